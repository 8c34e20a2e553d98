"""
API tests for the owner surfaces: certificates, projects, profile, study time.
"""
from app.crud.certificate import certificate_crud


def _create_certificate(client, headers, **overrides):
    body = {"title": "Data Science", "issuer": "IBM", "category": "technical"}
    body.update(overrides)
    return client.post("/api/v1/certificates/", json=body, headers=headers)


class TestCertificates:
    def test_create_and_list(self, client, student_headers, student_user):
        r = _create_certificate(client, student_headers, issue_date="2024-06-01")
        assert r.status_code == 201
        body = r.json()
        assert body["user_id"] == student_user.id
        assert body["is_verified"] is False
        assert body["pending"] is True

        listed = client.get("/api/v1/certificates/", headers=student_headers).json()
        assert [c["id"] for c in listed] == [body["id"]]

    def test_create_requires_auth(self, client):
        assert _create_certificate(client, {}).status_code == 401

    def test_empty_title_returns_422_and_persists_nothing(self, client, db, student_headers, student_user):
        r = _create_certificate(client, student_headers, title="   ")
        assert r.status_code == 422
        assert certificate_crud.list_by_owner(db, student_user.id) == []

    def test_bad_url(self, client, student_headers):
        r = _create_certificate(client, student_headers, certificate_url="not a url")
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"
        assert r.json()["details"]["errors"]

    def test_client_cannot_set_verification(self, client, student_headers):
        r = _create_certificate(client, student_headers, is_verified=True)
        assert r.json()["is_verified"] is False

    def test_patch_by_owner(self, client, student_headers):
        cid = _create_certificate(client, student_headers).json()["id"]
        r = client.patch(f"/api/v1/certificates/{cid}", json={"issuer": "IBM Skills"}, headers=student_headers)
        assert r.status_code == 200
        assert r.json()["issuer"] == "IBM Skills"

    def test_patch_by_other_is_forbidden(self, client, student_headers, other_headers):
        cid = _create_certificate(client, student_headers).json()["id"]
        r = client.patch(f"/api/v1/certificates/{cid}", json={"issuer": "X"}, headers=other_headers)
        assert r.status_code == 403
        assert r.json()["code"] == "NOT_AUTHORIZED"

    def test_delete(self, client, student_headers, other_headers):
        cid = _create_certificate(client, student_headers).json()["id"]
        assert client.delete(f"/api/v1/certificates/{cid}", headers=other_headers).status_code == 403
        assert client.delete(f"/api/v1/certificates/{cid}", headers=student_headers).status_code == 204
        assert client.get(f"/api/v1/certificates/{cid}", headers=student_headers).status_code == 404

    def test_pending_certificate_hidden_from_public(self, client, student_headers, admin_headers):
        cid = _create_certificate(client, student_headers).json()["id"]

        assert client.get(f"/api/v1/certificates/{cid}").status_code == 404
        assert client.get(f"/api/v1/certificates/{cid}", headers=student_headers).status_code == 200
        assert client.get(f"/api/v1/certificates/{cid}", headers=admin_headers).status_code == 200

    def test_not_found_body(self, client, student_headers):
        r = client.get("/api/v1/certificates/missing", headers=student_headers)
        assert r.status_code == 404
        assert r.json() == {
            "code": "NOT_FOUND",
            "message": "Certificate not found",
            "details": {"entity": "Certificate", "id": "missing"},
        }

    def test_overlong_title_returns_422_and_persists_nothing(self, client, db, student_headers, student_user):
        r = _create_certificate(client, student_headers, title="T" * 5000)
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"
        assert certificate_crud.list_by_owner(db, student_user.id) == []

    def test_overlong_url_returns_422(self, client, student_headers):
        r = _create_certificate(client, student_headers, image_url="https://cdn.example.com/" + "a" * 500)
        assert r.status_code == 422

    def test_patch_overlong_issuer_keeps_record(self, client, student_headers):
        cid = _create_certificate(client, student_headers).json()["id"]
        r = client.patch(f"/api/v1/certificates/{cid}", json={"issuer": "I" * 201}, headers=student_headers)
        assert r.status_code == 422
        assert client.get(f"/api/v1/certificates/{cid}", headers=student_headers).json()["issuer"] == "IBM"


class TestProjects:
    def test_create_dedups_technologies(self, client, student_headers):
        r = client.post(
            "/api/v1/projects/",
            json={"title": "Chat", "status": "planned", "technologies": ["Go", "Go", "SQL"]},
            headers=student_headers,
        )
        assert r.status_code == 201
        assert r.json()["technologies"] == ["Go", "SQL"]
        assert r.json()["review_comments"] is None

    def test_missing_title(self, client, student_headers):
        r = client.post("/api/v1/projects/", json={"description": "no title"}, headers=student_headers)
        assert r.status_code == 422

    def test_patch_status(self, client, student_headers):
        pid = client.post("/api/v1/projects/", json={"title": "Chat"}, headers=student_headers).json()["id"]
        r = client.patch(f"/api/v1/projects/{pid}", json={"status": "completed"}, headers=student_headers)
        assert r.json()["status"] == "completed"

    def test_patch_cannot_touch_review_comments(self, client, student_headers):
        pid = client.post("/api/v1/projects/", json={"title": "Chat"}, headers=student_headers).json()["id"]
        r = client.patch(f"/api/v1/projects/{pid}", json={"review_comments": "self-approved"}, headers=student_headers)
        assert r.status_code == 200
        assert r.json()["review_comments"] is None

    def test_overlong_title_and_url(self, client, student_headers):
        r = client.post("/api/v1/projects/", json={"title": "P" * 201}, headers=student_headers)
        assert r.status_code == 422
        r = client.post(
            "/api/v1/projects/",
            json={"title": "Chat", "project_url": "https://example.com/" + "p" * 500},
            headers=student_headers,
        )
        assert r.status_code == 422

    def test_patch_null_technologies_is_rejected(self, client, student_headers):
        pid = client.post(
            "/api/v1/projects/", json={"title": "Chat", "technologies": ["Go", "SQL"]}, headers=student_headers
        ).json()["id"]

        r = client.patch(f"/api/v1/projects/{pid}", json={"technologies": None}, headers=student_headers)
        assert r.status_code == 422

        r = client.get(f"/api/v1/projects/{pid}", headers=student_headers)
        assert r.json()["technologies"] == ["Go", "SQL"]

    def test_patch_empty_technologies_clears_them(self, client, student_headers):
        pid = client.post(
            "/api/v1/projects/", json={"title": "Chat", "technologies": ["Go"]}, headers=student_headers
        ).json()["id"]
        r = client.patch(f"/api/v1/projects/{pid}", json={"technologies": []}, headers=student_headers)
        assert r.json()["technologies"] == []


class TestProfile:
    def test_default_profile(self, client, student_headers, student_user):
        r = client.get("/api/v1/me/profile", headers=student_headers)
        assert r.status_code == 200
        assert r.json()["user_id"] == student_user.id
        assert r.json()["full_name"] == "Ana Souza"

    def test_update_profile(self, client, student_headers):
        r = client.put(
            "/api/v1/me/profile",
            json={"university": "UFMG", "skills": ["Python", "Python", "SQL"], "github_url": "https://github.com/ana"},
            headers=student_headers,
        )
        assert r.status_code == 200
        assert r.json()["skills"] == ["Python", "SQL"]
        assert r.json()["github_url"] == "https://github.com/ana"

    def test_bad_profile_url(self, client, student_headers):
        r = client.put("/api/v1/me/profile", json={"linkedin_url": "linkedin"}, headers=student_headers)
        assert r.status_code == 422


class TestStudySessions:
    def test_record_and_list(self, client, student_headers):
        r = client.post("/api/v1/analytics/study-sessions", json={"seconds": 2700}, headers=student_headers)
        assert r.status_code == 201
        assert r.json()["metric_name"] == "study_hours"
        assert r.json()["metric_value"] == 0.75

        listed = client.get("/api/v1/analytics/", headers=student_headers).json()
        assert len(listed) == 1

    def test_rejects_non_positive(self, client, student_headers):
        r = client.post("/api/v1/analytics/study-sessions", json={"seconds": 0}, headers=student_headers)
        assert r.status_code == 422
