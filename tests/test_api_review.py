"""
API tests for faculty review: verify/unverify endpoints and admin queues.
"""
import pytest


@pytest.fixture
def project_id(client, student_headers):
    r = client.post(
        "/api/v1/projects/",
        json={"title": "Chat", "status": "planned", "technologies": ["Go", "SQL"]},
        headers=student_headers,
    )
    return r.json()["id"]


@pytest.fixture
def certificate_id(client, student_headers):
    r = client.post("/api/v1/certificates/", json={"title": "CCNA", "issuer": "Cisco"}, headers=student_headers)
    return r.json()["id"]


class TestVerifyEndpoints:
    def test_admin_verifies_project(self, client, admin_headers, admin_user, project_id):
        r = client.post(
            f"/api/v1/review/projects/{project_id}/verify",
            json={"review_comments": "Solid architecture"},
            headers=admin_headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["is_verified"] is True
        assert body["verified_by"] == admin_user.id
        assert body["verified_at"] is not None
        assert body["review_comments"] == "Solid architecture"
        assert body["pending"] is False

    def test_admin_verifies_certificate_without_body(self, client, admin_headers, certificate_id):
        r = client.post(f"/api/v1/review/certificates/{certificate_id}/verify", headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["is_verified"] is True
        assert "review_comments" not in r.json()

    def test_unverify_keeps_comment(self, client, admin_headers, project_id):
        client.post(
            f"/api/v1/review/projects/{project_id}/verify",
            json={"review_comments": "ok"},
            headers=admin_headers,
        )
        r = client.post(f"/api/v1/review/projects/{project_id}/unverify", headers=admin_headers)
        body = r.json()
        assert body["is_verified"] is False
        assert body["verified_by"] is None
        assert body["verified_at"] is None
        assert body["review_comments"] == "ok"

    def test_student_is_forbidden(self, client, student_headers, project_id):
        r = client.post(f"/api/v1/review/projects/{project_id}/verify", headers=student_headers)
        assert r.status_code == 403
        assert r.json()["code"] == "NOT_AUTHORIZED"

        r = client.get(f"/api/v1/projects/{project_id}", headers=student_headers)
        assert r.json()["is_verified"] is False

    def test_anonymous_is_unauthenticated(self, client, project_id):
        r = client.post(f"/api/v1/review/projects/{project_id}/verify")
        assert r.status_code == 401

    def test_certificate_comment_rejected(self, client, admin_headers, certificate_id):
        r = client.post(
            f"/api/v1/review/certificates/{certificate_id}/verify",
            json={"review_comments": "nice"},
            headers=admin_headers,
        )
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_comment_too_long(self, client, admin_headers, project_id):
        r = client.post(
            f"/api/v1/review/projects/{project_id}/verify",
            json={"review_comments": "x" * 2001},
            headers=admin_headers,
        )
        assert r.status_code == 422

    def test_unknown_kind(self, client, admin_headers, project_id):
        r = client.post(f"/api/v1/review/badges/{project_id}/verify", headers=admin_headers)
        assert r.status_code == 422

    def test_missing_record(self, client, admin_headers):
        r = client.post("/api/v1/review/projects/missing/verify", headers=admin_headers)
        assert r.status_code == 404


class TestAdminQueues:
    def test_pending_queue(self, client, admin_headers, project_id, certificate_id):
        client.post(f"/api/v1/review/projects/{project_id}/verify", headers=admin_headers)

        pending = client.get("/api/v1/admin/projects", params={"verified": "false"}, headers=admin_headers).json()
        assert pending == []

        certs = client.get("/api/v1/admin/certificates", params={"verified": "false"}, headers=admin_headers).json()
        assert [c["id"] for c in certs] == [certificate_id]

        everything = client.get("/api/v1/admin/projects", headers=admin_headers).json()
        assert [p["id"] for p in everything] == [project_id]

    def test_student_cannot_list_queues(self, client, student_headers):
        r = client.get("/api/v1/admin/certificates", headers=student_headers)
        assert r.status_code == 403

    def test_stats(self, client, admin_headers, other_student, project_id, certificate_id):
        r = client.get("/api/v1/admin/stats", headers=admin_headers)
        assert r.status_code == 200
        stats = r.json()
        assert stats["total_students"] == 2
        assert stats["total_admins"] == 1
        assert stats["total_projects"] == 1
        assert stats["recent_projects"] == 1
        assert stats["active_projects"] == 0
        assert stats["total_certificates"] == 1
        assert stats["pending_certificates"] == 1
        assert stats["pending_projects"] == 1
