"""
Unit tests for the verification state machine.
"""
from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.core.rbac import ROLE_ADMIN, principal_for
from app.crud.certificate import certificate_crud
from app.crud.project import project_crud
from app.crud.user import user_crud
from app.models.audit import AuditLog
from app.schemas.user import UserCreate
from app.services.verification import RecordKind, unverify, verify


def _fields(record):
    return (record.is_verified, record.verified_by, record.verified_at, getattr(record, "review_comments", None))


@pytest.fixture
def certificate(db, student):
    return certificate_crud.create_for(db, student, {"title": "Python", "issuer": "Coursera"})


@pytest.fixture
def project(db, student):
    return project_crud.create_for(
        db, student, {"title": "Chat", "status": "planned", "technologies": ["Go", "SQL"]}
    )


@pytest.fixture
def second_admin(db):
    user = user_crud.create(
        db, UserCreate(name="Prof. Davi", email="davi@example.com", password="secret123"), role_name=ROLE_ADMIN
    )
    return principal_for(user)


class TestVerify:
    def test_verify_sets_provenance(self, db, certificate, admin):
        at = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

        c = verify(db, RecordKind.certificate, certificate.id, admin, now=at)

        assert c.is_verified is True
        assert c.verified_by == admin.id
        assert c.verified_at.replace(tzinfo=None) == at.replace(tzinfo=None)

    def test_verify_project_with_comment(self, db, project, admin):
        p = verify(db, RecordKind.project, project.id, admin, review_comments="  Great work  ")
        assert p.is_verified is True
        assert p.review_comments == "Great work"

    def test_reverify_refreshes_provenance(self, db, certificate, admin, second_admin):
        verify(db, RecordKind.certificate, certificate.id, admin)
        c = verify(db, RecordKind.certificate, certificate.id, second_admin)
        assert c.is_verified is True
        assert c.verified_by == second_admin.id

    def test_comment_on_certificate_is_rejected(self, db, certificate, admin):
        with pytest.raises(ValidationError):
            verify(db, RecordKind.certificate, certificate.id, admin, review_comments="nice")
        db.refresh(certificate)
        assert certificate.is_verified is False

    def test_missing_record(self, db, admin):
        with pytest.raises(NotFoundError):
            verify(db, RecordKind.project, "does-not-exist", admin)


class TestUnverify:
    def test_unverify_clears_provenance_and_keeps_comment(self, db, project, admin):
        verify(db, RecordKind.project, project.id, admin, review_comments="Checked with advisor")

        p = unverify(db, RecordKind.project, project.id, admin)

        assert p.is_verified is False
        assert p.verified_by is None
        assert p.verified_at is None
        assert p.review_comments == "Checked with advisor"

    def test_unverify_with_empty_comment_clears_it(self, db, project, admin):
        verify(db, RecordKind.project, project.id, admin, review_comments="ok")
        p = unverify(db, RecordKind.project, project.id, admin, review_comments="")
        assert p.review_comments is None

    def test_unverify_pending_record_is_noop(self, db, certificate, admin):
        c = unverify(db, RecordKind.certificate, certificate.id, admin)
        assert (c.is_verified, c.verified_by, c.verified_at) == (False, None, None)


class TestAuthorization:
    """Non-admin principals never move a record"""

    @pytest.mark.parametrize("transition", [verify, unverify])
    def test_student_is_denied(self, db, project, student, admin, transition):
        verify(db, RecordKind.project, project.id, admin, review_comments="ok")
        db.refresh(project)
        before = _fields(project)

        with pytest.raises(AuthorizationError):
            transition(db, RecordKind.project, project.id, student)

        db.refresh(project)
        assert _fields(project) == before

    def test_anonymous_is_denied(self, db, certificate):
        with pytest.raises(AuthorizationError):
            verify(db, RecordKind.certificate, certificate.id, None)

    def test_denied_before_lookup(self, db, student):
        # papel é checado antes de buscar o registro
        with pytest.raises(AuthorizationError):
            verify(db, RecordKind.certificate, "does-not-exist", student)


class TestInvariant:
    def test_provenance_both_present_or_both_absent(self, db, certificate, project, admin):
        verify(db, RecordKind.certificate, certificate.id, admin)
        verify(db, RecordKind.project, project.id, admin)
        unverify(db, RecordKind.project, project.id, admin)

        for record in certificate_crud.list_all(db) + project_crud.list_all(db):
            if record.is_verified:
                assert record.verified_by is not None and record.verified_at is not None
            else:
                assert record.verified_by is None and record.verified_at is None


class TestAudit:
    def test_each_transition_writes_audit_row(self, db, project, admin):
        verify(db, RecordKind.project, project.id, admin)
        unverify(db, RecordKind.project, project.id, admin)

        rows = db.scalars(select(AuditLog).where(AuditLog.entity_id == project.id).order_by(AuditLog.id)).all()

        assert [r.action for r in rows] == ["verify", "unverify"]
        assert rows[0].user_id == admin.id
        assert rows[0].diff_json["before"]["is_verified"] is False
        assert rows[0].diff_json["after"]["verified_by"] == admin.id
        assert rows[1].diff_json["after"] == {"is_verified": False, "verified_by": None, "verified_at": None}

    def test_denied_transition_writes_nothing(self, db, project, student):
        with pytest.raises(AuthorizationError):
            verify(db, RecordKind.project, project.id, student)
        assert db.scalars(select(AuditLog)).all() == []
