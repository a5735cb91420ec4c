"""
Tests for the authorization guard.

System role: Verification of ownership checks and masking
"""

import uuid

import pytest
from sqlalchemy.dialects import sqlite

from lockedin.boundary.db.models import StudySessionModel
from lockedin.core.authorization import AuthorizationGuard, authorize
from lockedin.core.exceptions import NotFoundError, ValidationError


class TestAuthorize:

    def test_owner_is_allowed(self) -> None:
        owner = uuid.uuid4()
        assert authorize(owner, owner) is True

    def test_other_principal_is_denied(self) -> None:
        assert authorize(uuid.uuid4(), uuid.uuid4()) is False

    def test_missing_principal_is_denied(self) -> None:
        assert authorize(None, uuid.uuid4()) is False

    def test_privileged_is_allowed(self) -> None:
        assert authorize(None, uuid.uuid4(), privileged=True) is True


class TestAuthorizationGuard:

    def test_ordinary_guard_requires_principal(self) -> None:
        with pytest.raises(ValueError):
            AuthorizationGuard(None)

    def test_require_raises_not_found_on_deny(self) -> None:
        guard = AuthorizationGuard.for_principal(uuid.uuid4())
        resource_id = uuid.uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            guard.require(uuid.uuid4(), "study_session", resource_id)

        assert exc_info.value.resource == "study_session"
        assert exc_info.value.resource_id == resource_id

    def test_require_passes_for_owner(self) -> None:
        owner = uuid.uuid4()
        AuthorizationGuard.for_principal(owner).require(owner, "task", uuid.uuid4())

    def test_owner_clause_filters_on_user_id(self) -> None:
        owner = uuid.uuid4()
        clause = AuthorizationGuard.for_principal(owner).owner_clause(StudySessionModel)

        compiled = str(clause.compile(dialect=sqlite.dialect()))

        assert "user_id" in compiled

    def test_operator_owner_clause_is_true(self) -> None:
        clause = AuthorizationGuard.operator().owner_clause(StudySessionModel)

        assert "user_id" not in str(clause.compile(dialect=sqlite.dialect()))

    def test_owner_for_write_defaults_to_principal(self) -> None:
        owner = uuid.uuid4()
        assert AuthorizationGuard.for_principal(owner).owner_for_write() == owner

    def test_owner_for_write_rejects_other_owner(self) -> None:
        guard = AuthorizationGuard.for_principal(uuid.uuid4())
        with pytest.raises(NotFoundError):
            guard.owner_for_write(uuid.uuid4())

    def test_operator_must_name_owner(self) -> None:
        operator = AuthorizationGuard.operator()
        owner = uuid.uuid4()

        with pytest.raises(ValidationError):
            operator.owner_for_write()
        assert operator.owner_for_write(owner) == owner
        assert operator.is_privileged is True
