"""
Authorization guard.

Every read or write of an owned record goes through a guard bound to the
authenticated principal. Denied access is reported as NotFoundError so a
caller cannot tell another owner's record from a missing one.

Dependencies: sqlalchemy, lockedin.core.exceptions
System role: Row-level ownership enforcement for sessions, tags, and tasks
"""

from typing import Any
from uuid import UUID

from sqlalchemy import true
from sqlalchemy.sql.elements import ColumnElement

from lockedin.core.exceptions import NotFoundError, ValidationError


def authorize(principal_id: UUID | None, resource_owner_id: UUID, privileged: bool = False) -> bool:
    """
    Decide whether a principal may touch a record.

    Args:
        principal_id: Authenticated caller
        resource_owner_id: Owner recorded on the row
        privileged: True only for the trusted operator context

    Returns:
        bool: True if access is allowed
    """
    if privileged:
        return True
    return principal_id is not None and principal_id == resource_owner_id


class AuthorizationGuard:
    """
    Ownership predicate bound to a single principal.

    Ordinary guards are built per request from the verified token subject.
    The operator guard bypasses ownership checks and is only handed out
    together with the privileged store handle (see
    lockedin.boundary.db.connection.operator_scope).
    """

    def __init__(self, principal_id: UUID | None, privileged: bool = False) -> None:
        if principal_id is None and not privileged:
            raise ValueError("An ordinary guard requires a principal")
        self._principal_id = principal_id
        self._privileged = privileged

    @classmethod
    def for_principal(cls, principal_id: UUID) -> "AuthorizationGuard":
        """Build a guard for an authenticated end user."""
        return cls(principal_id)

    @classmethod
    def operator(cls) -> "AuthorizationGuard":
        """Build the bypass guard for trusted operator jobs."""
        return cls(None, privileged=True)

    @property
    def principal_id(self) -> UUID | None:
        return self._principal_id

    @property
    def is_privileged(self) -> bool:
        return self._privileged

    def authorize(self, resource_owner_id: UUID) -> bool:
        return authorize(self._principal_id, resource_owner_id, self._privileged)

    def require(self, resource_owner_id: UUID, resource: str, resource_id: Any) -> None:
        """
        Raise unless the principal owns the record.

        Raises:
            NotFoundError: If access is denied
        """
        if not self.authorize(resource_owner_id):
            raise NotFoundError(resource, resource_id)

    def owner_clause(self, model: Any) -> ColumnElement[bool]:
        """
        SQL predicate restricting a query to the principal's rows.

        Args:
            model: ORM model with a user_id column

        Returns:
            ColumnElement: WHERE clause fragment
        """
        if self._privileged:
            return true()
        return model.user_id == self._principal_id

    def owner_for_write(self, owner_id: UUID | None = None) -> UUID:
        """
        Resolve the owner to stamp on a new row.

        Ordinary principals always write as themselves; an explicit
        owner_id that differs is rejected. The operator guard must name
        the owner.

        Raises:
            ValidationError: If no owner can be determined
            NotFoundError: If an ordinary principal names another owner
        """
        if self._privileged:
            if owner_id is None:
                raise ValidationError("Operator writes must name an owner", field="user_id")
            return owner_id
        if owner_id is not None and owner_id != self._principal_id:
            raise NotFoundError("user", owner_id)
        return self._principal_id
