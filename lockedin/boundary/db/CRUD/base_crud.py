"""
Base CRUD classes.

BaseCRUD covers inserts and deletes by id. OwnedCRUD adds
owner scoping through an AuthorizationGuard for models with a user_id.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.base import Base
from lockedin.core.authorization import AuthorizationGuard

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Unscoped create/delete shared by every table.

    Callers must have checked ownership before calling delete_by_id; the
    statement itself carries no owner predicate.
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a record by primary key.

        Args:
            session: Async database session
            id: UUID primary key

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0


class OwnedCRUD(BaseCRUD[ModelT]):
    """CRUD for models carrying a user_id owner column."""

    async def get_owned(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        id: UUID,
    ) -> ModelT | None:
        """
        Retrieve a record by primary key, restricted to the guard's principal.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            id: UUID primary key

        Returns:
            Model instance if found and owned, None otherwise
        """
        stmt = select(self.model).where(
            self.model.id == id,
            guard.owner_clause(self.model),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_owned(
        self,
        session: AsyncSession,
        guard: AuthorizationGuard,
        instance: ModelT,
        values: dict[str, Any],
        *criteria: Any,
    ) -> bool:
        """
        Apply column values to an owned record in a single UPDATE statement.

        Extra criteria (for example a version match) narrow the WHERE clause.
        The instance is refreshed from the store when a row was changed.

        Args:
            session: Async database session
            guard: Authorization guard for the caller
            instance: Previously loaded record
            values: Column values to write
            *criteria: Additional WHERE conditions

        Returns:
            True if a row was updated, False if no row matched
        """
        stmt = (
            update(self.model)
            .where(self.model.id == instance.id, guard.owner_clause(self.model), *criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            return False
        await session.refresh(instance)
        return True
