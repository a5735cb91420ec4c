"""
Task service orchestrator.

Tasks are the input to completion-rate analytics and may be linked to one
of the owner's study sessions.

Dependencies: lockedin.boundary.db.CRUD, lockedin.core
System role: Task use case orchestration
"""

import logging
from datetime import datetime
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from lockedin.boundary.db.CRUD.study_session_crud import study_session_crud
from lockedin.boundary.db.CRUD.task_crud import task_crud
from lockedin.boundary.db.errors import translate_store_errors
from lockedin.boundary.db.models.task_model import TaskModel
from lockedin.core.authorization import AuthorizationGuard
from lockedin.core.clock import Clock, SystemClock, ensure_aware_utc
from lockedin.core.exceptions import NotFoundError, ValidationError
from lockedin.core.normalization import strip_or_none
from lockedin.core.validators import validate_priority, validate_title

logger = logging.getLogger(__name__)

RESOURCE = "task"

UPDATABLE_FIELDS = frozenset({
    "title",
    "description",
    "is_completed",
    "priority",
    "due_date",
    "order_index",
    "session_id",
})


def task_to_dict(task: TaskModel) -> dict[str, Any]:
    return {
        "id": task.id,
        "user_id": task.user_id,
        "session_id": task.session_id,
        "title": task.title,
        "description": task.description,
        "is_completed": task.is_completed,
        "completed_at": ensure_aware_utc(task.completed_at),
        "priority": task.priority,
        "due_date": ensure_aware_utc(task.due_date),
        "order_index": task.order_index,
        "created_at": ensure_aware_utc(task.created_at),
        "updated_at": ensure_aware_utc(task.updated_at),
    }


class TaskService:
    """Task orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        guard: AuthorizationGuard,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize task service.

        Args:
            db: Async SQLAlchemy session
            guard: Authorization guard for the caller
            clock: Time source for completed_at
        """
        self.db = db
        self.guard = guard
        self.clock = clock or SystemClock()

    async def _get_owned(self, task_id: UUID) -> TaskModel:
        task = await task_crud.get_owned(self.db, self.guard, task_id)
        if task is None:
            raise NotFoundError(RESOURCE, task_id)
        return task

    async def _check_session_link(self, session_id: UUID | None, owner_id: UUID) -> None:
        """
        Require a linked session to be visible to the caller and owned by the
        task owner (the two differ only for the operator guard).
        """
        if session_id is None:
            return
        session = await study_session_crud.get_owned(self.db, self.guard, session_id)
        if session is None:
            raise NotFoundError("study_session", session_id)
        AuthorizationGuard.for_principal(owner_id).require(session.user_id, "study_session", session_id)

    @translate_store_errors("task.create")
    async def create(
        self,
        title: str,
        description: str | None = None,
        priority: int = 0,
        due_date: datetime | None = None,
        order_index: int = 0,
        session_id: UUID | None = None,
        user_id: UUID | None = None,
    ) -> dict:
        """
        Create a task.

        Returns:
            dict: Created task

        Raises:
            ValidationError: Blank or overlong title, priority outside 0..3
            NotFoundError: Linked session missing or owned by someone else
        """
        owner_id = self.guard.owner_for_write(user_id)
        title = validate_title(title)
        priority = validate_priority(priority)
        await self._check_session_link(session_id, owner_id)

        task = await task_crud.create(
            self.db,
            user_id=owner_id,
            title=title,
            description=strip_or_none(description),
            priority=priority,
            due_date=ensure_aware_utc(due_date),
            order_index=order_index,
            session_id=session_id,
        )
        await self.db.commit()
        logger.info("Task created", extra={"task_id": str(task.id), "user_id": str(owner_id)})
        return task_to_dict(task)

    @translate_store_errors("task.get")
    async def get(self, task_id: UUID) -> dict:
        return task_to_dict(await self._get_owned(task_id))

    @translate_store_errors("task.update")
    async def update(self, task_id: UUID, fields: dict[str, Any]) -> dict:
        """
        Apply a partial update.

        Changing is_completed maintains completed_at.

        Raises:
            NotFoundError: Task (or newly linked session) missing or not owned
            ValidationError: Unknown field or invalid value
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError("Field cannot be modified", field=sorted(unknown)[0])

        task = await self._get_owned(task_id)
        values: dict[str, Any] = {}
        for name, value in fields.items():
            if name == "title":
                values[name] = validate_title(value)
            elif name == "priority":
                values[name] = validate_priority(value)
            elif name == "description":
                values[name] = strip_or_none(value)
            elif name == "due_date":
                values[name] = ensure_aware_utc(value)
            elif name == "is_completed":
                if value is None:
                    raise ValidationError("is_completed cannot be null", field=name)
                values.update(self._completion_values(task, bool(value)))
            elif name == "order_index":
                if value is None:
                    raise ValidationError("order_index cannot be null", field=name)
                values[name] = value
            else:
                values[name] = value

        if "session_id" in values:
            await self._check_session_link(values["session_id"], task.user_id)

        if values:
            await task_crud.update_owned(self.db, self.guard, task, values)
            await self.db.commit()
        logger.info("Task updated", extra={"task_id": str(task_id), "fields": sorted(values)})
        return task_to_dict(task)

    @translate_store_errors("task.delete")
    async def delete(self, task_id: UUID) -> None:
        task = await self._get_owned(task_id)
        await task_crud.delete_by_id(self.db, task.id)
        await self.db.commit()
        logger.info("Task deleted", extra={"task_id": str(task_id)})

    @translate_store_errors("task.toggle_completion")
    async def toggle_completion(self, task_id: UUID) -> dict:
        """Flip is_completed, setting or clearing completed_at."""
        task = await self._get_owned(task_id)
        values = self._completion_values(task, not task.is_completed)
        await task_crud.update_owned(self.db, self.guard, task, values)
        await self.db.commit()
        return task_to_dict(task)

    @translate_store_errors("task.reorder")
    async def reorder(self, positions: Iterable[tuple[UUID, int]]) -> list[dict]:
        """
        Set order_index on several tasks in one transaction.

        Every task must be owned by the caller; otherwise nothing is written.

        Args:
            positions: (task_id, order_index) pairs

        Returns:
            list[dict]: Reordered tasks in the order given
        """
        positions = list(positions)
        tasks = [await self._get_owned(task_id) for task_id, _ in positions]
        for task, (_, order_index) in zip(tasks, positions):
            await task_crud.update_owned(self.db, self.guard, task, {"order_index": order_index})
        await self.db.commit()
        logger.info("Tasks reordered", extra={"count": len(tasks)})
        return [task_to_dict(t) for t in tasks]

    @translate_store_errors("task.list")
    async def list_tasks(
        self,
        completed: bool | None = None,
        session_id: UUID | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """List tasks by order_index ascending, then newest first."""
        if limit is not None and limit < 1:
            raise ValidationError("limit must be positive", field="limit")
        tasks = await task_crud.list_for_owner(
            self.db,
            self.guard,
            completed=completed,
            session_id=session_id,
            limit=limit,
        )
        return [task_to_dict(t) for t in tasks]

    def _completion_values(self, task: TaskModel, is_completed: bool) -> dict[str, Any]:
        if is_completed == task.is_completed:
            return {"is_completed": is_completed}
        return {
            "is_completed": is_completed,
            "completed_at": self.clock.now() if is_completed else None,
        }
