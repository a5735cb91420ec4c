"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - StoreHandles, init_store_handles(), get_async_db(), operator_scope(): Connection management
  - StudySessionModel, SessionTagModel, TaskModel: Domain entities
  - study_session_crud, session_tag_crud, task_crud: CRUD operation singletons
  - translate_store_errors: Driver failure translation for services

Dependencies: sqlalchemy, lockedin.configs
System role: Database adapter providing owner-scoped storage for study
sessions, their tags, and tasks.
"""

from lockedin.boundary.db.base import Base, TimestampMixin, UUIDMixin
from lockedin.boundary.db.connection import (
    StoreHandles,
    dispose_store_handles,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    get_store_handles,
    init_store_handles,
    operator_scope,
)
from lockedin.boundary.db.errors import translate_store_errors
from lockedin.boundary.db.models import (
    SessionTagModel,
    SessionType,
    StudySessionModel,
    TaskModel,
)
from lockedin.boundary.db.CRUD import (
    BaseCRUD,
    OwnedCRUD,
    SessionTagCRUD,
    StudySessionCRUD,
    TaskCRUD,
    session_tag_crud,
    study_session_crud,
    task_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "StoreHandles",
    "init_store_handles",
    "dispose_store_handles",
    "get_store_handles",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "operator_scope",
    # Errors
    "translate_store_errors",
    # Models
    "StudySessionModel",
    "SessionType",
    "SessionTagModel",
    "TaskModel",
    # CRUD classes
    "BaseCRUD",
    "OwnedCRUD",
    "StudySessionCRUD",
    "SessionTagCRUD",
    "TaskCRUD",
    # CRUD singletons
    "study_session_crud",
    "session_tag_crud",
    "task_crud",
]
