"""
CRUD operations for database models.

Exports base CRUD classes and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from lockedin.boundary.db.CRUD import study_session_crud

    active = await study_session_crud.get_active(db, guard)
"""

from lockedin.boundary.db.CRUD.base_crud import BaseCRUD, OwnedCRUD
from lockedin.boundary.db.CRUD.study_session_crud import StudySessionCRUD, study_session_crud
from lockedin.boundary.db.CRUD.session_tag_crud import SessionTagCRUD, session_tag_crud
from lockedin.boundary.db.CRUD.task_crud import TaskCRUD, task_crud

__all__ = [
    "BaseCRUD",
    "OwnedCRUD",
    "StudySessionCRUD",
    "study_session_crud",
    "SessionTagCRUD",
    "session_tag_crud",
    "TaskCRUD",
    "task_crud",
]
