"""
Database models package.

Exports:
  - StudySessionModel, SessionType: Study session ORM model and type enum
  - SessionTagModel: Session tag ORM model
  - TaskModel: Task ORM model

Dependencies: sqlalchemy, lockedin.boundary.db.base
System role: Database model definitions for domain entities
"""

from lockedin.boundary.db.models.study_session_model import SessionType, StudySessionModel
from lockedin.boundary.db.models.session_tag_model import SessionTagModel
from lockedin.boundary.db.models.task_model import TaskModel

__all__ = [
    "StudySessionModel",
    "SessionType",
    "SessionTagModel",
    "TaskModel",
]
