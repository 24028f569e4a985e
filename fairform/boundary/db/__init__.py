"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - AISessionModel, AIMessageModel, IntakeLogModel: Persisted entities
  - session_crud, message_crud, intake_log_crud: CRUD singletons
  - SQLAlchemyLifecycleRepository: Lifecycle job adapter

Dependencies: sqlalchemy, fairform.configs
System role: Persistent storage for AI sessions, messages and intake audit logs
"""

from fairform.boundary.db.base import Base, TimestampMixin, UUIDMixin
from fairform.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from fairform.boundary.db.models import (
    AIMessageModel,
    AISessionModel,
    IntakeLogModel,
    MessageAuthor,
)
from fairform.boundary.db.CRUD import (
    BaseCRUD,
    IntakeLogCRUD,
    MessageCRUD,
    SessionCRUD,
    intake_log_crud,
    message_crud,
    session_crud,
)
from fairform.boundary.db.lifecycle_repository import SQLAlchemyLifecycleRepository

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "AIMessageModel",
    "AISessionModel",
    "IntakeLogModel",
    "MessageAuthor",
    "BaseCRUD",
    "IntakeLogCRUD",
    "MessageCRUD",
    "SessionCRUD",
    "intake_log_crud",
    "message_crud",
    "session_crud",
    "SQLAlchemyLifecycleRepository",
]
