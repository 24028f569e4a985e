"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from fairform.boundary.db.CRUD import session_crud

    session = await session_crud.get_by_id(db, session_id)
"""

from fairform.boundary.db.CRUD.base_crud import BaseCRUD
from fairform.boundary.db.CRUD.intake_log_crud import IntakeLogCRUD, intake_log_crud
from fairform.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from fairform.boundary.db.CRUD.session_crud import SessionCRUD, session_crud

__all__ = [
    "BaseCRUD",
    "IntakeLogCRUD",
    "intake_log_crud",
    "MessageCRUD",
    "message_crud",
    "SessionCRUD",
    "session_crud",
]
