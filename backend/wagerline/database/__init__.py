"""
Database module initialization.
Exports database components for use throughout the application.
"""

from wagerline.database.base import Base
from wagerline.database.session import (
    SessionLocal,
    get_db_context,
    get_engine,
    init_db,
    reset_engine,
)

__all__ = [
    "Base",
    "SessionLocal",
    "get_db_context",
    "get_engine",
    "init_db",
    "reset_engine",
]
