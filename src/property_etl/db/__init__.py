"""
Database Package

Database models, connection management, and data persistence layer.
"""
from src.property_etl.db.base import Base
from src.property_etl.db.session import (
    engine,
    SessionLocal,
    get_db_session,
    session_scope_factory,
    health_check,
    close_connections,
    create_all_tables,
)
from src.property_etl.db.models import Property
from src.property_etl.db.repository import BaseRepository, PropertyRepository

__all__ = [
    # Base
    "Base",
    # Session management
    "engine",
    "SessionLocal",
    "get_db_session",
    "session_scope_factory",
    "health_check",
    "close_connections",
    "create_all_tables",
    # Models
    "Property",
    # Repositories
    "BaseRepository",
    "PropertyRepository",
]
