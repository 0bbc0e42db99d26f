"""Custodia Infra Persistence: database settings, engine and session factories."""

from custodia.infra.persistence.database import (
    DatabaseManager,
    DatabaseSettings,
    dispose_engine,
    get_database_manager,
    get_sync_engine,
    get_sync_session_factory,
)

__all__ = [
    "DatabaseManager",
    "DatabaseSettings",
    "dispose_engine",
    "get_database_manager",
    "get_sync_engine",
    "get_sync_session_factory",
]
