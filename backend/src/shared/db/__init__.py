"""
Database Module

Async engine and session management built from ``DatabaseSettings``.

Components:
===========
- session.py: Engine factory, session factory, transactional scope and
  connection lifecycle helpers

Usage:
======
    from src.shared.db import create_engine, create_session_factory, session_scope

    engine = create_engine(settings.database)
    factory = create_session_factory(engine)
    async with session_scope(factory) as session:
        ...
"""

from src.shared.db.session import (
    engine_options,
    create_engine,
    create_session_factory,
    session_scope,
    check_connection,
    dispose_engine,
)

__all__ = [
    "engine_options",  # Engine kwargs derived from settings
    "create_engine",  # Async engine for the configured database
    "create_session_factory",  # Session factory bound to an engine
    "session_scope",  # Commit/rollback unit of work
    "check_connection",  # Verify connectivity on startup
    "dispose_engine",  # Close pooled connections on shutdown
]
