"""
Shared Module

Code shared by every component that consumes the loaded settings:

Package Structure:
==================
    shared/
    ├── core/    ← Logging, exceptions
    ├── db/      ← Async engine and sessions built from DatabaseSettings
    └── utils/   ← JWT helpers built from ApplicationSettings

Usage:
======
    from src.shared.core import logger, ConfigurationError
    from src.shared.db import create_engine, create_session_factory
    from src.shared.utils import SecurityUtils
"""
