"""
Hearth Backend

Startup configuration for the Hearth server.

Package Structure:
==================
    src/
    ├── config/      ← app.ini and the settings loader
    ├── shared/      ← Logging, exceptions, database and auth helpers
    └── bootstrap.py ← Fail-fast startup entry for host applications

Starting Up:
============
    from src.bootstrap import bootstrap

    settings = bootstrap()   # exits with status 1 on a configuration error
"""
