"""
Utilities Module

- security: JWT access tokens signed with the [app] settings
"""

from src.shared.utils.security import SecurityUtils

__all__ = ["SecurityUtils"]
