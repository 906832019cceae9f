"""
Security Utilities

JWT access token management driven by the ``[app]`` section.

Settings Used:
==============
    JwtSecret        → signing key
    SigningMethod    → JWT algorithm (HS256 when empty)
    JWT_EXPIRE_TIME  → token lifetime in minutes (jwt_expires_at)

Usage:
======
    from src.shared.utils.security import SecurityUtils

    token = SecurityUtils.create_access_token({"user_id": "123"}, settings.app)
    payload = SecurityUtils.decode_access_token(token, settings.app)
"""

from datetime import datetime, timezone
from typing import Optional

import jwt

from src.config.settings import ApplicationSettings
from src.shared.core.exceptions import AuthenticationError


DEFAULT_SIGNING_METHOD = "HS256"


class SecurityUtils:
    """JWT token creation and validation."""

    @staticmethod
    def signing_algorithm(app: ApplicationSettings) -> str:
        """Algorithm named by ``SigningMethod``, or HS256."""
        return app.signing_method or DEFAULT_SIGNING_METHOD

    @staticmethod
    def create_access_token(
        data: dict,
        app: ApplicationSettings,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            data: Payload data to encode (e.g., user_id, email)
            app: Application settings holding the secret, lifetime and method
            issued_at: Issue time (default: now, UTC)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        issued = issued_at or datetime.now(timezone.utc)

        to_encode.update({
            "exp": issued + app.jwt_expires_at,
            "iat": issued,
        })

        return jwt.encode(
            to_encode,
            app.jwt_secret,
            algorithm=SecurityUtils.signing_algorithm(app),
        )

    @staticmethod
    def decode_access_token(token: str, app: ApplicationSettings) -> dict:
        """
        Decode and verify JWT token.

        Raises:
            AuthenticationError: If token is expired or invalid
        """
        try:
            return jwt.decode(
                token,
                app.jwt_secret,
                algorithms=[SecurityUtils.signing_algorithm(app)],
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError(f"Invalid token: {exc}") from exc
