"""
HS256 session tokens for the shop admin.

Tokens are signed with the ADMIN_TOKEN secret and carry the admin's
username plus an expiry. The secret is read on every call so a process can
pick up configuration changes without a restart.
"""
from datetime import datetime, timedelta, timezone
import jwt
import logging
from typing import Dict, Optional
from storefront.config import settings
from storefront.exceptions import AppError, AuthorizationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class JWTValidator:
    def __init__(self, secret: Optional[str] = None, ttl_minutes: Optional[int] = None):
        self._secret = secret
        self._ttl_minutes = ttl_minutes

    @property
    def secret(self) -> str:
        secret = self._secret or settings.admin_token
        if not secret:
            logger.error("ADMIN_TOKEN is not configured")
            raise AppError("CONFIG_ERROR", "Server authentication is not configured", 500)
        return secret

    @property
    def ttl_minutes(self) -> int:
        return self._ttl_minutes or settings.token_ttl_minutes

    @property
    def expires_in(self) -> str:
        """Token lifetime in the compact form returned to clients, e.g. ``30m``"""
        return f"{self.ttl_minutes}m"

    def issue_token(self, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "username": username,
            "iat": now,
            "exp": now + timedelta(minutes=self.ttl_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify_token(self, token: str) -> Dict:
        """
        Verify an admin token.
        Returns decoded token payload if valid.
        """
        secret = self.secret
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"verify_signature": True, "verify_exp": True, "require": ["exp"]}
            )
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise AuthorizationError("Invalid or expired token")
        except jwt.InvalidTokenError as e:
            logger.warning(f"JWT verification failed: {e}")
            raise AuthorizationError("Invalid or expired token")


jwt_validator = JWTValidator()
