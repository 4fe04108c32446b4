from typing import Any, Dict, Optional
import logging

import bcrypt
from botocore.exceptions import ClientError

from storefront.auth.jwt_validator import JWTValidator, jwt_validator
from storefront.config import settings
from storefront.db.dynamo import get_table, get_item
from storefront.exceptions import AppError, AuthenticationError, BadRequestError

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Invalid username or password"

# bcrypt input limit
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise BadRequestError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


class AuthService:
    """Admin login against bcrypt hashes stored in the users table"""

    def __init__(self, table=None, validator: Optional[JWTValidator] = None):
        self.table = table if table is not None else get_table(settings.users_table)
        self.validator = validator or jwt_validator

    def verify_password(self, username: str, password: str) -> bool:
        """True when the user exists and the password matches its stored hash"""
        try:
            user = get_item(self.table, {"username": username})
        except ClientError as e:
            logger.error(f"Unable to load user {username}: {e}", exc_info=True)
            raise

        if user is None:
            logger.warning(f"Login failed: user not found - {username}")
            return False

        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            logger.warning(f"Login failed: over-long password for user {username}")
            return False

        try:
            match = bcrypt.checkpw(encoded, str(user.get("password", "")).encode("utf-8"))
        except ValueError as e:
            logger.error(f"Password comparison failed for {username}: {e}")
            raise AppError("INTERNAL_SERVER_ERROR", "Login failed", 500)

        if not match:
            logger.warning(f"Login failed: invalid password for user {username}")
        return match

    def login(self, username: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        if not username or not password:
            logger.warning("Login attempt without credentials")
            raise BadRequestError("Username and password are required")

        logger.info(f"Login attempt for user: {username}")
        if not self.verify_password(username, password):
            raise AuthenticationError(LOGIN_FAILED)

        logger.info(f"Login successful for user: {username}")
        return {
            "token": self.validator.issue_token(username),
            "username": username,
            "expiresIn": self.validator.expires_in,
        }

    def refresh(self, claims: Dict[str, Any]) -> Dict[str, Any]:
        """New token for the holder of a verified one"""
        username = claims.get("username")
        logger.info(f"Refreshing token for user: {username}")
        return {
            "token": self.validator.issue_token(username),
            "username": username,
            "expiresIn": self.validator.expires_in,
        }

    def set_admin_user(self, username: str, password: str) -> None:
        """Create or replace an admin user with a freshly hashed password"""
        try:
            self.table.put_item(Item={"username": username, "password": hash_password(password)})
        except ClientError as e:
            logger.error(f"Unable to store admin user {username}: {e}", exc_info=True)
            raise
        logger.info(f"Stored admin user: {username}")
