from fastapi import Cookie, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from storefront.auth.jwt_validator import jwt_validator
from storefront.exceptions import AuthenticationError
import logging

logger = logging.getLogger(__name__)

AUTH_COOKIE = "auth_token"

bearer_scheme = HTTPBearer(auto_error=False)


def extract_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth_token: Optional[str] = Cookie(None),
) -> Optional[str]:
    """Admin token from the Authorization header, falling back to the auth_token cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    return auth_token or None


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth_token: Optional[str] = Cookie(None),
) -> dict:
    """Dependency guarding admin routes

    No token gives 401; a token that fails verification gives 403.
    """
    token = extract_token(credentials, auth_token)
    if not token:
        logger.warning("Admin route called without a token")
        raise AuthenticationError("No token provided")

    claims = jwt_validator.verify_token(token)
    logger.info(f"Authenticated admin: {claims.get('username')}")
    return claims
