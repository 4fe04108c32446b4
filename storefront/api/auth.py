from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from storefront.api.responses import success
from storefront.auth.dependencies import AUTH_COOKIE, extract_token, require_admin
from storefront.auth.jwt_validator import jwt_validator
from storefront.exceptions import AuthenticationError, AuthorizationError
from storefront.schemas.auth import LoginRequest
from storefront.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def get_auth_service() -> AuthService:
    """Dependency to get auth service"""
    return AuthService()


def set_auth_cookie(response: JSONResponse, token: str) -> JSONResponse:
    response.set_cookie(
        AUTH_COOKIE,
        token,
        max_age=jwt_validator.ttl_minutes * 60,
        httponly=True,
        secure=True,
        samesite="strict",
    )
    return response


def verified_claims(token: Optional[str]) -> dict:
    """Claims of a token presented to the session endpoints, which answer 401 for any failure"""
    if not token:
        logger.warning("Auth check without token")
        raise AuthenticationError("No token provided")
    try:
        return jwt_validator.verify_token(token)
    except AuthorizationError as e:
        raise AuthenticationError(e.message)


@router.post(
    "/login",
    summary="Admin login",
    description="""
    Verify admin credentials and issue a session token.

    The token is returned in the body and set as the `auth_token` cookie
    (httpOnly, secure, SameSite=strict) for the configured lifetime.
    """,
    responses={
        200: {
            "description": "Login successful",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "statusCode": 200,
                        "data": {"token": "eyJhbGciOiJIUzI1NiIs...", "username": "admin", "expiresIn": "30m"},
                        "timestamp": "2025-01-01T00:00:00.000Z"
                    }
                }
            }
        },
        400: {"description": "Username and password are required"},
        401: {"description": "Invalid username or password"}
    }
)
async def login(credentials: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    result = auth_service.login(credentials.username, credentials.password)
    return set_auth_cookie(success(result), result["token"])


@router.post(
    "/logout",
    summary="Admin logout",
    description="Clear the `auth_token` cookie. Tokens are stateless, so an issued token stays valid until it expires.",
)
async def logout(current_user: dict = Depends(require_admin)):
    logger.info(f"Logout requested for user: {current_user.get('username')}")
    response = success({"message": "Logged out successfully"})
    response.delete_cookie(AUTH_COOKIE, httponly=True, secure=True, samesite="strict")
    return response


@router.get(
    "/auth/check",
    summary="Check session",
    responses={
        200: {"description": "Token is valid"},
        401: {"description": "No token, or the token is invalid or expired"}
    }
)
async def check_auth(token: Optional[str] = Depends(extract_token)):
    claims = verified_claims(token)
    logger.info("Authentication check successful")
    return success({"loggedIn": True, "user": claims})


@router.post(
    "/auth/refresh",
    summary="Refresh session token",
    description="Exchange a valid token for a new one with a fresh expiry.",
    responses={
        200: {"description": "Token refreshed"},
        401: {"description": "No token, or the token is invalid or expired"}
    }
)
async def refresh_token(
    token: Optional[str] = Depends(extract_token),
    auth_service: AuthService = Depends(get_auth_service)
):
    claims = verified_claims(token)
    result = auth_service.refresh(claims)
    logger.info("Token refreshed successfully")
    return set_auth_cookie(success(result), result["token"])
