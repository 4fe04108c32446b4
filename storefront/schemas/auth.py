from pydantic import BaseModel, Field
from typing import Optional


class LoginRequest(BaseModel):
    username: Optional[str] = Field(None, description="Admin username", example="admin")
    password: Optional[str] = Field(None, description="Admin password")


class TokenResponse(BaseModel):
    token: str = Field(..., description="Signed admin session token (HS256 JWT)")
    username: Optional[str] = None
    expiresIn: str = Field(..., description="Token lifetime", example="30m")
