import re

from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-().]{7,20}$")


class EnquiryCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Customer name", example="Asha")
    email: str = Field(..., min_length=1, description="Customer email", example="asha@example.com")
    phone: str = Field(..., min_length=1, description="Customer phone", example="+91 98765 43210")
    query: str = Field(..., min_length=1, description="Enquiry text")
    product: Optional[str] = Field(None, description="Product the enquiry is about")

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email format")
        return value

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, value: str) -> str:
        if not PHONE_PATTERN.match(value):
            raise ValueError("Invalid phone number")
        return value


class NotificationRequest(BaseModel):
    """Legacy contact form payload for /sendEmail and /sendSMS"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    query: Optional[str] = None
    product: Optional[str] = None

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def is_complete(self) -> bool:
        return bool(self.name and (self.email or self.phone) and self.query)
