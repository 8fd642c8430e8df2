"""Auth domain schemas - registration and login payloads"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...models import ServiceCategory, UserRole
from ...security_utils import MIN_PASSWORD_LENGTH
from ...shared.validators import (
    normalize_username,
    require_text,
    validate_email,
    validate_phone,
)
from ..users.schemas import UserResponse


class ProviderInfo(BaseModel):
    """Business details captured when a provider signs up"""

    companyName: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    category: Optional[ServiceCategory] = None
    description: Optional[str] = Field(None, max_length=2000)
    workingHours: Optional[Any] = None


class RegisterRequest(BaseModel):
    username: str
    password: str
    firstName: str = Field(..., max_length=255)
    lastName: str = Field(..., max_length=255)
    email: str
    phone: Optional[str] = None
    city: Optional[str] = Field(None, max_length=255)
    role: UserRole = UserRole.CUSTOMER
    providerInfo: Optional[ProviderInfo] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        return normalize_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v

    @field_validator("firstName", "lastName")
    @classmethod
    def validate_names(cls, v):
        return require_text(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class LoginRequest(BaseModel):
    username: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
