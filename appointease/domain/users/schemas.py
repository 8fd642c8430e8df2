"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import User, UserRole
from ...shared.validators import require_text, validate_email, validate_phone


class UserUpdate(BaseModel):
    """Profile fields a user may change; role and username are immutable"""

    firstName: Optional[str] = Field(None, max_length=255)
    lastName: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = Field(None, max_length=255)
    isActive: Optional[bool] = None

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


class UserResponse(BaseModel):
    """Public view of an account; never carries the password hash"""

    id: int
    username: str
    firstName: str
    lastName: str
    email: str
    phone: Optional[str] = None
    city: Optional[str] = None
    role: UserRole
    isActive: bool
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            firstName=user.first_name,
            lastName=user.last_name,
            email=user.email,
            phone=user.phone,
            city=user.city,
            role=user.role,
            isActive=user.is_active,
            createdAt=user.created_at,
        )
