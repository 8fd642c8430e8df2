"""Employee domain schemas - Pydantic models for validation"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...models import Employee
from ...shared.validators import require_text, validate_email, validate_phone


class EmployeeCreate(BaseModel):
    """Schema for adding staff to a provider"""

    providerId: int
    firstName: str = Field(..., max_length=255)
    lastName: str = Field(..., max_length=255)
    email: str
    phone: Optional[str] = None
    position: Optional[str] = Field(None, max_length=255)
    department: str = Field(..., max_length=255)
    workingHours: Optional[Any] = None

    @field_validator("firstName", "lastName", "department")
    @classmethod
    def validate_required_text(cls, v):
        return require_text(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee; providerId is not updatable"""

    firstName: Optional[str] = Field(None, max_length=255)
    lastName: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    workingHours: Optional[Any] = None
    isActive: Optional[bool] = None

    @field_validator("firstName", "lastName", "department")
    @classmethod
    def validate_required_text(cls, v):
        return require_text(v)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_field(cls, v):
        return validate_phone(v)


class EmployeeResponse(BaseModel):
    id: int
    providerId: int
    firstName: str
    lastName: str
    email: str
    phone: Optional[str] = None
    position: Optional[str] = None
    department: str
    workingHours: Optional[Any] = None
    isActive: bool

    @classmethod
    def from_model(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            providerId=employee.provider_id,
            firstName=employee.first_name,
            lastName=employee.last_name,
            email=employee.email,
            phone=employee.phone,
            position=employee.position,
            department=employee.department,
            workingHours=employee.working_hours,
            isActive=employee.is_active,
        )
