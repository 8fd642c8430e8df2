"""Service domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import Service, ServiceCategory
from ...shared.validators import require_text


class ServiceCreate(BaseModel):
    """Schema for creating a new service"""

    providerId: int
    name: str = Field(..., max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: ServiceCategory
    duration: int = Field(..., gt=0, description="Length in minutes")
    price: int = Field(0, ge=0, description="Price in minor currency units")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v)


class ServiceUpdate(BaseModel):
    """Schema for updating a service; providerId is not updatable"""

    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[ServiceCategory] = None
    duration: Optional[int] = Field(None, gt=0)
    price: Optional[int] = Field(None, ge=0)
    isActive: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v)


class ServiceResponse(BaseModel):
    """Schema for service response"""

    id: int
    providerId: int
    name: str
    description: Optional[str] = None
    category: ServiceCategory
    duration: int
    price: int
    isActive: bool
    createdAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, service: Service) -> "ServiceResponse":
        return cls(
            id=service.id,
            providerId=service.provider_id,
            name=service.name,
            description=service.description,
            category=service.category,
            duration=service.duration,
            price=service.price,
            isActive=service.is_active,
            createdAt=service.created_at,
        )
