"""Provider domain schemas - Pydantic models for validation"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from ...models import Provider, ServiceCategory


class ProviderCreate(BaseModel):
    """Schema for creating a provider profile for an existing Provider-role user"""

    userId: int
    companyName: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    category: ServiceCategory
    description: Optional[str] = Field(None, max_length=2000)
    workingHours: Optional[Any] = None


class ProviderUpdate(BaseModel):
    """
    Schema for updating a provider.

    userId and isVerified are privileged: they are applied for admins and
    silently ignored for everyone else.
    """

    companyName: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    category: Optional[ServiceCategory] = None
    description: Optional[str] = Field(None, max_length=2000)
    workingHours: Optional[Any] = None
    userId: Optional[int] = None
    isVerified: Optional[bool] = None


class ProviderVerify(BaseModel):
    isVerified: bool


class ProviderUserInfo(BaseModel):
    """Public contact details of the user behind a provider"""

    firstName: str
    lastName: str
    email: str
    phone: Optional[str] = None
    city: Optional[str] = None


class ProviderResponse(BaseModel):
    id: int
    userId: int
    companyName: Optional[str] = None
    address: Optional[str] = None
    category: ServiceCategory
    description: Optional[str] = None
    workingHours: Optional[Any] = None
    isVerified: bool
    userInfo: Optional[ProviderUserInfo] = None

    @classmethod
    def from_model(cls, provider: Provider, include_user: bool = False) -> "ProviderResponse":
        user_info = None
        if include_user and provider.user is not None:
            user = provider.user
            user_info = ProviderUserInfo(
                firstName=user.first_name,
                lastName=user.last_name,
                email=user.email,
                phone=user.phone,
                city=user.city,
            )
        return cls(
            id=provider.id,
            userId=provider.user_id,
            companyName=provider.company_name,
            address=provider.address,
            category=provider.category,
            description=provider.description,
            workingHours=provider.working_hours,
            isVerified=provider.is_verified,
            userInfo=user_info,
        )
