"""Provider router - FastAPI endpoints for provider profiles"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_principal
from ...database import get_db
from ...models import ServiceCategory, UserRole
from ..access.policy import Principal, require_role
from .schemas import ProviderCreate, ProviderResponse, ProviderUpdate, ProviderVerify
from .service import ProviderService

router = APIRouter(prefix="/providers", tags=["Providers"])


def get_provider_service(db: Session = Depends(get_db)) -> ProviderService:
    """Dependency injection for ProviderService"""
    return ProviderService(db)


@router.get("", response_model=list[ProviderResponse])
async def list_providers(
    category: Optional[ServiceCategory] = Query(None),
    userId: Optional[int] = Query(None),
    service: ProviderService = Depends(get_provider_service),
):
    """Providers with their public contact details"""
    providers = service.list_providers(category=category, user_id=userId)
    return [ProviderResponse.from_model(p, include_user=True) for p in providers]


@router.get("/{provider_id}", response_model=ProviderResponse)
async def get_provider(
    provider_id: int,
    service: ProviderService = Depends(get_provider_service),
):
    return ProviderResponse.from_model(service.get_provider(provider_id), include_user=True)


@router.post("", response_model=ProviderResponse, status_code=201)
async def create_provider(
    data: ProviderCreate,
    principal: Principal = Depends(get_current_principal),
    service: ProviderService = Depends(get_provider_service),
):
    """Create a provider profile (admin only)"""
    return ProviderResponse.from_model(service.create_provider(data, principal))


@router.patch("/{provider_id}", response_model=ProviderResponse)
async def update_provider(
    provider_id: int,
    data: ProviderUpdate,
    principal: Principal = Depends(get_current_principal),
    service: ProviderService = Depends(get_provider_service),
):
    """Update provider info (owner or admin)"""
    return ProviderResponse.from_model(service.update_provider(provider_id, data, principal))


@router.patch("/{provider_id}/verify", response_model=ProviderResponse)
async def verify_provider(
    provider_id: int,
    data: ProviderVerify,
    principal: Principal = Depends(get_current_principal),
    service: ProviderService = Depends(get_provider_service),
):
    """Set the verification flag (admin only)"""
    require_role(principal, UserRole.ADMIN).raise_for_denial()
    return ProviderResponse.from_model(
        service.verify_provider(provider_id, data.isVerified, principal)
    )
