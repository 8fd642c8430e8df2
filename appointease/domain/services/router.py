"""Service router - FastAPI endpoints for the service catalog"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_principal
from ...database import get_db
from ...models import ServiceCategory
from ..access.policy import Principal
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def list_services(
    providerId: Optional[int] = Query(None),
    category: Optional[ServiceCategory] = Query(None),
    service: CatalogService = Depends(get_catalog_service),
):
    """Active services, optionally filtered by provider or category"""
    return [ServiceResponse.from_model(s) for s in service.list_services(providerId, category)]


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Get a service by ID (soft-deleted services included)"""
    return ServiceResponse.from_model(service.get_service(service_id))


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    principal: Principal = Depends(get_current_principal),
    service: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(service.create_service(data, principal))


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    principal: Principal = Depends(get_current_principal),
    service: CatalogService = Depends(get_catalog_service),
):
    return ServiceResponse.from_model(service.update_service(service_id, data, principal))


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    principal: Principal = Depends(get_current_principal),
    service: CatalogService = Depends(get_catalog_service),
):
    """Soft delete a service"""
    return service.delete_service(service_id, principal)
