"""Service catalog - Business logic for provider services"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import NotFound
from ...models import Service, ServiceCategory
from ...utils.sanitization import sanitize_string
from ..access.ownership import OwnershipResolver
from ..access.policy import Action, PolicyEngine, Principal, ResourceSnapshot
from ..providers.repository import ProviderRepository
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the bookable services offered by providers"""

    def __init__(self, db: Session, policy: Optional[PolicyEngine] = None):
        self.db = db
        self.repo = ServiceRepository()
        self.provider_repo = ProviderRepository()
        self.policy = policy or PolicyEngine(OwnershipResolver(db))

    def list_services(
        self, provider_id: Optional[int] = None, category: Optional[ServiceCategory] = None
    ) -> list[Service]:
        """Public listing of active services"""
        return self.repo.get_services(self.db, provider_id=provider_id, category=category)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFound("Service not found")
        return service

    def create_service(self, data: ServiceCreate, principal: Principal) -> Service:
        """Create a service for a provider the caller may manage"""
        self.policy.authorize(
            principal,
            Action.CREATE_SERVICE,
            ResourceSnapshot(kind="Service", provider_id=data.providerId),
        ).raise_for_denial()

        if not self.provider_repo.get_provider_by_id(self.db, data.providerId):
            raise NotFound("Provider not found")

        service = self.repo.create_service(
            self.db,
            data.providerId,
            name=sanitize_string(data.name),
            description=sanitize_string(data.description),
            category=data.category,
            duration=data.duration,
            price=data.price,
        )
        logger.info(f"✅ Service {service.id} created for provider {service.provider_id}")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate, principal: Principal) -> Service:
        service = self.get_service(service_id)
        self.policy.authorize(
            principal, Action.UPDATE_SERVICE, ResourceSnapshot.of(service)
        ).raise_for_denial()

        updates = {}
        if data.name is not None:
            updates["name"] = sanitize_string(data.name)
        if data.description is not None:
            updates["description"] = sanitize_string(data.description)
        if data.category is not None:
            updates["category"] = data.category
        if data.duration is not None:
            updates["duration"] = data.duration
        if data.price is not None:
            updates["price"] = data.price
        if data.isActive is not None:
            updates["is_active"] = data.isActive

        return self.repo.update_service(self.db, service, **updates)

    def delete_service(self, service_id: int, principal: Principal) -> dict:
        """Soft delete: the service disappears from listings but keeps its row"""
        service = self.get_service(service_id)
        self.policy.authorize(
            principal, Action.DELETE_SERVICE, ResourceSnapshot.of(service)
        ).raise_for_denial()

        self.repo.soft_delete_service(self.db, service)
        logger.info(f"🗑️ Service {service.id} deactivated by user {principal.user_id}")
        return {"message": "Service deleted successfully"}
