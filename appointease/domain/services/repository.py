"""Service repository - Database operations for bookable services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Service, ServiceCategory


class ServiceRepository:
    """Repository for service database operations"""

    @staticmethod
    def get_services(
        db: Session,
        provider_id: Optional[int] = None,
        category: Optional[ServiceCategory] = None,
    ) -> list[Service]:
        """List active services; soft-deleted ones never show up here"""
        query = db.query(Service).filter(Service.is_active.is_(True))

        if provider_id is not None:
            query = query.filter(Service.provider_id == provider_id)

        if category is not None:
            query = query.filter(Service.category == category)

        return query.order_by(Service.id).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        """Get a service by ID, including soft-deleted ones"""
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def create_service(db: Session, provider_id: int, **service_data) -> Service:
        """Create a new service"""
        service = Service(provider_id=provider_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        """Update a service with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def soft_delete_service(db: Session, service: Service) -> Service:
        """Mark a service inactive; it stays resolvable for past appointments"""
        service.is_active = False
        db.commit()
        db.refresh(service)
        return service
