"""Provider repository - Database operations for providers"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Provider, ServiceCategory


class ProviderRepository:
    """Repository for provider database operations"""

    @staticmethod
    def get_providers(
        db: Session,
        category: Optional[ServiceCategory] = None,
        user_id: Optional[int] = None,
    ) -> list[Provider]:
        """Get providers with optional category / owner filters"""
        query = db.query(Provider).options(joinedload(Provider.user))

        if category is not None:
            query = query.filter(Provider.category == category)

        if user_id is not None:
            query = query.filter(Provider.user_id == user_id)

        return query.order_by(Provider.id).all()

    @staticmethod
    def get_provider_by_id(db: Session, provider_id: int) -> Optional[Provider]:
        """Get a specific provider by ID"""
        return db.query(Provider).filter(Provider.id == provider_id).first()

    @staticmethod
    def get_provider_by_user_id(db: Session, user_id: int) -> Optional[Provider]:
        """Get the provider owned by a user (at most one)"""
        return db.query(Provider).filter(Provider.user_id == user_id).first()

    @staticmethod
    def create_provider(db: Session, user_id: int, **provider_data) -> Provider:
        """Create a new provider"""
        provider = Provider(user_id=user_id, **provider_data)
        db.add(provider)
        db.commit()
        db.refresh(provider)
        return provider

    @staticmethod
    def update_provider(db: Session, provider: Provider, **updates) -> Provider:
        """Update a provider with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(provider, key):
                setattr(provider, key, value)

        db.commit()
        db.refresh(provider)
        return provider

    @staticmethod
    def set_verified(db: Session, provider: Provider, is_verified: bool) -> Provider:
        """Toggle the admin-controlled verification flag"""
        provider.is_verified = is_verified
        db.commit()
        db.refresh(provider)
        return provider
