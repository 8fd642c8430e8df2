"""Provider service - Business logic for provider profiles"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import Conflict, NotFound, ValidationError
from ...models import Provider, ServiceCategory, User, UserRole
from ...utils.sanitization import sanitize_string
from ..access.ownership import OwnershipResolver
from ..access.policy import Action, PolicyEngine, Principal, ResourceSnapshot
from ..users.repository import UserRepository
from .repository import ProviderRepository
from .schemas import ProviderCreate, ProviderUpdate

logger = logging.getLogger(__name__)


class ProviderService:
    """Service layer for provider business logic"""

    def __init__(self, db: Session, policy: Optional[PolicyEngine] = None):
        self.db = db
        self.repo = ProviderRepository()
        self.user_repo = UserRepository()
        self.policy = policy or PolicyEngine(OwnershipResolver(db))

    def list_providers(
        self, category: Optional[ServiceCategory] = None, user_id: Optional[int] = None
    ) -> list[Provider]:
        return self.repo.get_providers(self.db, category=category, user_id=user_id)

    def get_provider(self, provider_id: int) -> Provider:
        provider = self.repo.get_provider_by_id(self.db, provider_id)
        if not provider:
            raise NotFound("Provider not found")
        return provider

    def _ensure_no_provider_for(self, user_id: int) -> None:
        if self.repo.get_provider_by_user_id(self.db, user_id):
            logger.warning(f"⚠️ Provider already exists for user {user_id}")
            raise Conflict("Provider already exists for this user")

    def _require_provider_user(self, user_id: int) -> User:
        user = self.user_repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFound("User not found")
        if user.role != UserRole.PROVIDER:
            raise ValidationError("User is not a provider")
        return user

    def create_provider(self, data: ProviderCreate, principal: Principal) -> Provider:
        """
        Create the provider profile of a Provider-role user.

        The one-provider-per-user rule is checked first, so a duplicate is a
        Conflict whoever the caller is.
        """
        self._ensure_no_provider_for(data.userId)

        self.policy.authorize(
            principal, Action.CREATE_PROVIDER, ResourceSnapshot(kind="Provider", user_id=data.userId)
        ).raise_for_denial()

        self._require_provider_user(data.userId)

        try:
            provider = self.repo.create_provider(
                self.db,
                data.userId,
                company_name=sanitize_string(data.companyName),
                address=sanitize_string(data.address),
                category=data.category,
                description=sanitize_string(data.description),
                working_hours=data.workingHours,
            )
        except IntegrityError as e:
            # Lost a race against another insert for the same user
            self.db.rollback()
            raise Conflict("Provider already exists for this user") from e

        logger.info(f"✅ Provider {provider.id} created for user {provider.user_id}")
        return provider

    def update_provider(
        self, provider_id: int, data: ProviderUpdate, principal: Principal
    ) -> Provider:
        provider = self.get_provider(provider_id)
        snapshot = ResourceSnapshot.of(provider)
        self.policy.authorize(principal, Action.UPDATE_PROVIDER, snapshot).raise_for_denial()

        updates = {}
        if data.companyName is not None:
            updates["company_name"] = sanitize_string(data.companyName)
        if data.address is not None:
            updates["address"] = sanitize_string(data.address)
        if data.category is not None:
            updates["category"] = data.category
        if data.description is not None:
            updates["description"] = sanitize_string(data.description)
        if data.workingHours is not None:
            updates["working_hours"] = data.workingHours

        wants_privileged = data.userId is not None or data.isVerified is not None
        if wants_privileged:
            if self.policy.authorize(principal, Action.UPDATE_PROVIDER_PRIVILEGED, snapshot):
                if data.userId is not None and data.userId != provider.user_id:
                    self._ensure_no_provider_for(data.userId)
                    self._require_provider_user(data.userId)
                    updates["user_id"] = data.userId
                if data.isVerified is not None:
                    updates["is_verified"] = data.isVerified
            else:
                # Forced to the existing values, not an error
                logger.info(
                    f"ℹ️ Ignoring privileged provider fields from user {principal.user_id} "
                    f"on provider {provider.id}"
                )

        try:
            return self.repo.update_provider(self.db, provider, **updates)
        except IntegrityError as e:
            self.db.rollback()
            raise Conflict("Provider already exists for this user") from e

    def verify_provider(
        self, provider_id: int, is_verified: bool, principal: Principal
    ) -> Provider:
        """Admin-only toggle of the verification badge"""
        self.policy.authorize(
            principal, Action.VERIFY_PROVIDER, ResourceSnapshot(kind="Provider", id=provider_id)
        ).raise_for_denial()

        provider = self.get_provider(provider_id)
        provider = self.repo.set_verified(self.db, provider, is_verified)
        logger.info(
            f"✅ Provider {provider.id} verification set to {is_verified} by admin {principal.user_id}"
        )
        return provider
