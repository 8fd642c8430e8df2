"""User service - Business logic for account profiles"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import NotFound
from ...models import User
from ..access.ownership import OwnershipResolver
from ..access.policy import Action, PolicyEngine, Principal, ResourceSnapshot
from .repository import UserRepository
from .schemas import UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user profile logic"""

    def __init__(self, db: Session, policy: Optional[PolicyEngine] = None):
        self.db = db
        self.repo = UserRepository()
        self.policy = policy or PolicyEngine(OwnershipResolver(db))

    def get_user(self, user_id: int, principal: Principal) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFound("User not found")

        self.policy.authorize(
            principal, Action.VIEW_USER, ResourceSnapshot(kind="User", id=user.id)
        ).raise_for_denial()
        return user

    def update_user(self, user_id: int, data: UserUpdate, principal: Principal) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise NotFound("User not found")

        snapshot = ResourceSnapshot(kind="User", id=user.id)
        self.policy.authorize(principal, Action.UPDATE_USER, snapshot).raise_for_denial()

        if data.isActive is not None:
            self.policy.authorize(
                principal, Action.TOGGLE_USER_ACTIVE, snapshot
            ).raise_for_denial()

        user = self.repo.update_user(
            self.db,
            user,
            first_name=data.firstName,
            last_name=data.lastName,
            email=data.email,
            phone=data.phone,
            city=data.city,
            is_active=data.isActive,
        )
        if data.isActive is not None:
            logger.info(
                f"✅ User {user.id} active flag set to {data.isActive} by admin {principal.user_id}"
            )
        return user
