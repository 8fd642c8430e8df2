"""Ownership resolver - maps a principal to the Provider record they own"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Provider
from ..providers.repository import ProviderRepository

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """
    Answers "which provider does this user own".

    Every call goes back to the store; results are never cached between
    requests so authorization always sees current data.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProviderRepository()

    def resolve_provider_for_user(self, user_id: int) -> Optional[Provider]:
        """Return the Provider owned by ``user_id``, or None if there is none"""
        return self.repo.get_provider_by_user_id(self.db, user_id)

    def owns_provider(self, user_id: int, provider_id: Optional[int]) -> bool:
        if provider_id is None:
            return False
        provider = self.resolve_provider_for_user(user_id)
        return provider is not None and provider.id == provider_id
