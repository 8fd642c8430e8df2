"""Auth service - account registration and credential checks"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...config import ALLOW_ADMIN_REGISTRATION
from ...errors import Conflict, Forbidden, Unauthenticated
from ...models import ServiceCategory, User, UserRole
from ...security_utils import create_access_token, hash_password, verify_password
from ...utils.sanitization import sanitize_string
from ..providers.repository import ProviderRepository
from ..users.repository import UserRepository
from .schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_CATEGORY = ServiceCategory.HEALTHCARE


class AuthService:
    """Service layer for registration and login"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository()
        self.provider_repo = ProviderRepository()

    def register(self, data: RegisterRequest) -> tuple[User, str]:
        """
        Create an account and return it with a fresh access token.

        A Provider registration also creates the provider profile, in the
        same transaction as the user row.
        """
        if data.role == UserRole.ADMIN and not ALLOW_ADMIN_REGISTRATION:
            logger.warning(f"🚫 Admin self-registration refused for '{data.username}'")
            raise Forbidden("Admin accounts cannot be self-registered")

        if self.user_repo.get_user_by_username(self.db, data.username):
            raise Conflict("Username is already taken")

        try:
            user = self.user_repo.create_user(
                self.db,
                commit=data.role != UserRole.PROVIDER,
                username=data.username,
                password_hash=hash_password(data.password),
                first_name=data.firstName,
                last_name=data.lastName,
                email=data.email,
                phone=data.phone,
                city=data.city,
                role=data.role,
            )

            if data.role == UserRole.PROVIDER:
                info = data.providerInfo
                if info and info.companyName:
                    company_name = sanitize_string(info.companyName)
                else:
                    company_name = f"{data.firstName}'s Company"
                self.provider_repo.create_provider(
                    self.db,
                    user.id,
                    company_name=company_name,
                    address=sanitize_string(info.address) if info else None,
                    category=(info.category if info and info.category else DEFAULT_PROVIDER_CATEGORY),
                    description=sanitize_string(info.description) if info else None,
                    working_hours=info.workingHours if info else None,
                )
                self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Registration race for username '{data.username}': {e.orig}")
            raise Conflict("Username is already taken") from e

        logger.info(f"✅ Registered user {user.id} ({user.role.value})")
        return user, create_access_token(user.id, user.role.value)

    def login(self, data: LoginRequest) -> tuple[User, str]:
        user = self.user_repo.get_user_by_username(self.db, data.username.strip())
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning(f"❌ Failed login for '{data.username}'")
            raise Unauthenticated("Invalid username or password")

        if not user.is_active:
            logger.warning(f"⚠️ Deactivated user {user.id} attempted to log in")
            raise Unauthenticated("Account is deactivated")

        logger.info(f"✅ User {user.id} logged in")
        return user, create_access_token(user.id, user.role.value)
