import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .domain.access.policy import Principal
from .errors import Unauthenticated
from .models import User
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header surfaces as our own 401, not FastAPI's default
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller from a Bearer access token"""

    if not credentials:
        logger.warning("❌ No credentials provided")
        raise Unauthenticated(
            "Not authenticated. Please provide a valid Bearer token in the Authorization header."
        )

    token = credentials.credentials
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, token length: {len(token)}")
        raise Unauthenticated("Invalid token format. Expected a valid JWT token.")

    claims = decode_access_token(token)
    if not claims:
        raise Unauthenticated("Invalid or expired token")

    try:
        user_id = int(claims.get("sub", ""))
    except (TypeError, ValueError):
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(claims.keys())}")
        raise Unauthenticated("Invalid token claims") from None

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Token for unknown user {user_id}")
        raise Unauthenticated("Account no longer exists")

    if not user.is_active:
        logger.warning(f"⚠️ Deactivated user {user.id} attempted to authenticate")
        raise Unauthenticated("Account is deactivated")

    logger.debug(f"✅ User authenticated: {user.username}")
    return user


async def get_current_principal(user: User = Depends(get_current_user)) -> Principal:
    """Reduce the authenticated user to what authorization needs"""
    return Principal(user_id=user.id, role=user.role)
