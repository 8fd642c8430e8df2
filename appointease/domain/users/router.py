"""User router - FastAPI endpoints for account profiles"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_principal, get_current_user
from ...database import get_db
from ...models import User
from ..access.policy import Principal
from .schemas import UserResponse, UserUpdate
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's profile"""
    return UserResponse.from_model(current_user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.from_model(service.get_user(user_id, principal))


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate,
    principal: Principal = Depends(get_current_principal),
    service: UserService = Depends(get_user_service),
):
    """Update profile fields (self or admin); isActive is admin only"""
    return UserResponse.from_model(service.update_user(user_id, data, principal))
