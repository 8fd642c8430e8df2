"""Auth router - registration and login endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ..users.schemas import UserResponse
from .schemas import AuthResponse, LoginRequest, RegisterRequest
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(data: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Create an account; providers also get their business profile"""
    user, token = service.register(data)
    return AuthResponse(token=token, user=UserResponse.from_model(user))


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    user, token = service.login(data)
    return AuthResponse(token=token, user=UserResponse.from_model(user))
