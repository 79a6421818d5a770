"""
Authentication endpoints
"""

from fastapi import APIRouter, Depends, status

from quizrank.api.deps import get_user_service
from quizrank.core.config import settings
from quizrank.core.security import create_user_token
from quizrank.schemas.user import Token, UserCreate, UserLogin, UserResponse
from quizrank.services.users import UserService

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_create: UserCreate, service: UserService = Depends(get_user_service)):
    """Register new user"""
    return service.register(user_create)


@router.post("/login", response_model=Token)
def login(credentials: UserLogin, service: UserService = Depends(get_user_service)):
    """Login with username or email"""
    user = service.authenticate(credentials.username, credentials.password)
    return Token(
        access_token=create_user_token(user),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
