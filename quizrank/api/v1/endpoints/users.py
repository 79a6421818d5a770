"""
User endpoints
Profile and score statistics of the authenticated user
"""

from fastapi import APIRouter, Depends

from quizrank.api.deps import get_user_service
from quizrank.core.security import get_current_active_user
from quizrank.models import User
from quizrank.schemas.user import UserResponse, UserStats
from quizrank.services.users import UserService

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_active_user)):
    """Get current user"""
    return current_user


@router.get("/me/stats", response_model=UserStats)
def get_my_stats(
    current_user: User = Depends(get_current_active_user),
    service: UserService = Depends(get_user_service),
):
    """Quizzes taken and answer totals across all attempts"""
    return service.get_stats(current_user.id)
