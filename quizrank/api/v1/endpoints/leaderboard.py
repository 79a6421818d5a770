"""
Leaderboard endpoints
Handles global, periodic and subject-specific leaderboards
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from quizrank.api.deps import get_leaderboard_service
from quizrank.core.security import get_current_user_id
from quizrank.schemas.leaderboard import LeaderboardPeriod, LeaderboardResponse, UserRankResponse
from quizrank.services.leaderboard import LeaderboardService

router = APIRouter()


@router.get("", response_model=LeaderboardResponse)
def get_leaderboard(
    subject_id: Optional[int] = Query(None, gt=0),
    period: LeaderboardPeriod = Query(LeaderboardPeriod.ALL_TIME),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Ranked standings; subject standings are all-time"""
    return service.get_leaderboard(subject_id=subject_id, period=period, limit=limit, offset=offset)


@router.get("/me", response_model=UserRankResponse)
def get_my_rank(
    subject_id: Optional[int] = Query(None, gt=0),
    period: LeaderboardPeriod = Query(LeaderboardPeriod.ALL_TIME),
    user_id: int = Depends(get_current_user_id),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Authenticated user's position"""
    return service.get_user_rank(user_id, subject_id=subject_id, period=period)


@router.get("/users/{user_id}/rank", response_model=UserRankResponse)
def get_user_rank(
    user_id: int,
    subject_id: Optional[int] = Query(None, gt=0),
    period: LeaderboardPeriod = Query(LeaderboardPeriod.ALL_TIME),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Any user's position"""
    return service.get_user_rank(user_id, subject_id=subject_id, period=period)
