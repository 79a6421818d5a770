"""Leaderboard schemas"""

import enum
from typing import List, Optional

from pydantic import BaseModel


class LeaderboardPeriod(str, enum.Enum):
    ALL_TIME = "all_time"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: int
    user_name: str
    total_score: int
    total_quizzes: int
    correct_answers: int
    total_questions: int
    accuracy_percent: float


class LeaderboardResponse(BaseModel):
    subject_id: Optional[int] = None
    subject_name: Optional[str] = None
    period: LeaderboardPeriod
    total_users: int
    entries: List[LeaderboardEntry]


class UserRankResponse(BaseModel):
    user_id: int
    user_name: str
    rank: int
    total_score: int
    total_quizzes: int
    correct_answers: int
    total_questions: int
    accuracy_percent: float
    total_users: int
