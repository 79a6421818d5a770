"""
Persistence gateway
Narrow repository classes over a SQLAlchemy session
"""

from quizrank.repositories.leaderboard import LeaderboardRepository, LeaderboardRow
from quizrank.repositories.questions import QuestionRepository, SubjectRepository
from quizrank.repositories.scores import ScoreRepository
from quizrank.repositories.users import UserRepository

__all__ = [
    "LeaderboardRepository",
    "LeaderboardRow",
    "QuestionRepository",
    "ScoreRepository",
    "SubjectRepository",
    "UserRepository",
]
