"""
Service dependencies
Each request gets its own session-bound repositories and services
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from quizrank.core.config import settings
from quizrank.core.database import get_db
from quizrank.repositories import (
    LeaderboardRepository,
    QuestionRepository,
    ScoreRepository,
    SubjectRepository,
    UserRepository,
)
from quizrank.services.leaderboard import LeaderboardService
from quizrank.services.questions import QuestionService
from quizrank.services.quiz_generator import QuizGenerator
from quizrank.services.quiz_grader import QuizGrader
from quizrank.services.users import UserService


def get_quiz_generator(db: Session = Depends(get_db)) -> QuizGenerator:
    return QuizGenerator(
        QuestionRepository(db),
        max_questions=settings.QUIZ_MAX_QUESTIONS,
        draw_attempts=settings.QUIZ_DRAW_ATTEMPTS,
    )


def get_quiz_grader(db: Session = Depends(get_db)) -> QuizGrader:
    return QuizGrader(
        QuestionRepository(db),
        ScoreRepository(db),
        strict=settings.strict_grading,
        mode=settings.SCORE_MODE,
    )


def get_leaderboard_service(db: Session = Depends(get_db)) -> LeaderboardService:
    return LeaderboardService(
        LeaderboardRepository(db),
        SubjectRepository(db),
        default_limit=settings.LEADERBOARD_DEFAULT_LIMIT,
        max_limit=settings.LEADERBOARD_MAX_LIMIT,
        weekly_days=settings.WEEKLY_WINDOW_DAYS,
        monthly_days=settings.MONTHLY_WINDOW_DAYS,
    )


def get_question_service(db: Session = Depends(get_db)) -> QuestionService:
    return QuestionService(QuestionRepository(db), SubjectRepository(db))


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db), ScoreRepository(db))
