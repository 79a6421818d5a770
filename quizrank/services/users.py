"""User service: registration, login and ledger statistics"""

import logging
from typing import Optional

from quizrank.core.config import settings
from quizrank.core.database import get_db_session
from quizrank.core.exceptions import AuthenticationException, DuplicateException, NotFoundException
from quizrank.core.security import SecurityUtils
from quizrank.models import User, UserRole
from quizrank.repositories import ScoreRepository, UserRepository
from quizrank.schemas.user import UserCreate, UserStats
from quizrank.services.leaderboard import accuracy_percent

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, scores: ScoreRepository):
        self.users = users
        self.scores = scores

    def register(self, data: UserCreate, role: UserRole = UserRole.STUDENT) -> User:
        """Create new user"""
        if self.users.exists(data.username, data.email):
            raise DuplicateException("User with this username or email")

        user = self.users.create(
            email=data.email,
            username=data.username,
            full_name=data.full_name,
            hashed_password=SecurityUtils.get_password_hash(data.password),
            role=role,
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def ensure_admin(self, data: UserCreate) -> User:
        """Create the admin account unless the username or email is taken"""
        existing = self.users.get_by_username_or_email(data.username)
        if existing is None:
            existing = self.users.get_by_username_or_email(data.email)
        if existing is not None:
            if existing.role != UserRole.ADMIN:
                logger.warning(
                    "First admin account name is held by a non-admin user",
                    extra={"user_id": existing.id},
                )
            return existing
        return self.register(data, role=UserRole.ADMIN)

    def authenticate(self, login: str, password: str) -> User:
        user = self.users.get_by_username_or_email(login)
        if user is None or not SecurityUtils.verify_password(password, user.hashed_password):
            raise AuthenticationException("Incorrect username or password")
        if not user.is_active:
            raise AuthenticationException("Inactive user")

        self.users.touch_login(user)
        return user

    def get_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundException("User", details={"user_id": user_id})
        return user

    def get_stats(self, user_id: int) -> UserStats:
        """Totals over every ledger row of the user; zeros when none exist"""
        totals = self.scores.user_totals(user_id)
        return UserStats(
            user_id=user_id,
            total_quizzes_taken=totals.total_quizzes,
            total_correct_answers=totals.correct_answers,
            total_incorrect_answers=totals.incorrect_answers,
            total_questions_answered=totals.total_questions,
            total_score=totals.total_score,
            accuracy_percent=accuracy_percent(totals.correct_answers, totals.total_questions),
        )


def seed_first_admin(
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> Optional[User]:
    """
    Create the configured first admin account

    Values default to the FIRST_ADMIN_* settings; nothing happens unless all
    three are set. Safe to run on every startup.
    """
    username = username or settings.FIRST_ADMIN_USERNAME
    email = email or settings.FIRST_ADMIN_EMAIL
    password = password or settings.FIRST_ADMIN_PASSWORD
    if not (username and email and password):
        return None

    data = UserCreate(email=email, username=username, full_name="Administrator", password=password)
    with get_db_session() as db:
        admin = UserService(UserRepository(db), ScoreRepository(db)).ensure_admin(data)
    logger.info("First admin ensured", extra={"user_id": admin.id})
    return admin
