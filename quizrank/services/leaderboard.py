"""
Leaderboard ranking
Aggregates the score ledger per user for a scope and ranks the result
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from quizrank.core.config import settings
from quizrank.core.exceptions import NotFoundException, ValidationException
from quizrank.core.logging import log_execution_time
from quizrank.repositories import LeaderboardRepository, LeaderboardRow, SubjectRepository
from quizrank.schemas.leaderboard import (
    LeaderboardEntry,
    LeaderboardPeriod,
    LeaderboardResponse,
    UserRankResponse,
)
from quizrank.utils.clock import utcnow

logger = logging.getLogger(__name__)


def accuracy_percent(correct_answers: int, total_questions: int) -> float:
    if total_questions == 0:
        return 0.0
    return correct_answers / total_questions * 100


class LeaderboardService:
    """
    Ranked standings over the score ledger

    Scopes are global all-time, global weekly, global monthly, or one
    subject (all-time only). Standings are recomputed on every call, so two
    calls can disagree if attempts are graded in between.
    """

    def __init__(
        self,
        leaderboard: LeaderboardRepository,
        subjects: SubjectRepository,
        clock: Callable[[], datetime] = utcnow,
        default_limit: int = settings.LEADERBOARD_DEFAULT_LIMIT,
        max_limit: int = settings.LEADERBOARD_MAX_LIMIT,
        weekly_days: int = settings.WEEKLY_WINDOW_DAYS,
        monthly_days: int = settings.MONTHLY_WINDOW_DAYS,
    ):
        self.leaderboard = leaderboard
        self.subjects = subjects
        self.clock = clock
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.windows = {
            LeaderboardPeriod.WEEKLY: timedelta(days=weekly_days),
            LeaderboardPeriod.MONTHLY: timedelta(days=monthly_days),
        }

    def window_start(self, period: LeaderboardPeriod) -> Optional[datetime]:
        """Earliest created_at included in the period; entries at exactly this instant count"""
        window = self.windows.get(LeaderboardPeriod(period))
        if window is None:
            return None
        return self.clock() - window

    def _resolve_scope(self, subject_id: Optional[int], period: LeaderboardPeriod):
        """Return (subject, period, since) for a query"""
        if subject_id is None:
            return None, LeaderboardPeriod(period), self.window_start(period)

        if subject_id <= 0:
            raise ValidationException("subject_id must be a positive integer")
        subject = self.subjects.get(subject_id)
        if subject is None:
            raise NotFoundException("Subject", details={"subject_id": subject_id})
        # Subject standings are all-time only
        return subject, LeaderboardPeriod.ALL_TIME, None

    @log_execution_time()
    def get_leaderboard(
        self,
        subject_id: Optional[int] = None,
        period: LeaderboardPeriod = LeaderboardPeriod.ALL_TIME,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> LeaderboardResponse:
        limit = self.default_limit if limit is None else limit
        if limit < 1 or limit > self.max_limit:
            raise ValidationException(
                f"limit must be between 1 and {self.max_limit}", details={"limit": limit}
            )
        if offset < 0:
            raise ValidationException("offset must not be negative", details={"offset": offset})

        subject, period, since = self._resolve_scope(subject_id, period)
        scope_subject_id = subject.id if subject else None

        total_users = self.leaderboard.count_users(subject_id=scope_subject_id, since=since)
        rows = self.leaderboard.page(limit, offset, subject_id=scope_subject_id, since=since)

        return LeaderboardResponse(
            subject_id=scope_subject_id,
            subject_name=subject.name if subject else None,
            period=period,
            total_users=total_users,
            entries=[self._entry(row) for row in rows],
        )

    def get_user_rank(
        self,
        user_id: int,
        subject_id: Optional[int] = None,
        period: LeaderboardPeriod = LeaderboardPeriod.ALL_TIME,
    ) -> UserRankResponse:
        if user_id <= 0:
            raise ValidationException("user_id must be a positive integer")

        subject, period, since = self._resolve_scope(subject_id, period)
        scope_subject_id = subject.id if subject else None

        row = self.leaderboard.user_position(user_id, subject_id=scope_subject_id, since=since)
        if row is None:
            raise NotFoundException(
                "User rank",
                details={"user_id": user_id, "subject_id": scope_subject_id, "period": period.value},
            )

        return UserRankResponse(
            user_id=row.user_id,
            user_name=row.user_name,
            rank=row.rank,
            total_score=row.total_score,
            total_quizzes=row.total_quizzes,
            correct_answers=row.correct_answers,
            total_questions=row.total_questions,
            accuracy_percent=accuracy_percent(row.correct_answers, row.total_questions),
            total_users=self.leaderboard.count_users(subject_id=scope_subject_id, since=since),
        )

    @staticmethod
    def _entry(row: LeaderboardRow) -> LeaderboardEntry:
        return LeaderboardEntry(
            rank=row.rank,
            user_id=row.user_id,
            user_name=row.user_name,
            total_score=row.total_score,
            total_quizzes=row.total_quizzes,
            correct_answers=row.correct_answers,
            total_questions=row.total_questions,
            accuracy_percent=accuracy_percent(row.correct_answers, row.total_questions),
        )
