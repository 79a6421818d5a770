"""Leaderboard aggregation queries over the score ledger"""

from datetime import datetime
from typing import List, NamedTuple, Optional

from sqlalchemy import func

from quizrank.models import Score, User
from quizrank.repositories.base import SessionRepository, store_call


class LeaderboardRow(NamedTuple):
    rank: int
    user_id: int
    user_name: str
    total_score: int
    total_quizzes: int
    correct_answers: int
    total_questions: int


class LeaderboardRepository(SessionRepository):
    """
    Ranks users by their summed ledger rows

    Ordering is total score desc, then total correct answers desc, then user
    id asc so that full ties still get a stable position. Ranks come from
    ROW_NUMBER() over the whole scope, before any LIMIT/OFFSET, so the page
    query and the single-user query always agree.
    """

    @staticmethod
    def _conditions(subject_id: Optional[int], since: Optional[datetime]) -> list:
        conditions = []
        if subject_id is not None:
            conditions.append(Score.subject_id == subject_id)
        if since is not None:
            conditions.append(Score.created_at >= since)
        return conditions

    def _ranked(self, subject_id: Optional[int], since: Optional[datetime]):
        total_score = func.coalesce(func.sum(Score.score), 0)
        correct_answers = func.coalesce(func.sum(Score.correct_answers), 0)
        rank = func.row_number().over(
            order_by=(total_score.desc(), correct_answers.desc(), Score.user_id.asc())
        )
        return (
            self.db.query(
                rank.label("rank"),
                Score.user_id.label("user_id"),
                User.username.label("user_name"),
                total_score.label("total_score"),
                func.count(Score.id).label("total_quizzes"),
                correct_answers.label("correct_answers"),
                func.coalesce(func.sum(Score.total_questions), 0).label("total_questions"),
            )
            .join(User, User.id == Score.user_id)
            .filter(*self._conditions(subject_id, since))
            .group_by(Score.user_id, User.username)
            .subquery("ranked")
        )

    @store_call
    def count_users(self, subject_id: Optional[int] = None, since: Optional[datetime] = None) -> int:
        return (
            self.db.query(func.count(func.distinct(Score.user_id)))
            .filter(*self._conditions(subject_id, since))
            .scalar()
        )

    @store_call
    def page(
        self,
        limit: int,
        offset: int = 0,
        subject_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> List[LeaderboardRow]:
        ranked = self._ranked(subject_id, since)
        rows = (
            self.db.query(ranked)
            .order_by(ranked.c.rank)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return [LeaderboardRow(**row._mapping) for row in rows]

    @store_call
    def user_position(
        self,
        user_id: int,
        subject_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> Optional[LeaderboardRow]:
        ranked = self._ranked(subject_id, since)
        row = self.db.query(ranked).filter(ranked.c.user_id == user_id).first()
        return LeaderboardRow(**row._mapping) if row is not None else None
