"""Score ledger: append-only attempt records"""

from typing import NamedTuple, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from quizrank.models import Score
from quizrank.repositories.base import SessionRepository, store_call


class ScoreTotals(NamedTuple):
    total_quizzes: int
    correct_answers: int
    incorrect_answers: int
    total_questions: int
    total_score: int


class ScoreRepository(SessionRepository):
    """
    Writes ledger rows and reads per-user totals

    There is no update or delete path; a row is final once committed.
    """

    @store_call
    def get(self, score_id: int) -> Optional[Score]:
        return self.db.query(Score).filter(Score.id == score_id).first()

    @store_call
    def get_by_submission(self, user_id: int, submission_id: str) -> Optional[Score]:
        return (
            self.db.query(Score)
            .filter(Score.user_id == user_id, Score.submission_id == submission_id)
            .first()
        )

    @store_call
    def insert(self, entry: Score) -> Tuple[Score, bool]:
        """
        Commit a new ledger row

        Returns the stored row and whether it was created. A row carrying a
        submission_id already recorded for the same user is not inserted
        again; the earlier row is returned instead.
        """
        if entry.submission_id:
            existing = self.get_by_submission(entry.user_id, entry.submission_id)
            if existing is not None:
                return existing, False

        try:
            self.db.add(entry)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if entry.submission_id:
                # Lost the race against a concurrent retry of the same submission
                existing = self.get_by_submission(entry.user_id, entry.submission_id)
                if existing is not None:
                    return existing, False
            raise

        self.db.refresh(entry)
        return entry, True

    @store_call
    def user_totals(self, user_id: int) -> ScoreTotals:
        row = (
            self.db.query(
                func.count(Score.id),
                func.coalesce(func.sum(Score.correct_answers), 0),
                func.coalesce(func.sum(Score.incorrect_answers), 0),
                func.coalesce(func.sum(Score.total_questions), 0),
                func.coalesce(func.sum(Score.score), 0),
            )
            .filter(Score.user_id == user_id)
            .one()
        )
        return ScoreTotals(*(int(value) for value in row))
