"""
Quiz grading
Checks submitted answers, builds the result sheet and records the attempt
in the score ledger
"""

import logging
from typing import Callable, List, Optional, Sequence

from quizrank.core.config import settings
from quizrank.core.exceptions import (
    DataIntegrityException,
    NotFoundException,
    ValidationException,
)
from quizrank.core.logging import log_execution_time
from quizrank.models import Score
from quizrank.repositories import QuestionRepository, ScoreRepository
from quizrank.schemas.quiz import AnswerSubmission, AttemptResult, QuestionResult
from quizrank.utils.clock import utcnow

logger = logging.getLogger(__name__)

# One point per correct answer
POINTS_PER_CORRECT_ANSWER = 1


def calculate_quiz_score(total_questions: int, score: int) -> int:
    """
    Percentage of the attempt, truncated toward zero

    >>> calculate_quiz_score(3, 1)
    33
    """
    if total_questions == 0:
        return 0
    return score * 100 // total_questions


class QuizGrader:
    """
    Grades one attempt and appends exactly one score ledger row

    An answer is correct when the selected option ids include the question's
    canonical correct option. Questions that no longer exist are skipped and
    counted as incorrect in lenient mode, and fail the whole attempt in strict
    mode. A submission_id already on the ledger for the user returns the
    stored totals with an empty result sheet and grades nothing. The ledger
    write is part of grading: if it fails nothing is returned.
    """

    def __init__(
        self,
        questions: QuestionRepository,
        scores: ScoreRepository,
        strict: bool = settings.strict_grading,
        mode: str = settings.SCORE_MODE,
        clock: Callable = utcnow,
    ):
        self.questions = questions
        self.scores = scores
        self.strict = strict
        self.mode = mode
        self.clock = clock

    @log_execution_time()
    def grade(
        self,
        user_id: int,
        submissions: Sequence[AnswerSubmission],
        time_taken_seconds: int = 0,
        submission_id: Optional[str] = None,
    ) -> AttemptResult:
        if user_id <= 0:
            raise ValidationException("user_id must be a positive integer")
        if not submissions:
            raise ValidationException("At least one answer must be submitted")
        for entry in submissions:
            if entry.question_id <= 0 or not entry.option_ids or min(entry.option_ids) <= 0:
                raise ValidationException(
                    "Each answer needs a question id and at least one option id",
                    details={"question_id": entry.question_id},
                )

        if submission_id:
            stored = self.scores.get_by_submission(user_id, submission_id)
            if stored is not None:
                return self._replay(stored, submission_id)

        results: List[QuestionResult] = []
        correct = 0
        incorrect = 0
        subject_id: Optional[int] = None

        for entry in submissions:
            question = self.questions.get(entry.question_id)
            if question is None:
                if self.strict:
                    raise NotFoundException("Question", details={"question_id": entry.question_id})
                logger.warning(
                    "Skipping answer for unknown question",
                    extra={"user_id": user_id, "question_id": entry.question_id},
                )
                incorrect += 1
                continue

            if subject_id is None:
                subject_id = question.subject_id

            correct_option = self.questions.get_correct_option(question.id)
            if correct_option is None:
                logger.error("Question has no correct option", extra={"question_id": question.id})
                raise DataIntegrityException(
                    "Question has no correct option", details={"question_id": question.id}
                )

            is_correct = correct_option.id in entry.option_ids
            if is_correct:
                correct += 1
            else:
                incorrect += 1

            results.append(
                QuestionResult(
                    question_id=question.id,
                    question=question.question_text,
                    selected_options=self._selected_texts(entry.option_ids),
                    correct_answer=correct_option.option_text,
                    is_correct=is_correct,
                    explanation=self.questions.get_explanation(question.id) or "",
                )
            )

        if subject_id is None:
            raise NotFoundException("Question", details={"reason": "no submitted question exists"})

        total = len(submissions)
        entry, created = self.scores.insert(
            Score(
                user_id=user_id,
                subject_id=subject_id,
                mode=self.mode,
                correct_answers=correct,
                incorrect_answers=incorrect,
                total_questions=total,
                score=correct * POINTS_PER_CORRECT_ANSWER,
                time_taken_seconds=time_taken_seconds,
                submission_id=submission_id,
                created_at=self.clock(),
            )
        )
        if not created:
            # A concurrent request with the same key was stored first
            return self._replay(entry, submission_id)

        logger.info(
            "Attempt graded",
            extra={
                "user_id": user_id,
                "subject_id": entry.subject_id,
                "score_id": entry.id,
                "correct": entry.correct_answers,
                "total": entry.total_questions,
            },
        )

        return self._result(entry, results)

    def _replay(self, entry: Score, submission_id: str) -> AttemptResult:
        """Result of an already recorded submission; the new answers are not graded"""
        logger.info(
            "Duplicate submission, ledger unchanged",
            extra={"user_id": entry.user_id, "submission_id": submission_id, "score_id": entry.id},
        )
        return self._result(entry, [], duplicate=True)

    @staticmethod
    def _result(entry: Score, results: List[QuestionResult], duplicate: bool = False) -> AttemptResult:
        return AttemptResult(
            score_id=entry.id,
            user_id=entry.user_id,
            subject_id=entry.subject_id,
            total_questions=entry.total_questions,
            correct_answers=entry.correct_answers,
            incorrect_answers=entry.incorrect_answers,
            score=entry.score,
            percentage=calculate_quiz_score(entry.total_questions, entry.score),
            duplicate=duplicate,
            results=results,
        )

    def _selected_texts(self, option_ids: Sequence[int]) -> List[str]:
        texts = []
        for option_id in option_ids:
            option = self.questions.get_option(option_id)
            if option is not None:
                texts.append(option.option_text)
        return texts
