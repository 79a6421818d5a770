"""
Quiz generation
Draws random questions for a subject and shapes them for the player
"""

import logging
from typing import List, Set

from quizrank.core.config import settings
from quizrank.core.exceptions import (
    OptionsUnavailableException,
    SubjectHasNoQuestionsException,
    ValidationException,
)
from quizrank.models import Question
from quizrank.repositories import QuestionRepository
from quizrank.schemas.quiz import GeneratedQuiz, QuizOption, QuizQuestion

logger = logging.getLogger(__name__)


class QuizGenerator:
    """
    Builds quizzes from the question store

    Generation is a pure read: nothing is reserved, and the same question can
    land in any number of concurrently generated quizzes. Each slot is drawn
    uniformly at random; a draw repeating an already picked question is
    retried up to ``draw_attempts`` times, after which the repeat is kept.
    Small pools therefore yield quizzes with repeated questions.
    """

    def __init__(
        self,
        questions: QuestionRepository,
        max_questions: int = settings.QUIZ_MAX_QUESTIONS,
        draw_attempts: int = settings.QUIZ_DRAW_ATTEMPTS,
    ):
        self.questions = questions
        self.max_questions = max_questions
        self.draw_attempts = max(1, draw_attempts)

    def generate(self, subject_id: int, count: int) -> GeneratedQuiz:
        if subject_id <= 0:
            raise ValidationException("subject_id must be a positive integer")
        if count <= 0 or count > self.max_questions:
            raise ValidationException(
                f"Number of questions must be between 1 and {self.max_questions}",
                details={"num_of_questions": count},
            )

        picked: List[Question] = []
        seen: Set[int] = set()
        for _ in range(count):
            question = self._draw(subject_id, seen)
            seen.add(question.id)
            picked.append(question)

        quiz = GeneratedQuiz(
            subject_id=subject_id,
            total_count=len(picked),
            questions=[self._shape(question) for question in picked],
        )
        logger.info(
            "Quiz generated",
            extra={"subject_id": subject_id, "requested": count, "distinct": len(seen)},
        )
        return quiz

    def _draw(self, subject_id: int, seen: Set[int]) -> Question:
        question = None
        for _ in range(self.draw_attempts):
            question = self.questions.get_random(subject_id)
            if question is None:
                raise SubjectHasNoQuestionsException(subject_id)
            if question.id not in seen:
                break
        return question

    def _shape(self, question: Question) -> QuizQuestion:
        options = self.questions.get_options(question.id)
        if not options:
            logger.error("Question has no options", extra={"question_id": question.id})
            raise OptionsUnavailableException(question.id)

        return QuizQuestion(
            question_id=question.id,
            question=question.question_text,
            subject_id=question.subject_id,
            is_multiple_choice=question.is_multiple_choice,
            options=[QuizOption(id=option.id, option=option.option_text) for option in options],
        )
