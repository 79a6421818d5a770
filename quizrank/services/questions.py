"""Subject and question authoring service"""

import logging
from typing import List

from quizrank.core.exceptions import DuplicateException, NotFoundException
from quizrank.models import Question, Subject
from quizrank.repositories import QuestionRepository, SubjectRepository
from quizrank.schemas.questions import (
    OptionResponse,
    QuestionCreate,
    QuestionResponse,
)

logger = logging.getLogger(__name__)


class QuestionService:
    def __init__(self, questions: QuestionRepository, subjects: SubjectRepository):
        self.questions = questions
        self.subjects = subjects

    def create_subject(self, name: str) -> Subject:
        name = name.strip()
        if self.subjects.get_by_name(name) is not None:
            raise DuplicateException("Subject", details={"name": name})
        subject = self.subjects.create(name)
        logger.info("Subject created", extra={"subject_id": subject.id})
        return subject

    def list_subjects(self) -> List[Subject]:
        return self.subjects.list()

    def get_subject(self, subject_id: int) -> Subject:
        subject = self.subjects.get(subject_id)
        if subject is None:
            raise NotFoundException("Subject", details={"subject_id": subject_id})
        return subject

    def create_question(self, subject_id: int, data: QuestionCreate) -> QuestionResponse:
        return self.create_questions(subject_id, [data])[0]

    def create_questions(self, subject_id: int, items: List[QuestionCreate]) -> List[QuestionResponse]:
        """Add questions to a subject; either all of them are stored or none"""
        self.get_subject(subject_id)

        created = []
        try:
            for data in items:
                created.append(
                    self.questions.add(
                        subject_id=subject_id,
                        text=data.question,
                        is_multiple_choice=data.is_multiple_choice,
                        options=data.options,
                        explanation=data.explanation,
                    )
                )
            self.questions.commit()
        except Exception:
            self.questions.rollback()
            raise

        logger.info(
            "Questions created",
            extra={"subject_id": subject_id, "count": len(created)},
        )
        return [self._response(question) for question in created]

    def list_questions(self, subject_id: int, skip: int = 0, limit: int = 50) -> List[Question]:
        self.get_subject(subject_id)
        return self.questions.list_for_subject(subject_id, skip, limit)

    def get_question(self, question_id: int) -> QuestionResponse:
        question = self.questions.get(question_id)
        if question is None:
            raise NotFoundException("Question", details={"question_id": question_id})
        return self._response(question)

    def delete_question(self, question_id: int) -> None:
        question = self.questions.get(question_id)
        if question is None:
            raise NotFoundException("Question", details={"question_id": question_id})
        self.questions.delete(question)
        logger.info("Question deleted", extra={"question_id": question_id})

    def _response(self, question: Question) -> QuestionResponse:
        return QuestionResponse(
            id=question.id,
            subject_id=question.subject_id,
            question_text=question.question_text,
            is_multiple_choice=question.is_multiple_choice,
            options=[OptionResponse.model_validate(option) for option in question.options],
            explanation=question.answer.explanation if question.answer else "",
            created_at=question.created_at,
            updated_at=question.updated_at,
        )
