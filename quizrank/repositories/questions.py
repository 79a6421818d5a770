"""Question store: subjects, questions, options and explanations"""

from typing import List, Optional, Sequence

from sqlalchemy import func

from quizrank.models import Answer, Option, Question, Subject
from quizrank.repositories.base import SessionRepository, store_call
from quizrank.schemas.questions import OptionCreate


class SubjectRepository(SessionRepository):

    @store_call
    def get(self, subject_id: int) -> Optional[Subject]:
        return self.db.query(Subject).filter(Subject.id == subject_id).first()

    @store_call
    def get_by_name(self, name: str) -> Optional[Subject]:
        return self.db.query(Subject).filter(func.lower(Subject.name) == name.lower()).first()

    @store_call
    def list(self) -> List[Subject]:
        return self.db.query(Subject).order_by(Subject.name).all()

    @store_call
    def create(self, name: str) -> Subject:
        subject = Subject(name=name)
        self.db.add(subject)
        self.db.commit()
        self.db.refresh(subject)
        return subject


class QuestionRepository(SessionRepository):

    @store_call
    def get(self, question_id: int) -> Optional[Question]:
        return self.db.query(Question).filter(Question.id == question_id).first()

    @store_call
    def get_random(self, subject_id: int) -> Optional[Question]:
        """Uniform draw from the subject's question pool"""
        return (
            self.db.query(Question)
            .filter(Question.subject_id == subject_id)
            .order_by(func.random())
            .first()
        )

    @store_call
    def count_for_subject(self, subject_id: int) -> int:
        return self.db.query(func.count(Question.id)).filter(Question.subject_id == subject_id).scalar()

    @store_call
    def list_for_subject(self, subject_id: int, skip: int = 0, limit: int = 50) -> List[Question]:
        return (
            self.db.query(Question)
            .filter(Question.subject_id == subject_id)
            .order_by(Question.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    @store_call
    def get_options(self, question_id: int) -> List[Option]:
        return self.db.query(Option).filter(Option.question_id == question_id).order_by(Option.id).all()

    @store_call
    def get_option(self, option_id: int) -> Optional[Option]:
        return self.db.query(Option).filter(Option.id == option_id).first()

    @store_call
    def get_correct_option(self, question_id: int) -> Optional[Option]:
        """The canonical correct option: lowest id among the correct ones"""
        return (
            self.db.query(Option)
            .filter(Option.question_id == question_id, Option.is_correct.is_(True))
            .order_by(Option.id)
            .first()
        )

    @store_call
    def get_explanation(self, question_id: int) -> Optional[str]:
        answer = self.db.query(Answer).filter(Answer.question_id == question_id).first()
        return answer.explanation if answer else None

    @store_call
    def add(
        self,
        subject_id: int,
        text: str,
        is_multiple_choice: bool,
        options: Sequence[OptionCreate],
        explanation: str,
    ) -> Question:
        """Stage a question with its options and explanation; call commit() to persist"""
        question = Question(
            subject_id=subject_id,
            question_text=text,
            is_multiple_choice=is_multiple_choice,
            options=[Option(option_text=o.text, is_correct=o.is_correct) for o in options],
            answer=Answer(explanation=explanation),
        )
        self.db.add(question)
        self.db.flush()
        return question

    @store_call
    def delete(self, question: Question) -> None:
        self.db.delete(question)
        self.db.commit()

    @store_call
    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
