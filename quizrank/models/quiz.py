"""
Quiz models for QuizRank
Subjects, questions with their options and explanations, and the score ledger
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from quizrank.core.database import Base
from quizrank.utils.clock import utcnow


class Subject(Base):
    """Topic grouping questions, e.g. Mathematics"""
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    questions = relationship("Question", back_populates="subject")


class Question(Base):
    """Question model"""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)

    question_text = Column(Text, nullable=False)
    is_multiple_choice = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    subject = relationship("Subject", back_populates="questions")
    options = relationship(
        "Option",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Option.id",
    )
    answer = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        uselist=False,
    )


class Option(Base):
    """Multiple-choice option of a question"""
    __tablename__ = "options"

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    option_text = Column(Text, nullable=False)
    is_correct = Column(Boolean, default=False, nullable=False)

    question = relationship("Question", back_populates="options")


class Answer(Base):
    """Explanation shown after grading, one per question"""
    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(
        Integer, ForeignKey("questions.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    explanation = Column(Text, nullable=False, default="")

    question = relationship("Question", back_populates="answer")


class Score(Base):
    """One row per graded attempt. Append-only."""
    __tablename__ = "scores"
    __table_args__ = (
        CheckConstraint(
            "correct_answers + incorrect_answers = total_questions",
            name="ck_scores_totals",
        ),
        UniqueConstraint("user_id", "submission_id", name="uq_scores_user_submission"),
        Index("ix_scores_subject_created", "subject_id", "created_at"),
        Index("ix_scores_created", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    mode = Column(String(32), nullable=False, default="practice")

    correct_answers = Column(Integer, nullable=False)
    incorrect_answers = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    score = Column(Integer, nullable=False)
    time_taken_seconds = Column(Integer, nullable=False, default=0)

    submission_id = Column(String(64), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
