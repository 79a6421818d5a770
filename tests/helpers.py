"""Builders for rows the tests need"""

from datetime import datetime

from quizrank.core.security import SecurityUtils, create_user_token
from quizrank.models import Answer, Option, Question, Score, Subject, User, UserRole

PASSWORD = "correct-horse-battery"
_PASSWORD_HASH = None


def password_hash() -> str:
    global _PASSWORD_HASH
    if _PASSWORD_HASH is None:
        _PASSWORD_HASH = SecurityUtils.get_password_hash(PASSWORD)
    return _PASSWORD_HASH


def make_user(db, username, role=UserRole.STUDENT):
    user = User(
        email=f"{username}@quizrank.io",
        username=username,
        full_name=username.title(),
        hashed_password=password_hash(),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


def make_subject(db, name="General Knowledge"):
    subject = Subject(name=name)
    db.add(subject)
    db.commit()
    db.refresh(subject)
    return subject


def make_question(db, subject, text, options, explanation="", is_multiple_choice=False):
    """options is a list of (text, is_correct) pairs"""
    question = Question(
        subject_id=subject.id,
        question_text=text,
        is_multiple_choice=is_multiple_choice,
        options=[Option(option_text=o, is_correct=c) for o, c in options],
        answer=Answer(explanation=explanation),
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    return question


def option_id(question, text):
    return next(option.id for option in question.options if option.option_text == text)


def add_score(db, user, subject, score, correct=None, total=None, created_at=None):
    correct = score if correct is None else correct
    total = correct if total is None else total
    entry = Score(
        user_id=user.id,
        subject_id=subject.id,
        correct_answers=correct,
        incorrect_answers=total - correct,
        total_questions=total,
        score=score,
        created_at=created_at or datetime(2026, 1, 1),
    )
    db.add(entry)
    db.commit()
    return entry
