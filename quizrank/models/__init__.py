"""
QuizRank Models Package
"""

from quizrank.models.user import User, UserRole
from quizrank.models.quiz import Subject, Question, Option, Answer, Score

__all__ = [
    "User", "UserRole",
    "Subject", "Question", "Option", "Answer", "Score",
]
