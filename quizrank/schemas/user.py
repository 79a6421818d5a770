"""
User schemas for QuizRank
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from quizrank.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema"""
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_-]+$")
    full_name: str = Field(..., min_length=1, max_length=100)


class UserCreate(UserBase):
    """User creation schema"""
    password: str = Field(..., min_length=8)


class UserResponse(UserBase):
    """User response schema"""
    id: int
    role: UserRole
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """User login schema, username or email"""
    username: str
    password: str


class Token(BaseModel):
    """Token response schema"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserStats(BaseModel):
    """Totals over all of a user's score ledger entries"""
    user_id: int
    total_quizzes_taken: int
    total_correct_answers: int
    total_incorrect_answers: int
    total_questions_answered: int
    total_score: int
    accuracy_percent: float
