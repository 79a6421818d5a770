"""Subject and question authoring schemas"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field, model_validator


class SubjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class SubjectResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True


class OptionCreate(BaseModel):
    text: str = Field(..., min_length=1)
    is_correct: bool = False


class QuestionCreate(BaseModel):
    """Question with its options and explanation"""
    question: str = Field(..., min_length=1)
    is_multiple_choice: bool = False
    options: List[OptionCreate] = Field(..., min_length=2)
    explanation: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_correct_options(self):
        correct = sum(1 for option in self.options if option.is_correct)
        if correct == 0:
            raise ValueError("at least one option must be marked correct")
        if not self.is_multiple_choice and correct != 1:
            raise ValueError("single-select questions need exactly one correct option")
        return self


class QuestionBulkCreate(BaseModel):
    questions: List[QuestionCreate] = Field(..., min_length=1)


class OptionResponse(BaseModel):
    id: int
    option_text: str
    is_correct: bool

    class Config:
        from_attributes = True


class QuestionResponse(BaseModel):
    """Admin view of a question, correctness included"""
    id: int
    subject_id: int
    question_text: str
    is_multiple_choice: bool
    options: List[OptionResponse]
    explanation: str
    created_at: datetime
    updated_at: datetime


class QuestionSummary(BaseModel):
    id: int
    subject_id: int
    question_text: str
    is_multiple_choice: bool

    class Config:
        from_attributes = True
