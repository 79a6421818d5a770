"""
Quiz schemas for QuizRank
Generated quizzes never expose which option is correct; attempt results do.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class GenerateQuizRequest(BaseModel):
    """Quiz generation request"""
    subject_id: int = Field(..., gt=0)
    num_of_questions: int = Field(..., ge=1)


class QuizOption(BaseModel):
    """Option as shown to the player, without correctness"""
    id: int
    option: str


class QuizQuestion(BaseModel):
    question_id: int
    question: str
    subject_id: int
    is_multiple_choice: bool
    options: List[QuizOption]


class GeneratedQuiz(BaseModel):
    subject_id: int
    total_count: int
    questions: List[QuizQuestion]


class AnswerSubmission(BaseModel):
    """One answered question of an attempt"""
    question_id: int = Field(..., gt=0)
    is_multiple_choice: bool = False
    option_ids: List[int] = Field(..., min_length=1)


class SubmitQuizRequest(BaseModel):
    """Quiz attempt submission"""
    answers: List[AnswerSubmission] = Field(..., min_length=1)
    time_taken_seconds: int = Field(0, ge=0)
    submission_id: Optional[str] = Field(
        None,
        min_length=1,
        max_length=64,
        description="Client-generated key; resubmitting with the same key does not score twice",
    )


class QuestionResult(BaseModel):
    question_id: int
    question: str
    selected_options: List[str]
    correct_answer: str
    is_correct: bool
    explanation: str


class AttemptResult(BaseModel):
    """Graded attempt, paired with its score ledger entry"""
    score_id: int
    user_id: int
    subject_id: int
    total_questions: int
    correct_answers: int
    incorrect_answers: int
    score: int
    percentage: int
    duplicate: bool = False
    results: List[QuestionResult]
