"""
Subject endpoints
Public listing used by clients to pick a quiz subject
"""

from typing import List

from fastapi import APIRouter, Depends

from quizrank.api.deps import get_question_service
from quizrank.schemas.questions import SubjectResponse
from quizrank.services.questions import QuestionService

router = APIRouter()


@router.get("", response_model=List[SubjectResponse])
def list_subjects(service: QuestionService = Depends(get_question_service)):
    """List all subjects"""
    return service.list_subjects()
