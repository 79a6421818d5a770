"""
Admin endpoints
Subject and question authoring, admin accounts
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from quizrank.api.deps import get_question_service, get_user_service
from quizrank.core.security import require_admin
from quizrank.models import UserRole
from quizrank.schemas.questions import (
    QuestionBulkCreate,
    QuestionCreate,
    QuestionResponse,
    QuestionSummary,
    SubjectCreate,
    SubjectResponse,
)
from quizrank.schemas.user import UserCreate, UserResponse
from quizrank.services.questions import QuestionService
from quizrank.services.users import UserService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/subjects", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
def create_subject(data: SubjectCreate, service: QuestionService = Depends(get_question_service)):
    return service.create_subject(data.name)


@router.get("/subjects", response_model=List[SubjectResponse])
def list_subjects(service: QuestionService = Depends(get_question_service)):
    return service.list_subjects()


@router.get("/subjects/{subject_id}", response_model=SubjectResponse)
def get_subject(subject_id: int, service: QuestionService = Depends(get_question_service)):
    return service.get_subject(subject_id)


@router.post(
    "/subjects/{subject_id}/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_question(
    subject_id: int,
    data: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
):
    """Create one question with its options and explanation"""
    return service.create_question(subject_id, data)


@router.post(
    "/subjects/{subject_id}/questions/bulk",
    response_model=List[QuestionResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_questions_bulk(
    subject_id: int,
    data: QuestionBulkCreate,
    service: QuestionService = Depends(get_question_service),
):
    """Create several questions at once; nothing is stored if one fails"""
    return service.create_questions(subject_id, data.questions)


@router.get("/questions", response_model=List[QuestionSummary])
def list_questions(
    subject_id: int = Query(..., gt=0),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    service: QuestionService = Depends(get_question_service),
):
    return service.list_questions(subject_id, skip, limit)


@router.get("/questions/{question_id}", response_model=QuestionResponse)
def get_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    return service.get_question(question_id)


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    service.delete_question(question_id)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_admin_user(user_create: UserCreate, service: UserService = Depends(get_user_service)):
    """Register another admin account"""
    return service.register(user_create, role=UserRole.ADMIN)
