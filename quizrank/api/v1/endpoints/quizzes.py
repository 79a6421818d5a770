"""
Quiz endpoints
Generate a quiz for a subject and submit answers for grading
"""

from fastapi import APIRouter, Depends

from quizrank.api.deps import get_question_service, get_quiz_generator, get_quiz_grader
from quizrank.core.security import get_current_active_user
from quizrank.models import User
from quizrank.schemas.quiz import AttemptResult, GeneratedQuiz, GenerateQuizRequest, SubmitQuizRequest
from quizrank.services.questions import QuestionService
from quizrank.services.quiz_generator import QuizGenerator
from quizrank.services.quiz_grader import QuizGrader

router = APIRouter()


@router.post("/generate", response_model=GeneratedQuiz)
def generate_quiz(
    request: GenerateQuizRequest,
    current_user: User = Depends(get_current_active_user),
    questions: QuestionService = Depends(get_question_service),
    generator: QuizGenerator = Depends(get_quiz_generator),
):
    """Draw random questions of a subject; correct options are not revealed"""
    # Raises NotFound before any drawing happens
    questions.get_subject(request.subject_id)
    return generator.generate(request.subject_id, request.num_of_questions)


@router.post("/submit", response_model=AttemptResult)
def submit_quiz(
    submission: SubmitQuizRequest,
    current_user: User = Depends(get_current_active_user),
    grader: QuizGrader = Depends(get_quiz_grader),
):
    """Grade an attempt and record it on the score ledger"""
    return grader.grade(
        current_user.id,
        submission.answers,
        time_taken_seconds=submission.time_taken_seconds,
        submission_id=submission.submission_id,
    )
