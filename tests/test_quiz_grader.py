from datetime import datetime

import pytest

from quizrank.core.exceptions import DataIntegrityException, NotFoundException, ValidationException
from quizrank.models import Score
from quizrank.repositories import QuestionRepository, ScoreRepository
from quizrank.schemas.quiz import AnswerSubmission
from quizrank.services.quiz_grader import QuizGrader, calculate_quiz_score
from tests.helpers import make_question, make_subject, make_user, option_id

GRADED_AT = datetime(2026, 3, 14, 9, 30)


class SimpleQuiz:
    def __init__(self, subject, capital, river, primes):
        self.subject = subject
        self.capital = capital
        self.river = river
        self.primes = primes


def grader_for(db, strict=False):
    return QuizGrader(
        QuestionRepository(db),
        ScoreRepository(db),
        strict=strict,
        clock=lambda: GRADED_AT,
    )


def answer(question_id, *option_ids):
    return AnswerSubmission(question_id=question_id, option_ids=list(option_ids))


@pytest.fixture
def quiz(db):
    subject = make_subject(db, "Geography")
    capital = make_question(
        db, subject, "Capital of France?",
        [("Paris", True), ("Lyon", False), ("Nice", False)],
        explanation="Paris has been the capital since 987.",
    )
    river = make_question(
        db, subject, "Longest river?",
        [("Nile", True), ("Seine", False)],
    )
    primes = make_question(
        db, subject, "Pick the primes",
        [("2", True), ("3", True), ("4", False)],
        is_multiple_choice=True,
    )
    return SimpleQuiz(subject, capital, river, primes)


def ledger(db):
    return db.query(Score).order_by(Score.id).all()


def test_all_correct_records_one_entry(db, student, quiz):
    result = grader_for(db).grade(
        student.id,
        [
            answer(quiz.capital.id, option_id(quiz.capital, "Paris")),
            answer(quiz.river.id, option_id(quiz.river, "Nile")),
        ],
        time_taken_seconds=42,
    )

    assert result.correct_answers == 2
    assert result.incorrect_answers == 0
    assert result.score == 2
    assert result.percentage == 100
    assert result.subject_id == quiz.subject.id
    assert result.duplicate is False

    rows = ledger(db)
    assert len(rows) == 1
    row = rows[0]
    assert row.id == result.score_id
    assert (row.user_id, row.subject_id) == (student.id, quiz.subject.id)
    assert (row.correct_answers, row.incorrect_answers, row.total_questions) == (2, 0, 2)
    assert row.time_taken_seconds == 42
    assert row.created_at == GRADED_AT


def test_result_sheet_reveals_answer_and_explanation(db, student, quiz):
    result = grader_for(db).grade(student.id, [answer(quiz.capital.id, option_id(quiz.capital, "Lyon"))])

    sheet = result.results[0]
    assert sheet.is_correct is False
    assert sheet.selected_options == ["Lyon"]
    assert sheet.correct_answer == "Paris"
    assert sheet.explanation == "Paris has been the capital since 987."
    assert result.percentage == 0


def test_correct_and_incorrect_add_up(db, student, quiz):
    result = grader_for(db).grade(
        student.id,
        [
            answer(quiz.capital.id, option_id(quiz.capital, "Paris")),
            answer(quiz.river.id, option_id(quiz.river, "Seine")),
            answer(quiz.primes.id, option_id(quiz.primes, "4")),
        ],
    )

    assert result.correct_answers == 1
    assert result.incorrect_answers == 2
    assert result.correct_answers + result.incorrect_answers == result.total_questions == 3
    assert result.percentage == 33


def test_selection_containing_canonical_option_is_correct(db, student, quiz):
    result = grader_for(db).grade(
        student.id,
        [answer(quiz.primes.id, option_id(quiz.primes, "2"), option_id(quiz.primes, "4"))],
    )

    assert result.results[0].is_correct is True
    assert result.results[0].correct_answer == "2"


def test_second_correct_option_alone_is_not_enough(db, student, quiz):
    result = grader_for(db).grade(student.id, [answer(quiz.primes.id, option_id(quiz.primes, "3"))])

    assert result.results[0].is_correct is False


def test_unknown_option_ids_left_out_of_selection(db, student, quiz):
    result = grader_for(db).grade(
        student.id, [answer(quiz.capital.id, 99999, option_id(quiz.capital, "Nice"))]
    )

    assert result.results[0].selected_options == ["Nice"]


def test_lenient_mode_counts_missing_question_as_incorrect(db, student, quiz):
    result = grader_for(db).grade(
        student.id,
        [answer(quiz.capital.id, option_id(quiz.capital, "Paris")), answer(424242, 1)],
    )

    assert result.total_questions == 2
    assert result.correct_answers == 1
    assert result.incorrect_answers == 1
    assert [r.question_id for r in result.results] == [quiz.capital.id]
    assert len(ledger(db)) == 1


def test_strict_mode_rejects_missing_question(db, student, quiz):
    with pytest.raises(NotFoundException):
        grader_for(db, strict=True).grade(
            student.id,
            [answer(quiz.capital.id, option_id(quiz.capital, "Paris")), answer(424242, 1)],
        )

    assert ledger(db) == []


def test_only_missing_questions_raises(db, student, quiz):
    with pytest.raises(NotFoundException):
        grader_for(db).grade(student.id, [answer(424242, 1)])

    assert ledger(db) == []


def test_question_without_correct_option_fails_attempt(db, student):
    subject = make_subject(db, "Broken")
    broken = make_question(db, subject, "Nothing is right", [("a", False), ("b", False)])

    with pytest.raises(DataIntegrityException):
        grader_for(db).grade(student.id, [answer(broken.id, option_id(broken, "a"))])

    assert ledger(db) == []


def test_resubmission_without_key_counts_twice(db, student, quiz):
    submissions = [answer(quiz.capital.id, option_id(quiz.capital, "Paris"))]
    grader = grader_for(db)

    first = grader.grade(student.id, submissions)
    second = grader.grade(student.id, submissions)

    assert first.score_id != second.score_id
    assert len(ledger(db)) == 2


def test_resubmission_with_key_is_recorded_once(db, student, quiz):
    submissions = [answer(quiz.capital.id, option_id(quiz.capital, "Paris"))]
    grader = grader_for(db)

    first = grader.grade(student.id, submissions, submission_id="attempt-1")
    second = grader.grade(student.id, submissions, submission_id="attempt-1")

    assert second.duplicate is True
    assert second.score_id == first.score_id
    assert len(ledger(db)) == 1


def test_same_key_from_other_users_is_independent(db, student, quiz):
    other = make_user(db, "other")
    submissions = [answer(quiz.capital.id, option_id(quiz.capital, "Paris"))]
    grader = grader_for(db)

    grader.grade(student.id, submissions, submission_id="attempt-1")
    result = grader.grade(other.id, submissions, submission_id="attempt-1")

    assert result.duplicate is False
    assert len(ledger(db)) == 2


def test_empty_submission_rejected(db, student):
    with pytest.raises(ValidationException):
        grader_for(db).grade(student.id, [])


@pytest.mark.parametrize(
    "total, score, expected",
    [(0, 0, 0), (3, 1, 33), (3, 2, 66), (4, 4, 100), (10, 0, 0)],
)
def test_calculate_quiz_score(total, score, expected):
    assert calculate_quiz_score(total, score) == expected


def test_reused_key_with_different_answers_returns_stored_attempt(db, student, quiz):
    grader = grader_for(db)

    first = grader.grade(
        student.id, [answer(quiz.capital.id, option_id(quiz.capital, "Paris"))], submission_id="k"
    )
    retry = grader.grade(
        student.id, [answer(quiz.capital.id, option_id(quiz.capital, "Lyon"))], submission_id="k"
    )

    assert retry.duplicate is True
    assert retry.score_id == first.score_id
    assert (retry.correct_answers, retry.incorrect_answers, retry.percentage) == (1, 0, 100)
    assert retry.results == []
    assert len(ledger(db)) == 1


def test_reused_key_skips_grading_of_vanished_questions(db, student, quiz):
    grader = grader_for(db, strict=True)
    grader.grade(student.id, [answer(quiz.river.id, option_id(quiz.river, "Nile"))], submission_id="again")

    retry = grader.grade(student.id, [answer(424242, 1)], submission_id="again")

    assert retry.duplicate is True
    assert retry.total_questions == 1
