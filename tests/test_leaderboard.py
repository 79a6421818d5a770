from datetime import datetime, timedelta

import pytest

from quizrank.core.exceptions import NotFoundException, ValidationException
from quizrank.repositories import LeaderboardRepository, SubjectRepository
from quizrank.schemas.leaderboard import LeaderboardPeriod
from quizrank.services.leaderboard import LeaderboardService, accuracy_percent
from tests.helpers import add_score, make_subject, make_user

NOW = datetime(2026, 6, 15, 12, 0)


def service_for(db, now=NOW):
    return LeaderboardService(LeaderboardRepository(db), SubjectRepository(db), clock=lambda: now)


@pytest.fixture
def subject(db):
    return make_subject(db, "History")


def test_empty_ledger_gives_empty_board(db):
    board = service_for(db).get_leaderboard()

    assert board.entries == []
    assert board.total_users == 0
    assert board.period == LeaderboardPeriod.ALL_TIME


def test_ranked_by_summed_score(db, subject):
    alice, bob, carol = (make_user(db, name) for name in ("alice", "bob", "carol"))
    add_score(db, alice, subject, 3)
    add_score(db, alice, subject, 4)
    add_score(db, bob, subject, 9)
    add_score(db, carol, subject, 2)

    board = service_for(db).get_leaderboard()

    assert [(e.rank, e.user_name, e.total_score) for e in board.entries] == [
        (1, "bob", 9),
        (2, "alice", 7),
        (3, "carol", 2),
    ]
    assert board.entries[1].total_quizzes == 2
    assert board.total_users == 3


def test_score_tie_broken_by_correct_answers_then_user_id(db, subject):
    first, second, third = (make_user(db, name) for name in ("first", "second", "third"))
    add_score(db, third, subject, 10, correct=6, total=8)
    add_score(db, second, subject, 10, correct=4, total=8)
    add_score(db, first, subject, 10, correct=4, total=8)

    board = service_for(db).get_leaderboard()

    assert [e.user_id for e in board.entries] == [third.id, first.id, second.id]
    assert [e.rank for e in board.entries] == [1, 2, 3]


def test_offset_keeps_absolute_ranks(db, subject):
    users = [make_user(db, f"player{n}") for n in range(5)]
    for points, user in enumerate(users, start=1):
        add_score(db, user, subject, points)

    board = service_for(db).get_leaderboard(limit=2, offset=1)

    assert [e.rank for e in board.entries] == [2, 3]
    assert [e.user_id for e in board.entries] == [users[3].id, users[2].id]
    assert board.total_users == 5


def test_offset_past_end_is_empty(db, subject):
    add_score(db, make_user(db, "solo"), subject, 1)

    board = service_for(db).get_leaderboard(limit=10, offset=5)

    assert board.entries == []
    assert board.total_users == 1


@pytest.mark.parametrize("limit, offset", [(0, 0), (101, 0), (10, -1)])
def test_invalid_paging_rejected(db, limit, offset):
    with pytest.raises(ValidationException):
        service_for(db).get_leaderboard(limit=limit, offset=offset)


def test_weekly_window_includes_boundary_instant(db, subject):
    on_edge, outside = make_user(db, "edge"), make_user(db, "outside")
    add_score(db, on_edge, subject, 5, created_at=NOW - timedelta(days=7))
    add_score(db, outside, subject, 8, created_at=NOW - timedelta(days=7, seconds=1))

    board = service_for(db).get_leaderboard(period=LeaderboardPeriod.WEEKLY)

    assert [e.user_id for e in board.entries] == [on_edge.id]
    assert board.period == LeaderboardPeriod.WEEKLY


def test_monthly_window_sums_only_recent_entries(db, subject):
    user = make_user(db, "regular")
    add_score(db, user, subject, 4, created_at=NOW - timedelta(days=3))
    add_score(db, user, subject, 6, created_at=NOW - timedelta(days=29))
    add_score(db, user, subject, 50, created_at=NOW - timedelta(days=31))

    monthly = service_for(db).get_leaderboard(period=LeaderboardPeriod.MONTHLY)
    all_time = service_for(db).get_leaderboard()

    assert monthly.entries[0].total_score == 10
    assert all_time.entries[0].total_score == 60


def test_subject_board_only_counts_that_subject(db, subject):
    other_subject = make_subject(db, "Physics")
    historian, physicist = make_user(db, "historian"), make_user(db, "physicist")
    add_score(db, historian, subject, 3)
    add_score(db, physicist, other_subject, 9)
    add_score(db, physicist, subject, 1)

    board = service_for(db).get_leaderboard(subject_id=subject.id)

    assert board.subject_name == "History"
    assert [(e.user_id, e.total_score) for e in board.entries] == [(historian.id, 3), (physicist.id, 1)]


def test_subject_board_is_always_all_time(db, subject):
    user = make_user(db, "veteran")
    add_score(db, user, subject, 5, created_at=NOW - timedelta(days=365))

    board = service_for(db).get_leaderboard(subject_id=subject.id, period=LeaderboardPeriod.WEEKLY)

    assert board.period == LeaderboardPeriod.ALL_TIME
    assert board.entries[0].total_score == 5


def test_unknown_subject_raises(db):
    with pytest.raises(NotFoundException):
        service_for(db).get_leaderboard(subject_id=999)


def test_user_rank_matches_board_position(db, subject):
    users = [make_user(db, f"racer{n}") for n in range(4)]
    add_score(db, users[0], subject, 5, correct=5, total=5)
    add_score(db, users[1], subject, 5, correct=5, total=5)
    add_score(db, users[2], subject, 7, correct=7, total=10)
    add_score(db, users[3], subject, 1, correct=1, total=4)

    service = service_for(db)
    board = service.get_leaderboard()

    for entry in board.entries:
        rank = service.get_user_rank(entry.user_id)
        assert rank.rank == entry.rank
        assert rank.total_users == 4

    third = service.get_user_rank(users[2].id)
    assert third.rank == 1
    assert third.accuracy_percent == pytest.approx(70.0)


def test_user_without_entries_has_no_rank(db, subject):
    ranked, idle = make_user(db, "ranked"), make_user(db, "idle")
    add_score(db, ranked, subject, 1)

    with pytest.raises(NotFoundException):
        service_for(db).get_user_rank(idle.id)


def test_user_outside_window_has_no_weekly_rank(db, subject):
    user = make_user(db, "lapsed")
    add_score(db, user, subject, 3, created_at=NOW - timedelta(days=10))

    with pytest.raises(NotFoundException):
        service_for(db).get_user_rank(user.id, period=LeaderboardPeriod.WEEKLY)


def test_accuracy_percent():
    assert accuracy_percent(0, 0) == 0.0
    assert accuracy_percent(3, 4) == 75.0
