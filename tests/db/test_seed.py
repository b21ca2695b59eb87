"""Tests for the sample data seed."""

from datetime import datetime, timezone

import pytest

from tutorcenter.core.views import session_status, student_row, tutor_row
from tutorcenter.db import repository
from tutorcenter.db.database import get_db, init_db, reset_db
from tutorcenter.db.seed import seed_database

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    init_db(url)
    yield url
    reset_db()


def test_seed_creates_sample_data(db_url):
    with get_db() as db:
        result = seed_database(db, now=NOW)

    assert result.users_created == 3
    assert result.students_created == 2
    assert result.tutors_created == 1
    assert result.sessions_created == 2

    with get_db() as db:
        students = {r.name: r for r in map(student_row, repository.list_students(db))}
        assert students["John Doe"].grade == "10th Grade"
        assert students["John Doe"].attendance == 95.5
        assert students["Jane Smith"].attendance == 88.0

        tutors = [tutor_row(t) for t in repository.list_tutors(db)]
        assert [(t.name, t.earnings) for t in tutors] == [("Bob Wilson", 1500.0)]

        sessions = repository.list_sessions(db)
        assert [s.title for s in sessions] == ["Science Tutoring", "Math Tutoring"]
        assert [session_status(s, NOW) for s in sessions] == ["Completed", "Upcoming"]
        assert sessions[1].student.user.first_name == "John"


def test_seed_is_idempotent(db_url):
    with get_db() as db:
        seed_database(db, now=NOW)
    with get_db() as db:
        result = seed_database(db, now=NOW)

    assert result.users_created == 0
    assert result.students_created == 0
    assert result.sessions_created == 0

    with get_db() as db:
        assert len(repository.list_users(db)) == 3
        assert len(repository.list_sessions(db)) == 2
