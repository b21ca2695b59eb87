"""Sample data for local development.

Creates two students, one tutor, one upcoming and one past session.
Users are matched by email so running the seed twice does not duplicate
people; sessions are only added when the seed creates the tutor.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import structlog
from sqlalchemy.orm import Session

from tutorcenter.db import repository
from tutorcenter.db.models import Student, Tutor, TutoringSession, User

logger = structlog.get_logger(__name__)

SAMPLE_STUDENTS = [
    {
        "email": "john.doe@example.com",
        "first_name": "John",
        "last_name": "Doe",
        "grade": "10th Grade",
        "attendance": 95.5,
    },
    {
        "email": "jane.smith@example.com",
        "first_name": "Jane",
        "last_name": "Smith",
        "grade": "11th Grade",
        "attendance": 88.0,
    },
]

SAMPLE_TUTOR = {
    "email": "bob.tutor@example.com",
    "first_name": "Bob",
    "last_name": "Wilson",
    "earnings": 1500.0,
}


@dataclass
class SeedResult:
    users_created: int = 0
    students_created: int = 0
    tutors_created: int = 0
    sessions_created: int = 0


def _upsert_user(db: Session, data: dict, result: SeedResult) -> User:
    user = repository.get_user_by_email(db, data["email"])
    if user is None:
        user = repository.create(
            db,
            User,
            {
                "email": data["email"],
                "first_name": data["first_name"],
                "last_name": data["last_name"],
            },
        )
        result.users_created += 1
    return user


def seed_database(db: Session, now: datetime | None = None) -> SeedResult:
    """Insert the sample records.

    Args:
        db: Open ORM session (caller commits)
        now: Reference time for the sample sessions

    Returns:
        SeedResult with counts of newly created rows
    """
    now = now or datetime.now(timezone.utc)
    result = SeedResult()

    students = []
    for data in SAMPLE_STUDENTS:
        user = _upsert_user(db, data, result)
        student = user.student
        if student is None:
            student = repository.create(
                db,
                Student,
                {"user_id": user.id, "grade": data["grade"], "attendance": data["attendance"]},
            )
            result.students_created += 1
        students.append(student)

    tutor_user = _upsert_user(db, SAMPLE_TUTOR, result)
    tutor = tutor_user.tutor
    if tutor is None:
        tutor = repository.create(
            db, Tutor, {"user_id": tutor_user.id, "earnings": SAMPLE_TUTOR["earnings"]}
        )
        result.tutors_created += 1

        future = now + timedelta(days=7)
        past = now - timedelta(days=7)
        sessions = [
            ("Math Tutoring", "Algebra and geometry review", future, students[0]),
            ("Science Tutoring", "Physics concepts", past, students[1]),
        ]
        for title, description, start, student in sessions:
            repository.create(
                db,
                TutoringSession,
                {
                    "title": title,
                    "description": description,
                    "start_time": start,
                    "end_time": start + timedelta(hours=1),
                    "student_id": student.id,
                    "tutor_id": tutor.id,
                },
            )
            result.sessions_created += 1

    logger.info("seed.finished", **vars(result))
    return result
