"""Shared pytest fixtures for courseboard tests."""

import pytest

from courseboard.models.domain import Course, Instructor, Participant, Registration, Room

COURSE_A = "aaaaaaaaaaaaaaaaaaaaaaa1"
COURSE_B = "bbbbbbbbbbbbbbbbbbbbbbb2"
COURSE_C = "ccccccccccccccccccccccc3"


def course_ref(record_id: str) -> str:
    """Reference string the way the record service embeds course ids."""
    return f"https://my.living-apps.de/rest/apps/kurse/records/{record_id}"


@pytest.fixture
def courses() -> list[Course]:
    """Three courses: active (100), active (250), cancelled (no price)."""
    return [
        Course(record_id=COURSE_A, title="Yoga", start_date="2026-02-01", price=100, status="active"),
        Course(record_id=COURSE_B, title="Pilates", start_date="2026-03-01", price=250, status="active"),
        Course(record_id=COURSE_C, title="Spinning", start_date=None, price=None, status="cancelled"),
    ]


@pytest.fixture
def counted() -> tuple[list[Instructor], list[Participant], list[Room]]:
    """Instructors, participants and rooms - only their lengths matter."""
    return (
        [Instructor("i1"), Instructor("i2")],
        [Participant("p1"), Participant("p2"), Participant("p3")],
        [Room("r1")],
    )


@pytest.fixture
def registrations() -> list[Registration]:
    """Two paid registrations for course A, one unpaid for course B."""
    return [
        Registration(record_id="a1", paid=True, course_ref=course_ref(COURSE_A)),
        Registration(record_id="a2", paid=True, course_ref=course_ref(COURSE_A)),
        Registration(record_id="a3", paid=False, course_ref=course_ref(COURSE_B)),
    ]
