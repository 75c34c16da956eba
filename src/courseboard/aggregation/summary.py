"""Dashboard summary aggregation.

Computes headline counts, paid ratio, revenue, the course-status histogram
and the recent-courses list from one snapshot of the five collections.
Domain logic is pure - fetching goes through the data service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from courseboard.aggregation.labels import STATUS_CHART_LABELS
from courseboard.core.refs import extract_record_id
from courseboard.models.domain import (
    COURSE_STATUSES,
    Course,
    CourseStatus,
    Instructor,
    Participant,
    Registration,
    Room,
    Snapshot,
    normalize_status,
)
from courseboard.models.types import DashboardStats, StatusCount

RECENT_COURSES_LIMIT = 5


@dataclass(frozen=True)
class Summary:
    """Result of one aggregation: stats plus the two derived lists."""

    stats: DashboardStats
    status_histogram: list[StatusCount] = field(default_factory=list)
    recent_courses: list[Course] = field(default_factory=list)


def empty_stats() -> DashboardStats:
    """All-zero stats shown before the first successful load."""
    return DashboardStats(
        courses=0,
        active_courses=0,
        instructors=0,
        participants=0,
        rooms=0,
        registrations=0,
        paid_ratio=0,
        revenue=0,
    )


def aggregate(
    courses: Sequence[Course],
    instructors: Sequence[Instructor],
    participants: Sequence[Participant],
    rooms: Sequence[Room],
    registrations: Sequence[Registration],
) -> Summary:
    """Compute the dashboard summary.

    Pure function - no I/O, no hidden state. Malformed optional fields were
    already defaulted by the domain models, so nothing here raises.

    Args:
        courses: Courses in service order.
        instructors: Instructors (counted only).
        participants: Participants (counted only).
        rooms: Rooms (counted only).
        registrations: Registrations in service order.

    Returns:
        Summary with stats, status histogram and recent courses.
    """
    active_courses = sum(1 for c in courses if c.status == "active")
    paid = [r for r in registrations if r.paid]

    stats = DashboardStats(
        courses=len(courses),
        active_courses=active_courses,
        instructors=len(instructors),
        participants=len(participants),
        rooms=len(rooms),
        registrations=len(registrations),
        paid_ratio=_paid_ratio(len(paid), len(registrations)),
        revenue=_revenue(courses, paid),
    )

    return Summary(
        stats=stats,
        status_histogram=_status_histogram(courses),
        recent_courses=_recent_courses(courses),
    )


def aggregate_snapshot(snapshot: Snapshot) -> Summary:
    """Aggregate a fetched Snapshot."""
    return aggregate(
        snapshot.courses,
        snapshot.instructors,
        snapshot.participants,
        snapshot.rooms,
        snapshot.registrations,
    )


def _paid_ratio(paid: int, total: int) -> int:
    """Integer percentage of paid registrations, rounded half up.

    Exact integer arithmetic: round(100 * paid / total) with .5 going up.
    """
    if total == 0:
        return 0
    return (200 * paid + total) // (2 * total)


def _revenue(courses: Sequence[Course], paid: Sequence[Registration]) -> float:
    """Sum course prices over paid registrations.

    A course referenced by several paid registrations is counted once per
    registration.
    """
    # First occurrence wins when record ids repeat
    by_id: dict[str, Course] = {}
    for course in courses:
        by_id.setdefault(course.record_id, course)

    revenue: float = 0
    for registration in paid:
        course_id = extract_record_id(registration.course_ref)
        if course_id is None:
            continue
        course = by_id.get(course_id)
        if course is not None and course.price is not None:
            revenue += course.price
    return revenue


def _status_histogram(courses: Sequence[Course]) -> list[StatusCount]:
    counts: dict[CourseStatus, int] = {status: 0 for status in COURSE_STATUSES}
    for course in courses:
        counts[normalize_status(course.status)] += 1

    return [
        StatusCount(status=status, label=STATUS_CHART_LABELS[status], count=counts[status])
        for status in COURSE_STATUSES
    ]


def _recent_courses(courses: Sequence[Course]) -> list[Course]:
    # sorted() is stable with reverse=True; undated ("") sorts last
    ordered = sorted(courses, key=lambda c: c.start_date or "", reverse=True)
    return ordered[:RECENT_COURSES_LIMIT]
