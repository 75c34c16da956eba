"""Pydantic models for the courseboard API.

Payload shapes returned to the dashboard UI.
"""

from pydantic import BaseModel

from courseboard.models.domain import CourseStatus


class DashboardStats(BaseModel):
    """Headline counts and money figures of the dashboard."""

    courses: int
    active_courses: int
    instructors: int
    participants: int
    rooms: int
    registrations: int
    paid_ratio: int  # integer percent, 0..100
    revenue: float


class StatusCount(BaseModel):
    """One bar of the course-status chart."""

    status: CourseStatus
    label: str
    count: int


class RecentCourse(BaseModel):
    """One entry of the recent-courses list."""

    record_id: str
    title: str | None
    start_date: str | None
    price: float | None
    status: CourseStatus
    status_label: str
    badge: str


class DashboardOverview(BaseModel):
    """Full dashboard payload for API response.

    While ``loading`` is true the stats are withheld (``None``) so the UI
    shows placeholders instead of stale or zero values.
    """

    loading: bool
    stats: DashboardStats | None
    status_histogram: list[StatusCount]
    recent_courses: list[RecentCourse]
    error: str | None = None
