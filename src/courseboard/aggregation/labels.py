"""Display labels and badge classes for course statuses."""

from courseboard.models.domain import CourseStatus

STATUS_LABELS: dict[CourseStatus, str] = {
    "planned": "Planned",
    "active": "Active",
    "completed": "Completed",
    "cancelled": "Cancelled",
}

# Shorter labels used as chart axis ticks
STATUS_CHART_LABELS: dict[CourseStatus, str] = {
    "planned": "Planned",
    "active": "Active",
    "completed": "Compl.",
    "cancelled": "Cancelled",
}

STATUS_BADGES: dict[CourseStatus, str] = {
    "planned": "badge-planned",
    "active": "badge-active",
    "completed": "badge-completed",
    "cancelled": "badge-cancelled",
}


def status_label(status: CourseStatus) -> str:
    return STATUS_LABELS.get(status, STATUS_LABELS["planned"])


def status_badge(status: CourseStatus) -> str:
    return STATUS_BADGES.get(status, STATUS_BADGES["planned"])
