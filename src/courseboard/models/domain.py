"""Domain models for courseboard.

Pure Python dataclasses for the records read from the data service.
Default substitution for loosely-typed wire fields happens once, here,
in the ``from_record`` constructors. Nothing downstream re-checks them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal

# ============================================================================
# Course Domain
# ============================================================================

CourseStatus = Literal["planned", "active", "completed", "cancelled"]

# Fixed display order of the status buckets
COURSE_STATUSES: tuple[CourseStatus, ...] = ("planned", "active", "completed", "cancelled")

# Wire values (German) and canonical values both map to canonical status
_STATUS_ALIASES: dict[str, CourseStatus] = {
    "geplant": "planned",
    "aktiv": "active",
    "abgeschlossen": "completed",
    "abgesagt": "cancelled",
    "planned": "planned",
    "active": "active",
    "completed": "completed",
    "cancelled": "cancelled",
}


def _fields(record: dict[str, Any]) -> dict[str, Any]:
    fields = record.get("fields")
    return fields if isinstance(fields, dict) else {}


def _pick(fields: dict[str, Any], *names: str) -> Any:
    """Return the first present, non-null value among ``names``."""
    for name in names:
        value = fields.get(name)
        if value is not None:
            return value
    return None


def _record_id(record: dict[str, Any]) -> str:
    # Records without an id still count; an empty id never matches a reference
    record_id = record.get("record_id")
    return "" if record_id is None else str(record_id)


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _as_price(value: Any) -> float | None:
    # bool is an int subclass; a flag is never a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def normalize_status(value: Any) -> CourseStatus:
    """Map a raw status value to a canonical course status.

    Absent or unrecognised values default to ``planned``.
    """
    if isinstance(value, str):
        return _STATUS_ALIASES.get(value, "planned")
    return "planned"


@dataclass(frozen=True)
class Course:
    """Domain model for a course."""

    record_id: str
    title: str | None = None
    start_date: str | None = None  # ISO-8601 date string
    price: float | None = None
    status: CourseStatus = "planned"

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Course:
        """Build a Course from a service record, substituting defaults.

        Args:
            record: Record dict with ``record_id`` and a ``fields`` mapping.

        Returns:
            Course with missing or malformed optional fields defaulted.
        """
        fields = _fields(record)
        return cls(
            record_id=_record_id(record),
            title=_as_text(_pick(fields, "titel", "title")),
            start_date=_as_text(_pick(fields, "startdatum", "start_date")),
            price=_as_price(_pick(fields, "preis", "price")),
            status=normalize_status(_pick(fields, "status")),
        )


# ============================================================================
# Registration Domain
# ============================================================================


@dataclass(frozen=True)
class Registration:
    """Domain model for a registration.

    ``course_ref`` is a reference string that embeds the course's record id
    as a trailing token (e.g. a record URL), not the id itself.
    """

    record_id: str
    paid: bool = False
    course_ref: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Registration:
        """Build a Registration from a service record."""
        fields = _fields(record)
        return cls(
            record_id=_record_id(record),
            paid=_pick(fields, "bezahlt", "paid") is True,
            course_ref=_as_text(_pick(fields, "kurs", "course_ref")),
        )


# ============================================================================
# Counted-only Domains
# ============================================================================


@dataclass(frozen=True)
class Instructor:
    """Domain model for an instructor. Only counted by the dashboard."""

    record_id: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Instructor:
        return cls(record_id=_record_id(record))


@dataclass(frozen=True)
class Participant:
    """Domain model for a participant. Only counted by the dashboard."""

    record_id: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Participant:
        return cls(record_id=_record_id(record))


@dataclass(frozen=True)
class Room:
    """Domain model for a room. Only counted by the dashboard."""

    record_id: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Room:
        return cls(record_id=_record_id(record))


# ============================================================================
# Snapshot
# ============================================================================


@dataclass(frozen=True)
class Snapshot:
    """The five collections fetched for one dashboard load."""

    courses: list[Course] = field(default_factory=list)
    instructors: list[Instructor] = field(default_factory=list)
    participants: list[Participant] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    registrations: list[Registration] = field(default_factory=list)
