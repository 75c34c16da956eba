"""Dashboard loader: parallel fetch-join and load-boundary policy.

- Fans out the five collection reads and joins them
- Applies a fresh summary only when every read succeeded
- Forbidden: aggregation logic (delegated), UI formatting

Architecture:
- DashboardLoader: owns the displayed state and the load boundary
- fetch_snapshot: pure fan-out/join over a DataService
- aggregate_snapshot: pure summary computation
"""

from __future__ import annotations

import asyncio
import logging

from courseboard.aggregation.labels import status_badge, status_label
from courseboard.aggregation.summary import Summary, aggregate_snapshot, empty_stats
from courseboard.models.domain import Course, Snapshot
from courseboard.models.types import DashboardOverview, RecentCourse
from courseboard.providers.base import DataService

logger = logging.getLogger(__name__)


async def fetch_snapshot(service: DataService) -> Snapshot:
    """Fetch all five collections concurrently.

    All-or-nothing: the first failure propagates and no Snapshot is built.
    Reads still in flight at that point (or on cancellation) are cancelled
    and awaited before returning.

    Args:
        service: Data service to read from.

    Returns:
        Snapshot of the five collections.
    """
    tasks = [
        asyncio.create_task(service.get_instructors()),
        asyncio.create_task(service.get_participants()),
        asyncio.create_task(service.get_rooms()),
        asyncio.create_task(service.get_courses()),
        asyncio.create_task(service.get_registrations()),
    ]
    try:
        instructors, participants, rooms, courses, registrations = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return Snapshot(
        courses=courses,
        instructors=instructors,
        participants=participants,
        rooms=rooms,
        registrations=registrations,
    )


def _recent_course_payload(course: Course) -> RecentCourse:
    return RecentCourse(
        record_id=course.record_id,
        title=course.title,
        start_date=course.start_date,
        price=course.price,
        status=course.status,
        status_label=status_label(course.status),
        badge=status_badge(course.status),
    )


class DashboardLoader:
    """Holds the dashboard state and refreshes it from a data service.

    The state is replaced as a whole after a successful load and left
    untouched after a failed, cancelled or discarded one.
    """

    def __init__(self, service: DataService):
        """Initialize loader with the all-zero initial state.

        Args:
            service: Data service providing the five collections.
        """
        self.service = service
        self.summary = Summary(stats=empty_stats())
        self.loading = True
        self.last_error: str | None = None
        self.closed = False
        self.attempted = False
        # Serialises loads so concurrent callers never fan out twice at once
        self._lock = asyncio.Lock()

    async def load(self) -> bool:
        """Run one fetch-join-aggregate cycle.

        Fetch failures are logged and recorded in ``last_error``; they are
        never raised. Cancellation propagates.

        Returns:
            True if a new summary was applied.
        """
        async with self._lock:
            return await self._load()

    async def ensure_loaded(self) -> None:
        """Run the initial load unless one has already been attempted.

        Concurrent callers wait for the single initial load instead of
        starting their own.
        """
        async with self._lock:
            if not self.attempted:
                await self._load()

    async def _load(self) -> bool:
        self.attempted = True
        self.loading = True
        try:
            snapshot = await fetch_snapshot(self.service)
            if self.closed:
                logger.debug("Loader closed during fetch; discarding result")
                return False
            summary = aggregate_snapshot(snapshot)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Failed to load dashboard stats")
            self.last_error = str(e) or type(e).__name__
            return False
        finally:
            self.loading = False

        self.summary = summary
        self.last_error = None
        logger.info(
            f"Dashboard loaded: {summary.stats.courses} courses, "
            f"{summary.stats.registrations} registrations, "
            f"paid_ratio={summary.stats.paid_ratio}%"
        )
        return True

    def close(self) -> None:
        """Mark the view as torn down; later results are discarded."""
        self.closed = True

    def overview(self) -> DashboardOverview:
        """Build the API payload for the current state."""
        return DashboardOverview(
            loading=self.loading,
            stats=None if self.loading else self.summary.stats,
            status_histogram=list(self.summary.status_histogram),
            recent_courses=[_recent_course_payload(c) for c in self.summary.recent_courses],
            error=self.last_error,
        )
