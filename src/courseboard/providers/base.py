"""Base data-service interface.

- Data service adapter: five full-collection reads, no parameters
- Forbidden: aggregation, UI shaping
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from courseboard.models.domain import Course, Instructor, Participant, Registration, Room


class DataServiceError(Exception):
    """Raised when a collection cannot be fetched or decoded."""


class DataService(ABC):
    """Abstract base class for the record service behind the dashboard.

    Each read returns the full collection in service order. Reads are
    independent and may run concurrently.
    """

    @abstractmethod
    async def get_courses(self) -> list[Course]:
        pass

    @abstractmethod
    async def get_instructors(self) -> list[Instructor]:
        pass

    @abstractmethod
    async def get_participants(self) -> list[Participant]:
        pass

    @abstractmethod
    async def get_rooms(self) -> list[Room]:
        pass

    @abstractmethod
    async def get_registrations(self) -> list[Registration]:
        pass

    async def aclose(self) -> None:
        """Release any held resources. No-op by default."""
        return None
