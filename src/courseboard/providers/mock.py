"""In-memory data service for demo/testing.

Serves fixed collections without calling the real record service.
Records are given in the service's wire shape and decoded the same way the
HTTP client decodes them, so defaults apply identically.
"""

from __future__ import annotations

import asyncio
from typing import Any

from courseboard.models.domain import Course, Instructor, Participant, Registration, Room
from courseboard.providers.base import DataService, DataServiceError
from courseboard.providers.living_apps import decode_records

DEMO_COURSE_IDS = (
    "65a1f0c2e4b0a1b2c3d4e5f1",
    "65a1f0c2e4b0a1b2c3d4e5f2",
    "65a1f0c2e4b0a1b2c3d4e5f3",
)

DEMO_RECORDS: dict[str, list[dict[str, Any]]] = {
    "courses": [
        {
            "record_id": DEMO_COURSE_IDS[0],
            "fields": {"titel": "Python Basics", "startdatum": "2026-03-02", "preis": 490, "status": "aktiv"},
        },
        {
            "record_id": DEMO_COURSE_IDS[1],
            "fields": {"titel": "Data Analysis", "startdatum": "2026-05-11", "preis": 690, "status": "geplant"},
        },
        {
            "record_id": DEMO_COURSE_IDS[2],
            "fields": {"titel": "Web APIs", "startdatum": "2025-11-17", "preis": 590, "status": "abgeschlossen"},
        },
    ],
    "instructors": [{"record_id": "i1"}, {"record_id": "i2"}],
    "participants": [{"record_id": "p1"}, {"record_id": "p2"}, {"record_id": "p3"}],
    "rooms": [{"record_id": "r1"}],
    "registrations": [
        {
            "record_id": "a1",
            "fields": {"bezahlt": True, "kurs": f"https://my.living-apps.de/rest/apps/x/records/{DEMO_COURSE_IDS[0]}"},
        },
        {
            "record_id": "a2",
            "fields": {"bezahlt": False, "kurs": f"https://my.living-apps.de/rest/apps/x/records/{DEMO_COURSE_IDS[1]}"},
        },
        {
            "record_id": "a3",
            "fields": {"bezahlt": True, "kurs": f"https://my.living-apps.de/rest/apps/x/records/{DEMO_COURSE_IDS[2]}"},
        },
    ],
}


class MockDataService(DataService):
    """Data service that returns fixed in-memory collections.

    Args to the constructor let tests simulate a slow or failing service.
    """

    def __init__(
        self,
        records: dict[str, list[dict[str, Any]]] | None = None,
        fail_on: set[str] | None = None,
        delay: float = 0.0,
    ):
        """Initialize mock service.

        Args:
            records: Collection name -> wire records. Defaults to demo data.
            fail_on: Collection names whose fetch raises DataServiceError.
            delay: Seconds each fetch sleeps before returning.
        """
        self.records = DEMO_RECORDS if records is None else records
        self.fail_on = set(fail_on or ())
        self.delay = delay
        self.calls: list[str] = []

    async def _records(self, collection: str) -> list[dict[str, Any]]:
        self.calls.append(collection)
        if self.delay:
            await asyncio.sleep(self.delay)
        if collection in self.fail_on:
            raise DataServiceError(f"Simulated failure fetching {collection}")
        return decode_records(self.records.get(collection, []), collection)

    async def get_courses(self) -> list[Course]:
        return [Course.from_record(r) for r in await self._records("courses")]

    async def get_instructors(self) -> list[Instructor]:
        return [Instructor.from_record(r) for r in await self._records("instructors")]

    async def get_participants(self) -> list[Participant]:
        return [Participant.from_record(r) for r in await self._records("participants")]

    async def get_rooms(self) -> list[Room]:
        return [Room.from_record(r) for r in await self._records("rooms")]

    async def get_registrations(self) -> list[Registration]:
        return [Registration.from_record(r) for r in await self._records("registrations")]
