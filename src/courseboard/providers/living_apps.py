"""HTTP client for the Living Apps record service.

Each collection lives in its own app; ``GET {base_url}/apps/{app_id}/records``
returns its records either as a JSON list or as an object keyed by record id.

- Data service adapter: fetch and decode only
- Forbidden: aggregation, UI shaping
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, TypeVar

import httpx

from courseboard.config import Settings
from courseboard.models.domain import Course, Instructor, Participant, Registration, Room
from courseboard.providers.base import DataService, DataServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decode_records(payload: Any, collection: str) -> list[dict[str, Any]]:
    """Normalise a collection payload to an ordered list of records.

    Args:
        payload: Decoded JSON body - a list of records, or a dict mapping
            record id to record.
        collection: Collection name, for messages.

    Returns:
        Records in payload order. Records without a ``record_id`` are kept
        so that collection counts match the service; entries that are not
        objects are skipped.

    Raises:
        DataServiceError: If the payload is neither a list nor a dict.
    """
    if isinstance(payload, dict):
        items = []
        for key, value in payload.items():
            if isinstance(value, dict):
                items.append({"record_id": key, **value})
            else:
                items.append(value)
    elif isinstance(payload, list):
        items = payload
    else:
        raise DataServiceError(
            f"Unexpected payload for {collection}: {type(payload).__name__}"
        )

    records: list[dict[str, Any]] = []
    for item in items:
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-record {collection} entry: {type(item).__name__}")
            continue
        if not item.get("record_id"):
            logger.warning(f"Keeping {collection} record without record_id")
        records.append(item)
    return records


class LivingAppsService(DataService):
    """Data service backed by the Living Apps REST API."""

    def __init__(
        self,
        base_url: str,
        app_ids: dict[str, str],
        api_key: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: REST base URL, e.g. ``https://my.living-apps.de/rest``.
            app_ids: Collection name -> app id.
            api_key: Optional key sent as ``X-API-Key``.
            timeout: Request timeout in seconds.
            client: Optional pre-built client (tests inject a mock transport).
                A supplied client is not closed by ``aclose``.
        """
        self.base_url = base_url.rstrip("/")
        self.app_ids = dict(app_ids)
        headers = {"Accept": "application/json"}
        if api_key:
            headers["X-API-Key"] = api_key
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers

    @classmethod
    def from_settings(cls, settings: Settings) -> LivingAppsService:
        return cls(
            base_url=settings.api_url,
            app_ids=settings.app_ids,
            api_key=settings.api_key,
            timeout=settings.timeout,
        )

    async def _fetch(self, collection: str, parse: Callable[[dict[str, Any]], T]) -> list[T]:
        app_id = self.app_ids.get(collection)
        if not app_id:
            raise DataServiceError(f"No app id configured for {collection}")

        url = f"{self.base_url}/apps/{app_id}/records"
        start_time = time.time()
        try:
            response = await self._client.get(url, headers=self._headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise DataServiceError(
                f"Fetching {collection} failed with HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DataServiceError(f"Fetching {collection} failed: {e}") from e
        except ValueError as e:
            raise DataServiceError(f"Invalid JSON for {collection}: {e}") from e

        records = [parse(record) for record in decode_records(payload, collection)]
        latency_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"Fetched {len(records)} {collection} in {latency_ms} ms")
        return records

    async def get_courses(self) -> list[Course]:
        return await self._fetch("courses", Course.from_record)

    async def get_instructors(self) -> list[Instructor]:
        return await self._fetch("instructors", Instructor.from_record)

    async def get_participants(self) -> list[Participant]:
        return await self._fetch("participants", Participant.from_record)

    async def get_rooms(self) -> list[Room]:
        return await self._fetch("rooms", Room.from_record)

    async def get_registrations(self) -> list[Registration]:
        return await self._fetch("registrations", Registration.from_record)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
