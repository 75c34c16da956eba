"""Environment-driven configuration.

All settings come from ``COURSEBOARD_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

DEFAULT_API_URL = "https://my.living-apps.de/rest"
DEFAULT_TIMEOUT = 10.0

# Collection name -> environment variable holding its app id
APP_ID_VARIABLES: dict[str, str] = {
    "courses": "COURSEBOARD_APP_COURSES",
    "instructors": "COURSEBOARD_APP_INSTRUCTORS",
    "participants": "COURSEBOARD_APP_PARTICIPANTS",
    "rooms": "COURSEBOARD_APP_ROOMS",
    "registrations": "COURSEBOARD_APP_REGISTRATIONS",
}

PROVIDERS = ("living_apps", "mock")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration."""

    api_url: str = DEFAULT_API_URL
    api_key: str | None = None
    app_ids: dict[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    provider: str = "mock"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read settings from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        Frozen Settings.

    Raises:
        ValueError: If the timeout is not a positive number or the provider
            is unknown.
    """
    if environ is None:
        environ = os.environ

    raw_timeout = environ.get("COURSEBOARD_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError as e:
        raise ValueError(f"COURSEBOARD_TIMEOUT must be a number, got {raw_timeout!r}") from e
    if timeout <= 0:
        raise ValueError(f"COURSEBOARD_TIMEOUT must be positive, got {timeout}")

    provider = environ.get("COURSEBOARD_PROVIDER", "mock")
    if provider not in PROVIDERS:
        raise ValueError(f"COURSEBOARD_PROVIDER must be one of {PROVIDERS}, got {provider!r}")

    app_ids = {
        name: environ.get(variable, "")
        for name, variable in APP_ID_VARIABLES.items()
    }

    return Settings(
        api_url=environ.get("COURSEBOARD_API_URL", DEFAULT_API_URL).rstrip("/"),
        api_key=environ.get("COURSEBOARD_API_KEY") or None,
        app_ids=app_ids,
        timeout=timeout,
        provider=provider,
    )
