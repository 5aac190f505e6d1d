from __future__ import annotations

from collections.abc import Iterator

import pytest

from teamclock.config import TOKEN_ENV_VARS
from teamclock.models import TimezoneEntry

_ENV_VARS = (
    *TOKEN_ENV_VARS,
    "SLACK_API_URL",
    "TEAMCLOCK_HTTP_TIMEOUT",
    "TEAMCLOCK_LOG_FILE",
    "TEAMCLOCK_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep real credentials and log settings out of tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def roster() -> tuple[TimezoneEntry, ...]:
    return (
        TimezoneEntry("Ada Lovelace", "ada", "Europe/London", 0),
        TimezoneEntry("Grace Hopper", "grace", "America/New_York", -18000),
        TimezoneEntry("Kenji Sato", "kenji", "Asia/Tokyo", 32400),
    )


@pytest.fixture
def anyio_backend() -> str:
    """Textual runs on asyncio only."""
    return "asyncio"
