"""Slack directory client.

Lists workspace members through the Web API ``users.list`` method and maps
the active human accounts to timezone entries. Uses httpx for HTTP calls.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from teamclock.config.settings import DEFAULT_API_URL, DEFAULT_HTTP_TIMEOUT
from teamclock.models import DEFAULT_TIMEZONE, Roster, TimezoneEntry

logger = logging.getLogger(__name__)

PAGE_LIMIT = 200
# Guard against a server that keeps returning the same cursor
MAX_PAGES = 500


class FetchError(Exception):
    """Raised when the directory cannot be listed."""


class DirectoryClient(Protocol):
    """Anything that can produce the workspace roster."""

    def fetch_roster(self) -> Roster:
        """Fetch all active human members as timezone entries.

        Raises:
            FetchError: If the directory could not be listed.
        """
        ...


def is_active_human(member: Mapping[str, Any]) -> bool:
    """Check that a member record is neither a bot nor deactivated."""
    return not (member.get("is_bot") or member.get("deleted"))


def entry_from_member(member: Mapping[str, Any]) -> TimezoneEntry:
    """Map a ``users.list`` member record to a TimezoneEntry."""
    handle = str(member.get("name") or "")
    profile = member.get("profile")
    if not isinstance(profile, Mapping):
        profile = {}
    name = str(member.get("real_name") or profile.get("real_name") or handle)
    timezone_id = str(member.get("tz") or "").strip() or DEFAULT_TIMEZONE
    try:
        raw_offset = int(member.get("tz_offset") or 0)
    except (TypeError, ValueError):
        raw_offset = 0
    return TimezoneEntry(
        name=name,
        handle=handle,
        timezone_id=timezone_id,
        raw_offset_seconds=raw_offset,
    )


class SlackDirectoryClient:
    """Blocking client for the Slack member directory."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Bot or user token, sent as a bearer token.
            base_url: Web API base URL.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def fetch_roster(self) -> Roster:
        """Fetch every active human member, in directory order.

        Raises:
            FetchError: On transport, HTTP, API or payload errors.
        """
        try:
            members = self._list_members()
        except httpx.HTTPError as e:
            raise FetchError(f"error getting users: {e}") from e

        roster = tuple(
            entry_from_member(member)
            for member in members
            if is_active_human(member)
        )
        logger.info(
            "Fetched %d members, %d active humans", len(members), len(roster)
        )
        return roster

    def _list_members(self) -> list[Mapping[str, Any]]:
        """Follow ``users.list`` pagination until the cursor is exhausted."""
        members: list[Mapping[str, Any]] = []
        cursor = ""
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }
        with httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            for _ in range(MAX_PAGES):
                params: dict[str, str | int] = {"limit": PAGE_LIMIT}
                if cursor:
                    params["cursor"] = cursor
                response = client.get("/users.list", params=params)
                response.raise_for_status()
                payload = self._parse_payload(response)

                page = payload.get("members")
                if not isinstance(page, list):
                    raise FetchError("error getting users: response has no members")
                members.extend(m for m in page if isinstance(m, Mapping))

                metadata = payload.get("response_metadata")
                cursor = ""
                if isinstance(metadata, Mapping):
                    cursor = str(metadata.get("next_cursor") or "")
                if not cursor:
                    return members
                logger.debug("Fetching next users.list page")

        raise FetchError(f"error getting users: more than {MAX_PAGES} pages")

    @staticmethod
    def _parse_payload(response: httpx.Response) -> Mapping[str, Any]:
        """Decode a Web API response and surface ``ok: false`` errors."""
        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"error getting users: malformed response: {e}") from e
        if not isinstance(payload, Mapping):
            raise FetchError("error getting users: malformed response")
        if not payload.get("ok"):
            error = payload.get("error") or "unknown error"
            raise FetchError(f"error getting users: {error}")
        return payload
