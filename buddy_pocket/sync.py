"""Profile sync: pushes the public profile to the social backend.

The engine never talks to the network. Callers take a ProfileSnapshot
from BuddyEngine.profile_snapshot() and hand it to a ProfileSync:

    async def push(self, snapshot: ProfileSnapshot) -> None: ...

Two implementations are provided:

    HttpProfileSync  - PUT {base_url}/api/v1/profiles/{id} with the snapshot
                       as JSON body.
    NullProfileSync  - records snapshots in memory. Used when no sync URL
                       is configured.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from buddy_pocket.models import ProfileSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

class ProfileSync(Protocol):
    async def push(self, snapshot: ProfileSnapshot) -> None: ...


# ---------------------------------------------------------------------------
# HttpProfileSync
# ---------------------------------------------------------------------------

class HttpProfileSync:
    """Async HTTP client for the profile endpoint.

    Args:
        base_url: Backend root, e.g. "https://buddy.example.com".
        api_key:  Bearer token, or empty string if not required.
        timeout:  HTTP timeout in seconds. Defaults to 10.
    """

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _url(self, snapshot: ProfileSnapshot) -> str:
        return f"{self._base_url}/api/v1/profiles/{snapshot.id}"

    async def push(self, snapshot: ProfileSnapshot) -> None:
        url = self._url(snapshot)
        logger.debug("profile sync url=%s level=%d", url, snapshot.level)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.put(url, json=snapshot.model_dump(), headers=self._headers())
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise SyncError(f"Cannot connect to profile backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise SyncError(f"Profile backend returned HTTP {e.response.status_code}") from e
        except httpx.TimeoutException as e:
            raise SyncError(f"Profile backend timed out after {self._timeout}s") from e


# ---------------------------------------------------------------------------
# NullProfileSync
# ---------------------------------------------------------------------------

class NullProfileSync:
    """Keeps pushed snapshots in memory. No network calls."""

    def __init__(self) -> None:
        self.pushed: list[ProfileSnapshot] = []

    async def push(self, snapshot: ProfileSnapshot) -> None:
        logger.debug("NullProfileSync id=%s", snapshot.id)
        self.pushed.append(snapshot)


def profile_sync_from_settings(url: str, api_key: str = "") -> ProfileSync:
    if not url:
        return NullProfileSync()
    return HttpProfileSync(url, api_key=api_key)


# ---------------------------------------------------------------------------
# SyncError
# ---------------------------------------------------------------------------

class SyncError(RuntimeError):
    """Raised when the profile backend cannot be reached or rejects the push."""
