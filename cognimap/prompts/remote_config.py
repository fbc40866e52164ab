"""
Read-through client for the remote prompt configuration service.

The client keeps the last successfully fetched key/value snapshot in memory and
refreshes it at most once per ``min_fetch_interval`` seconds. Fetch failures are
logged and absorbed: callers keep reading the previous snapshot (possibly empty)
and fall back to static defaults.
"""
from __future__ import annotations

import asyncio
import logging
import time
import uuid
from typing import Any, Callable

import httpx

from cognimap.config import Settings

logger = logging.getLogger(__name__)

FIREBASE_FETCH_URL = (
    "https://firebaseremoteconfig.googleapis.com/v1/projects/{project_id}/namespaces/firebase:fetch"
)


class RemoteConfigClient:
    def __init__(
        self,
        *,
        url: str | None = None,
        token: str | None = None,
        firebase_project_id: str | None = None,
        firebase_api_key: str | None = None,
        firebase_app_id: str | None = None,
        timeout: float = 5.0,
        min_fetch_interval: float = 3600.0,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url
        self.token = token
        self.firebase_project_id = firebase_project_id
        self.firebase_api_key = firebase_api_key
        self.firebase_app_id = firebase_app_id
        self.timeout = timeout
        self.min_fetch_interval = min_fetch_interval

        self._transport = transport
        self._clock = clock
        self._values: dict[str, str] = {}
        self._last_fetch: float | None = None
        self._lock = asyncio.Lock()
        self._instance_id = uuid.uuid4().hex

    @classmethod
    def from_settings(cls, settings: Settings) -> "RemoteConfigClient":
        return cls(
            url=settings.remote_config_url,
            token=settings.remote_config_token,
            firebase_project_id=settings.firebase_project_id,
            firebase_api_key=settings.firebase_api_key,
            firebase_app_id=settings.firebase_app_id,
            timeout=settings.remote_config_timeout,
            min_fetch_interval=settings.remote_config_min_fetch_interval,
        )

    @property
    def enabled(self) -> bool:
        if self.url:
            return True
        return bool(self.firebase_project_id and self.firebase_api_key and self.firebase_app_id)

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    def get_string(self, key: str) -> str:
        return self._values.get(key, "")

    async def fetch_and_activate(self, *, force: bool = False) -> bool:
        """Refresh the snapshot if the minimum fetch interval has elapsed.

        Returns True when a new snapshot was activated. Never raises for a
        malformed URL or a failed fetch.
        """

        if not self.enabled:
            return False

        if not force and not self._fetch_due():
            return False

        async with self._lock:
            # Another task may have refreshed while we waited for the lock.
            if not force and not self._fetch_due():
                return False

            self._last_fetch = self._clock()
            try:
                payload = await self._fetch_payload()
                values = parse_remote_values(payload)
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
                logger.warning("Remote config fetch failed, keeping previous values: %s", exc)
                return False

            self._values = values
            logger.debug("Activated %d remote config values", len(values))
            return True

    def _fetch_due(self) -> bool:
        if self._last_fetch is None:
            return True
        return self._clock() - self._last_fetch >= self.min_fetch_interval

    async def _fetch_payload(self) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            if self.url:
                headers = {"Accept": "application/json"}
                if self.token:
                    headers["Authorization"] = f"Bearer {self.token}"
                response = await client.get(self.url, headers=headers)
            else:
                response = await client.post(
                    FIREBASE_FETCH_URL.format(project_id=self.firebase_project_id),
                    params={"key": self.firebase_api_key},
                    json={
                        "appId": self.firebase_app_id,
                        "appInstanceId": self._instance_id,
                        "sdkVersion": "cognimap",
                    },
                )
            response.raise_for_status()
            return response.json()


def parse_remote_values(payload: Any) -> dict[str, str]:
    """Flatten the accepted remote payload shapes into a key/value mapping.

    Accepted shapes: ``{KEY: "value"}``, the Firebase client fetch response
    ``{"entries": {KEY: "value"}}`` and the Firebase template
    ``{"parameters": {KEY: {"defaultValue": {"value": "..."}}}}``.
    """

    if not isinstance(payload, dict):
        raise ValueError("Remote config payload must be a JSON object.")

    if isinstance(payload.get("parameters"), dict):
        values: dict[str, str] = {}
        for key, parameter in payload["parameters"].items():
            if not isinstance(parameter, dict):
                continue
            default_value = parameter.get("defaultValue") or {}
            value = default_value.get("value") if isinstance(default_value, dict) else None
            if isinstance(value, str):
                values[key] = value
        return values

    if "entries" in payload or "state" in payload:
        entries = payload.get("entries") or {}
        if not isinstance(entries, dict):
            raise ValueError("Remote config 'entries' must be a JSON object.")
        return {key: value for key, value in entries.items() if isinstance(value, str)}

    return {key: value for key, value in payload.items() if isinstance(value, str)}
