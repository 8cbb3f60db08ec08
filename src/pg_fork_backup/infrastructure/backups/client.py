"""HTTP client for the Heroku Postgres backups API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from pg_fork_backup.domain.ports import BackupTransferClient

PG_BACKUPS_API_URL = "https://postgres-api.heroku.com"

logger = logging.getLogger(__name__)


class PgBackupsClientError(RuntimeError):
    """Raised when backups API calls fail."""


class PgBackupsClient(BackupTransferClient):
    """Starts backups and reads transfer records."""

    def __init__(
        self,
        api_key: str,
        base_url: str = PG_BACKUPS_API_URL,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._auth = httpx.BasicAuth(username="", password=api_key)
        self._base_url = base_url.strip().rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def create_backup(self, database_name: str) -> str | None:
        """Call `POST /client/v11/databases/{name}/backups`.

        Returns None when the provider did not hand back a transfer id, which
        happens while a freshly forked database is still provisioning.
        """

        url = self._endpoint(f"/client/v11/databases/{quote(database_name, safe='')}/backups")
        response = await self._send("POST", url, json={"expire": True})
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            transfer_id = payload.get("uuid")
            if isinstance(transfer_id, str) and transfer_id:
                return transfer_id

        logger.info(
            "Backup request for %s was rejected: %s %s",
            database_name,
            response.status_code,
            self._detail(payload, response),
        )
        return None

    async def get_transfer(self, database_name: str, transfer_id: str) -> dict[str, Any]:
        """Call `GET /client/v11/databases/{name}/transfers/{id}`."""

        url = self._endpoint(
            f"/client/v11/databases/{quote(database_name, safe='')}"
            f"/transfers/{quote(transfer_id, safe='')}"
        )
        response = await self._send("GET", url)
        if not response.is_success:
            raise PgBackupsClientError(
                f"GET {url} failed: {response.status_code} {response.text.strip()}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise PgBackupsClientError(f"GET {url} returned invalid JSON.") from exc
        if not isinstance(payload, dict):
            raise PgBackupsClientError(f"GET {url} returned non-object JSON.")
        return payload

    async def _send(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
                auth=self._auth,
            ) as http_client:
                return await http_client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            raise PgBackupsClientError(f"{method} {url} failed: {exc}") from exc

    def _endpoint(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _detail(self, payload: object, response: httpx.Response) -> str:
        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("id")
            if isinstance(message, str):
                return message
            return str(payload)
        return response.text.strip() or "<no response body>"


__all__ = ["PG_BACKUPS_API_URL", "PgBackupsClient", "PgBackupsClientError"]
