"""HTTP client for the Heroku Platform API."""

from __future__ import annotations

from typing import Any, cast
from urllib.parse import quote

import httpx

from pg_fork_backup.domain.entities import AddOn, ManagedDatabase
from pg_fork_backup.domain.ports import CloudResourceClient

HEROKU_API_URL = "https://api.heroku.com"
HEROKU_ACCEPT_HEADER = "application/vnd.heroku+json; version=3"


class HerokuClientError(RuntimeError):
    """Raised when Platform API calls fail."""


class HerokuPlatformClient(CloudResourceClient):
    """Wrapper around the config var and add-on endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = HEROKU_API_URL,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key.strip():
            raise HerokuClientError("Heroku API key cannot be empty.")
        self._api_key = api_key
        self._base_url = base_url.strip().rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def config_vars(self, app_name: str) -> dict[str, str]:
        """Call `GET /apps/{app}/config-vars`."""

        payload = await self._request("GET", f"/apps/{self._quote(app_name)}/config-vars")
        if not isinstance(payload, dict):
            raise HerokuClientError(f"Config vars of '{app_name}' are not a JSON object.")
        return {str(key): str(value) for key, value in payload.items() if value is not None}

    async def create_database_fork(
        self,
        app_name: str,
        *,
        plan: str,
        fork_source_url: str,
    ) -> ManagedDatabase:
        """Call `POST /apps/{app}/addons` with a fork config."""

        payload = await self._request(
            "POST",
            f"/apps/{self._quote(app_name)}/addons",
            json={"plan": plan, "config": {"fork": fork_source_url, "fast": True}},
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("name"), str):
            raise HerokuClientError(f"Add-on create on '{app_name}' returned no add-on name.")

        config_vars = payload.get("config_vars") or []
        return ManagedDatabase(
            name=payload["name"],
            config_var_keys=tuple(str(key) for key in config_vars),
            service_name=self._service_name(payload) or "heroku-postgresql",
        )

    async def list_addons(self, app_name: str) -> list[AddOn]:
        """Call `GET /apps/{app}/addons`."""

        payload = await self._request("GET", f"/apps/{self._quote(app_name)}/addons")
        if not isinstance(payload, list):
            raise HerokuClientError(f"Add-ons of '{app_name}' are not a JSON array.")
        return [
            AddOn(name=str(item["name"]), service_name=self._service_name(item) or "")
            for item in payload
            if isinstance(item, dict) and "name" in item
        ]

    async def delete_addon(self, app_name: str, addon_name: str) -> None:
        """Call `DELETE /apps/{app}/addons/{addon}`."""

        await self._request(
            "DELETE",
            f"/apps/{self._quote(app_name)}/addons/{self._quote(addon_name)}",
        )

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
                headers={
                    "Accept": HEROKU_ACCEPT_HEADER,
                    "Authorization": f"Bearer {self._api_key}",
                },
            ) as http_client:
                response = await http_client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            raise HerokuClientError(f"{method} {url} failed: {exc}") from exc

        self._ensure_success(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise HerokuClientError(f"{method} {url} returned invalid JSON.") from exc

    def _ensure_success(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message = self._detail_from_response(response)
        raise HerokuClientError(
            f"{response.request.method} {response.request.url} failed: "
            f"{response.status_code} {message}"
        )

    def _detail_from_response(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            text = response.text.strip()
            return text or "<no response body>"

        if isinstance(payload, dict):
            message = payload.get("message")
            if isinstance(message, str):
                return message
        return str(payload)

    def _service_name(self, addon: dict[str, Any]) -> str | None:
        service = addon.get("addon_service")
        if isinstance(service, dict):
            name = cast(dict[str, Any], service).get("name")
            if isinstance(name, str):
                return name
        return None

    def _quote(self, segment: str) -> str:
        return quote(segment, safe="")


__all__ = ["HEROKU_API_URL", "HerokuClientError", "HerokuPlatformClient"]
