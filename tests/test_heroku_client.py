from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from pg_fork_backup.domain.entities import AddOn
from pg_fork_backup.infrastructure.heroku import HerokuClientError, HerokuPlatformClient


def _client(handler: httpx.MockTransport) -> HerokuPlatformClient:
    return HerokuPlatformClient(api_key="api-key", transport=handler)


def test_config_vars_sends_versioned_media_type_and_bearer_token() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code=200, json={"DATABASE_URL": "postgres://x", "EMPTY": None})

    config = asyncio.run(_client(httpx.MockTransport(handler)).config_vars("prod-app"))

    assert config == {"DATABASE_URL": "postgres://x"}
    request = requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://api.heroku.com/apps/prod-app/config-vars"
    assert request.headers["Accept"] == "application/vnd.heroku+json; version=3"
    assert request.headers["Authorization"] == "Bearer api-key"


def test_create_database_fork_posts_fork_config() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            status_code=201,
            json={
                "name": "postgresql-curved-123",
                "config_vars": ["HEROKU_POSTGRESQL_RED_URL"],
                "addon_service": {"name": "heroku-postgresql"},
            },
        )

    database = asyncio.run(
        _client(httpx.MockTransport(handler)).create_database_fork(
            "backup-app",
            plan="heroku-postgresql:standard-0",
            fork_source_url="postgres://prod",
        )
    )

    assert database.name == "postgresql-curved-123"
    assert database.config_var_keys == ("HEROKU_POSTGRESQL_RED_URL",)
    assert database.primary_config_var_key == "HEROKU_POSTGRESQL_RED_URL"
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.heroku.com/apps/backup-app/addons"
    assert json.loads(request.content.decode()) == {
        "plan": "heroku-postgresql:standard-0",
        "config": {"fork": "postgres://prod", "fast": True},
    }


def test_list_addons_maps_service_names() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=200,
            json=[
                {"name": "postgresql-a", "addon_service": {"name": "heroku-postgresql"}},
                {"name": "papertrail-b", "addon_service": {"name": "papertrail"}},
                {"name": "orphan"},
            ],
        )

    addons = asyncio.run(_client(httpx.MockTransport(handler)).list_addons("backup-app"))

    assert addons == [
        AddOn(name="postgresql-a", service_name="heroku-postgresql"),
        AddOn(name="papertrail-b", service_name="papertrail"),
        AddOn(name="orphan", service_name=""),
    ]


def test_delete_addon_calls_addon_path() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code=200, json={"name": "postgresql-a"})

    asyncio.run(_client(httpx.MockTransport(handler)).delete_addon("backup-app", "postgresql-a"))

    assert requests[0].method == "DELETE"
    assert str(requests[0].url) == "https://api.heroku.com/apps/backup-app/addons/postgresql-a"


def test_non_success_status_raises_descriptive_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code=404,
            json={"id": "not_found", "message": "Couldn't find that app."},
        )

    with pytest.raises(HerokuClientError, match="404 Couldn't find that app."):
        asyncio.run(_client(httpx.MockTransport(handler)).list_addons("missing-app"))


def test_transport_error_raises_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection reset", request=request)

    with pytest.raises(HerokuClientError, match="GET https://api.heroku.com/apps/a/addons failed"):
        asyncio.run(_client(httpx.MockTransport(handler)).list_addons("a"))


def test_empty_api_key_is_rejected() -> None:
    with pytest.raises(HerokuClientError):
        HerokuPlatformClient(api_key="  ")
