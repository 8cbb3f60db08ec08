from __future__ import annotations

import asyncio
import base64
import json

import httpx
import pytest

from pg_fork_backup.infrastructure.backups import PgBackupsClient, PgBackupsClientError


def _client(handler: httpx.MockTransport) -> PgBackupsClient:
    return PgBackupsClient(api_key="api-key", transport=handler)


def test_create_backup_posts_expire_flag_with_basic_auth() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code=201, json={"uuid": "b001-uuid"})

    transfer_id = asyncio.run(
        _client(httpx.MockTransport(handler)).create_backup("postgresql-fork-1")
    )

    assert transfer_id == "b001-uuid"
    request = requests[0]
    assert request.method == "POST"
    assert (
        str(request.url)
        == "https://postgres-api.heroku.com/client/v11/databases/postgresql-fork-1/backups"
    )
    assert json.loads(request.content.decode()) == {"expire": True}
    expected = base64.b64encode(b":api-key").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(status_code=422, json={"id": "unprocessable", "message": "not ready"}),
        httpx.Response(status_code=200, json={"state": "pending"}),
        httpx.Response(status_code=503, text="unavailable"),
    ],
)
def test_create_backup_returns_none_when_no_uuid(response: httpx.Response) -> None:
    transfer_id = asyncio.run(
        _client(httpx.MockTransport(lambda _: response)).create_backup("postgresql-fork-1")
    )

    assert transfer_id is None


def test_get_transfer_returns_detail_record() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            status_code=200,
            json={"uuid": "b001-uuid", "finished_at": "2026-10-16 03:00:00 +0000"},
        )

    detail = asyncio.run(
        _client(httpx.MockTransport(handler)).get_transfer("postgresql-fork-1", "b001-uuid")
    )

    assert detail["finished_at"] == "2026-10-16 03:00:00 +0000"
    assert str(requests[0].url).endswith(
        "/client/v11/databases/postgresql-fork-1/transfers/b001-uuid"
    )


def test_get_transfer_raises_on_non_success_status() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code=500, text="internal error")

    with pytest.raises(PgBackupsClientError, match="500 internal error"):
        asyncio.run(
            _client(httpx.MockTransport(handler)).get_transfer("postgresql-fork-1", "b001")
        )


def test_transport_error_raises_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(PgBackupsClientError, match="timed out"):
        asyncio.run(_client(httpx.MockTransport(handler)).create_backup("postgresql-fork-1"))
