import json
from typing import Optional

import aiohttp
import pytest

from databinding.databinding import (
    DecodeError,
    EmptyBodyError,
    FetchClient,
    TransportError,
    User,
    decode_users,
)
from databinding.databinding.config import USERS_ENDPOINT


class FakeResponse:
    def __init__(self, body: Optional[bytes]) -> None:
        self.body = body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def read(self) -> Optional[bytes]:
        return self.body


class FakeSession:
    def __init__(self, body: Optional[bytes] = None, error: Optional[Exception] = None) -> None:
        self.body = body
        self.error = error
        self.requested: list[str] = []
        self.closed = False

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True

    def get(self, url: str) -> FakeResponse:
        self.requested.append(url)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body)


def test_decode_users(sample_records: list[dict], sample_users: tuple[User, ...]) -> None:
    users = decode_users(json.dumps(sample_records).encode())
    assert users == sample_users
    assert users[0].name == "Leanne Graham"


def test_decode_users_ignores_extra_keys(sample_records: list[dict]) -> None:
    sample_records[0]["address"] = {"city": "Gwenborough"}
    sample_records[0]["username"] = "Bret"
    users = decode_users(json.dumps(sample_records).encode())
    assert users[0] == User(1, "Leanne Graham", "Sincere@april.biz", "1-770-736-8031")


def test_decode_empty_array() -> None:
    assert decode_users(b"[]") == ()


@pytest.mark.parametrize("body", [None, b""])
def test_decode_absent_body(body: Optional[bytes]) -> None:
    with pytest.raises(EmptyBodyError):
        decode_users(body)


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b'{"id": 1}',
        b'[{"id": "1", "name": "a", "email": "b", "phone": "c"}]',
        b'[{"id": true, "name": "a", "email": "b", "phone": "c"}]',
        b'[{"id": 1.5, "name": "a", "email": "b", "phone": "c"}]',
        b'[{"id": 1, "name": "a", "email": "b"}]',
        b'[{"id": 1, "name": null, "email": "b", "phone": "c"}]',
        b"[1, 2, 3]",
        b"[" * 100000 + b"]" * 100000,
    ],
    ids=lambda body: repr(body) if len(body) < 80 else f"nested-{len(body)}",
)
def test_decode_malformed_body(body: bytes) -> None:
    with pytest.raises(DecodeError):
        decode_users(body)


def test_one_bad_record_fails_whole_list(sample_records: list[dict]) -> None:
    sample_records[2]["phone"] = 5551234
    with pytest.raises(DecodeError, match="phone"):
        decode_users(json.dumps(sample_records).encode())


@pytest.mark.asyncio
async def test_fetch_users_gets_endpoint(
    sample_records: list[dict], sample_users: tuple[User, ...]
) -> None:
    session = FakeSession(json.dumps(sample_records).encode())
    client = FetchClient(session_factory=lambda: session)

    assert await client.fetch_users() == sample_users
    assert session.requested == [USERS_ENDPOINT]
    assert session.closed


@pytest.mark.asyncio
async def test_fetch_users_transport_error() -> None:
    error = aiohttp.ClientConnectionError("connection refused")
    client = FetchClient(
        "http://localhost:1/users", session_factory=lambda: FakeSession(error=error)
    )

    with pytest.raises(TransportError) as excinfo:
        await client.fetch_users()
    assert excinfo.value.__cause__ is error


@pytest.mark.asyncio
async def test_fetch_users_os_error_is_transport_error() -> None:
    client = FetchClient(session_factory=lambda: FakeSession(error=OSError("unreachable")))
    with pytest.raises(TransportError):
        await client.fetch_users()


@pytest.mark.asyncio
async def test_fetch_users_empty_body() -> None:
    client = FetchClient(session_factory=lambda: FakeSession(b""))
    with pytest.raises(EmptyBodyError):
        await client.fetch_users()


@pytest.mark.asyncio
async def test_fetch_users_decode_error() -> None:
    client = FetchClient(session_factory=lambda: FakeSession(b"<html>Not Found</html>"))
    with pytest.raises(DecodeError):
        await client.fetch_users()


@pytest.mark.asyncio
async def test_fetch_users_deeply_nested_body_is_decode_error() -> None:
    body = b"[" * 100000 + b"]" * 100000
    client = FetchClient(session_factory=lambda: FakeSession(body))
    with pytest.raises(DecodeError) as excinfo:
        await client.fetch_users()
    assert isinstance(excinfo.value.__cause__, RecursionError)
