import asyncio

import pytest

from databinding.databinding import IFetchClient, TransportError, User

SAMPLE_RECORDS = [
    {
        "id": 1,
        "name": "Leanne Graham",
        "email": "Sincere@april.biz",
        "phone": "1-770-736-8031",
    },
    {
        "id": 2,
        "name": "Ervin Howell",
        "email": "Shanna@melissa.tv",
        "phone": "010-692-6593 x09125",
    },
    {
        "id": 3,
        "name": "Clementine Bauch",
        "email": "Nathan@yesenia.net",
        "phone": "1-463-123-4447",
    },
]


class FakeClient(IFetchClient):
    def __init__(self, result: object) -> None:
        self.result = result
        self.calls = 0

    async def fetch_users(self) -> tuple[User, ...]:
        self.calls += 1
        await asyncio.sleep(0)
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result  # type: ignore[return-value]


class ControlledClient(IFetchClient):
    """Each call blocks until the test resolves its future."""

    def __init__(self) -> None:
        self.pending: list[asyncio.Future] = []

    async def fetch_users(self) -> tuple[User, ...]:
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future

    def resolve(self, index: int, result: object) -> None:
        future = self.pending[index]
        if isinstance(result, BaseException):
            future.set_exception(result)
        else:
            future.set_result(result)


@pytest.fixture
def sample_records() -> list[dict]:
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture
def sample_users() -> tuple[User, ...]:
    return tuple(User(**record) for record in SAMPLE_RECORDS)  # type: ignore[arg-type]


@pytest.fixture
def users_client(sample_users: tuple[User, ...]) -> FakeClient:
    return FakeClient(sample_users)


@pytest.fixture
def failing_client() -> FakeClient:
    return FakeClient(TransportError("connection refused"))


@pytest.fixture
def controlled_client() -> ControlledClient:
    return ControlledClient()
