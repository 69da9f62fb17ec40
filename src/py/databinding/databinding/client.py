import asyncio
import json
import logging
from typing import Any, Callable, Optional

import aiohttp
from typing_extensions import override

from .config import USERS_ENDPOINT
from .errors import DecodeError, EmptyBodyError, TransportError
from .models import User, Users

logger = logging.getLogger(__name__)


def decode_users(body: Optional[bytes]) -> Users:
    """Decode a response body into users; all records or nothing."""
    if not body:
        raise EmptyBodyError("Response body is empty")
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as error:
        raise DecodeError(f"Response body is not valid JSON: {error}") from error
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array, got {type(payload).__name__}")
    return tuple(User.from_dict(record) for record in payload)


class IFetchClient:
    async def fetch_users(self) -> Users:
        """
        Fetch the user list, raising a FetchError subclass on failure.
        """
        raise NotImplementedError


class FetchClient(IFetchClient):
    def __init__(
        self,
        endpoint: str = USERS_ENDPOINT,
        session_factory: Callable[[], Any] = aiohttp.ClientSession,
    ) -> None:
        self.endpoint = endpoint
        self._session_factory = session_factory

    @override
    async def fetch_users(self) -> Users:
        logger.debug("GET %s", self.endpoint)
        try:
            async with self._session_factory() as session:
                async with session.get(self.endpoint) as response:
                    body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as error:
            raise TransportError(f"GET {self.endpoint} failed: {error}") from error

        users = decode_users(body)
        logger.debug("Decoded %d users from %s", len(users), self.endpoint)
        return users
