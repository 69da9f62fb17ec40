import asyncio
import concurrent.futures
import logging
from typing import Optional, Union

from .client import FetchClient, IFetchClient
from .context import DeliveryContext
from .core import Publisher
from .errors import FetchError
from .models import (
    Failed,
    FetchFailed,
    Loaded,
    Loading,
    LoadingChanged,
    NotStarted,
    ResourceEvent,
    ResourceState,
    Users,
    UsersUpdated,
)

logger = logging.getLogger(__name__)

FetchHandle = Union["asyncio.Task[None]", "concurrent.futures.Future[None]"]


class ResourceContainer:
    """
    Owns the user-list resource state and emits its events.

    Each ``fetch()`` emits, on the delivery context, ``LoadingChanged(True)``,
    then ``UsersUpdated`` or ``FetchFailed``, then ``LoadingChanged(False)``.

    Overlapping fetches are neither cancelled nor de-duplicated: every
    completion is applied in the order it lands, so a slow stale response
    can overwrite a newer one.
    """

    def __init__(
        self,
        client: Optional[IFetchClient] = None,
        context: Optional[DeliveryContext] = None,
    ) -> None:
        self.client = client if client is not None else FetchClient()
        self.context = context if context is not None else DeliveryContext.current()
        self.events: Publisher[ResourceEvent] = Publisher(name="resource-events")
        self._state: ResourceState = NotStarted()
        self._users: Users = ()
        self._tasks: set["asyncio.Task[None]"] = set()
        self._closed = False

    @property
    def state(self) -> ResourceState:
        return self._state

    @property
    def users(self) -> Users:
        """Users from the last successful fetch."""
        return self._users

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def error(self) -> Optional[FetchError]:
        """Error of the last fetch, if it failed."""
        if isinstance(self._state, Failed):
            return self._state.error
        return None

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def fetch(self) -> FetchHandle:
        """
        Start a fetch.

        On the delivery loop's thread this emits ``LoadingChanged(True)``
        before returning the fetch task. From any other thread the start is
        scheduled on the loop and a ``concurrent.futures.Future`` is returned.
        """
        if self.context.is_current():
            return self._start()
        return self.context.submit(self._start_and_wait())

    def refresh(self) -> FetchHandle:
        return self.fetch()

    async def wait_idle(self) -> None:
        """Wait until no fetch is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def close(self) -> None:
        """
        Drop every subscriber. Fetches still in flight run to completion and
        their results are discarded.
        """
        if self._closed:
            return
        self._closed = True
        self.events.clear()

    async def _start_and_wait(self) -> None:
        await self._start()

    def _start(self) -> "asyncio.Task[None]":
        self._state = Loading()
        logger.debug("Fetch started (%d already in flight)", len(self._tasks))

        # runs only after this call yields, so LoadingChanged(True) comes first
        task = self.context.loop.create_task(self._run())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

        self.events.notify(LoadingChanged(True))
        return task

    def _finished(self, task: "asyncio.Task[None]") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        # failures are logged where raised; reading the exception marks it retrieved
        error = task.exception()
        if error is not None:
            logger.debug("Fetch task ended with %r", error)

    async def _run(self) -> None:
        outcome: ResourceState
        try:
            users = await self.client.fetch_users()
        except FetchError as error:
            outcome = Failed(error)
        except Exception:
            logger.exception("Fetch client raised an unexpected error.")
            raise
        else:
            outcome = Loaded(tuple(users))
        self.context.dispatch(self._complete, outcome)

    def _complete(self, outcome: ResourceState) -> None:
        if self._closed:
            logger.debug("Discarding completion for closed container: %r", outcome)
            return

        self._state = outcome
        event: ResourceEvent
        if isinstance(outcome, Loaded):
            self._users = outcome.users
            event = UsersUpdated(outcome.users)
            logger.debug("Fetch completed with %d users", len(outcome.users))
        else:
            assert isinstance(outcome, Failed)
            event = FetchFailed(outcome.error)
            logger.debug("Fetch failed: %r", outcome.error)

        try:
            self.events.notify(event)
        finally:
            self.events.notify(LoadingChanged(False))
