from typing import Callable, Optional, TypeVar

from ..client import IFetchClient
from ..container import FetchHandle, ResourceContainer
from ..core import MISSING, Observer, SkipUpdate
from ..errors import FetchError
from ..models import FetchFailed, LoadingChanged, Users, UsersUpdated

T = TypeVar("T")


def loading_of(event: object) -> bool:
    if isinstance(event, LoadingChanged):
        return event.is_loading
    raise SkipUpdate


def users_of(event: object) -> Users:
    if isinstance(event, UsersUpdated):
        return event.users
    raise SkipUpdate


def error_of(event: object) -> FetchError:
    if isinstance(event, FetchFailed):
        return event.error
    raise SkipUpdate


class ResourceAdapter:
    """
    Common plumbing for the delivery adapters.

    Every adapter projects the container's event stream into per-field
    observers and restates them in its own vocabulary. Closing the adapter
    detaches those observers, so nothing is delivered afterwards, even for
    a fetch that is already in flight.
    """

    def __init__(
        self,
        container: Optional[ResourceContainer] = None,
        *,
        client: Optional[IFetchClient] = None,
    ) -> None:
        self.container = (
            container if container is not None else ResourceContainer(client)
        )
        self._observers: list[Observer] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def fetch(self) -> FetchHandle:
        return self.container.fetch()

    def refresh(self) -> FetchHandle:
        return self.container.refresh()

    def close(self) -> None:
        self._closed = True
        for observer in self._observers:
            observer.detach()
        self._observers.clear()

    def _derive(
        self,
        transform: Callable[[object], T],
        initial_value: object = MISSING,
        *,
        replay: bool = False,
        name: str = "observer",
    ) -> "Observer[T]":
        observer: Observer[T] = Observer(
            self.container.events,
            transform,
            initial_value,
            replay=replay,
            name=name,
        )
        self._observers.append(observer)
        return observer
