from typing import Callable, Generic, Optional, TypeVar

from ..client import IFetchClient
from ..container import ResourceContainer
from ..core import Publisher, Subscription
from ..errors import FetchError
from ..models import Users
from .base import ResourceAdapter, error_of, loading_of, users_of

T = TypeVar("T")


class ValueHolder(Generic[T]):
    """Latest-value holder. New subscribers get the current value at once."""

    def __init__(self, publisher: Publisher[T]) -> None:
        self._publisher = publisher

    @property
    def value(self) -> Optional[T]:
        return self._publisher.get()

    def subscribe(self, observer: Callable[[T], None]) -> Subscription[T]:
        return self._publisher.add_observer(observer)


class ValueAdapter(ResourceAdapter):
    def __init__(
        self,
        container: Optional[ResourceContainer] = None,
        *,
        client: Optional[IFetchClient] = None,
    ) -> None:
        super().__init__(container, client=client)
        self.is_loading: ValueHolder[bool] = ValueHolder(
            self._derive(
                loading_of, self.container.is_loading, replay=True, name="value-loading"
            )
        )
        self.users: ValueHolder[Users] = ValueHolder(
            self._derive(
                users_of, self.container.users, replay=True, name="value-users"
            )
        )
        self.error: ValueHolder[Optional[FetchError]] = ValueHolder(
            self._derive(
                error_of, self.container.error, replay=True, name="value-error"
            )
        )
