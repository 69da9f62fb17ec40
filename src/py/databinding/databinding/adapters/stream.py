from typing import Callable, Generic, Optional, TypeVar

from ..client import IFetchClient
from ..container import ResourceContainer
from ..core import Publisher, Subscription
from ..errors import FetchError
from ..models import Users
from .base import ResourceAdapter, error_of, loading_of, users_of

T = TypeVar("T")


class Disposable:
    def __init__(self, subscription: Subscription) -> None:
        self._subscription = subscription

    @property
    def disposed(self) -> bool:
        return not self._subscription.active

    def dispose(self) -> None:
        self._subscription.cancel()

    def disposed_by(self, bag: "DisposeBag") -> "Disposable":
        bag.insert(self)
        return self


class DisposeBag:
    """Disposes everything it holds at once. Items added afterwards are disposed on insert."""

    def __init__(self) -> None:
        self._items: list[Disposable] = []
        self._disposed = False

    def insert(self, disposable: Disposable) -> None:
        if self._disposed:
            disposable.dispose()
            return
        self._items.append(disposable)

    def dispose(self) -> None:
        self._disposed = True
        items, self._items = self._items, []
        for item in items:
            item.dispose()

    def __len__(self) -> int:
        return len(self._items)


class PublishStream(Generic[T]):
    """Live-only stream: subscribers see values emitted after they subscribe."""

    def __init__(self, publisher: Publisher[T]) -> None:
        self._publisher = publisher

    def subscribe(self, on_next: Callable[[T], None]) -> Disposable:
        return Disposable(self._publisher.add_observer(on_next))


class BehaviorStream(PublishStream[T], Generic[T]):
    """Stream that replays its latest value to each new subscriber."""

    @property
    def value(self) -> T:
        return self._publisher.get()  # type: ignore[return-value]


class StreamAdapter(ResourceAdapter):
    def __init__(
        self,
        container: Optional[ResourceContainer] = None,
        *,
        client: Optional[IFetchClient] = None,
    ) -> None:
        super().__init__(container, client=client)
        self.is_loading: BehaviorStream[bool] = BehaviorStream(
            self._derive(
                loading_of, self.container.is_loading, replay=True, name="stream-loading"
            )
        )
        self.users: BehaviorStream[Users] = BehaviorStream(
            self._derive(
                users_of, self.container.users, replay=True, name="stream-users"
            )
        )
        self.error: PublishStream[FetchError] = PublishStream(
            self._derive(error_of, name="stream-error")
        )
