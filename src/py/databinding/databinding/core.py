from typing import Callable, Generic, Optional, TypeVar
from typing_extensions import override
import logging

T = TypeVar("T")


class SkipUpdate(Exception):
    """Signals an expected miss in an observer transform that should skip the value."""


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: object = _Missing()


class ISubscription:
    @property
    def active(self) -> bool:
        raise NotImplementedError

    def cancel(self) -> None:
        """
        Stop delivering values to the observer. Cancelling twice is a no-op.
        """
        raise NotImplementedError


class IPublisher(Generic[T]):
    def add_observer(self, observer: Callable[[T], None]) -> ISubscription:
        """
        Add an observer to the publisher.
        """
        raise NotImplementedError

    def notify(self, value: T) -> None:
        """
        Notify all observers with a new value.
        """
        raise NotImplementedError


class Subscription(ISubscription, Generic[T]):
    def __init__(self, publisher: "Publisher[T]", observer: Callable[[T], None]) -> None:
        self.publisher = publisher
        self.observer = observer
        self._active = True

    @property
    @override
    def active(self) -> bool:
        return self._active

    @override
    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self.publisher._remove(self)

    def __enter__(self) -> "Subscription[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


class Publisher(IPublisher[T], Generic[T]):
    """
    Synchronous fan-out of values to observers.

    All calls are expected on one delivery context (see ``DeliveryContext``);
    the publisher does no locking of its own. With ``replay`` set, a new
    observer immediately receives the current value, if there is one.
    """

    def __init__(
        self,
        initial_value: object = MISSING,
        *,
        replay: bool = False,
        name: str = "publisher",
    ) -> None:
        self.name = name
        self.replay = replay
        self._current = initial_value
        self._subscriptions: list[Subscription[T]] = []

    def get(self) -> Optional[T]:
        if self._current is MISSING:
            return None
        return self._current  # type: ignore[return-value]

    @property
    def observer_count(self) -> int:
        return len(self._subscriptions)

    @override
    def add_observer(self, observer: Callable[[T], None]) -> Subscription[T]:
        subscription: Subscription[T] = Subscription(self, observer)
        self._subscriptions.append(subscription)
        if self.replay and self._current is not MISSING:
            observer(self._current)  # type: ignore[arg-type]
        return subscription

    @override
    def notify(self, value: T) -> None:
        self._current = value

        errors: list[Exception] = []
        for subscription in list(self._subscriptions):
            # an earlier observer may have cancelled this one
            if not subscription.active:
                continue
            try:
                subscription.observer(value)
            except Exception as error:
                logging.getLogger(__name__).exception(
                    "Observer of %s failed.", self.name
                )
                errors.append(error)
        if errors:
            raise errors[0]

    def clear(self) -> None:
        for subscription in list(self._subscriptions):
            subscription.cancel()

    def _remove(self, subscription: Subscription[T]) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass


class Observer(Publisher[T], Generic[T]):
    def __init__(
        self,
        upstream: IPublisher,
        transform: Callable[[object], T],
        initial_value: object = MISSING,
        *,
        replay: bool = False,
        name: str = "observer",
    ) -> None:
        """
        Create a publisher fed by ``upstream`` through ``transform``.

        The transform may raise SkipUpdate to drop a value. Other exceptions
        are logged and re-raised.
        """
        super().__init__(initial_value, replay=replay, name=name)
        self.transform = transform
        self._upstream = upstream.add_observer(self.update)

    @classmethod
    def new(cls, upstream: IPublisher, **kwargs: object) -> "Observer[T]":
        return cls(upstream, lambda value: value, **kwargs)  # type: ignore[arg-type]

    def update(self, value: object) -> None:
        try:
            transformed_value = self.transform(value)
        except SkipUpdate:
            return
        except Exception:
            logging.getLogger(__name__).exception("Observer transform failed.")
            raise
        self.notify(transformed_value)

    def detach(self) -> None:
        """
        Stop following upstream and drop every downstream observer.
        """
        self._upstream.cancel()
        self.clear()
