import asyncio
import concurrent.futures
import logging
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


class DeliveryContext:
    """
    The one event loop on which a container mutates state and emits events.

    Work submitted from the loop's own thread runs inline; work from any
    other thread is handed to the loop with ``call_soon_threadsafe``. This
    hand-off is the only synchronization the containers rely on.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    @classmethod
    def current(cls) -> "DeliveryContext":
        return cls(asyncio.get_running_loop())

    def is_current(self) -> bool:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            return False
        return running is self.loop

    def dispatch(self, callback: Callable[..., None], *args: Any) -> None:
        if self.is_current():
            callback(*args)
            return
        try:
            self.loop.call_soon_threadsafe(callback, *args)
        except RuntimeError:
            logging.getLogger(__name__).warning(
                "Delivery loop is closed, dropping %r.", callback
            )

    def submit(
        self, coroutine: Coroutine[Any, Any, T]
    ) -> "concurrent.futures.Future[T]":
        return asyncio.run_coroutine_threadsafe(coroutine, self.loop)
