from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from ..client import IFetchClient
from ..config import USERS_DID_FAIL, USERS_DID_UPDATE, USERS_LOADING
from ..container import ResourceContainer
from ..core import Publisher, Subscription
from ..errors import FetchError
from ..models import Users
from .base import ResourceAdapter, error_of, loading_of, users_of


@dataclass(frozen=True)
class Notification:
    name: str
    sender: object = None
    user_info: Mapping[str, object] = field(default_factory=dict)


class NotificationChannel:
    """
    Named notification channels.

    A channel belongs to one resource container and is handed to consumers
    explicitly, so two containers never share channel names. Observers stay
    registered until removed with ``remove_observer``.
    """

    def __init__(self) -> None:
        self._publishers: dict[str, Publisher[Notification]] = {}

    def add_observer(
        self, name: str, handler: Callable[[Notification], None]
    ) -> Subscription[Notification]:
        return self._publisher(name).add_observer(handler)

    def remove_observer(self, token: Subscription[Notification]) -> None:
        token.cancel()

    def post(self, name: str, sender: object = None, **user_info: object) -> None:
        publisher = self._publishers.get(name)
        if publisher is None:
            return
        publisher.notify(Notification(name, sender, user_info))

    def observer_count(self, name: str) -> int:
        publisher = self._publishers.get(name)
        return publisher.observer_count if publisher is not None else 0

    def clear(self) -> None:
        for publisher in self._publishers.values():
            publisher.clear()

    def _publisher(self, name: str) -> Publisher[Notification]:
        if name not in self._publishers:
            self._publishers[name] = Publisher(name=f"channel:{name}")
        return self._publishers[name]


class BroadcastAdapter(ResourceAdapter):
    """
    Posts resource events to named channels:

    - ``users_loading`` with ``user_info["is_loading"]``
    - ``users_did_update`` with ``user_info["users"]``
    - ``users_did_fail`` with ``user_info["error"]``
    """

    def __init__(
        self,
        container: Optional[ResourceContainer] = None,
        *,
        client: Optional[IFetchClient] = None,
        channel: Optional[NotificationChannel] = None,
    ) -> None:
        super().__init__(container, client=client)
        self.channel = channel if channel is not None else NotificationChannel()

        self._derive(loading_of, name="broadcast-loading").add_observer(
            self._post_loading
        )
        self._derive(users_of, name="broadcast-users").add_observer(
            self._post_users
        )
        self._derive(error_of, name="broadcast-error").add_observer(
            self._post_error
        )

    def _post_loading(self, is_loading: bool) -> None:
        self.channel.post(USERS_LOADING, self, is_loading=is_loading)

    def _post_users(self, users: Users) -> None:
        self.channel.post(USERS_DID_UPDATE, self, users=users)

    def _post_error(self, error: FetchError) -> None:
        self.channel.post(USERS_DID_FAIL, self, error=error)
