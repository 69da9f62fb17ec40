from typing import Callable, Optional

from ..client import IFetchClient
from ..container import ResourceContainer
from ..errors import FetchError
from ..models import Users
from .base import ResourceAdapter, error_of, loading_of, users_of


class CallbackAdapter(ResourceAdapter):
    """
    Delivers resource events to three optional callback slots.

    Each slot holds one callable; assigning replaces the previous one.
    """

    def __init__(
        self,
        container: Optional[ResourceContainer] = None,
        *,
        client: Optional[IFetchClient] = None,
    ) -> None:
        super().__init__(container, client=client)
        self.on_users_updated: Optional[Callable[[Users], None]] = None
        self.on_error: Optional[Callable[[FetchError], None]] = None
        self.on_loading: Optional[Callable[[bool], None]] = None
        self._users: Users = ()

        self._derive(loading_of, name="callback-loading").add_observer(
            self._deliver_loading
        )
        self._derive(users_of, name="callback-users").add_observer(
            self._deliver_users
        )
        self._derive(error_of, name="callback-error").add_observer(
            self._deliver_error
        )

    @property
    def users(self) -> Users:
        return self._users

    def close(self) -> None:
        super().close()
        self.on_users_updated = None
        self.on_error = None
        self.on_loading = None

    def _deliver_loading(self, is_loading: bool) -> None:
        if self.on_loading is not None:
            self.on_loading(is_loading)

    def _deliver_users(self, users: Users) -> None:
        self._users = users
        if self.on_users_updated is not None:
            self.on_users_updated(users)

    def _deliver_error(self, error: FetchError) -> None:
        if self.on_error is not None:
            self.on_error(error)
