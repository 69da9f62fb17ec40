import weakref
from typing import Optional

from ..client import IFetchClient
from ..container import ResourceContainer
from ..errors import FetchError
from ..models import Users
from .base import ResourceAdapter, error_of, loading_of, users_of


class IUsersDelegate:
    def did_update_users(self, adapter: "DelegateAdapter", users: Users) -> None:
        raise NotImplementedError

    def did_fail_with_error(
        self, adapter: "DelegateAdapter", error: FetchError
    ) -> None:
        raise NotImplementedError

    def did_change_loading(self, adapter: "DelegateAdapter", is_loading: bool) -> None:
        raise NotImplementedError


class DelegateAdapter(ResourceAdapter):
    """
    Delivers resource events to a single delegate.

    The delegate is held weakly: once the consumer is garbage collected the
    slot reads as empty and deliveries stop. Set ``delegate = None`` to
    unregister explicitly.
    """

    def __init__(
        self,
        container: Optional[ResourceContainer] = None,
        *,
        client: Optional[IFetchClient] = None,
    ) -> None:
        super().__init__(container, client=client)
        self._delegate_ref: Optional["weakref.ref[IUsersDelegate]"] = None
        self._users: Users = ()

        self._derive(loading_of, name="delegate-loading").add_observer(
            self._deliver_loading
        )
        self._derive(users_of, name="delegate-users").add_observer(
            self._deliver_users
        )
        self._derive(error_of, name="delegate-error").add_observer(
            self._deliver_error
        )

    @property
    def delegate(self) -> Optional[IUsersDelegate]:
        if self._delegate_ref is None:
            return None
        return self._delegate_ref()

    @delegate.setter
    def delegate(self, delegate: Optional[IUsersDelegate]) -> None:
        self._delegate_ref = weakref.ref(delegate) if delegate is not None else None

    @property
    def users(self) -> Users:
        return self._users

    def close(self) -> None:
        super().close()
        self._delegate_ref = None

    def _deliver_loading(self, is_loading: bool) -> None:
        delegate = self.delegate
        if delegate is not None:
            delegate.did_change_loading(self, is_loading)

    def _deliver_users(self, users: Users) -> None:
        self._users = users
        delegate = self.delegate
        if delegate is not None:
            delegate.did_update_users(self, users)

    def _deliver_error(self, error: FetchError) -> None:
        delegate = self.delegate
        if delegate is not None:
            delegate.did_fail_with_error(self, error)
