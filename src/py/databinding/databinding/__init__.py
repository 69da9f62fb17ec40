"""Fetch a user list once and bind its state to observers five different ways.

Every adapter restates the same ``ResourceContainer`` events. All state
mutation and delivery happens on the container's ``DeliveryContext``.
"""

from .adapters import (
    BehaviorStream,
    BroadcastAdapter,
    CallbackAdapter,
    DelegateAdapter,
    Disposable,
    DisposeBag,
    IUsersDelegate,
    Notification,
    NotificationChannel,
    PublishStream,
    ResourceAdapter,
    StreamAdapter,
    ValueAdapter,
    ValueHolder,
)
from .client import FetchClient, IFetchClient, decode_users
from .container import ResourceContainer
from .context import DeliveryContext
from .core import IPublisher, ISubscription, Observer, Publisher, SkipUpdate, Subscription
from .errors import DecodeError, EmptyBodyError, FetchError, TransportError
from .models import (
    Failed,
    FetchFailed,
    Loaded,
    Loading,
    LoadingChanged,
    NotStarted,
    User,
    UsersUpdated,
)

__all__ = [
    "BehaviorStream",
    "BroadcastAdapter",
    "CallbackAdapter",
    "DelegateAdapter",
    "Disposable",
    "DisposeBag",
    "IUsersDelegate",
    "Notification",
    "NotificationChannel",
    "PublishStream",
    "ResourceAdapter",
    "StreamAdapter",
    "ValueAdapter",
    "ValueHolder",
    "FetchClient",
    "IFetchClient",
    "decode_users",
    "ResourceContainer",
    "DeliveryContext",
    "IPublisher",
    "ISubscription",
    "Observer",
    "Publisher",
    "SkipUpdate",
    "Subscription",
    "DecodeError",
    "EmptyBodyError",
    "FetchError",
    "TransportError",
    "Failed",
    "FetchFailed",
    "Loaded",
    "Loading",
    "LoadingChanged",
    "NotStarted",
    "User",
    "UsersUpdated",
]
