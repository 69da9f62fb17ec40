from .base import ResourceAdapter
from .broadcast import BroadcastAdapter, Notification, NotificationChannel
from .callback import CallbackAdapter
from .delegate import DelegateAdapter, IUsersDelegate
from .stream import BehaviorStream, Disposable, DisposeBag, PublishStream, StreamAdapter
from .value import ValueAdapter, ValueHolder

__all__ = [
    "ResourceAdapter",
    "BroadcastAdapter",
    "Notification",
    "NotificationChannel",
    "CallbackAdapter",
    "DelegateAdapter",
    "IUsersDelegate",
    "BehaviorStream",
    "Disposable",
    "DisposeBag",
    "PublishStream",
    "StreamAdapter",
    "ValueAdapter",
    "ValueHolder",
]
