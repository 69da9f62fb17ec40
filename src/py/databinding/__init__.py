"""Fetch a user list once and bind its state to observers five different ways.

All state mutation and delivery for a container happens on its
``DeliveryContext``; treat delivered user tuples as immutable.
"""

from .databinding import (
    BroadcastAdapter,
    CallbackAdapter,
    DelegateAdapter,
    FetchClient,
    ResourceContainer,
    StreamAdapter,
    ValueAdapter,
)

__all__ = [
    "BroadcastAdapter",
    "CallbackAdapter",
    "DelegateAdapter",
    "FetchClient",
    "ResourceContainer",
    "StreamAdapter",
    "ValueAdapter",
]
