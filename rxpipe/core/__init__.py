"""
rxpipe Core - Primitives the Operator Layer Is Built On
=======================================================
"""

from .disposables import DisposableBag, as_disposer
from .observable import Observable, ensure_observable, is_observable
from .promise import Promise, PromiseState, is_future, is_promise
from .signal import Connection, Signal
from .subscription import Subscription, SubscriptionState
from .types import UNSET, is_list_like

__all__ = [
    "Connection",
    "DisposableBag",
    "Observable",
    "Promise",
    "PromiseState",
    "Signal",
    "Subscription",
    "SubscriptionState",
    "UNSET",
    "as_disposer",
    "ensure_observable",
    "is_future",
    "is_list_like",
    "is_observable",
    "is_promise",
]
