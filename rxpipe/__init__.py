"""
rxpipe - Push-Based Reactive Stream Combinators
===============================================

Observables describe event sequences; operators create, transform, merge and
tear them down with deterministic cleanup. Everything is synchronous: the
library never schedules work of its own, it only reacts to whatever fires.
"""

from . import operators
from .core import (
    UNSET,
    Connection,
    DisposableBag,
    Observable,
    Promise,
    PromiseState,
    Signal,
    Subscription,
    SubscriptionState,
    is_observable,
    is_promise,
)
from .errors import (
    CannotConvertError,
    NotAnObservableError,
    PipeCompositionError,
    PromiseNotSettledError,
    RxError,
)
from .operators import (
    EMPTY,
    NEVER,
    combine_latest,
    flat_map,
    from_,
    from_promise,
    from_signal,
    map_to,
    merge,
    merge_all,
    of,
    packed,
    pipe,
    start,
    start_from,
    start_with,
    switch_all,
    switch_map,
    take_until,
    tap,
    unpacked,
    using,
    where,
)

# ``map`` stays namespaced (rxpipe.operators.map) so the package root never
# shadows the builtin for ``from rxpipe import *``.

__all__ = [
    # Primitives
    "Observable",
    "Subscription",
    "SubscriptionState",
    "DisposableBag",
    "Promise",
    "PromiseState",
    "Signal",
    "Connection",
    "is_observable",
    "is_promise",
    # Sentinel
    "UNSET",
    # Operators
    "operators",
    "pipe",
    "EMPTY",
    "NEVER",
    "of",
    "from_",
    "from_signal",
    "from_promise",
    "tap",
    "map_to",
    "where",
    "start",
    "start_from",
    "start_with",
    "merge_all",
    "switch_all",
    "flat_map",
    "switch_map",
    "merge",
    "combine_latest",
    "take_until",
    "packed",
    "unpacked",
    "using",
    # Exceptions
    "RxError",
    "NotAnObservableError",
    "PipeCompositionError",
    "CannotConvertError",
    "PromiseNotSettledError",
]
