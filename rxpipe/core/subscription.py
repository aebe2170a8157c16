"""
rxpipe Subscription - The Disposer Returned by subscribe()
==========================================================

A Subscription is the live result of one ``Observable.subscribe`` call. It owns
the observer callbacks, gates delivery to them, and owns the teardown the
subscribe function handed back.

State machine:

    PENDING ──fire──> PENDING
    PENDING ──fail──> FAILED      (on_error, then teardown)
    PENDING ──complete──> COMPLETE (on_completed, then teardown)
    PENDING ──dispose──> CANCELLED (teardown)

Only PENDING delivers anything, so at most one terminal event can ever reach
the observer. Values also stop as soon as dispose() is called. Teardown runs
at most once whichever way the subscription ends.
"""

from enum import Enum
from typing import Any, Optional

from .disposables import as_disposer
from .types import Disposer, OnCompleted, OnError, OnNext


class SubscriptionState(Enum):
    PENDING = "pending"
    COMPLETE = "complete"
    FAILED = "failed"
    CANCELLED = "cancelled"


class Subscription:
    """
    Cancellable handle for one subscription.

    Calling the subscription, or calling ``dispose()``, cancels it. Both are
    idempotent. Values stop the moment ``dispose()`` is called. Hooks that run
    during teardown may still deliver the terminal event; once ``dispose()``
    returns nothing more is delivered.

    A subscription without an ``on_error`` callback re-raises stream errors
    into whatever code delivered them.

    Example:
        ```python
        subscription = source.subscribe(print, on_error=log_error)
        ...
        subscription.dispose()

        with source.subscribe(print):
            run_for_a_while()
        ```
    """

    __slots__ = (
        "_on_next",
        "_on_error",
        "_on_completed",
        "_state",
        "_teardown",
        "_disposed",
    )

    def __init__(
        self,
        on_next: Optional[OnNext] = None,
        on_error: Optional[OnError] = None,
        on_completed: Optional[OnCompleted] = None,
    ) -> None:
        self._on_next = on_next
        self._on_error = on_error
        self._on_completed = on_completed
        self._state = SubscriptionState.PENDING
        self._teardown: Optional[Disposer] = None
        self._disposed = False

    @property
    def state(self) -> SubscriptionState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is SubscriptionState.PENDING

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def fire(self, *args: Any) -> None:
        if (
            self._state is SubscriptionState.PENDING
            and not self._disposed
            and self._on_next is not None
        ):
            self._on_next(*args)

    def fail(self, error: BaseException) -> None:
        if self._state is not SubscriptionState.PENDING:
            return
        self._state = SubscriptionState.FAILED
        try:
            if self._on_error is None:
                raise error
            self._on_error(error)
        finally:
            self._run_teardown()

    def complete(self) -> None:
        if self._state is not SubscriptionState.PENDING:
            return
        self._state = SubscriptionState.COMPLETE
        try:
            if self._on_completed is not None:
                self._on_completed()
        finally:
            self._run_teardown()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        try:
            self._run_teardown()
        finally:
            if self._state is SubscriptionState.PENDING:
                self._state = SubscriptionState.CANCELLED

    def _attach(self, teardown: Any) -> None:
        """Take ownership of the subscribe function's teardown."""
        disposer = as_disposer(teardown)
        if disposer is None:
            return
        if self._disposed or self._state is not SubscriptionState.PENDING:
            # Ended while the subscribe function was still running.
            disposer()
            return
        self._teardown = disposer

    def _abandon(self) -> None:
        """Mark a subscription whose subscribe function raised."""
        self._disposed = True
        if self._state is SubscriptionState.PENDING:
            self._state = SubscriptionState.CANCELLED

    def _run_teardown(self) -> None:
        teardown, self._teardown = self._teardown, None
        if teardown is not None:
            teardown()

    def __call__(self) -> None:
        self.dispose()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"Subscription({self._state.value})"
