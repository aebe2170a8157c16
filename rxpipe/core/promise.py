"""
rxpipe Promise - One-Shot Async Values
======================================

A minimal promise: a value that is eventually either fulfilled or rejected,
exactly once, with callbacks that fire at most once. ``from_promise`` converts
one into an Observable.

``Promise.from_future`` adapts ``concurrent.futures.Future`` and
``asyncio.Future`` so code that already has futures can use them directly.
"""

import asyncio
import concurrent.futures
import logging
import threading
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Tuple

from ..errors import PromiseNotSettledError
from .types import T

logger = logging.getLogger(__name__)


class PromiseState(Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


_Callbacks = Tuple[Optional[Callable[[Any], None]], Optional[Callable[[BaseException], None]]]


class Promise(Generic[T]):
    """
    An eventual value with fulfilled and rejected terminal states.

    Settling is once-only; later resolve()/reject() calls are ignored. Callbacks
    registered after settlement run synchronously inside then().

    Example:
        ```python
        promise = Promise()
        promise.then(print, lambda error: print("failed:", error))
        promise.resolve(42)   # prints 42
        promise.wait()        # 42
        ```
    """

    __slots__ = ("_state", "_value", "_error", "_callbacks", "_lock")

    def __init__(
        self,
        executor: Optional[
            Callable[[Callable[[Any], None], Callable[[BaseException], None]], None]
        ] = None,
    ) -> None:
        self._state = PromiseState.PENDING
        self._value: Any = None
        self._error: Optional[BaseException] = None
        self._callbacks: List[_Callbacks] = []
        self._lock = threading.RLock()
        if executor is not None:
            try:
                executor(self.resolve, self.reject)
            except Exception as error:
                self.reject(error)

    @classmethod
    def resolved(cls, value: Any = None) -> "Promise":
        promise = cls()
        promise.resolve(value)
        return promise

    @classmethod
    def rejected(cls, error: BaseException) -> "Promise":
        promise = cls()
        promise.reject(error)
        return promise

    @classmethod
    def from_future(cls, future: Any) -> "Promise":
        """
        Adapt a concurrent.futures.Future or asyncio.Future.

        A cancelled future rejects the promise with the cancellation error.
        """
        if not is_future(future):
            raise TypeError(f"Expected a future, got {type(future).__name__!r}")
        promise = cls()

        def settle(done: Any) -> None:
            if done.cancelled():
                promise.reject(
                    asyncio.CancelledError()
                    if asyncio.isfuture(done)
                    else concurrent.futures.CancelledError()
                )
                return
            error = done.exception()
            if error is not None:
                promise.reject(error)
            else:
                promise.resolve(done.result())

        future.add_done_callback(settle)
        return promise

    @property
    def state(self) -> PromiseState:
        return self._state

    def is_pending(self) -> bool:
        return self._state is PromiseState.PENDING

    def is_fulfilled(self) -> bool:
        return self._state is PromiseState.FULFILLED

    def is_rejected(self) -> bool:
        return self._state is PromiseState.REJECTED

    def resolve(self, value: Any = None) -> None:
        self._settle(PromiseState.FULFILLED, value, None)

    def reject(self, error: BaseException) -> None:
        self._settle(PromiseState.REJECTED, None, error)

    def wait(self) -> Any:
        """
        Return the fulfilled value, or raise the rejection error.

        Only valid once settled.

        Raises:
            PromiseNotSettledError: If the promise is still pending
        """
        if self._state is PromiseState.FULFILLED:
            return self._value
        if self._state is PromiseState.REJECTED:
            raise self._error
        raise PromiseNotSettledError("Promise.wait() called on a pending promise")

    def then(
        self,
        on_fulfilled: Optional[Callable[[Any], None]] = None,
        on_rejected: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        with self._lock:
            if self._state is PromiseState.PENDING:
                self._callbacks.append((on_fulfilled, on_rejected))
                return
        self._dispatch(on_fulfilled, on_rejected)

    def _settle(
        self, state: PromiseState, value: Any, error: Optional[BaseException]
    ) -> None:
        with self._lock:
            if self._state is not PromiseState.PENDING:
                return
            self._state = state
            self._value = value
            self._error = error
            callbacks, self._callbacks = self._callbacks, []
        # Every callback hears the outcome even if an earlier one raises.
        first_error: Optional[BaseException] = None
        for on_fulfilled, on_rejected in callbacks:
            try:
                self._dispatch(on_fulfilled, on_rejected)
            except Exception as callback_error:
                if first_error is None:
                    first_error = callback_error
                else:
                    logger.debug("Suppressed further callback error: %r", callback_error)
        if first_error is not None:
            raise first_error

    def _dispatch(
        self,
        on_fulfilled: Optional[Callable[[Any], None]],
        on_rejected: Optional[Callable[[BaseException], None]],
    ) -> None:
        if self._state is PromiseState.FULFILLED:
            if on_fulfilled is not None:
                on_fulfilled(self._value)
        elif on_rejected is not None:
            on_rejected(self._error)

    def __repr__(self) -> str:
        return f"Promise({self._state.value})"


def is_promise(obj: Any) -> bool:
    return isinstance(obj, Promise)


def is_future(obj: Any) -> bool:
    return isinstance(obj, concurrent.futures.Future) or asyncio.isfuture(obj)
