"""
rxpipe Observable - The Subscribable Primitive
==============================================

An Observable is a stateless description of a sequence of values over time. It
wraps a subscribe function of shape ``(fire, fail, complete) -> teardown``;
every ``subscribe()`` call runs that function afresh, so independent
subscriptions never share state.

The subscribe function may return:
- None, when there is nothing to release
- a callable
- a Subscription or DisposableBag
- any object with dispose(), disconnect() or close()
"""

from typing import Any, Callable, Generic, Optional

from ..errors import NotAnObservableError
from .subscription import Subscription
from .types import OnCompleted, OnError, OnNext, T, Teardown

SubscribeFunction = Callable[[OnNext, OnError, OnCompleted], Teardown]


class Observable(Generic[T]):
    """
    A lazily evaluated push-based stream.

    Example:
        ```python
        def count_to_three(fire, fail, complete):
            for i in (1, 2, 3):
                fire(i)
            complete()

        numbers = Observable(count_to_three)
        numbers.subscribe(print, on_completed=lambda: print("done"))
        # 1
        # 2
        # 3
        # done
        ```
    """

    __slots__ = ("_on_subscribe",)

    def __init__(self, on_subscribe: SubscribeFunction) -> None:
        if not callable(on_subscribe):
            raise TypeError(
                f"Observable needs a callable subscribe function, "
                f"got {type(on_subscribe).__name__!r}"
            )
        self._on_subscribe = on_subscribe

    def subscribe(
        self,
        on_next: Optional[OnNext] = None,
        on_error: Optional[OnError] = None,
        on_completed: Optional[OnCompleted] = None,
    ) -> Subscription:
        """
        Start a new, independent subscription.

        Args:
            on_next: Called with the positional arguments of every emission
            on_error: Called once with the stream error
            on_completed: Called once when the stream completes

        Returns:
            The Subscription, which is also the disposer for this subscription
        """
        subscription = Subscription(on_next, on_error, on_completed)
        try:
            teardown = self._on_subscribe(
                subscription.fire, subscription.fail, subscription.complete
            )
        except BaseException:
            subscription._abandon()
            raise
        subscription._attach(teardown)
        return subscription

    def pipe(self, *transformers: Callable[["Observable"], "Observable"]) -> "Observable":
        """Apply unary operators left to right. Same checks as ``rxpipe.pipe``."""
        from ..operators.pipe import pipe

        return pipe(transformers)(self)

    def __repr__(self) -> str:
        name = getattr(self._on_subscribe, "__qualname__", None) or repr(
            self._on_subscribe
        )
        return f"Observable({name})"


def is_observable(obj: Any) -> bool:
    """
    Check if an object is an Observable instance.

    Example:
        ```python
        is_observable(of(1))   # True
        is_observable(1)       # False
        ```
    """
    return isinstance(obj, Observable)


def ensure_observable(obj: Any, context: str = "") -> Observable:
    """Return obj unchanged, raising NotAnObservableError if it is not an Observable."""
    if not isinstance(obj, Observable):
        raise NotAnObservableError(obj, context)
    return obj
