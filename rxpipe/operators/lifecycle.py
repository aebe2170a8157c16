"""
rxpipe Lifecycle Operators
==========================

Operators about when a subscription starts and stops, and what it owns while
it is live: take_until cuts a stream short, using ties a resource to a
subscription, and packed/unpacked carry several values through a single
emission.
"""

import logging
from typing import Any, Callable

from ..core.disposables import DisposableBag
from ..core.observable import Observable, ensure_observable, is_observable
from ..core.types import is_list_like
from ..errors import NotAnObservableError
from .pipe import Transformer

logger = logging.getLogger(__name__)


def take_until(notifier: Observable) -> Transformer:
    """
    Relay the source until ``notifier`` emits, errors or completes.

    The notifier is subscribed first. Its first event is only a trigger: the
    payload is discarded, both subscriptions are released, and the stream
    completes. If the notifier triggers while it is being subscribed, the
    source is never subscribed at all.
    """
    ensure_observable(notifier, "take_until")

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "take_until")

        def subscribe(fire, fail, complete):
            bag = DisposableBag()
            cancelled = False

            def cancel(*_):
                nonlocal cancelled
                if cancelled:
                    return
                cancelled = True
                try:
                    bag.dispose()
                finally:
                    complete()

            bag.add(notifier.subscribe(cancel, cancel, cancel))
            if cancelled:
                return None

            try:
                bag.add(source.subscribe(fire, fail, complete))
            except BaseException:
                bag.dispose()
                raise
            return bag

        return Observable(subscribe)

    return operator


def packed(*values: Any) -> Observable:
    """Emit ``values`` as one tuple, then complete."""

    def subscribe(fire, fail, complete):
        fire(values)
        complete()

    return Observable(subscribe)


def unpacked(source: Observable) -> Observable:
    """
    Spread each list-like emission into positional arguments.

    A value that is not list-like is logged and dropped; the stream carries on.
    """
    ensure_observable(source, "unpacked")

    def subscribe(fire, fail, complete):
        def on_next(value):
            if is_list_like(value):
                fire(*value)
            else:
                logger.warning(
                    "unpacked expected a list-like value, got type %r",
                    type(value).__name__,
                )

        return source.subscribe(on_next, fail, complete)

    return Observable(subscribe)


def using(
    resource_factory: Callable[[], Any],
    observable_factory: Callable[[Any], Observable],
) -> Observable:
    """
    Tie a resource's lifetime to a subscription.

    http://reactivex.io/documentation/operators/using.html

    The resource is built when subscribed, handed to ``observable_factory``,
    and released when the subscription ends, whether by completion, error or
    cancellation. The inner subscription is released before the resource.

    Example:
        ```python
        lines = using(
            lambda: open("events.log"),
            lambda handle: of(*handle.readlines()),
        )
        ```
    """
    if not callable(resource_factory) or not callable(observable_factory):
        raise TypeError("[using] resource_factory and observable_factory must be callable")

    def subscribe(fire, fail, complete):
        bag = DisposableBag()
        resource = resource_factory()
        bag.add(resource)

        try:
            observable = observable_factory(resource)
            if not is_observable(observable):
                raise NotAnObservableError(observable, "using")
            bag.add(observable.subscribe(fire, fail, complete))
        except BaseException:
            bag.dispose()
            raise
        return bag

    return Observable(subscribe)
