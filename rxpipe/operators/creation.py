"""
rxpipe Creation Operators
=========================

Ways to get an Observable in the first place: literal values, list-likes,
event sources and promises.
"""

from typing import Any

from ..core.disposables import DisposableBag
from ..core.observable import Observable
from ..core.promise import Promise, is_future, is_promise
from ..core.types import is_list_like
from ..errors import CannotConvertError


def _complete_immediately(fire, fail, complete):
    complete()


def _never(fire, fail, complete):
    return None


EMPTY: Observable = Observable(_complete_immediately)
NEVER: Observable = Observable(_never)


def of(*values: Any) -> Observable:
    """
    Emit each value in order, then complete, synchronously.

    http://reactivex.io/documentation/operators/just.html
    """

    def subscribe(fire, fail, complete):
        for value in values:
            fire(value)
        complete()

    return Observable(subscribe)


def from_(item: Any) -> Observable:
    """
    Convert a promise, future or list-like into an Observable.

    http://reactivex.io/documentation/operators/from.html

    Raises:
        CannotConvertError: For any other kind of value
    """
    if is_promise(item) or is_future(item):
        return from_promise(item)
    if is_list_like(item):
        return of(*item)
    raise CannotConvertError(item)


def from_signal(signal: Any) -> Observable:
    """
    Relay every firing of an event source as one emission.

    The stream never completes on its own. Completion is delivered when the
    subscription is torn down, after the connection has been released.

    Args:
        signal: Anything with ``connect(callback)`` returning a releasable connection
    """
    if not callable(getattr(signal, "connect", None)):
        raise TypeError(
            f"[from_signal] Expected an object with connect(), "
            f"got {type(signal).__name__!r}"
        )

    def subscribe(fire, fail, complete):
        bag = DisposableBag()
        bag.add(signal.connect(fire))
        bag.add_finalizer(complete)
        return bag

    return Observable(subscribe)


def from_promise(promise: Any) -> Observable:
    """
    Emit a promise's value and complete, or fail with its rejection.

    An already-fulfilled promise emits synchronously. Nothing is delivered once
    the subscription has been torn down, for either outcome.
    """
    if is_future(promise):
        promise = Promise.from_future(promise)
    if not is_promise(promise):
        raise TypeError(
            f"[from_promise] Expected a Promise or future, got {type(promise).__name__!r}"
        )

    def subscribe(fire, fail, complete):
        if promise.is_fulfilled():
            fire(promise.wait())
            complete()
            return None

        live = True

        def release():
            nonlocal live
            live = False

        def on_fulfilled(value):
            if live:
                fire(value)
                complete()

        def on_rejected(error):
            if live:
                fail(error)

        promise.then(on_fulfilled, on_rejected)
        return release

    return Observable(subscribe)
