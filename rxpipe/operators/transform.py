"""
rxpipe Transform Operators
==========================

One upstream in, one stream out. Each relays events in order, passes error and
completion through unchanged, and has no state of its own.

Exceptions raised by user callbacks (projections, predicates, taps) are not
caught. They propagate to whatever delivered the value.
"""

from typing import Any, Callable, Iterable

from ..core.observable import Observable, ensure_observable
from .pipe import Transformer


def _require_callable(value: Any, operator: str, role: str) -> None:
    if not callable(value):
        raise TypeError(f"[{operator}] Bad {role} callback of type {type(value).__name__!r}")


def tap(firing_callback: Callable[..., Any]) -> Transformer:
    """Call ``firing_callback`` with every emission before relaying it."""
    _require_callable(firing_callback, "tap", "firing")

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "tap")

        def subscribe(fire, fail, complete):
            def on_next(*args):
                firing_callback(*args)
                fire(*args)

            return source.subscribe(on_next, fail, complete)

        return Observable(subscribe)

    return operator


def start(callback: Callable[[], Any]) -> Transformer:
    """
    Emit ``callback()`` before anything from the source.

    http://reactivex.io/documentation/operators/start.html
    """
    _require_callable(callback, "start", "start")

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "start")

        def subscribe(fire, fail, complete):
            fire(callback())
            return source.subscribe(fire, fail, complete)

        return Observable(subscribe)

    return operator


def start_from(callback: Callable[[], Iterable[Any]]) -> Transformer:
    """Like start, but ``callback()`` returns a list of values to emit first."""
    _require_callable(callback, "start_from", "start")

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "start_from")

        def subscribe(fire, fail, complete):
            for value in callback():
                fire(value)
            return source.subscribe(fire, fail, complete)

        return Observable(subscribe)

    return operator


def start_with(values: Iterable[Any]) -> Transformer:
    """Emit the given literal values before anything from the source."""
    if isinstance(values, (str, bytes)) or not hasattr(values, "__iter__"):
        raise TypeError(
            f"[start_with] Expected a list of values, got {type(values).__name__!r}"
        )
    prefix = list(values)

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "start_with")

        def subscribe(fire, fail, complete):
            for value in prefix:
                fire(value)
            return source.subscribe(fire, fail, complete)

        return Observable(subscribe)

    return operator


def where(predicate: Callable[..., bool]) -> Transformer:
    """
    Relay only emissions for which ``predicate`` holds.

    http://reactivex.io/documentation/operators/filter.html
    """
    _require_callable(predicate, "where", "predicate")

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "where")

        def subscribe(fire, fail, complete):
            def on_next(*args):
                if predicate(*args):
                    fire(*args)

            return source.subscribe(on_next, fail, complete)

        return Observable(subscribe)

    return operator


def map_to(*values: Any) -> Transformer:
    """
    Replace every emission with the given arguments.

    https://rxjs.dev/api/operators/mapTo
    """

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "map_to")

        def subscribe(fire, fail, complete):
            def on_next(*_):
                fire(*values)

            return source.subscribe(on_next, fail, complete)

        return Observable(subscribe)

    return operator


def map(project: Callable[..., Any]) -> Transformer:
    """
    Emit ``project(*args)`` for every emission.

    http://reactivex.io/documentation/operators/map.html
    """
    _require_callable(project, "map", "project")

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "map")

        def subscribe(fire, fail, complete):
            def on_next(*args):
                fire(project(*args))

            return source.subscribe(on_next, fail, complete)

        return Observable(subscribe)

    return operator
