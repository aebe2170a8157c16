"""
rxpipe Combination Operators
============================

Operators that subscribe to several independent sources at once. Relative
order across sources is whatever order their emissions happen in; within one
source order is preserved.

Both operators fail fast: the first error from any source is relayed and every
source subscription is released.
"""

from collections.abc import Mapping
from typing import Any, Hashable, Iterable, List, Tuple, Union

from ..core.disposables import DisposableBag
from ..core.observable import Observable, ensure_observable
from .state import CombineLatestState, MergeState


def merge(observables: Union[Iterable[Observable], Mapping]) -> Observable:
    """
    Relay every value from every source as it arrives.

    Completes once all sources have completed. An empty collection completes
    immediately.

    Example:
        ```python
        clicks = merge([from_signal(left_click), from_signal(right_click)])
        ```
    """
    sources: List[Observable] = list(
        observables.values() if isinstance(observables, Mapping) else observables
    )
    for source in sources:
        ensure_observable(source, "merge")

    def subscribe(fire, fail, complete):
        if not sources:
            complete()
            return None

        bag = DisposableBag()
        state = MergeState(outer_complete=True, pending_count=len(sources))

        def on_failed(error):
            try:
                fail(error)
            finally:
                bag.dispose()

        def on_completed():
            if state.close_inner():
                try:
                    complete()
                finally:
                    bag.dispose()

        try:
            for source in sources:
                bag.add(source.subscribe(fire, on_failed, on_completed))
                if bag.is_disposed:
                    break
        except BaseException:
            bag.dispose()
            raise
        return bag

    return Observable(subscribe)


def combine_latest(
    observables: Union[Mapping, Iterable[Observable]],
) -> Observable:
    """
    Emit a tuple of the latest value from every source.

    Nothing is emitted until every source has produced a value; after that
    every new value from any source emits the full tuple again. Tuple order is
    the mapping's key order, or the sequence's index order. A source that
    emits several arguments at once contributes them as one tuple.

    Completes once every source has completed. With no sources it completes
    immediately without emitting.

    Example:
        ```python
        combine_latest({"x": of(1), "y": of(2)}).subscribe(print)   # (1, 2)
        ```
    """
    if isinstance(observables, Mapping):
        items: List[Tuple[Hashable, Observable]] = list(observables.items())
    else:
        items = list(enumerate(observables))
    for _, source in items:
        ensure_observable(source, "combine_latest")

    def subscribe(fire, fail, complete):
        if not items:
            complete()
            return None

        bag = DisposableBag()
        state = CombineLatestState.for_keys(key for key, _ in items)

        def on_failed(error):
            try:
                fail(error)
            finally:
                bag.dispose()

        def on_completed():
            if state.complete_source():
                try:
                    complete()
                finally:
                    bag.dispose()

        def make_on_next(key: Hashable):
            def on_next(*args: Any):
                value = args[0] if len(args) == 1 else args
                if state.update(key, value):
                    fire(state.snapshot())

            return on_next

        try:
            for key, source in items:
                bag.add(source.subscribe(make_on_next(key), on_failed, on_completed))
                if bag.is_disposed:
                    break
        except BaseException:
            bag.dispose()
            raise
        return bag

    return Observable(subscribe)
