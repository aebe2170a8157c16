"""
rxpipe Flattening Operators - Higher-Order Observables
======================================================

Operators over an outer Observable whose values are themselves Observables.

- merge_all: every inner source is subscribed as it arrives and they run
  side by side.
- switch_all: only the latest inner source is live. A new one cancels its
  predecessor before being subscribed.

Both fail fast. The first error, from the outer source or a live inner
source, is relayed downstream and tears down everything the subscription
holds.
"""

from typing import Any, Callable

from ..core.disposables import DisposableBag
from ..core.observable import Observable, ensure_observable, is_observable
from ..errors import NotAnObservableError
from .pipe import Transformer, pipe
from .state import MergeState, SwitchState
from .transform import map

_CURRENT_INNER = "current_inner"


def merge_all() -> Transformer:
    """
    Flatten by subscribing to every inner Observable concurrently.

    Completes once the outer source has completed and every inner source has
    completed.
    """

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "merge_all")

        def subscribe(fire, fail, complete):
            bag = DisposableBag()
            state = MergeState()

            def on_failed(error):
                try:
                    fail(error)
                finally:
                    bag.dispose()

            def finish():
                try:
                    complete()
                finally:
                    bag.dispose()

            def on_inner_completed():
                if state.close_inner():
                    finish()

            def on_inner(observable):
                if not is_observable(observable):
                    on_failed(NotAnObservableError(observable, "merge_all"))
                    return
                state.open_inner()
                bag.add(observable.subscribe(fire, on_failed, on_inner_completed))

            def on_outer_completed():
                if state.close_outer():
                    finish()

            try:
                bag.add(source.subscribe(on_inner, on_failed, on_outer_completed))
            except BaseException:
                bag.dispose()
                raise
            return bag

        return Observable(subscribe)

    return operator


def switch_all() -> Transformer:
    """
    Flatten by following only the most recent inner Observable.

    https://rxjs.dev/api/operators/switchAll

    Completes once the outer source and the current inner source have both
    completed. Events from a superseded inner source are ignored.
    """

    def operator(source: Observable) -> Observable:
        ensure_observable(source, "switch_all")

        def subscribe(fire, fail, complete):
            bag = DisposableBag()
            state = SwitchState()

            def on_failed(error):
                try:
                    fail(error)
                finally:
                    bag.dispose()

            def finish():
                try:
                    complete()
                finally:
                    bag.dispose()

            def on_inner(observable):
                if not is_observable(observable):
                    on_failed(NotAnObservableError(observable, "switch_all"))
                    return

                inner_id = state.next_inner()
                bag.clear(_CURRENT_INNER)

                def on_inner_next(*args):
                    if state.is_current(inner_id):
                        fire(*args)

                def on_inner_failed(error):
                    if state.is_current(inner_id):
                        on_failed(error)

                def on_inner_completed():
                    if state.complete_inner(inner_id):
                        finish()

                subscription = observable.subscribe(
                    on_inner_next, on_inner_failed, on_inner_completed
                )
                if state.is_current(inner_id):
                    bag.replace(_CURRENT_INNER, subscription)
                else:
                    # Superseded while subscribing (re-entrant outer emission).
                    subscription.dispose()

            def on_outer_completed():
                if state.complete_outer():
                    finish()

            try:
                bag.add(source.subscribe(on_inner, on_failed, on_outer_completed))
            except BaseException:
                bag.dispose()
                raise
            return bag

        return Observable(subscribe)

    return operator


def flat_map(project: Callable[..., Any]) -> Transformer:
    """map(project) followed by merge_all(). Roughly promise.then()."""
    return pipe([map(project), merge_all()])


def switch_map(project: Callable[..., Any]) -> Transformer:
    """map(project) followed by switch_all()."""
    return pipe([map(project), switch_all()])
