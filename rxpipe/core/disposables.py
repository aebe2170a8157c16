"""
rxpipe Disposables - Resource Aggregation
=========================================

This module provides DisposableBag, the cleanup aggregator every operator that
holds upstream or inner subscriptions uses to release them.

A bag accepts heterogeneous cleanup tasks:
- plain callables
- anything with a ``dispose()`` method (Subscription, another DisposableBag)
- event connections with a ``disconnect()`` method
- closeable resources with a ``close()`` method

Teardown happens in two phases. Tasks are released first, newest first, the
way ``contextlib.ExitStack`` unwinds. Finalizers run afterwards; they are the
named place for "do this once everything is released" hooks, such as
completing a stream when its subscription is cancelled.
"""

import logging
from typing import Any, Callable, Dict, Hashable, List, Optional

from .types import Disposer

logger = logging.getLogger(__name__)


def as_disposer(task: Any) -> Optional[Disposer]:
    """
    Normalize a cleanup task into a zero-argument callable.

    Args:
        task: None, a callable, or an object exposing dispose(), disconnect()
              or close()

    Returns:
        A callable that releases the task, or None when there is nothing to release

    Raises:
        TypeError: If the task has no recognizable release method
    """
    if task is None:
        return None
    for method_name in ("dispose", "disconnect", "close"):
        method = getattr(task, method_name, None)
        if callable(method):
            return method
    if callable(task):
        return task
    raise TypeError(
        f"Cannot register {task!r} of type {type(task).__name__!r} as a cleanup task"
    )


class DisposableBag:
    """
    Collects cleanup tasks and releases all of them exactly once.

    ``dispose()`` is idempotent and safe to call re-entrantly from inside a task:
    every task is removed from the bag before it runs, so a nested call only
    sees what is left. Anything added after disposal is released immediately.

    Example:
        ```python
        bag = DisposableBag()
        bag.add(signal.connect(on_event))
        bag.add(observable.subscribe(print))
        bag.add_finalizer(lambda: print("done"))

        bag.dispose()   # disconnects, unsubscribes, then prints "done"
        bag.dispose()   # no-op
        ```
    """

    __slots__ = ("_tasks", "_slots", "_finalizers", "_disposed")

    def __init__(self) -> None:
        self._tasks: List[Disposer] = []
        self._slots: Dict[Hashable, Disposer] = {}
        self._finalizers: List[Callable[[], None]] = []
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def add(self, task: Any) -> Any:
        """Register a cleanup task and return it unchanged."""
        disposer = as_disposer(task)
        if disposer is None:
            return task
        if self._disposed:
            logger.debug("Task %r added to a disposed bag, releasing now", task)
            disposer()
            return task
        self._tasks.append(disposer)
        return task

    def replace(self, key: Hashable, task: Any) -> Any:
        """
        Store a task under a named slot, releasing the previous occupant first.

        Passing None just empties the slot.
        """
        previous = self._slots.pop(key, None)
        if previous is not None:
            previous()
        disposer = as_disposer(task)
        if disposer is None:
            return task
        if self._disposed:
            logger.debug("Task %r placed in a disposed bag, releasing now", task)
            disposer()
            return task
        self._slots[key] = disposer
        return task

    def clear(self, key: Hashable) -> None:
        """Release whatever occupies the named slot."""
        self.replace(key, None)

    def add_finalizer(self, hook: Callable[[], None]) -> None:
        """Register a hook that runs after every task has been released."""
        if not callable(hook):
            raise TypeError(f"Finalizer must be callable, got {type(hook).__name__!r}")
        if self._disposed:
            hook()
            return
        self._finalizers.append(hook)

    def dispose(self) -> None:
        """
        Release slots, then tasks newest first, then finalizers.

        A task that raises does not stop the rest from being released. The
        first error is re-raised once everything has run.
        """
        self._disposed = True
        first_error: Optional[BaseException] = None
        while self._slots or self._tasks or self._finalizers:
            if self._slots:
                _, disposer = self._slots.popitem()
            elif self._tasks:
                disposer = self._tasks.pop()
            else:
                disposer = self._finalizers.pop(0)
            try:
                disposer()
            except Exception as error:
                if first_error is None:
                    first_error = error
                else:
                    logger.debug("Suppressed further cleanup error: %r", error)
        if first_error is not None:
            raise first_error

    def __call__(self) -> None:
        self.dispose()

    def __len__(self) -> int:
        return len(self._tasks) + len(self._slots) + len(self._finalizers)

    def __enter__(self) -> "DisposableBag":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else f"{len(self)} pending"
        return f"DisposableBag({state})"
