"""
Shared pytest fixtures and configuration for rxpipe tests.
"""

from typing import Any, List, Tuple

import pytest

from rxpipe import Observable, Signal, Subscription


class Recorder:
    """
    Observer that logs every event it receives as a tuple.

    Single-argument emissions are stored as the bare value; multi-argument
    emissions are stored as a tuple of their arguments.
    """

    def __init__(self) -> None:
        self.events: List[Tuple[Any, ...]] = []

    def on_next(self, *args: Any) -> None:
        self.events.append(("next", args[0] if len(args) == 1 else args))

    def on_error(self, error: BaseException) -> None:
        self.events.append(("error", error))

    def on_completed(self) -> None:
        self.events.append(("complete",))

    def subscribe(self, observable: Observable) -> Subscription:
        return observable.subscribe(self.on_next, self.on_error, self.on_completed)

    @property
    def values(self) -> List[Any]:
        return [event[1] for event in self.events if event[0] == "next"]

    @property
    def errors(self) -> List[BaseException]:
        return [event[1] for event in self.events if event[0] == "error"]

    @property
    def completed(self) -> bool:
        return ("complete",) in self.events

    @property
    def terminal_count(self) -> int:
        return sum(1 for event in self.events if event[0] in ("error", "complete"))


class SubscriptionProbe:
    """
    Wrap a source to count how often it is subscribed and torn down.
    """

    def __init__(self, source: Observable) -> None:
        self.source = source
        self.subscribe_count = 0
        self.teardown_count = 0
        self.observable = Observable(self._subscribe)

    def _subscribe(self, fire, fail, complete):
        self.subscribe_count += 1
        subscription = self.source.subscribe(fire, fail, complete)

        def teardown():
            self.teardown_count += 1
            subscription.dispose()

        return teardown


class ManualSource:
    """
    Observable driven by hand from the test.

    Every live subscriber receives next()/error()/complete(). Teardown removes
    the subscriber, so a cancelled subscription stops being driven.
    """

    def __init__(self) -> None:
        self.observers: List[Tuple[Any, Any, Any]] = []
        self.subscribe_count = 0
        self.teardown_count = 0
        self.observable = Observable(self._subscribe)

    def _subscribe(self, fire, fail, complete):
        observer = (fire, fail, complete)
        self.subscribe_count += 1
        self.observers.append(observer)

        def teardown():
            self.teardown_count += 1
            if observer in self.observers:
                self.observers.remove(observer)

        return teardown

    @property
    def is_subscribed(self) -> bool:
        return bool(self.observers)

    def next(self, *args: Any) -> None:
        for fire, _, _ in list(self.observers):
            fire(*args)

    def error(self, error: BaseException) -> None:
        for _, fail, _ in list(self.observers):
            fail(error)

    def complete(self) -> None:
        for _, _, complete in list(self.observers):
            complete()


@pytest.fixture
def recorder():
    """Provide a fresh Recorder."""
    return Recorder()


@pytest.fixture
def recorder_factory():
    """Provide the Recorder class for tests that need more than one."""
    return Recorder


@pytest.fixture
def probe_factory():
    """Provide SubscriptionProbe for tests that count subscriptions."""
    return SubscriptionProbe


@pytest.fixture
def signal():
    """Provide a fresh Signal."""
    return Signal()


@pytest.fixture
def manual_source_factory():
    """Provide ManualSource for tests that drive sources by hand."""
    return ManualSource
