"""Tests for DisposableBag."""

import logging

import pytest

from rxpipe import DisposableBag, Signal
from rxpipe.core.disposables import as_disposer


class Closeable:
    def __init__(self):
        self.closed = 0

    def close(self):
        self.closed += 1


@pytest.mark.unit
@pytest.mark.core
def test_dispose_releases_every_kind_of_task():
    """Callables, bags, connections and closeables are all released."""
    # Arrange
    calls = []
    signal = Signal()
    nested = DisposableBag()
    nested.add(lambda: calls.append("nested"))
    resource = Closeable()

    bag = DisposableBag()
    bag.add(lambda: calls.append("callable"))
    bag.add(nested)
    connection = bag.add(signal.connect(lambda: None))
    bag.add(resource)

    # Act
    bag.dispose()

    # Assert
    assert sorted(calls) == ["callable", "nested"]
    assert not connection.connected
    assert resource.closed == 1
    assert len(signal) == 0


@pytest.mark.unit
@pytest.mark.core
def test_tasks_release_newest_first():
    """Tasks unwind in reverse registration order."""
    order = []
    bag = DisposableBag()
    bag.add(lambda: order.append(1))
    bag.add(lambda: order.append(2))
    bag.add(lambda: order.append(3))

    bag.dispose()

    assert order == [3, 2, 1]


@pytest.mark.unit
@pytest.mark.core
def test_dispose_is_idempotent():
    """Each task runs once no matter how often dispose is called."""
    calls = []
    bag = DisposableBag()
    bag.add(lambda: calls.append(1))

    bag.dispose()
    bag.dispose()
    bag()

    assert calls == [1]
    assert bag.is_disposed


@pytest.mark.unit
@pytest.mark.core
def test_finalizers_run_after_tasks():
    """Finalizers are the second teardown phase."""
    order = []
    bag = DisposableBag()
    bag.add_finalizer(lambda: order.append("finalizer"))
    bag.add(lambda: order.append("task"))

    bag.dispose()

    assert order == ["task", "finalizer"]


@pytest.mark.unit
@pytest.mark.core
def test_add_after_dispose_releases_immediately(caplog):
    """A task added to a disposed bag is released straight away."""
    calls = []
    bag = DisposableBag()
    bag.dispose()

    with caplog.at_level(logging.DEBUG, logger="rxpipe.core.disposables"):
        bag.add(lambda: calls.append(1))

    assert calls == [1]
    assert "disposed bag" in caplog.text


@pytest.mark.unit
@pytest.mark.core
def test_reentrant_dispose_runs_each_task_once():
    """A task that disposes its own bag does not cause double release."""
    calls = []
    bag = DisposableBag()
    bag.add(lambda: calls.append("first"))
    bag.add(lambda: (calls.append("second"), bag.dispose()))

    bag.dispose()

    assert calls == ["second", "first"]


@pytest.mark.unit
@pytest.mark.core
def test_replace_releases_previous_slot_occupant():
    """Storing into a named slot releases what was there."""
    calls = []
    bag = DisposableBag()
    bag.replace("current", lambda: calls.append("a"))

    bag.replace("current", lambda: calls.append("b"))
    assert calls == ["a"]

    bag.clear("current")
    assert calls == ["a", "b"]

    bag.replace("current", lambda: calls.append("c"))
    bag.dispose()
    assert calls == ["a", "b", "c"]


@pytest.mark.unit
@pytest.mark.core
def test_none_is_ignored():
    """None is accepted and simply not registered."""
    bag = DisposableBag()

    assert bag.add(None) is None
    assert len(bag) == 0


@pytest.mark.unit
@pytest.mark.core
def test_unreleasable_task_is_rejected():
    """Values with no release method are a TypeError."""
    with pytest.raises(TypeError):
        DisposableBag().add(42)

    with pytest.raises(TypeError):
        as_disposer("nope")


@pytest.mark.unit
@pytest.mark.core
def test_context_manager_disposes_on_exit():
    calls = []
    with DisposableBag() as bag:
        bag.add(lambda: calls.append(1))

    assert calls == [1]


@pytest.mark.unit
@pytest.mark.core
def test_raising_task_does_not_block_the_rest():
    """Every task and finalizer runs; the first error is raised afterwards."""
    # Arrange
    finalized = []
    signal = Signal()
    bag = DisposableBag()
    bag.add(signal.connect(lambda: None))

    def broken():
        raise ValueError("cleanup failed")

    bag.add(broken)
    bag.add_finalizer(lambda: finalized.append(True))

    # Act
    with pytest.raises(ValueError, match="cleanup failed"):
        bag.dispose()

    # Assert
    assert len(signal) == 0
    assert finalized == [True]
    assert bag.is_disposed
    assert len(bag) == 0
