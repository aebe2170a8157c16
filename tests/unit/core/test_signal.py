"""Tests for Signal and Connection."""

import pytest

from rxpipe import Signal


@pytest.mark.unit
@pytest.mark.core
def test_fire_calls_connected_callbacks_in_order(signal):
    received = []
    signal.connect(lambda value: received.append(("a", value)))
    signal.connect(lambda value: received.append(("b", value)))

    signal.fire(1)

    assert received == [("a", 1), ("b", 1)]


@pytest.mark.unit
@pytest.mark.core
def test_disconnect_stops_delivery_and_is_idempotent(signal):
    received = []
    connection = signal.connect(received.append)

    connection.disconnect()
    connection.disconnect()
    signal.fire(1)

    assert received == []
    assert not connection.connected


@pytest.mark.unit
@pytest.mark.core
def test_callback_may_disconnect_another_while_firing(signal):
    """Disconnecting during fire takes effect for connections not yet called."""
    received = []
    holder = {}

    def first(value):
        received.append("first")
        holder["second"].disconnect()

    signal.connect(first)
    holder["second"] = signal.connect(lambda value: received.append("second"))

    signal.fire(1)

    assert received == ["first"]


@pytest.mark.unit
@pytest.mark.core
def test_disconnect_all():
    signal = Signal()
    signal.connect(lambda: None)
    signal.connect(lambda: None)

    signal.disconnect_all()

    assert len(signal) == 0


@pytest.mark.unit
@pytest.mark.core
def test_connect_requires_callable(signal):
    with pytest.raises(TypeError):
        signal.connect("nope")
