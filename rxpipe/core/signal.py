"""
rxpipe Signal - A Plain Event Source
====================================

Signal is the smallest event emitter ``from_signal`` can consume: callbacks
connect, every ``fire()`` calls them in connection order, and each Connection
can be disconnected on its own. Anything with a compatible ``connect()`` works
with ``from_signal``; Signal exists so host code has one to hand.
"""

from typing import Any, Callable, List, Optional


class Connection:
    """Handle for one connected callback. ``disconnect()`` is idempotent."""

    __slots__ = ("_signal", "_callback")

    def __init__(self, signal: "Signal", callback: Callable[..., None]) -> None:
        self._signal: Optional["Signal"] = signal
        self._callback = callback

    @property
    def connected(self) -> bool:
        return self._signal is not None

    def disconnect(self) -> None:
        signal, self._signal = self._signal, None
        if signal is not None:
            signal._remove(self)

    def _invoke(self, *args: Any) -> None:
        if self._signal is not None:
            self._callback(*args)


class Signal:
    """
    Synchronous multi-listener event.

    Example:
        ```python
        clicked = Signal()
        connection = clicked.connect(lambda x, y: print("clicked at", x, y))
        clicked.fire(3, 4)         # clicked at 3 4
        connection.disconnect()
        clicked.fire(5, 6)         # nothing
        ```
    """

    __slots__ = ("_connections",)

    def __init__(self) -> None:
        self._connections: List[Connection] = []

    def connect(self, callback: Callable[..., None]) -> Connection:
        if not callable(callback):
            raise TypeError(f"Signal callback must be callable, got {type(callback).__name__!r}")
        connection = Connection(self, callback)
        self._connections.append(connection)
        return connection

    def fire(self, *args: Any) -> None:
        # Snapshot so callbacks may connect or disconnect while firing.
        for connection in list(self._connections):
            connection._invoke(*args)

    def disconnect_all(self) -> None:
        for connection in list(self._connections):
            connection.disconnect()

    def _remove(self, connection: Connection) -> None:
        try:
            self._connections.remove(connection)
        except ValueError:
            pass

    def __len__(self) -> int:
        return len(self._connections)

    def __repr__(self) -> str:
        return f"Signal({len(self._connections)} connections)"
