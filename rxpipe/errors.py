"""
rxpipe Errors
=============

Contract errors raised eagerly at call or composition time. Stream errors are
whatever exception travels through a subscription's error terminal; the
classes here are only used for failures rxpipe detects itself.
"""

from typing import Any


class RxError(Exception):
    """Base class for errors raised by rxpipe."""

    pass


class NotAnObservableError(RxError, TypeError):
    """A value that must be an Observable is not one."""

    def __init__(self, value: Any, context: str = "") -> None:
        self.value = value
        prefix = f"[{context}] " if context else ""
        super().__init__(
            f"{prefix}Expected an Observable, got {value!r} "
            f"of type {type(value).__name__!r}"
        )


class PipeCompositionError(RxError, TypeError):
    """A transformer in a pipe produced something that is not an Observable."""

    def __init__(self, index: int, produced: Any) -> None:
        self.index = index
        self.produced = produced
        self.produced_type = type(produced)
        super().__init__(
            f"[pipe] Failed to transform step {index} in pipe, made {produced!r} "
            f"({self.produced_type.__name__})"
        )


class CannotConvertError(RxError, TypeError):
    """from_() was handed a value it has no conversion for."""

    def __init__(self, item: Any) -> None:
        self.item = item
        super().__init__(
            f"[from_] Cannot convert {item!r} of type {type(item).__name__!r} "
            f"to an Observable"
        )


class PromiseNotSettledError(RxError, RuntimeError):
    """Promise.wait() was called before the promise settled."""

    pass
