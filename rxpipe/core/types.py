"""
rxpipe Core Types
=================

Callback aliases shared by the core primitives and the operator layer, the
UNSET sentinel, and the list-like check used by from_() and unpacked().
"""

from collections.abc import Sequence
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

OnNext = Callable[..., None]
OnError = Callable[[BaseException], None]
OnCompleted = Callable[[], None]
Disposer = Callable[[], None]

# Whatever a subscribe function hands back: nothing, a callable, or a handle
# DisposableBag knows how to release.
Teardown = Optional[Any]


class _Unset:
    """Sentinel for 'no value emitted yet'."""

    __slots__ = ()

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET = _Unset()


def is_list_like(value: Any) -> bool:
    """
    Check whether a value can be spread as positional arguments.

    Strings and byte strings are sequences but are treated as scalar values.

    Example:
        ```python
        is_list_like([1, 2])    # True
        is_list_like((1,))      # True
        is_list_like("ab")      # False
        is_list_like({"a": 1})  # False
        ```
    """
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )
