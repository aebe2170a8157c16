"""
rxpipe Operator State - Per-Subscription Bookkeeping
====================================================

Every subscription to a merging, switching or combining operator gets one of
these records. Keeping the counters and flags in named fields, rather than
loose closure variables, lets the completion rules be read and tested on their
own.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, Tuple

from ..core.types import UNSET


@dataclass
class MergeState:
    """
    Completion bookkeeping for merge_all and merge.

    Done once the outer source has completed and no inner source is open.
    ``merge`` has no outer stream and starts with ``outer_complete=True``.
    """

    outer_complete: bool = False
    pending_count: int = 0

    @property
    def is_done(self) -> bool:
        return self.outer_complete and self.pending_count == 0

    def open_inner(self) -> None:
        self.pending_count += 1

    def close_inner(self) -> bool:
        self.pending_count -= 1
        return self.is_done

    def close_outer(self) -> bool:
        self.outer_complete = True
        return self.is_done


@dataclass
class SwitchState:
    """
    Bookkeeping for switch_all.

    Each inner source gets a fresh id when it arrives, and only callbacks
    tagged with ``current_inner_id`` count. A superseded inner that errors
    or completes late is ignored.
    """

    outer_complete: bool = False
    inner_complete: bool = True
    current_inner_id: int = 0

    @property
    def is_done(self) -> bool:
        return self.outer_complete and self.inner_complete

    def next_inner(self) -> int:
        self.current_inner_id += 1
        self.inner_complete = False
        return self.current_inner_id

    def is_current(self, inner_id: int) -> bool:
        return inner_id == self.current_inner_id

    def complete_inner(self, inner_id: int) -> bool:
        if not self.is_current(inner_id):
            return False
        self.inner_complete = True
        return self.is_done

    def complete_outer(self) -> bool:
        self.outer_complete = True
        return self.is_done


@dataclass
class CombineLatestState:
    """Latest-value table and completion counter for combine_latest."""

    latest: Dict[Hashable, Any] = field(default_factory=dict)
    pending_count: int = 0

    @classmethod
    def for_keys(cls, keys: Iterable[Hashable]) -> "CombineLatestState":
        latest = {key: UNSET for key in keys}
        return cls(latest=latest, pending_count=len(latest))

    @property
    def is_ready(self) -> bool:
        return all(value is not UNSET for value in self.latest.values())

    def update(self, key: Hashable, value: Any) -> bool:
        """Record a value and report whether every key has one."""
        self.latest[key] = value
        return self.is_ready

    def snapshot(self) -> Tuple[Any, ...]:
        return tuple(self.latest.values())

    def complete_source(self) -> bool:
        self.pending_count -= 1
        return self.pending_count == 0
