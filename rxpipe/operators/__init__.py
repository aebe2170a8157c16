"""
rxpipe Operators
================

The operator layer. Import it as a namespace:

    from rxpipe import operators as rx

    rx.pipe([
        rx.where(lambda x: x > 0),
        rx.map(lambda x: x * 2),
    ])(rx.of(-1, 1, 2)).subscribe(print)

``map`` intentionally shadows the builtin inside this namespace.
"""

from .combine import combine_latest, merge
from .creation import EMPTY, NEVER, from_, from_promise, from_signal, of
from .flatten import flat_map, merge_all, switch_all, switch_map
from .lifecycle import packed, take_until, unpacked, using
from .pipe import Transformer, pipe
from .transform import map, map_to, start, start_from, start_with, tap, where

__all__ = [
    # Composition
    "pipe",
    "Transformer",
    # Creation
    "EMPTY",
    "NEVER",
    "of",
    "from_",
    "from_signal",
    "from_promise",
    # Transform
    "tap",
    "map",
    "map_to",
    "where",
    "start",
    "start_from",
    "start_with",
    # Flattening
    "merge_all",
    "switch_all",
    "flat_map",
    "switch_map",
    # Combination
    "merge",
    "combine_latest",
    # Lifecycle
    "take_until",
    "packed",
    "unpacked",
    "using",
]
