"""
rxpipe Pipe - Left-to-Right Operator Composition
================================================

``pipe([f, g, h])`` builds a single unary operator equivalent to
``lambda source: h(g(f(source)))``. Each step is checked as it runs: a step
that produces something other than an Observable fails right there, naming
the step, instead of surfacing later at subscription time.
"""

from typing import Callable, Iterable, List

from ..core.observable import Observable, ensure_observable, is_observable
from ..errors import PipeCompositionError

Transformer = Callable[[Observable], Observable]


def pipe(transformers: Iterable[Transformer]) -> Transformer:
    """
    Compose unary operators left to right.

    Args:
        transformers: Ordered operators; step i receives the output of step i-1

    Returns:
        A unary operator applying every step in order

    Raises:
        TypeError: Immediately, if any element is not callable
        PipeCompositionError: When applied, if a step returns a non-Observable

    Example:
        ```python
        evens_doubled = pipe([
            where(lambda x: x % 2 == 0),
            map(lambda x: x * 2),
        ])
        evens_doubled(of(1, 2, 3, 4)).subscribe(print)   # 4, 8
        ```
    """
    steps: List[Transformer] = list(transformers)
    for index, transformer in enumerate(steps):
        if not callable(transformer):
            raise TypeError(
                f"[pipe] Bad pipe value of type {type(transformer).__name__!r} "
                f"at index {index}, expected callable"
            )

    def composed(source: Observable) -> Observable:
        current = ensure_observable(source, "pipe")
        for index, transformer in enumerate(steps):
            current = transformer(current)
            if not is_observable(current):
                raise PipeCompositionError(index, current)
        return current

    return composed
