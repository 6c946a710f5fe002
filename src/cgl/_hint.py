"""Hint functions: opaque computations attached to graph nodes.

A hint function takes the tuple of its dependency values, in declaration
order, and returns one value. The graph never inspects what it computes, so
every hint should be paired with a constraint that checks its output
algebraically.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from ._errors import ArityMismatchError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ._ir import HintFunction

_ARITY_ATTR = "__cgl_arity__"


def hint_fn(*, arity: int) -> Callable[[HintFunction], HintFunction]:
    """Decorator declaring how many dependency values a hint function expects.

    The builder checks the declared arity against the dependencies passed to
    ``Builder.hint`` and raises ArityMismatchError on construction.

    Callables that cannot carry attributes, such as bound methods, are
    wrapped; use the returned function.

    Example:
        @cgl.hint_fn(arity=2)
        def quotient(values):
            return values[0] // values[1]

    """
    if arity < 0:
        msg = f"arity must be non-negative, got {arity}"
        raise ValueError(msg)

    def decorator(func: HintFunction) -> HintFunction:
        try:
            setattr(func, _ARITY_ATTR, arity)
        except (AttributeError, TypeError):
            # Bound methods and builtins do not take attributes.
            @functools.wraps(func)
            def wrapper(values: Sequence[int]) -> int:
                return func(values)

            setattr(wrapper, _ARITY_ATTR, arity)
            return wrapper
        return func

    return decorator


def declared_arity(func: HintFunction) -> int | None:
    """Return the arity attached by ``hint_fn``, if any."""
    return getattr(func, _ARITY_ATTR, None)


def check_arity(func: HintFunction, dependency_count: int, arity: int | None = None) -> None:
    """Validate a hint's dependency count when its arity is known.

    Args:
        func: The hint function.
        dependency_count: Number of dependencies the hint node declares.
        arity: Explicit arity. Falls back to the ``hint_fn`` declaration.

    Raises:
        ArityMismatchError: If the known arity differs from dependency_count.

    """
    expected = arity if arity is not None else declared_arity(func)
    if expected is not None and expected != dependency_count:
        raise ArityMismatchError(expected, dependency_count)
