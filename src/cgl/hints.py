"""Ready-made hint functions.

Each of these computes a value that cannot be written as additions and
multiplications of existing nodes. Pair them with a constraint that checks
the result, e.g. ``assert_equal(mul(q, k), b)`` for ``q = hint([b], div_by(k))``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ._hint import hint_fn

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._ir import HintFunction


@hint_fn(arity=1)
def isqrt(values: Sequence[int]) -> int:
    """Floor of the square root of the single dependency."""
    return math.isqrt(values[0])


@hint_fn(arity=2)
def div(values: Sequence[int]) -> int:
    """Floor division of the first dependency by the second."""
    return values[0] // values[1]


@hint_fn(arity=2)
def mod(values: Sequence[int]) -> int:
    """Remainder of the first dependency divided by the second."""
    return values[0] % values[1]


def div_by(divisor: int) -> HintFunction:
    """Hint computing floor division of the single dependency by a fixed divisor."""
    if divisor == 0:
        msg = "divisor must be non-zero"
        raise ValueError(msg)

    @hint_fn(arity=1)
    def _div_by(values: Sequence[int]) -> int:
        return values[0] // divisor

    return _div_by


def mod_by(divisor: int) -> HintFunction:
    """Hint computing the remainder of the single dependency by a fixed divisor."""
    if divisor == 0:
        msg = "divisor must be non-zero"
        raise ValueError(msg)

    @hint_fn(arity=1)
    def _mod_by(values: Sequence[int]) -> int:
        return values[0] % divisor

    return _mod_by
