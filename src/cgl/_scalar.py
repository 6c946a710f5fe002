"""Unsigned 32-bit scalar semantics.

Every node value in a graph is an integer in ``[0, 2**32)``. Additions and
multiplications wrap modulo ``2**32``; overflow is a defined result, not an
error. Callers that need overflow detection must compare operands themselves.
"""

from typing import Annotated

from annotated_types import Interval
from pydantic import Strict, TypeAdapter, ValidationError

from ._errors import ValueOutOfRangeError

U32_BITS = 32
U32_MODULUS = 1 << U32_BITS
U32_MAX = U32_MODULUS - 1

U32 = Annotated[int, Strict(), Interval(ge=0, le=U32_MAX)]

_u32_adapter: TypeAdapter[int] = TypeAdapter(U32)


def validate_u32(value: object, *, what: str = "value") -> int:
    """Validate that ``value`` is an unsigned 32-bit integer.

    Args:
        value: The candidate scalar.
        what: Human-readable description used in the error message.

    Returns:
        The value, as an ``int``.

    Raises:
        ValueOutOfRangeError: If the value is not an ``int`` in ``[0, 2**32)``.

    """
    try:
        return _u32_adapter.validate_python(value)
    except ValidationError as e:
        msg = f"{what} must be an unsigned 32-bit integer, got {value!r}"
        raise ValueOutOfRangeError(msg, value=value) from e


def wrapping_add(a: int, b: int) -> int:
    """Add two u32 values modulo 2**32."""
    return (a + b) & U32_MAX


def wrapping_mul(a: int, b: int) -> int:
    """Multiply two u32 values modulo 2**32."""
    return (a * b) & U32_MAX
