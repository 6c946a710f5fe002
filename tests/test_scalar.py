"""Tests for u32 scalar validation and wrapping arithmetic."""

import pytest

from cgl._errors import ValueOutOfRangeError
from cgl._scalar import U32_MAX, U32_MODULUS, validate_u32, wrapping_add, wrapping_mul


class TestValidateU32:
    """Tests for validate_u32."""

    @pytest.mark.parametrize("value", [0, 1, 42, U32_MAX])
    def test_accepts_in_range(self, value: int) -> None:
        assert validate_u32(value) == value

    @pytest.mark.parametrize("value", [-1, U32_MODULUS, 2**64])
    def test_rejects_out_of_range(self, value: int) -> None:
        with pytest.raises(ValueOutOfRangeError, match="unsigned 32-bit"):
            validate_u32(value)

    @pytest.mark.parametrize("value", [1.0, "3", None])
    def test_rejects_non_integers(self, value: object) -> None:
        with pytest.raises(ValueOutOfRangeError):
            validate_u32(value)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="constant"):
            validate_u32(-5, what="constant")

    def test_error_keeps_value(self) -> None:
        with pytest.raises(ValueOutOfRangeError) as exc_info:
            validate_u32(-5)
        assert exc_info.value.value == -5


class TestWrappingArithmetic:
    """Tests for modular add/mul."""

    def test_add_without_overflow(self) -> None:
        assert wrapping_add(2, 3) == 5

    def test_add_wraps(self) -> None:
        assert wrapping_add(U32_MAX, 1) == 0
        assert wrapping_add(U32_MAX, U32_MAX) == U32_MAX - 1

    def test_mul_without_overflow(self) -> None:
        assert wrapping_mul(6, 7) == 42

    def test_mul_wraps(self) -> None:
        assert wrapping_mul(1 << 16, 1 << 16) == 0
        assert wrapping_mul(U32_MAX, 2) == U32_MAX - 1
        assert wrapping_mul(U32_MAX, U32_MAX) == 1
