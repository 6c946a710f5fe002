"""Tests for the public Builder API."""

import math

import pytest

import cgl
from cgl import hints


class TestConstruction:
    """Tests for node and constraint creation."""

    def test_ids_in_creation_order(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        c = builder.constant(5)
        s = builder.add(x, c)
        m = builder.mul(s, s)
        h = builder.hint([m], hints.isqrt)
        assert [x, c, s, m, h] == [0, 1, 2, 3, 4]
        assert len(builder) == 5
        assert [n.kind for n in builder.nodes] == [
            cgl.NodeKind.INPUT,
            cgl.NodeKind.CONSTANT,
            cgl.NodeKind.ADD,
            cgl.NodeKind.MUL,
            cgl.NodeKind.HINT,
        ]

    def test_constant_is_resolved_immediately(self) -> None:
        builder = cgl.Builder()
        c = builder.constant(7)
        assert builder.value(c) == 7

    def test_names(self) -> None:
        builder = cgl.Builder()
        x = builder.init(name="x")
        assert builder.node(x).name == "x"
        assert builder.node(x).label == "#0 input 'x'"

    @pytest.mark.parametrize("value", [-1, 2**32, 3.0])
    def test_constant_out_of_range(self, value: object) -> None:
        builder = cgl.Builder()
        with pytest.raises(cgl.ValueOutOfRangeError):
            builder.constant(value)  # type: ignore[arg-type]
        assert len(builder) == 0

    def test_add_invalid_reference(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        with pytest.raises(cgl.InvalidReferenceError) as exc_info:
            builder.add(x, 3)
        assert exc_info.value.node_id == 3

    def test_mul_invalid_reference(self) -> None:
        builder = cgl.Builder()
        with pytest.raises(cgl.InvalidReferenceError):
            builder.mul(0, 0)

    def test_id_from_another_graph_is_rejected_when_out_of_range(self) -> None:
        other = cgl.Builder()
        other.init()
        foreign = other.init()
        builder = cgl.Builder()
        builder.init()
        with pytest.raises(cgl.InvalidReferenceError):
            builder.add(0, foreign)

    def test_in_range_id_from_another_graph_is_accepted(self) -> None:
        other = cgl.Builder()
        foreign = other.init()
        builder = cgl.Builder()
        own = builder.constant(5)
        y = builder.add(own, foreign)
        assert builder.node(y).parents == (own, own)

    def test_hint_invalid_reference(self) -> None:
        builder = cgl.Builder()
        with pytest.raises(cgl.InvalidReferenceError):
            builder.hint([0], hints.isqrt)

    def test_hint_requires_callable(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        with pytest.raises(TypeError, match="callable"):
            builder.hint([x], 5)  # type: ignore[arg-type]

    def test_hint_declared_arity_mismatch(self) -> None:
        builder = cgl.Builder()
        a = builder.init()
        b = builder.init()
        with pytest.raises(cgl.ArityMismatchError):
            builder.hint([a, b], hints.isqrt)
        assert len(builder) == 2

    def test_hint_explicit_arity_mismatch(self) -> None:
        builder = cgl.Builder()
        a = builder.init()
        with pytest.raises(cgl.ArityMismatchError):
            builder.hint([a], lambda values: values[0] + values[1], arity=2)

    def test_assert_equal_records_constraint(self) -> None:
        builder = cgl.Builder()
        a = builder.init()
        b = builder.init()
        constraint = builder.assert_equal(a, b)
        assert builder.constraints == (cgl.Constraint(left=a, right=b),)
        assert constraint.left == a

    def test_assert_equal_invalid_reference(self) -> None:
        builder = cgl.Builder()
        a = builder.init()
        with pytest.raises(cgl.InvalidReferenceError):
            builder.assert_equal(a, 1)

    def test_dependency_graph(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        y = builder.mul(x, x)
        graph = builder.dependency_graph()
        assert graph.predecessors(y) == frozenset({x})
        assert graph.leaves() == frozenset({y})


class TestExamples:
    """The three reference circuits."""

    def test_quadratic(self) -> None:
        """f(x) = x^2 + x + 5 at x = 3."""
        builder = cgl.Builder()
        x = builder.init()
        x_squared = builder.mul(x, x)
        x_squared_plus_x = builder.add(x_squared, x)
        five = builder.constant(5)
        y = builder.add(x_squared_plus_x, five)

        builder.fill_nodes([3])

        assert builder.value(y) == 17
        assert builder.check_constraints()

    def test_division_hint(self) -> None:
        """f(a) = (a + 1) / 8 at a = 7."""
        builder = cgl.Builder()
        a = builder.init()
        one = builder.constant(1)
        b = builder.add(a, one)
        c = builder.hint([b], lambda values: values[0] // 8)
        eight = builder.constant(8)
        c_times_8 = builder.mul(c, eight)
        builder.assert_equal(b, c_times_8)

        builder.fill_nodes([7])

        assert (builder.value(b), builder.value(c), builder.value(c_times_8)) == (8, 1, 8)
        assert builder.check_constraints()

    def test_division_hint_rejects_inexact_quotient(self) -> None:
        builder = cgl.Builder()
        a = builder.init()
        b = builder.add(a, builder.constant(1))
        c = builder.hint([b], hints.div_by(8))
        builder.assert_equal(b, builder.mul(c, builder.constant(8)))

        builder.fill_nodes([8])

        result = builder.check_constraints()
        assert not result
        assert result.first_failure is not None
        assert result.first_failure.kind == cgl.FailureKind.MISMATCH

    def test_square_root_hint(self) -> None:
        """f(x) = sqrt(x + 7) at x = 9."""
        builder = cgl.Builder()
        x = builder.init()
        seven = builder.constant(7)
        x_plus_7 = builder.add(x, seven)
        root = builder.hint([x_plus_7], lambda values: math.isqrt(values[0]))
        computed_sq = builder.mul(root, root)
        builder.assert_equal(computed_sq, x_plus_7)

        builder.fill_nodes([9])

        assert (builder.value(x_plus_7), builder.value(root), builder.value(computed_sq)) == (16, 4, 16)
        assert builder.check_constraints()

    def test_square_root_of_non_perfect_square_without_constraint(self) -> None:
        builder = cgl.Builder()
        x = builder.constant(10)
        root = builder.hint([x], hints.isqrt)

        report = builder.fill_nodes([None])

        assert report.complete
        assert builder.value(root) == 3
        assert builder.check_constraints()

    def test_unresolved_dependency_reported(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        y = builder.init()
        s = builder.add(x, y)
        builder.assert_equal(s, x)

        builder.fill_nodes([1, None])

        result = builder.check_constraints()
        assert not result
        failure = result.first_failure
        assert failure is not None
        assert failure.kind == cgl.FailureKind.UNRESOLVED
        assert failure.node_id == s
        assert failure.missing_inputs == (y,)
        with pytest.raises(cgl.UnresolvedNodeError):
            result.raise_for_failure()


class TestEdgeCases:
    """Small graphs without inputs."""

    def test_constant_only(self) -> None:
        builder = cgl.Builder()
        builder.constant(5)
        builder.fill_nodes([None])
        assert builder.check_constraints()

    def test_zero_constants(self) -> None:
        builder = cgl.Builder()
        zero_a = builder.constant(0)
        zero_b = builder.constant(0)
        total = builder.add(zero_a, zero_b)
        builder.fill_nodes([None, None])
        builder.assert_equal(total, zero_a)
        assert builder.check_constraints()

    def test_multiple_operations_same_result(self) -> None:
        builder = cgl.Builder()
        two = builder.constant(2)
        three = builder.constant(3)
        six = builder.mul(two, three)
        six_alt = builder.add(three, three)
        builder.assert_equal(six, six_alt)
        builder.fill_nodes([None, None])
        assert builder.check_constraints()

    def test_input_for_constant_position_is_ignored(self) -> None:
        builder = cgl.Builder()
        c = builder.constant(5)
        x = builder.init()
        builder.fill_nodes([99, 1])
        assert builder.value(c) == 5
        assert builder.value(x) == 1


class TestValues:
    """Tests for value reads, witness and refilling."""

    def test_value_of_unresolved_node_raises(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        builder.fill_nodes([])
        assert builder.get_value(x) is None
        with pytest.raises(cgl.UnresolvedNodeError, match="Node 0 is unresolved"):
            builder.value(x)

    def test_witness(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        y = builder.init()
        builder.add(x, builder.constant(2))
        builder.mul(x, y)
        builder.fill_nodes([3])
        assert builder.witness() == (3, None, 2, 5, None)

    def test_fill_twice_is_idempotent(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        builder.hint([builder.mul(x, x)], hints.isqrt)
        builder.fill_nodes([12])
        first = builder.witness()
        builder.fill_nodes([12])
        assert builder.witness() == first

    def test_refill_with_different_input_is_noop(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        y = builder.add(x, x)
        builder.fill_nodes([3])
        first = builder.witness()

        builder.fill_nodes([4])

        assert builder.witness() == first
        assert builder.value(y) == 6

    def test_refill_with_different_input_strict(self) -> None:
        builder = cgl.Builder(cgl.CGLConfig(strict_inputs=True))
        x = builder.init()
        builder.fill_nodes([3])
        with pytest.raises(cgl.InvalidInputError):
            builder.fill_nodes([4])
        assert builder.value(x) == 3

    def test_reset_starts_new_run(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        y = builder.add(x, x)
        builder.fill_nodes([1])
        builder.fill_nodes([2])
        assert builder.value(y) == 2
        builder.reset()
        builder.fill_nodes([2])
        assert builder.value(y) == 4

    def test_fill_in_stages(self) -> None:
        builder = cgl.Builder()
        a = builder.init()
        b = builder.init()
        p = builder.mul(a, b)
        builder.fill_nodes([2])
        assert builder.get_value(p) is None
        builder.fill_nodes({b: 5})
        assert builder.value(p) == 10

    def test_overflow_wraps(self) -> None:
        builder = cgl.Builder()
        x = builder.init()
        y = builder.mul(x, builder.constant(2))
        builder.fill_nodes([cgl.U32_MAX])
        assert builder.value(y) == cgl.U32_MAX - 1


class TestConfig:
    """Tests for Builder behaviour under configuration."""

    def test_default_config(self) -> None:
        assert cgl.Builder().config == cgl.CGLConfig()

    def test_strict_inputs(self) -> None:
        builder = cgl.Builder(cgl.CGLConfig(strict_inputs=True))
        builder.constant(5)
        builder.init()
        with pytest.raises(cgl.InvalidInputError):
            builder.fill_nodes([5, 1])

    def test_collect_all_failures(self) -> None:
        builder = cgl.Builder(cgl.CGLConfig(fail_fast=False))
        one = builder.constant(1)
        two = builder.constant(2)
        builder.assert_equal(one, two)
        builder.assert_equal(two, one)
        result = builder.check_constraints()
        assert len(result.failures) == 2

    def test_fail_fast_default(self) -> None:
        builder = cgl.Builder()
        one = builder.constant(1)
        two = builder.constant(2)
        builder.assert_equal(one, two)
        builder.assert_equal(two, one)
        assert len(builder.check_constraints().failures) == 1
