"""Constraint checking over a filled graph.

Checking never raises: failures are returned as data so that callers can
report which constraint failed and on which side. ``CheckResult.raise_for_failure``
turns the first failure into an exception for callers that prefer that.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from ._errors import ConstraintViolationError, UnresolvedNodeError
from ._graph import DependencyGraph
from ._ir import NodeKind

if TYPE_CHECKING:
    from ._ir import Constraint, NodeId, NodeStore

logger = logging.getLogger(__name__)


class FailureKind(StrEnum):
    """Why a constraint did not hold."""

    UNRESOLVED = auto()  # A side has no value
    MISMATCH = auto()  # Both sides resolved to different values


class Side(StrEnum):
    """Which side of a constraint an unresolved node sits on."""

    LEFT = auto()
    RIGHT = auto()


@dataclass(frozen=True, slots=True)
class ConstraintFailure:
    """A single failed constraint.

    Attributes:
        index: Position of the constraint in recording order.
        constraint: The failed constraint.
        kind: UNRESOLVED or MISMATCH.
        side: For UNRESOLVED, the side whose node has no value.
        node_id: For UNRESOLVED, the unresolved node.
        left_value: Value of the left node, if resolved.
        right_value: Value of the right node, if resolved.
        missing_inputs: For UNRESOLVED, the input nodes without a value that
            the unresolved node depends on.

    """

    index: int
    constraint: Constraint
    kind: FailureKind
    side: Side | None = None
    node_id: NodeId | None = None
    left_value: int | None = None
    right_value: int | None = None
    missing_inputs: tuple[NodeId, ...] = ()

    def describe(self) -> str:
        """Return a one-line human-readable description."""
        c = self.constraint
        if self.kind == FailureKind.UNRESOLVED:
            text = f"constraint {self.index} ({c.left} == {c.right}): {self.side} node {self.node_id} is unresolved"
            if self.missing_inputs:
                text += f", missing inputs {list(self.missing_inputs)}"
            return text
        return f"constraint {self.index} ({c.left} == {c.right}): {self.left_value} != {self.right_value}"

    def to_error(self) -> UnresolvedNodeError | ConstraintViolationError:
        """Convert this failure into the matching exception."""
        if self.kind == FailureKind.UNRESOLVED:
            assert self.node_id is not None  # noqa: S101
            return UnresolvedNodeError(self.node_id, self.missing_inputs)
        assert self.left_value is not None  # noqa: S101
        assert self.right_value is not None  # noqa: S101
        return ConstraintViolationError(
            self.constraint.left,
            self.constraint.right,
            self.left_value,
            self.right_value,
        )


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of checking a graph's constraints.

    A CheckResult is truthy exactly when every checked constraint holds.

    Attributes:
        checked: Number of constraints examined.
        failures: Failed constraints, in recording order.

    """

    checked: int
    failures: tuple[ConstraintFailure, ...] = ()

    @property
    def success(self) -> bool:
        """Check if all constraints hold."""
        return not self.failures

    @property
    def first_failure(self) -> ConstraintFailure | None:
        """The earliest failed constraint, if any."""
        return self.failures[0] if self.failures else None

    def raise_for_failure(self) -> None:
        """Raise the exception matching the first failure, if any.

        Raises:
            UnresolvedNodeError: If a constraint side was unresolved.
            ConstraintViolationError: If a constraint's values differ.

        """
        if self.failures:
            raise self.failures[0].to_error()

    def __bool__(self) -> bool:
        """Return True if all constraints hold."""
        return self.success


def _missing_inputs(store: NodeStore, graph: DependencyGraph[int], node_id: NodeId) -> tuple[NodeId, ...]:
    candidates = graph.ancestors(node_id) | {node_id}
    return tuple(
        sorted(
            n for n in candidates if store.node(n).kind == NodeKind.INPUT and store.get_value(n) is None
        ),
    )


def _check_one(
    store: NodeStore,
    index: int,
    constraint: Constraint,
    graph: DependencyGraph[int] | None,
) -> tuple[ConstraintFailure | None, DependencyGraph[int] | None]:
    left_value = store.get_value(constraint.left)
    right_value = store.get_value(constraint.right)

    for side, node_id, value in (
        (Side.LEFT, constraint.left, left_value),
        (Side.RIGHT, constraint.right, right_value),
    ):
        if value is None:
            # Only unresolved constraints need the dependency view.
            if graph is None:
                graph = DependencyGraph.from_store(store)
            failure = ConstraintFailure(
                index=index,
                constraint=constraint,
                kind=FailureKind.UNRESOLVED,
                side=side,
                node_id=node_id,
                left_value=left_value,
                right_value=right_value,
                missing_inputs=_missing_inputs(store, graph, node_id),
            )
            return failure, graph

    if left_value != right_value:
        failure = ConstraintFailure(
            index=index,
            constraint=constraint,
            kind=FailureKind.MISMATCH,
            left_value=left_value,
            right_value=right_value,
        )
        return failure, graph

    return None, graph


def check_constraints(store: NodeStore, *, fail_fast: bool = True) -> CheckResult:
    """Check every recorded constraint against the current values.

    Args:
        store: The filled graph.
        fail_fast: Stop at the first failing constraint. When False, every
            constraint is checked and all failures are reported.

    Returns:
        CheckResult, truthy when every constraint holds. A graph with no
        constraints always succeeds.

    """
    failures: list[ConstraintFailure] = []
    graph: DependencyGraph[int] | None = None
    checked = 0

    for index, constraint in enumerate(store.constraints):
        checked += 1
        failure, graph = _check_one(store, index, constraint, graph)
        if failure is None:
            continue
        logger.debug("Constraint check failed: %s", failure.describe())
        failures.append(failure)
        if fail_fast:
            break

    logger.debug("Checked %d constraints, %d failed", checked, len(failures))
    return CheckResult(checked=checked, failures=tuple(failures))
