"""Exception hierarchy for cgl.

Construction errors are raised immediately by the builder. Fill-time problems
with unresolved nodes are not errors; they are reported by the constraint
checker, which can turn its first failure into one of these exceptions.
"""

from __future__ import annotations


class CGLError(Exception):
    """Base class for all cgl errors."""


class InvalidReferenceError(CGLError):
    """An operation referenced a node id that does not exist in the graph."""

    def __init__(self, node_id: object, node_count: int) -> None:
        self.node_id = node_id
        self.node_count = node_count
        super().__init__(f"Node {node_id!r} does not exist (graph has {node_count} nodes)")


class UnresolvedNodeError(CGLError):
    """A value was required from a node that has no resolved value."""

    def __init__(self, node_id: int, missing_inputs: tuple[int, ...] = ()) -> None:
        self.node_id = node_id
        self.missing_inputs = missing_inputs
        msg = f"Node {node_id} is unresolved"
        if missing_inputs:
            msg += f" (missing inputs: {', '.join(map(str, missing_inputs))})"
        super().__init__(msg)


class InvalidNodeError(CGLError):
    """A node's constant or hint function does not match its kind."""


class ArityMismatchError(CGLError):
    """A node declares a different number of dependencies than its operation takes."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} dependency values, got {actual}")


class HintEvaluationError(CGLError):
    """A hint function failed while the graph was being filled."""

    def __init__(self, node_id: int, reason: str) -> None:
        self.node_id = node_id
        super().__init__(f"Hint node {node_id} failed: {reason}")


class ValueOutOfRangeError(CGLError, ValueError):
    """A constant, input or hint output is not an unsigned 32-bit integer."""

    def __init__(self, message: str, *, value: object) -> None:
        self.value = value
        super().__init__(message)


class WriteOnceError(CGLError):
    """A resolved node was written again with a different value."""

    def __init__(self, node_id: int, current: int, attempted: int) -> None:
        self.node_id = node_id
        self.current = current
        self.attempted = attempted
        super().__init__(
            f"Node {node_id} already holds {current}; refusing to overwrite with {attempted}. "
            "Call reset() to start a new evaluation run.",
        )


class InvalidInputError(CGLError):
    """An input entry was rejected in strict-input mode."""


class ConstraintViolationError(CGLError):
    """Both sides of an equality constraint are resolved but differ."""

    def __init__(self, left: int, right: int, left_value: int, right_value: int) -> None:
        self.left = left
        self.right = right
        self.left_value = left_value
        self.right_value = right_value
        super().__init__(
            f"Constraint violated: node {left} = {left_value} != node {right} = {right_value}",
        )


class ConfigError(CGLError):
    """Error in cgl configuration."""
