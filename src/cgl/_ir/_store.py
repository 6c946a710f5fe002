"""Append-only arena of nodes, values and constraints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cgl._errors import ArityMismatchError, InvalidNodeError, InvalidReferenceError, WriteOnceError
from cgl._scalar import validate_u32

from ._node import Constraint, Node, NodeId, NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from ._node import HintFunction

logger = logging.getLogger(__name__)


class NodeStore:
    """Exclusive owner of a graph's nodes, values and constraints.

    Nodes are addressed by their index in creation order. Structure is
    append-only; values are write-once until ``reset`` starts a new run.
    """

    __slots__ = ("_constraints", "_nodes", "_values")

    def __init__(self) -> None:
        self._nodes: list[Node] = []
        self._values: list[int | None] = []
        self._constraints: list[Constraint] = []

    def _check_ref(self, node_id: object) -> NodeId:
        # bool is an int subclass but never a valid reference
        if (
            not isinstance(node_id, int)
            or isinstance(node_id, bool)
            or not 0 <= node_id < len(self._nodes)
        ):
            raise InvalidReferenceError(node_id, len(self._nodes))
        return node_id

    def create(
        self,
        kind: NodeKind,
        parents: Iterable[NodeId] = (),
        *,
        constant: int | None = None,
        compute: HintFunction | None = None,
        name: str | None = None,
    ) -> NodeId:
        """Append a node and return its id.

        Raises:
            InvalidReferenceError: If any parent is not an existing node id.
            ArityMismatchError: If an ADD or MUL node does not have exactly
                two parents, or an INPUT or CONSTANT node has any.
            InvalidNodeError: If ``constant`` or ``compute`` does not match
                the kind: a CONSTANT needs a value, a HINT needs a callable,
                and no other kind takes either.
            ValueOutOfRangeError: If a CONSTANT value is not a u32.

        """
        if kind == NodeKind.CONSTANT:
            if constant is None:
                msg = "A constant node needs a value"
                raise InvalidNodeError(msg)
            constant = validate_u32(constant, what="constant")
        elif constant is not None:
            msg = f"A {kind} node cannot carry a constant value"
            raise InvalidNodeError(msg)
        if kind == NodeKind.HINT:
            if not callable(compute):
                msg = f"Hint function must be callable, got {type(compute).__name__}"
                raise InvalidNodeError(msg)
        elif compute is not None:
            msg = f"A {kind} node cannot carry a hint function"
            raise InvalidNodeError(msg)

        checked = tuple(self._check_ref(p) for p in parents)
        if kind.binary and len(checked) != 2:  # noqa: PLR2004
            raise ArityMismatchError(2, len(checked))
        if kind in (NodeKind.INPUT, NodeKind.CONSTANT) and checked:
            raise ArityMismatchError(0, len(checked))
        node_id = len(self._nodes)
        node = Node(id=node_id, kind=kind, parents=checked, constant=constant, compute=compute, name=name)
        self._nodes.append(node)
        self._values.append(constant if kind == NodeKind.CONSTANT else None)
        logger.debug("Created %s with parents %s", node.label, checked)
        return node_id

    def add_constraint(self, left: NodeId, right: NodeId) -> Constraint:
        """Record an equality constraint between two existing nodes."""
        constraint = Constraint(left=self._check_ref(left), right=self._check_ref(right))
        self._constraints.append(constraint)
        return constraint

    def node(self, node_id: NodeId) -> Node:
        """Get a node by id."""
        return self._nodes[self._check_ref(node_id)]

    def get_value(self, node_id: NodeId) -> int | None:
        """Get the resolved value of a node, or None if it is unresolved."""
        return self._values[self._check_ref(node_id)]

    def set_value(self, node_id: NodeId, value: int) -> None:
        """Resolve a node.

        Writing the value a node already holds is a no-op.

        Raises:
            ValueOutOfRangeError: If value is not a u32.
            WriteOnceError: If the node already holds a different value.

        """
        current = self._values[self._check_ref(node_id)]
        value = validate_u32(value, what=f"value for node {node_id}")
        if current is not None:
            if current != value:
                raise WriteOnceError(node_id, current, value)
            return
        self._values[node_id] = value

    def unresolved(self) -> tuple[NodeId, ...]:
        """Ids of all nodes without a value, in id order."""
        return tuple(i for i, v in enumerate(self._values) if v is None)

    def reset(self) -> None:
        """Clear every value except constants, starting a new evaluation run."""
        for node in self._nodes:
            if node.kind != NodeKind.CONSTANT:
                self._values[node.id] = None

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All nodes in creation order."""
        return tuple(self._nodes)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        """All constraints in recording order."""
        return tuple(self._constraints)

    @property
    def values(self) -> tuple[int | None, ...]:
        """Snapshot of every node value, indexed by node id."""
        return tuple(self._values)

    def __len__(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        """Check if a node id exists in this store."""
        return isinstance(node_id, int) and not isinstance(node_id, bool) and 0 <= node_id < len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        """Iterate over nodes in id order."""
        return iter(self._nodes)
