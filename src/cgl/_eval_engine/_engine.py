"""Fixpoint evaluation of computation graphs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cgl._errors import HintEvaluationError, InvalidInputError
from cgl._ir import NodeKind
from cgl._scalar import validate_u32, wrapping_add, wrapping_mul

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from cgl._ir import Node, NodeId, NodeStore

logger = logging.getLogger(__name__)

type Inputs = Sequence[int | None] | Mapping[NodeId, int | None]

# Failures a hint function may raise that are reported as HintEvaluationError.
_HINT_ERRORS = (ArithmeticError, TypeError, ValueError, IndexError, KeyError)


@dataclass(frozen=True, slots=True)
class FillReport:
    """Outcome of a fill run.

    Attributes:
        passes: Number of passes over the graph, including the final pass
            that made no progress.
        resolved: Number of nodes resolved by this run (inputs included).
        unresolved: Ids of nodes still without a value, in id order.

    """

    passes: int
    resolved: int
    unresolved: tuple[NodeId, ...]

    @property
    def complete(self) -> bool:
        """Check if every node in the graph has a value."""
        return not self.unresolved


def _iter_inputs(inputs: Inputs) -> Iterator[tuple[NodeId, int | None]]:
    if isinstance(inputs, Mapping):
        yield from inputs.items()
    else:
        yield from enumerate(inputs)


def _collect_input_writes(
    store: NodeStore,
    inputs: Inputs,
    *,
    strict: bool,
) -> dict[NodeId, int]:
    """Validate caller-supplied inputs and return the writes to apply.

    Nothing is written until every entry has been validated, so a rejected
    entry leaves the store untouched.
    """
    writes: dict[NodeId, int] = {}
    for node_id, raw in _iter_inputs(inputs):
        if raw is None:
            continue
        if node_id not in store:
            if strict:
                msg = f"Input given for node {node_id!r}, but the graph has {len(store)} nodes"
                raise InvalidInputError(msg)
            logger.debug("Ignoring input for unknown node %r", node_id)
            continue
        node = store.node(node_id)
        if node.kind != NodeKind.INPUT:
            if strict:
                msg = f"Input given for {node.label}, which is not an input node"
                raise InvalidInputError(msg)
            logger.debug("Ignoring input for non-input node %s", node.label)
            continue
        value = validate_u32(raw, what=f"input for {node.label}")
        current = store.get_value(node_id)
        if current is not None:
            if current != value and strict:
                msg = f"Input {value} given for {node.label}, which already holds {current}; call reset() first"
                raise InvalidInputError(msg)
            if current != value:
                logger.debug("Ignoring input %d for %s, already resolved to %d", value, node.label, current)
            continue
        writes[node_id] = value
    return writes


def _compute(node: Node, parent_values: tuple[int, ...]) -> int:
    match node.kind:
        case NodeKind.ADD:
            return wrapping_add(*parent_values)
        case NodeKind.MUL:
            return wrapping_mul(*parent_values)
        case NodeKind.HINT:
            if node.compute is None:
                msg = f"{node.label} has no hint function"
                raise TypeError(msg)
            try:
                return validate_u32(node.compute(parent_values), what=f"output of {node.label}")
            except _HINT_ERRORS as e:
                raise HintEvaluationError(node.id, f"{type(e).__name__}: {e}") from e
        case _:
            msg = f"{node.label} cannot be computed from its parents"
            raise TypeError(msg)


def fill(store: NodeStore, inputs: Inputs, *, strict_inputs: bool = False) -> FillReport:
    """Fill the graph from the given inputs until no more nodes can be resolved.

    1. Writes every supplied value whose position is an INPUT node. Entries
       for other nodes are ignored unless ``strict_inputs`` is set.
    2. Passes over all nodes in id order, computing each unresolved node whose
       parents all hold values. Additions and multiplications wrap modulo
       2**32; hints call their function with the tuple of dependency values.
    3. Stops after a pass that resolves nothing.

    Resolved values are never overwritten, so filling an already-filled graph
    changes nothing: a value given for an input that already holds one is
    ignored. Use ``NodeStore.reset`` to start a new run. Nodes whose
    dependencies never resolve stay unresolved; that is reported, not raised.

    Args:
        store: The graph to fill. This is the only place values are written.
        inputs: Either a sequence where position ``i`` holds the value for
            node ``i``, or a mapping from node id to value. None means "not
            supplied".
        strict_inputs: Reject values given for unknown or non-input nodes, and
            values that differ from what an input already holds.

    Returns:
        FillReport describing the run.

    Raises:
        ValueOutOfRangeError: If an input value is not a u32.
        InvalidInputError: In strict mode, for entries at non-input positions
            or conflicting with an already resolved input.
        HintEvaluationError: If a hint function fails or returns a non-u32.

    Example:
        >>> store = NodeStore()
        >>> x = store.create(NodeKind.INPUT)
        >>> y = store.create(NodeKind.MUL, (x, x))
        >>> fill(store, [7]).complete
        True
        >>> store.get_value(y)
        49

    """
    writes = _collect_input_writes(store, inputs, strict=strict_inputs)
    resolved = 0
    for node_id, value in writes.items():
        if store.get_value(node_id) is None:
            store.set_value(node_id, value)
            resolved += 1
    logger.debug("Applied %d input values", resolved)

    passes = 0
    while True:
        passes += 1
        progress = 0
        for node in store:
            if node.kind == NodeKind.INPUT or store.get_value(node.id) is not None:
                continue
            parent_values = tuple(store.get_value(p) for p in node.parents)
            if None in parent_values:
                continue
            value = _compute(node, parent_values)  # type: ignore[arg-type]
            store.set_value(node.id, value)
            logger.debug("  Set %s = %d", node.label, value)
            progress += 1
        logger.debug("Pass %d resolved %d nodes", passes, progress)
        resolved += progress
        if progress == 0:
            break

    unresolved = store.unresolved()
    if unresolved:
        logger.debug("Fill stopped with %d unresolved nodes: %s", len(unresolved), unresolved)
    return FillReport(passes=passes, resolved=resolved, unresolved=unresolved)
