"""Public construction API for computation graphs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ._check import CheckResult, check_constraints
from ._config import CGLConfig
from ._errors import UnresolvedNodeError
from ._eval_engine import FillReport, fill
from ._graph import DependencyGraph
from ._hint import check_arity
from ._ir import NodeKind, NodeStore

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._eval_engine import Inputs
    from ._ir import Constraint, HintFunction, Node, NodeId

logger = logging.getLogger(__name__)


class Builder:
    """Builds, fills and checks a computation graph.

    Nodes are identified by the integer ids returned from the construction
    methods, assigned 0, 1, 2, ... in creation order.

    Example:
        >>> builder = Builder()
        >>> x = builder.init()
        >>> x_squared = builder.mul(x, x)
        >>> y = builder.add(builder.add(x_squared, x), builder.constant(5))
        >>> builder.fill_nodes([3])
        FillReport(passes=2, resolved=4, unresolved=())
        >>> builder.value(y)
        17

    """

    def __init__(self, config: CGLConfig | None = None) -> None:
        self.config = config if config is not None else CGLConfig()
        self._store = NodeStore()

    def init(self, *, name: str | None = None) -> NodeId:
        """Create an input node, to be supplied at fill time."""
        return self._store.create(NodeKind.INPUT, name=name)

    def constant(self, value: int, *, name: str | None = None) -> NodeId:
        """Create a node resolved to ``value`` immediately.

        Raises:
            ValueOutOfRangeError: If value is not an unsigned 32-bit integer.

        """
        return self._store.create(NodeKind.CONSTANT, constant=value, name=name)

    def add(self, a: NodeId, b: NodeId, *, name: str | None = None) -> NodeId:
        """Create a node computing ``a + b`` modulo 2**32.

        Node ids are plain integers. An id taken from another Builder is
        rejected only when it is out of range here; otherwise it refers to
        this graph's node with the same id.

        Raises:
            InvalidReferenceError: If a or b is not a node of this graph.

        """
        return self._store.create(NodeKind.ADD, (a, b), name=name)

    def mul(self, a: NodeId, b: NodeId, *, name: str | None = None) -> NodeId:
        """Create a node computing ``a * b`` modulo 2**32.

        As with ``add``, ids from another Builder are only rejected when out
        of range for this graph.

        Raises:
            InvalidReferenceError: If a or b is not a node of this graph.

        """
        return self._store.create(NodeKind.MUL, (a, b), name=name)

    def hint(
        self,
        depends_on: Iterable[NodeId],
        f: HintFunction,
        *,
        arity: int | None = None,
        name: str | None = None,
    ) -> NodeId:
        """Create a node whose value is ``f`` applied to its dependency values.

        ``f`` receives a tuple of the values of ``depends_on``, in order, once
        they are all resolved, and must return an unsigned 32-bit integer. The
        graph does not check what ``f`` computes; pair the hint with a
        constraint that verifies it.

        Args:
            depends_on: Nodes whose values are passed to ``f``.
            f: The hint function.
            arity: Number of values ``f`` expects. Defaults to the arity
                declared with ``hint_fn``, if any.
            name: Optional caption for diagnostics.

        Raises:
            InvalidReferenceError: If a dependency is not a node of this graph.
            ArityMismatchError: If a known arity differs from the number of
                dependencies.

        Example:
            >>> c = builder.hint([b], lambda values: values[0] // 8)

        """
        if not callable(f):
            msg = f"Hint function must be callable, got {type(f).__name__}"
            raise TypeError(msg)
        parents = tuple(depends_on)
        check_arity(f, len(parents), arity)
        return self._store.create(NodeKind.HINT, parents, compute=f, name=name)

    def assert_equal(self, a: NodeId, b: NodeId) -> Constraint:
        """Record that nodes ``a`` and ``b`` must resolve to the same value.

        The nodes need not be resolved yet; the constraint is evaluated by
        ``check_constraints``.

        Raises:
            InvalidReferenceError: If a or b is not a node of this graph.

        """
        return self._store.add_constraint(a, b)

    def fill_nodes(self, inputs: Inputs) -> FillReport:
        """Fill the graph from the given input values.

        Args:
            inputs: Either a sequence where position ``i`` supplies the value
                of node ``i``, or a mapping from node id to value. None
                entries, and entries for nodes that are not inputs, are
                ignored (rejected with InvalidInputError when
                ``config.strict_inputs`` is set). A value for an input that
                already holds a different one is ignored the same way; call
                ``reset`` to fill with new inputs.

        Returns:
            FillReport describing the run.

        """
        report = fill(self._store, inputs, strict_inputs=self.config.strict_inputs)
        logger.debug(
            "Filled %d/%d nodes in %d passes",
            len(self._store) - len(report.unresolved),
            len(self._store),
            report.passes,
        )
        return report

    def check_constraints(self) -> CheckResult:
        """Check every recorded constraint against the filled values.

        Returns:
            CheckResult, truthy when every constraint holds.

        """
        return check_constraints(self._store, fail_fast=self.config.fail_fast)

    def get_value(self, node_id: NodeId) -> int | None:
        """Get a node's value, or None if it is unresolved."""
        return self._store.get_value(node_id)

    def value(self, node_id: NodeId) -> int:
        """Get a node's resolved value.

        Raises:
            UnresolvedNodeError: If the node has no value.

        """
        value = self._store.get_value(node_id)
        if value is None:
            raise UnresolvedNodeError(node_id)
        return value

    def witness(self) -> tuple[int | None, ...]:
        """Return every node value, indexed by node id."""
        return self._store.values

    def reset(self) -> None:
        """Forget all computed and input values so the graph can be refilled."""
        self._store.reset()

    def dependency_graph(self) -> DependencyGraph[int]:
        """Return the dependency structure of the graph."""
        return DependencyGraph.from_store(self._store)

    def node(self, node_id: NodeId) -> Node:
        """Get the structure of a node."""
        return self._store.node(node_id)

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All nodes in creation order."""
        return self._store.nodes

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        """All recorded constraints."""
        return self._store.constraints

    def __len__(self) -> int:
        """Return the number of nodes."""
        return len(self._store)
