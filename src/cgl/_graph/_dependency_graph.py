"""Dependency view over the nodes of a graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cgl._ir import NodeStore


@dataclass(frozen=True, slots=True)
class DependencyGraph[T]:
    """An immutable "depends on" graph.

    - predecessors[b] = {a} means "b depends on a"
    - successors[a] = {b} means "a is depended on by b"

    Nodes without any edge are kept, so every node of the source graph is
    present.

    """

    _predecessors: dict[T, frozenset[T]] = field(default_factory=dict)
    _successors: dict[T, frozenset[T]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a graph from (source, target) edges.

        An edge (a, b) means "b depends on a".

        Args:
            edges: Edges of the graph.
            nodes: Extra nodes to include even if no edge touches them.

        Example:
            >>> graph = DependencyGraph.from_edges([(0, 2), (1, 2)])
            >>> sorted(graph.predecessors(2))
            [0, 1]

        """
        predecessors: dict[T, set[T]] = {n: set() for n in nodes}
        successors: dict[T, set[T]] = {n: set() for n in predecessors}

        for src, dst in edges:
            predecessors.setdefault(dst, set()).add(src)
            successors.setdefault(src, set()).add(dst)
            predecessors.setdefault(src, set())
            successors.setdefault(dst, set())

        return cls(
            _predecessors={k: frozenset(v) for k, v in predecessors.items()},
            _successors={k: frozenset(v) for k, v in successors.items()},
        )

    @classmethod
    def from_store(cls, store: NodeStore) -> DependencyGraph[int]:
        """Build the graph of a NodeStore, keyed by node id."""
        return DependencyGraph.from_edges(
            ((parent, node.id) for node in store for parent in node.parents),
            nodes=range(len(store)),
        )

    @property
    def nodes(self) -> frozenset[T]:
        """All nodes in the graph."""
        return frozenset(self._predecessors)

    def predecessors(self, node: T) -> frozenset[T]:
        """Get direct dependencies of a node."""
        return self._predecessors.get(node, frozenset())

    def successors(self, node: T) -> frozenset[T]:
        """Get direct dependents of a node."""
        return self._successors.get(node, frozenset())

    def roots(self) -> frozenset[T]:
        """Get nodes with no dependencies (inputs, constants, nullary hints)."""
        return frozenset(n for n, preds in self._predecessors.items() if not preds)

    def leaves(self) -> frozenset[T]:
        """Get nodes nothing depends on (the outputs of the graph)."""
        return frozenset(n for n, succs in self._successors.items() if not succs)

    def ancestors(self, node: T) -> frozenset[T]:
        """Get all transitive dependencies of a node."""
        return self._walk(node, self._predecessors)

    def descendants(self, node: T) -> frozenset[T]:
        """Get all transitive dependents of a node."""
        return self._walk(node, self._successors)

    @staticmethod
    def _walk(node: T, edges: dict[T, frozenset[T]]) -> frozenset[T]:
        visited: set[T] = set()
        stack = list(edges.get(node, ()))
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(edges.get(current, ()))
        return frozenset(visited)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._predecessors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._predecessors
