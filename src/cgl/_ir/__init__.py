"""Intermediate representation of computation graphs.

Key types:
- NodeKind: Enum for node types (INPUT, CONSTANT, ADD, MUL, HINT)
- Node: Immutable structure of a single node
- Constraint: Equality between two node values
- NodeStore: Append-only arena owning nodes, values and constraints
"""

from ._node import Constraint, HintFunction, Node, NodeId, NodeKind
from ._store import NodeStore

__all__ = ["Constraint", "HintFunction", "Node", "NodeId", "NodeKind", "NodeStore"]
