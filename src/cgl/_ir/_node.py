"""Node and constraint specifications."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

type NodeId = int
type HintFunction = Callable[[Sequence[int]], int]


class NodeKind(StrEnum):
    """The kind of node in the computation graph."""

    INPUT = auto()  # Supplied by the caller at fill time
    CONSTANT = auto()  # Resolved at construction
    ADD = auto()
    MUL = auto()
    HINT = auto()  # Computed by an opaque function of its dependencies

    @property
    def binary(self) -> bool:
        """Whether nodes of this kind take exactly two parents."""
        return self in (NodeKind.ADD, NodeKind.MUL)


@dataclass(frozen=True, slots=True)
class Node:
    """Structure of a single node.

    A node never changes after creation; its value is tracked separately by
    the NodeStore so that the structure can stay immutable.

    Attributes:
        id: Creation index of the node.
        kind: What the node computes.
        parents: Ids of the nodes this node depends on, in order. Every parent
            id is strictly smaller than ``id``.
        constant: The value of a CONSTANT node, None otherwise.
        compute: The function of a HINT node, None otherwise.
        name: Optional caption shown in diagnostics.

    """

    id: NodeId
    kind: NodeKind
    parents: tuple[NodeId, ...] = ()
    constant: int | None = None
    compute: HintFunction | None = None
    name: str | None = None

    @property
    def label(self) -> str:
        """Short description such as ``#3 mul`` or ``#0 input 'x'``."""
        text = f"#{self.id} {self.kind}"
        if self.name is not None:
            text += f" {self.name!r}"
        return text


@dataclass(frozen=True, slots=True)
class Constraint:
    """Equality that must hold between two resolved node values."""

    left: NodeId
    right: NodeId
