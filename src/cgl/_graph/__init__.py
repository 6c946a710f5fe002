"""Graph module providing a dependency view over node ids.

This module contains:
- DependencyGraph[T]: A generic, immutable directed acyclic graph
"""

from ._dependency_graph import DependencyGraph

__all__ = ["DependencyGraph"]
