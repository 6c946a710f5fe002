"""Evaluation engine module for cgl.

The engine fills a NodeStore from caller inputs by repeated passes until a
fixpoint is reached.

Key types:
- FillReport: Outcome of a fill run
- fill: Resolve every node reachable from the supplied inputs
"""

from ._engine import FillReport, Inputs, fill

__all__ = ["FillReport", "Inputs", "fill"]
