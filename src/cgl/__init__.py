"""Arithmetic computation graphs with hints and equality constraints.

Build a DAG of u32 additions, multiplications and hinted values, fill it
from inputs, and check that the recorded equalities hold.
"""

__all__ = [
    "U32_MAX",
    "ArityMismatchError",
    "Builder",
    "CGLConfig",
    "CGLError",
    "CheckResult",
    "ConfigError",
    "Constraint",
    "ConstraintFailure",
    "ConstraintViolationError",
    "DependencyGraph",
    "FailureKind",
    "FillReport",
    "HintEvaluationError",
    "InvalidInputError",
    "InvalidNodeError",
    "InvalidReferenceError",
    "Node",
    "NodeKind",
    "Side",
    "UnresolvedNodeError",
    "ValueOutOfRangeError",
    "WriteOnceError",
    "get_config",
    "hint_fn",
    "load_config",
]

from ._builder import Builder
from ._check import CheckResult, ConstraintFailure, FailureKind, Side
from ._config import CGLConfig, get_config, load_config
from ._errors import (
    ArityMismatchError,
    CGLError,
    ConfigError,
    ConstraintViolationError,
    HintEvaluationError,
    InvalidInputError,
    InvalidNodeError,
    InvalidReferenceError,
    UnresolvedNodeError,
    ValueOutOfRangeError,
    WriteOnceError,
)
from ._eval_engine import FillReport
from ._graph import DependencyGraph
from ._hint import hint_fn
from ._ir import Constraint, Node, NodeKind
from ._scalar import U32_MAX
