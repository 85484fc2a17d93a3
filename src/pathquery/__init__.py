from .exceptions import PathQueryError, PathSyntaxError, SelectionError
from .api import compile, evaluate, evaluate_at, get_evaluator
from .core import (
    MISSING, OPEN_END, Access, CompiledPath, CurrentItem, EngineConfig, Evaluator,
    FilterAccess, FrameSelector, Operator, PathBuilder, RecursiveDescent, Root,
    SelectionSpec, Slice, Union, Wildcard,
)

__all__ = [
    "PathQueryError",
    "PathSyntaxError",
    "SelectionError",
    "compile",
    "evaluate",
    "evaluate_at",
    "get_evaluator",
    "MISSING",
    "OPEN_END",
    "Access",
    "CompiledPath",
    "CurrentItem",
    "EngineConfig",
    "Evaluator",
    "FilterAccess",
    "FrameSelector",
    "Operator",
    "PathBuilder",
    "RecursiveDescent",
    "Root",
    "SelectionSpec",
    "Slice",
    "Union",
    "Wildcard",
]
