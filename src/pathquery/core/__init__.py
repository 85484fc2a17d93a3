from .types import Json, Kind, MISSING, kind_of, child, children, size, is_collection
from .compare import Operator, compare, values_equal
from .tokens import (
    OPEN_END, Access, CompiledPath, CurrentItem, FilterAccess, PathToken,
    RecursiveDescent, Root, Slice, Union, Wildcard,
)
from .path import PathCompiler, compile_path
from .engine import EngineConfig, Evaluator
from .builder.path import PathBuilder
from .models import ExplodeSpec, SelectionSpec
from .frame import FrameSelector
from .frame import DataFrameBackend, PandasBackend

__all__ = [
    "Json",
    "Kind",
    "MISSING",
    "kind_of",
    "child",
    "children",
    "size",
    "is_collection",
    "Operator",
    "compare",
    "values_equal",
    "OPEN_END",
    "Access",
    "CompiledPath",
    "CurrentItem",
    "FilterAccess",
    "PathToken",
    "RecursiveDescent",
    "Root",
    "Slice",
    "Union",
    "Wildcard",
    "PathCompiler",
    "compile_path",
    "EngineConfig",
    "Evaluator",
    "PathBuilder",
    "ExplodeSpec",
    "SelectionSpec",
    "FrameSelector",
    "DataFrameBackend",
    "PandasBackend",
]
