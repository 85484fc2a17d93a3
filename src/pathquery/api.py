from __future__ import annotations
from typing import Any, List, Optional

from .core.engine import Evaluator, PathLike
from .core.path import compile_path
from .core.tokens import CompiledPath

_default_evaluator: Optional[Evaluator] = None


def get_evaluator() -> Evaluator:
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = Evaluator()

    return _default_evaluator


def compile(text: str) -> CompiledPath:
    """Compile path text. Raises PathSyntaxError on malformed input."""
    return compile_path(text)


def evaluate(document: Any, path: PathLike) -> List[Any]:
    """
    Evaluate ``path`` against ``document``; both ``$`` and ``@`` anchor to it.

    >>> evaluate({"a": {"b": 42}}, "$.a.b")
    [42]
    >>> evaluate({"a": {"b": 42}}, "$.x.y")
    [None]
    """
    return get_evaluator().evaluate(document, path)


def evaluate_at(document: Any, item: Any, path: PathLike) -> List[Any]:
    """
    Evaluate ``path`` with ``$`` anchored to ``document`` and ``@`` to ``item``.

    >>> doc = {"a": {"b": 42}}
    >>> evaluate_at(doc, doc["a"], "@.b")
    [42]
    >>> evaluate_at(doc, doc["a"], "b")
    [42]
    """
    return get_evaluator().evaluate(document, path, item=item)
