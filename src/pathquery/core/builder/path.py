from __future__ import annotations
from typing import Any, List, Optional, Union as TUnion

from ..compare import Operator
from ..path import compile_path
from ..tokens import (
    OPEN_END, Access, CompiledPath, CurrentItem, FilterAccess, PathToken,
    RecursiveDescent, Root, Slice, Union, Wildcard,
)


class PathBuilder:
    """
    Fluent construction of compiled paths without going through path text.

    Example:
        >>> PathBuilder().root().key("items").where("@.qty", ">", 0).key("sku").build()
    """
    __slots__ = ("_tokens",)

    def __init__(self, initial: Optional[List[PathToken]] = None) -> None:
        self._tokens: List[PathToken] = list(initial or [])

    @staticmethod
    def _as_path(x: Any) -> CompiledPath:
        if isinstance(x, PathBuilder):
            return x.build()
        if isinstance(x, CompiledPath):
            return x
        if isinstance(x, str):
            return compile_path(x)
        raise ValueError("subpath must be path text, a PathBuilder or a CompiledPath.")

    def _push(self, token: PathToken) -> "PathBuilder":
        self._tokens.append(token)
        return self

    def root(self) -> "PathBuilder":
        return self._push(Root())

    def current(self) -> "PathBuilder":
        return self._push(CurrentItem())

    def key(self, name: str) -> "PathBuilder":
        if not isinstance(name, str):
            raise ValueError("key() requires a string.")
        return self._push(Access(name))

    def index(self, at: int) -> "PathBuilder":
        if isinstance(at, bool) or not isinstance(at, int):
            raise ValueError("index() requires an integer.")
        return self._push(Access(at))

    def wildcard(self) -> "PathBuilder":
        return self._push(Wildcard())

    def descend(self, name: str) -> "PathBuilder":
        if not name or not isinstance(name, str):
            raise ValueError("descend() requires a non-empty string.")
        return self._push(RecursiveDescent(name))

    def slice(self, first: int = 0, last: Optional[int] = None, step: int = 1) -> "PathBuilder":
        return self._push(Slice(first, OPEN_END if last is None else last, step))

    def union(self, *keys: TUnion[str, int]) -> "PathBuilder":
        if not keys:
            raise ValueError("union() needs at least one key.")
        return self._push(Union(tuple(Access(k) for k in keys)))

    def where(self, subpath: Any, op: str, literal: Any) -> "PathBuilder":
        try:
            operator = Operator(op)
        except ValueError:
            raise ValueError(f"where(op=...) must be one of {[o.value for o in Operator]}.") from None
        return self._push(FilterAccess(operator, self._as_path(subpath), literal))

    def build(self) -> CompiledPath:
        return CompiledPath(tuple(self._tokens))
