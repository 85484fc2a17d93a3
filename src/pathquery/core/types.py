from __future__ import annotations
from enum import Enum
from numbers import Number
from typing import Any, Dict, Iterator, List, Optional, Union

Json = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class Kind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class _Missing:
    """Absence marker produced by failed navigation."""
    __slots__ = ()
    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


def kind_of(value: Any) -> Optional[Kind]:
    # bool first: it subclasses int
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, Number):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    if isinstance(value, dict):
        return Kind.OBJECT
    return None


def is_collection(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def child(value: Any, key: Union[str, int]) -> Any:
    """
    Look up one child of ``value``.

    Objects take string keys, arrays take integer indices (negative indices
    count from the end). Anything else yields MISSING rather than raising.
    """
    if isinstance(value, dict):
        if isinstance(key, str) and key in value:
            return value[key]
        return MISSING

    if isinstance(value, (list, tuple)):
        if isinstance(key, bool) or not isinstance(key, int):
            return MISSING
        if -len(value) <= key < len(value):
            return value[key]
        return MISSING

    return MISSING


def children(value: Any) -> Iterator[Any]:
    # objects enumerate in insertion order
    if isinstance(value, dict):
        return iter(value.values())
    if isinstance(value, (list, tuple)):
        return iter(value)
    return iter(())


def size(value: Any) -> int:
    if isinstance(value, (dict, list, tuple)):
        return len(value)
    return 0
