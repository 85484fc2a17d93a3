from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence, Tuple, Union as TUnion

from .compare import Operator

NAME_PATTERN = r"[^\W\d][\w\-]*"
_NAME = re.compile(NAME_PATTERN)


class _OpenEnd:
    """Slice end that resolves to the length of the sliced array."""
    __slots__ = ()
    _instance: Optional["_OpenEnd"] = None

    def __new__(cls) -> "_OpenEnd":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "OPEN_END"

    def __reduce__(self):
        return (_OpenEnd, ())


OPEN_END = _OpenEnd()


def quote(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f"'{escaped}'"


def is_literal(value: Any) -> bool:
    if value is None or isinstance(value, (bool, int, str)):
        return True
    return isinstance(value, float) and math.isfinite(value)


def literal_text(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, str):
        return quote(value)
    return repr(value)


@dataclass(frozen=True)
class Root:
    def __str__(self) -> str:
        return "$"


@dataclass(frozen=True)
class CurrentItem:
    def __str__(self) -> str:
        return "@"


@dataclass(frozen=True)
class Access:
    key: TUnion[str, int]

    def __post_init__(self) -> None:
        if isinstance(self.key, bool) or not isinstance(self.key, (str, int)):
            raise ValueError(f"Access key must be a string or an integer, got {self.key!r}")

    def __str__(self) -> str:
        if isinstance(self.key, str) and _NAME.fullmatch(self.key):
            return f".{self.key}"
        return f"[{_selector_text(self)}]"


@dataclass(frozen=True)
class FilterAccess:
    op: Operator
    subpath: "CompiledPath"
    literal: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", Operator(self.op))
        if isinstance(self.subpath, str):
            from .path import compile_path
            object.__setattr__(self, "subpath", compile_path(self.subpath))
        elif not isinstance(self.subpath, CompiledPath):
            object.__setattr__(self, "subpath", CompiledPath(tuple(self.subpath)))
        if not self.subpath.tokens:
            raise ValueError("FilterAccess subpath must not be empty.")
        if not is_literal(self.literal):
            raise ValueError(
                f"Filter literal must be null, a boolean, an integer, a finite float or a string, got {self.literal!r}"
            )

    def __str__(self) -> str:
        return f"[{_selector_text(self)}]"


@dataclass(frozen=True)
class RecursiveDescent:
    key: str

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ValueError(f"RecursiveDescent key must be a non-empty string, got {self.key!r}")

    def __str__(self) -> str:
        if _NAME.fullmatch(self.key):
            return f"..{self.key}"
        return f"..[{quote(self.key)}]"


@dataclass(frozen=True)
class Slice:
    first: int = 0
    last: TUnion[int, _OpenEnd] = OPEN_END
    step: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.first, bool) or not isinstance(self.first, int):
            raise ValueError(f"Slice start must be an integer, got {self.first!r}")
        if self.last is not OPEN_END and (isinstance(self.last, bool) or not isinstance(self.last, int)):
            raise ValueError(f"Slice end must be an integer or OPEN_END, got {self.last!r}")
        if isinstance(self.step, bool) or not isinstance(self.step, int) or self.step <= 0:
            raise ValueError(f"Slice step must be a positive integer, got {self.step!r}")

    def __str__(self) -> str:
        return f"[{_selector_text(self)}]"


@dataclass(frozen=True)
class Wildcard:
    def __str__(self) -> str:
        return "[*]"


@dataclass(frozen=True)
class Union:
    alternatives: Tuple["PathToken", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "alternatives", tuple(self.alternatives))
        if not self.alternatives:
            raise ValueError("Union needs at least one alternative.")
        for alternative in self.alternatives:
            if not isinstance(alternative, _SELECTOR_TYPES):
                raise ValueError(
                    f"Union alternatives must be Access, Slice, Wildcard or FilterAccess tokens, got {alternative!r}"
                )

    def __str__(self) -> str:
        return "[" + ",".join(_selector_text(a) for a in self.alternatives) + "]"


PathToken = TUnion[Root, CurrentItem, Access, FilterAccess, RecursiveDescent, Slice, Wildcard, Union]

_TOKEN_TYPES = (Root, CurrentItem, Access, FilterAccess, RecursiveDescent, Slice, Wildcard, Union)
_SELECTOR_TYPES = (Access, Slice, Wildcard, FilterAccess)


def _selector_text(token: PathToken) -> str:
    """Render a token the way it appears between brackets."""
    if isinstance(token, Access):
        if isinstance(token.key, str):
            return quote(token.key)
        return str(token.key)

    if isinstance(token, Wildcard):
        return "*"

    if isinstance(token, Slice):
        last = "" if token.last is OPEN_END else str(token.last)
        text = f"{token.first}:{last}"
        if token.step != 1:
            text += f":{token.step}"
        return text

    if isinstance(token, FilterAccess):
        return f"?({token.subpath} {token.op.value} {literal_text(token.literal)})"

    return str(token)


@dataclass(frozen=True)
class CompiledPath:
    """
    Immutable sequence of path tokens. Reusable across evaluations and threads.
    """
    tokens: Tuple[PathToken, ...] = ()
    source: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))
        for token in self.tokens:
            if not isinstance(token, _TOKEN_TYPES):
                raise ValueError(f"Not a path token: {token!r}")

    @classmethod
    def of(cls, tokens: Sequence[PathToken], source: Optional[str] = None) -> "CompiledPath":
        if isinstance(tokens, CompiledPath):
            return tokens
        return cls(tuple(tokens), source)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[PathToken]:
        return iter(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]

    def __str__(self) -> str:
        return "".join(str(t) for t in self.tokens)
