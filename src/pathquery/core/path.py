from __future__ import annotations
import math
import re
from typing import Any, List, NamedTuple, Optional

from ..exceptions import PathSyntaxError
from .compare import Operator
from .tokens import (
    NAME_PATTERN, OPEN_END, Access, CompiledPath, CurrentItem, FilterAccess,
    PathToken, RecursiveDescent, Root, Slice, Union, Wildcard,
)

_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f",
    "/": "/", "\\": "\\", "'": "'", '"': '"',
}

_LITERAL_NAMES = {"true": True, "false": False, "null": None}


class Lexeme(NamedTuple):
    kind: str
    text: str
    pos: int


class PathCompiler:
    """
    Compile JSONPath text into a CompiledPath.

    Supported syntax:
      $ / @                  document root / current item
      .name  ['name']        child by key
      [N]                    array index (negative counts from the end)
      .* / [*]               wildcard
      ..name                 recursive descent
      [start:end:step]       slice, any part optional
      ['a','b'] / [0,2:4]    union of selectors
      [?(@.field OP lit)]    filter (==, !=, >, >=, <, <=)

    Examples:
      $.store.book[*].author
      $..price
      $.items[?(@.qty > 0)].sku
      name.first             (relative to the current item)
    """

    _lexeme = re.compile(
        r"(?P<ws>\s+)"
        r"|(?P<dotdot>\.\.)"
        r"|(?P<dot>\.)"
        r"|(?P<root>\$)"
        r"|(?P<current>@)"
        r"|(?P<star>\*)"
        r"|(?P<lbrack>\[)"
        r"|(?P<rbrack>\])"
        r"|(?P<lparen>\()"
        r"|(?P<rparen>\))"
        r"|(?P<question>\?)"
        r"|(?P<comma>,)"
        r"|(?P<colon>:)"
        r"|(?P<op>==|!=|<=|>=|<|>)"
        r"|(?P<number>-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)"
        r"|(?P<string>'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\")"
        r"|(?P<name>" + NAME_PATTERN + r")",
        re.UNICODE | re.DOTALL,
    )
    _integer = re.compile(r"-?\d+")

    def __init__(self, text: str) -> None:
        self._text = text
        self._lexemes = self.lex(text)
        self._index = 0

    @classmethod
    def compile(cls, text: str) -> CompiledPath:
        if not isinstance(text, str):
            raise TypeError(f"path must be a string, got {type(text).__name__}")
        if not text.strip():
            raise PathSyntaxError("Empty path", text, 0)
        parser = cls(text)
        tokens = parser._path()
        parser._expect("eof", "Unexpected trailing input")
        return CompiledPath(tuple(tokens), text)

    @classmethod
    def lex(cls, text: str) -> List[Lexeme]:
        out: List[Lexeme] = []
        pos = 0
        while pos < len(text):
            m = cls._lexeme.match(text, pos)
            if not m:
                if text[pos] in "'\"":
                    raise PathSyntaxError("Unterminated string literal", text, pos)
                raise PathSyntaxError(f"Unexpected character {text[pos]!r}", text, pos)

            kind = m.lastgroup
            if kind == "string":
                out.append(Lexeme(kind, cls._unescape(m.group(), text, pos), pos))
            elif kind != "ws":
                out.append(Lexeme(kind, m.group(), pos))
            pos = m.end()

        out.append(Lexeme("eof", "", len(text)))
        return out

    @staticmethod
    def _unescape(raw: str, text: str, pos: int) -> str:
        body = raw[1:-1]
        if "\\" not in body:
            return body

        chars: List[str] = []
        i = 0
        while i < len(body):
            ch = body[i]
            if ch != "\\":
                chars.append(ch)
                i += 1
                continue

            esc = body[i + 1]
            if esc == "u":
                digits = body[i + 2:i + 6]
                if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                    raise PathSyntaxError("Invalid unicode escape", text, pos + 1 + i)
                chars.append(chr(int(digits, 16)))
                i += 6
                continue

            if esc not in _ESCAPES:
                raise PathSyntaxError(f"Invalid escape sequence '\\{esc}'", text, pos + 1 + i)
            chars.append(_ESCAPES[esc])
            i += 2

        return "".join(chars)

    def _peek(self) -> Lexeme:
        return self._lexemes[self._index]

    def _advance(self) -> Lexeme:
        lx = self._lexemes[self._index]
        if lx.kind != "eof":
            self._index += 1
        return lx

    def _accept(self, kind: str) -> Optional[Lexeme]:
        if self._peek().kind == kind:
            return self._advance()
        return None

    def _expect(self, kind: str, message: str) -> Lexeme:
        lx = self._accept(kind)
        if lx is None:
            self._fail(message)
        return lx

    def _fail(self, message: str) -> None:
        lx = self._peek()
        found = "end of path" if lx.kind == "eof" else repr(lx.text)
        raise PathSyntaxError(f"{message}, found {found}", self._text, lx.pos)

    def _path(self) -> List[PathToken]:
        tokens: List[PathToken] = []
        if self._accept("root"):
            tokens.append(Root())
        elif self._accept("current"):
            tokens.append(CurrentItem())
        else:
            lx = self._accept("name")
            if lx is not None:
                tokens.append(Access(lx.text))

        tokens.extend(self._segments())
        if not tokens:
            self._fail("Expected '$', '@', a name or a segment")
        return tokens

    def _segments(self) -> List[PathToken]:
        tokens: List[PathToken] = []
        while True:
            if self._accept("dot"):
                if self._accept("star"):
                    tokens.append(Wildcard())
                    continue
                lx = self._expect("name", "Expected a name or '*' after '.'")
                tokens.append(Access(lx.text))

            elif self._accept("dotdot"):
                lx = self._accept("name")
                if lx is None:
                    self._expect("lbrack", "Expected a name after '..'")
                    lx = self._expect("string", "Expected a quoted key after '..['")
                    if not lx.text:
                        raise PathSyntaxError("Recursive descent key must not be empty", self._text, lx.pos)
                    self._expect("rbrack", "Expected ']'")
                tokens.append(RecursiveDescent(lx.text))

            elif self._accept("lbrack"):
                selectors = [self._selector()]
                while self._accept("comma"):
                    selectors.append(self._selector())
                self._expect("rbrack", "Expected ']' or ','")
                tokens.append(selectors[0] if len(selectors) == 1 else Union(tuple(selectors)))

            else:
                return tokens

    def _selector(self) -> PathToken:
        if self._accept("star"):
            return Wildcard()

        if self._accept("question"):
            self._expect("lparen", "Expected '(' after '?'")
            token = self._filter()
            self._expect("rparen", "Expected ')' to close the filter")
            return token

        lx = self._accept("string")
        if lx is not None:
            return Access(lx.text)

        first: Optional[int] = None
        if self._peek().kind == "number":
            first = self._int()

        if not self._accept("colon"):
            if first is None:
                self._fail("Expected a key, an index, a slice, '*' or a filter")
            return Access(first)

        last: Any = OPEN_END
        if self._peek().kind == "number":
            last = self._int()

        step = 1
        if self._accept("colon") and self._peek().kind == "number":
            pos = self._peek().pos
            step = self._int()
            if step <= 0:
                raise PathSyntaxError("Slice step must be a positive integer", self._text, pos)

        return Slice(0 if first is None else first, last, step)

    def _int(self) -> int:
        lx = self._advance()
        if not self._integer.fullmatch(lx.text):
            raise PathSyntaxError(f"Expected an integer, found {lx.text!r}", self._text, lx.pos)
        return int(lx.text)

    def _filter(self) -> FilterAccess:
        subpath = self._path()
        op = self._expect("op", "Expected a comparison operator")
        literal = self._literal()
        return FilterAccess(Operator(op.text), CompiledPath(tuple(subpath)), literal)

    def _literal(self) -> Any:
        lx = self._peek()
        if lx.kind == "number":
            self._advance()
            if self._integer.fullmatch(lx.text):
                return int(lx.text)
            value = float(lx.text)
            if not math.isfinite(value):
                raise PathSyntaxError(f"Number {lx.text!r} is out of range", self._text, lx.pos)
            return value

        if lx.kind == "string":
            self._advance()
            return lx.text

        if lx.kind == "name" and lx.text in _LITERAL_NAMES:
            self._advance()
            return _LITERAL_NAMES[lx.text]

        self._fail("Expected a number, a string, true, false or null")


def compile_path(text: str) -> CompiledPath:
    return PathCompiler.compile(text)
