from __future__ import annotations
from enum import Enum
from typing import Any

from .types import Kind, kind_of

_ORDERED = {Kind.NUMBER, Kind.STRING, Kind.BOOL}


class Operator(str, Enum):
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    EQ = "=="
    NE = "!="


def values_equal(a: Any, b: Any) -> bool:
    ka, kb = kind_of(a), kind_of(b)
    if ka is None or ka != kb:
        return False

    if ka is Kind.ARRAY:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))

    if ka is Kind.OBJECT:
        if a.keys() != b.keys():
            return False
        return all(values_equal(v, b[k]) for k, v in a.items())

    try:
        return bool(a == b)
    except ArithmeticError:
        return False


def compare(op: Operator, left: Any, right: Any) -> bool:
    """
    Apply a filter operator. Equality is defined for every pair of values;
    ordering only holds between two numbers, two strings or two booleans and
    is False for any other pair.
    """
    op = Operator(op)
    if op is Operator.EQ:
        return values_equal(left, right)
    if op is Operator.NE:
        return not values_equal(left, right)

    kl = kind_of(left)
    if kl not in _ORDERED or kl != kind_of(right):
        return False

    # Decimal NaN signals on ordering; complex does not order at all
    try:
        if op is Operator.GT:
            return left > right
        if op is Operator.GE:
            return left >= right
        if op is Operator.LT:
            return left < right
        return left <= right
    except (TypeError, ArithmeticError):
        return False
