import pytest

from pathquery.core.compare import Operator, compare, values_equal


def test_numeric_ordering() -> None:
    assert compare(">", 2, 1) is True
    assert compare(">=", 2, 2) is True
    assert compare("<", 1, 2.5) is True
    assert compare("<=", 3, 2) is False
    assert compare(Operator.GT, 10, 9.99) is True


def test_string_and_bool_ordering() -> None:
    assert compare("<", "apple", "banana") is True
    assert compare(">", "b", "B") is True
    assert compare("<", False, True) is True
    assert compare(">=", True, True) is True


def test_ordering_across_kinds_fails_the_predicate() -> None:
    assert compare(">", "10", 5) is False
    assert compare("<", 5, "10") is False
    assert compare(">", True, 0) is False
    assert compare("<", None, 1) is False
    assert compare("<=", None, None) is False
    assert compare("<", [1], [2]) is False
    assert compare(">", {"a": 2}, {"a": 1}) is False


def test_equality_is_kind_aware() -> None:
    assert compare("==", 1, 1.0) is True
    assert compare("==", 1, True) is False
    assert compare("==", 0, False) is False
    assert compare("!=", 1, "1") is True
    assert compare("==", None, None) is True
    assert compare("!=", None, 0) is True


def test_structural_equality() -> None:
    assert values_equal({"a": [1, 2], "b": None}, {"b": None, "a": [1, 2]}) is True
    assert values_equal([1, [True]], [1, [1]]) is False
    assert values_equal({"a": 1}, {"a": 1, "b": 2}) is False
    assert values_equal([1, 2], (1, 2)) is True


def test_unknown_operator_is_rejected() -> None:
    with pytest.raises(ValueError):
        compare("~=", "a", "a")


def test_decimal_and_other_numbers() -> None:
    from decimal import Decimal

    assert compare("==", Decimal("2.5"), 2.5) is True
    assert compare(">", Decimal("3"), 2) is True
    assert compare("<", Decimal("NaN"), 1) is False
    assert compare(">", complex(1, 0), 0) is False
