import pytest

from wordsim.engine.cache import hash_expr
from wordsim.engine.expr import Expr, Match, expr_from_lists


def test_add_accumulates_weight_for_repeated_word() -> None:
    expr = Expr()
    expr.add(1.0, "king")
    expr.add(0.5, "king")
    expr.add(-1.0, "man")

    assert expr == {"king": 1.5, "man": -1.0}


def test_add_weighted_matches_add_all() -> None:
    x = Expr()
    y = Expr()

    x.add_weighted([0.1, 0.2], ["one", "two"])
    y.add_all(0.1, ["one", "two"])
    y.add_all(0.1, ["two"])

    assert x == y


def test_add_weighted_rejects_mismatched_lengths() -> None:
    with pytest.raises(ValueError):
        Expr().add_weighted([1.0], ["one", "two"])


def test_expr_from_lists_uses_plus_and_minus_one() -> None:
    expr = expr_from_lists("king,woman", "man")

    assert expr == {"king": 1.0, "woman": 1.0, "man": -1.0}


def test_expr_from_lists_skips_empty_items() -> None:
    assert expr_from_lists("", "") == {}
    assert expr_from_lists("a,,b,", "") == {"a": 1.0, "b": 1.0}


def test_hash_expr_ignores_insertion_order() -> None:
    first = Expr()
    first.add(1.0, "a")
    first.add(2.0, "b")
    second = Expr()
    second.add(2.0, "b")
    second.add(1.0, "a")

    assert hash_expr(first) == hash_expr(second)
    assert hash_expr(first) != hash_expr({"a": 1.0, "b": 2.5})
    assert hash_expr({"ab": 1.0}) != hash_expr({"a": 1.0, "b": 1.0})


def test_match_to_dict() -> None:
    assert Match("hello", 1.0).to_dict() == {"word": "hello", "score": 1.0}


def test_hash_expr_keeps_word_and_weight_apart() -> None:
    assert hash_expr({"a1": 0.5}) != hash_expr({"a": 10.5})
    assert hash_expr({"a": 1.0, "b": 2.0}) != hash_expr({"a1.0b": 2.0})
