import pytest

from wordsim.engine.errors import EmptyExpressionError, NotFoundError
from wordsim.engine.expr import Match
from wordsim.engine.multi import multi_cos_n


def test_results_follow_input_order(animals_model) -> None:
    exprs = [{"car": 1.0}, {"cat": 1.0}, {"truck": 1.0}, {"wolf": 1.0}]

    results = multi_cos_n(animals_model, exprs, 2, max_workers=2)

    assert len(results) == 4
    assert [matches[0].word for matches in results] == ["car", "cat", "truck", "wolf"]
    for expr, matches in zip(exprs, results):
        assert matches == animals_model.cos_n(expr, 2)


def test_single_worker_gives_same_results(animals_model) -> None:
    exprs = [{"dog": 1.0}, {"dog": 1.0, "car": -1.0}]

    assert multi_cos_n(animals_model, exprs, 3, max_workers=1) == multi_cos_n(
        animals_model, exprs, 3
    )


def test_missing_word_fails_before_any_scan(animals_model, monkeypatch) -> None:
    def _fail_scan(vector):
        raise AssertionError("vocabulary must not be scanned")

    monkeypatch.setattr(animals_model, "_scores", _fail_scan)

    with pytest.raises(NotFoundError) as exc_info:
        multi_cos_n(animals_model, [{"cat": 1.0}, {"unicorn": 1.0}], 3)

    assert exc_info.value.word == "unicorn"


def test_empty_expression_fails_whole_call(animals_model) -> None:
    with pytest.raises(EmptyExpressionError):
        multi_cos_n(animals_model, [{"cat": 1.0}, {}], 3)


def test_zero_n_gives_empty_list_per_expression(animals_model) -> None:
    assert multi_cos_n(animals_model, [{"cat": 1.0}, {"dog": 1.0}], 0) == [[], []]


def test_negative_n_is_rejected(animals_model) -> None:
    with pytest.raises(ValueError):
        multi_cos_n(animals_model, [{"cat": 1.0}], -1)


def test_no_expressions_gives_no_results(animals_model) -> None:
    assert multi_cos_n(animals_model, [], 5) == []


def test_hello_world_queries_in_input_order(hello_world_model) -> None:
    results = multi_cos_n(hello_world_model, [{"hello": 1.0}, {"world": 1.0}], 1)

    assert results == [[Match("hello", 1.0)], [Match("world", 1.0)]]
