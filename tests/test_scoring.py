"""Tests for the scoring engine and recognize()."""

import math

import pytest

from conftest import arc_points, circle_points, line_points
from recognizer.params import RecognizerParams
from recognizer.scoring import UNKNOWN, RecognitionResult, ShapeRecognizer, distance_to_score
from recognizer.template_store import TemplateStore


def test_half_diagonal_default():
    assert RecognizerParams().half_diagonal == pytest.approx(0.5 * math.sqrt(2 * 250.0 ** 2))


def test_distance_to_score_scale(params):
    assert distance_to_score(0.0, params) == 1.0
    assert distance_to_score(params.half_diagonal, params) == pytest.approx(0.0)
    assert distance_to_score(2 * params.half_diagonal, params) < 0.0


def test_line_right_scenario(recognizer):
    stroke = [(0, 0), (10, 1), (50, 0), (100, -1), (150, 0)]
    res = recognizer.recognize(stroke)
    assert res.name == "line_right"
    assert res.score >= 0.6
    assert res.recognized


def test_opposite_direction_is_discriminated(recognizer):
    stroke = [(0, 0), (-40, 0), (-80, 1), (-120, 0), (-150, 0)]
    shape = recognizer.process(stroke)
    right = recognizer.score(shape, recognizer.store.get("line_right").points)
    left = recognizer.score(shape, recognizer.store.get("line_left").points)
    assert left > 0.9
    assert right < 0.5
    assert recognizer.recognize(stroke).name == "line_left"


def test_closed_shape_traced_in_reverse_matches(store):
    store.add("circle", circle_points(start_deg=0.0))
    rec = ShapeRecognizer(store)
    # 从对面起笔、反方向描一圈
    reverse = circle_points(start_deg=180.0)[::-1]
    shape = rec.process(reverse)
    assert rec.score(shape, store.get("circle").points) > 0.9
    assert rec.recognize(reverse).name == "circle"


def test_degenerate_stroke_is_rejected_before_scoring(recognizer):
    assert recognizer.recognize([(5, 5), (5, 6), (5, 5)]) == RecognitionResult(UNKNOWN, 0.0)


def test_stroke_that_collapses_after_filtering_is_rejected(recognizer):
    dwell = [(5, 5), (5.5, 5), (5, 5.5), (6, 6), (5, 5), (5.2, 5.1)]
    assert recognizer.recognize(dwell) == RecognitionResult(UNKNOWN, 0.0)


def test_empty_store_is_always_unknown(store):
    rec = ShapeRecognizer(store)
    res = rec.recognize(line_points((0, 0), (150, 0)))
    assert res.name == UNKNOWN
    assert res.score == float("-inf")
    assert not res.recognized


def test_below_threshold_returns_unknown_with_best_score(line_store):
    strict = RecognizerParams(score_threshold=0.999)
    rec = ShapeRecognizer(line_store, strict)
    res = rec.recognize([(0, 0), (40, 30), (80, -30), (120, 30), (160, 0)])
    assert res.name == UNKNOWN
    assert res.score < 0.999
    assert res.score > float("-inf")


def test_resampling_is_density_invariant(params):
    rec = ShapeRecognizer(TemplateStore(params))
    sparse = rec.process(arc_points(n=10))
    dense = rec.process(arc_points(n=1000))
    assert rec.score(sparse, dense) >= 0.95


def test_identical_shape_scores_near_one(params):
    rec = ShapeRecognizer(TemplateStore(params))
    shape = rec.process(circle_points())
    assert rec.score(shape, shape) > 0.98


def test_tie_returns_one_of_the_tied_names(store):
    pts = line_points((0, 0), (150, 0))
    store.add("a", pts)
    store.add("b", pts)
    res = ShapeRecognizer(store).recognize(pts)
    assert res.name in ("a", "b")


def test_rank_sorted_best_first(recognizer):
    ranking = recognizer.rank([(0, 0), (10, 1), (50, 0), (100, -1), (150, 0)])
    assert [name for name, _ in ranking] == ["line_right", "line_left"]
    assert ranking[0][1] >= ranking[1][1]


def test_rank_empty_for_rejected_stroke(recognizer):
    assert recognizer.rank([(1, 1), (2, 2)]) == []


def test_recognize_does_not_mutate_stroke(recognizer):
    stroke = [(0, 0), (10, 1), (50, 0), (100, -1), (150, 0)]
    before = list(stroke)
    recognizer.recognize(stroke)
    assert stroke == before


def test_templates_are_not_reprocessed_while_scoring(line_store, monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("template reprocessed")

    monkeypatch.setattr("recognizer.template_store.normalize_trajectory", boom)
    res = ShapeRecognizer(line_store).recognize([(0, 0), (10, 1), (50, 0), (100, -1), (150, 0)])
    assert res.name == "line_right"


def test_recognizer_uses_store_params_by_default():
    p = RecognizerParams(num_points=32)
    rec = ShapeRecognizer(TemplateStore(p))
    assert rec.params is p


def test_recognize_rejects_non_finite_stroke(recognizer):
    with pytest.raises(ValueError):
        recognizer.recognize([(0, 0), (10, 0), (20, 0), (float("inf"), 0), (40, 0)])


def test_analyze_processes_and_scores_once(line_store, monkeypatch):
    rec = ShapeRecognizer(line_store)
    calls = {"process": 0, "score": 0}
    real_process, real_score = rec.process, rec.score

    def counting_process(stroke):
        calls["process"] += 1
        return real_process(stroke)

    def counting_score(shape, template):
        calls["score"] += 1
        return real_score(shape, template)

    monkeypatch.setattr(rec, "process", counting_process)
    monkeypatch.setattr(rec, "score", counting_score)

    shape, res, ranking = rec.analyze([(0, 0), (10, 1), (50, 0), (100, -1), (150, 0)])
    assert calls == {"process": 1, "score": len(line_store)}
    assert shape.shape == (rec.params.num_points, 2)
    assert res.name == "line_right"
    assert ranking[0] == (res.name, res.score)


def test_analyze_rejected_and_empty_store(store):
    rec = ShapeRecognizer(store)
    assert rec.analyze([(1, 1), (2, 2)]) == (None, RecognitionResult(UNKNOWN, 0.0), [])
    shape, res, ranking = rec.analyze(line_points((0, 0), (100, 0)))
    assert shape is not None
    assert res == RecognitionResult(UNKNOWN, -math.inf)
    assert ranking == []
