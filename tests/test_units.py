import random

import pytest

from linmotion_quiz.builders import get_builder
from linmotion_quiz.formatting import format_answer
from linmotion_quiz.models import (
    AnswerUnit, CorrectAnswer, Point, Question, TableRepresentation, VtGraph, XtGraph,
)
from linmotion_quiz.pipeline import run_stages
from linmotion_quiz.units import (
    CM, CM_PER_S, KM, KMH, M_PER_MIN, MINUTES, apply_unit_strategy, ensure_metadata,
    pick_unit_transform, update_explanation,
)

# (序号, 答案类型, 期望的换算)
RULE_CASES = [
    (7, "speed", KMH),
    (14, "speed", KMH),
    (28, "speed", KMH),          # 7 优先于 4
    (6, "distance", KM),
    (12, "distance", KM),        # 6 优先于 3
    (5, "speed", M_PER_MIN),
    (4, "speed", CM_PER_S),
    (3, "distance", CM),
    (2, "time", MINUTES),
    (1, "speed", None),
    (2, "speed", None),
    (6, "speed", None),
    (7, "distance", None),
    (6, "equation", None),
    (42, "equation", None),
]


@pytest.mark.parametrize("sequence,answer_type,expected", RULE_CASES)
def test_unit_rules(sequence, answer_type, expected):
    assert pick_unit_transform(sequence, answer_type) is expected


def test_unit_rule_is_pure():
    for n in range(1, 50):
        for t in ("speed", "distance", "time", "equation"):
            assert pick_unit_transform(n, t) is pick_unit_transform(n, t)


def _speed_question(rep):
    return ensure_metadata(Question(
        id="q", prompt="", correct_answer=CorrectAnswer(5, "m/s"),
        representation=rep, answer_type="speed", explanation="בסיס",
    ))


def test_ensure_metadata_defaults():
    q = ensure_metadata(Question(
        id="q", prompt="", correct_answer=CorrectAnswer(3, "s"), explanation="הסבר",
    ))
    assert q.answer_type == "speed"
    assert q.base_unit == "s"
    assert q.correct_value == 3
    assert q.explanation_base == "הסבר"
    assert q.answer_unit == AnswerUnit(1.0, "s")


def test_kmh_scales_velocity_graph_only():
    vt = _speed_question(VtGraph(points=(Point(0, 5), Point(3, 5)), max_time=3))
    converted = apply_unit_strategy(7, vt)
    assert converted.answer_unit == AnswerUnit(3.6, "km/h")
    assert converted.representation.points[0].value == pytest.approx(18)
    assert converted.representation.y_label == "v (km/h)"

    xt = _speed_question(XtGraph(points=(Point(0, 0), Point(4, 20))))
    converted = apply_unit_strategy(7, xt)
    assert converted.answer_unit.label == "km/h"
    assert converted.representation == xt.representation


def test_m_per_min_rescales_time_axis():
    xt = _speed_question(XtGraph(points=(Point(0, 0), Point(120, 600)), max_time=120))
    converted = apply_unit_strategy(5, xt)
    rep = converted.representation
    assert rep.x_label == "t (min)"
    assert rep.max_time == pytest.approx(2)
    assert rep.points[1].value == 600
    assert converted.answer_unit.label == "m/min"


def test_no_rule_leaves_question_unchanged():
    q = _speed_question(XtGraph(points=(Point(0, 0), Point(4, 20))))
    assert apply_unit_strategy(1, q) is q


def test_update_explanation_appends_conversion():
    q = apply_unit_strategy(7, _speed_question(None))
    q = update_explanation(q)
    assert q.explanation == "בסיס (18 km/h = 5 m/s)"


def test_update_explanation_without_conversion():
    q = update_explanation(_speed_question(None))
    assert q.explanation == "בסיס"


def test_update_explanation_skips_text_answers():
    q = ensure_metadata(Question(
        id="q", prompt="", correct_answer=CorrectAnswer(5, "m/s", "גוף B"),
        answer_type="speed", explanation="בסיס",
    ))
    q = update_explanation(apply_unit_strategy(7, q))
    assert q.explanation == "בסיס"


# ── 换算后图像读数与答案一致 ──

def _stage(name, sequence, seed):
    rng = random.Random(seed)
    return run_stages(get_builder(name).build(rng), sequence, rng)


def test_vt_area_in_km_matches_answer():
    for seed in range(10):
        q = _stage("vt-area", 6, seed)
        rep = q.representation
        area = rep.points[0].value * rep.max_time
        assert q.answer_unit.label == "km"
        assert rep.y_label == "v (km/s)"
        assert area == pytest.approx(q.correct_value * q.answer_unit.multiplier)


def test_vt_area_in_cm_matches_answer():
    q = _stage("vt-area", 3, 1)
    rep = q.representation
    assert rep.points[0].value * rep.max_time == pytest.approx(q.correct_value * 100)


def test_xt_constant_in_m_per_min_matches_answer():
    for seed in range(10):
        q = _stage("xt-constant", 5, seed)
        first, last = q.representation.points
        slope = (last.value - first.value) / (last.t - first.t)
        assert slope == pytest.approx(q.correct_value * 60)


def test_vt_stop_in_minutes_matches_answer():
    for seed in range(10):
        q = _stage("vt-stop", 2, seed)
        first, last = q.representation.points
        # 直线与 v=0 的交点
        zero_time = first.t + (0 - first.value) * (last.t - first.t) / (last.value - first.value)
        assert zero_time == pytest.approx(q.correct_value / 60)
        assert q.representation.x_label == "t (min)"


def test_m_per_min_keeps_table_in_seconds():
    rng = random.Random(0)
    q = get_builder("table-rate").build(rng, speed=5, start=2, times=[0, 1, 2, 4])
    q = run_stages(q, 5, rng)
    assert q.answer_unit.label == "m/min"
    assert q.representation.headers == ("t (s)", "x (m)")
    assert q.representation.rows == (("0", "2"), ("1", "7"), ("2", "12"), ("4", "22"))
    assert format_answer(q) == "300 m/min"


def test_minutes_still_scale_tables():
    table = TableRepresentation(rows=(("0", "0"), ("60", "5")))
    q = ensure_metadata(Question(
        id="q", prompt="", correct_answer=CorrectAnswer(60, "s"),
        representation=table, answer_type="time",
    ))
    rep = apply_unit_strategy(2, q).representation
    assert rep.headers == ("t (min)", "x (m)")
    assert float(rep.rows[1][0]) == pytest.approx(1)
    assert rep.rows[1][1] == "5"
