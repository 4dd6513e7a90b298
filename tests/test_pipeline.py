import random
from dataclasses import replace

import pytest

from linmotion_quiz.builders import all_builders, get_builder
from linmotion_quiz.config import ConfigError, QuizConfig
from linmotion_quiz.models import CorrectAnswer, Option, Question
from linmotion_quiz.pipeline import (
    QuestionInvariantError, QuizSession, QuizState, build_options, check_question,
    generate_batch, generate_next, record_answer, resolve_registry,
)
from linmotion_quiz.score import ScoreStore
from linmotion_quiz.units import ensure_metadata


def _question(options, value=5):
    return ensure_metadata(Question(
        id="q", prompt="", correct_answer=CorrectAnswer(value, "m/s"), options=tuple(options),
    ))


# ── 测试模式 ──

def test_test_mode_visits_every_builder_once():
    rng = random.Random(0)
    state = QuizState()
    names = []
    for i in range(20):
        state, q = generate_next(state, rng, test_mode=True)
        assert q.sequence == i + 1
        names.append(q.builder)
    assert names == [e.name for e in all_builders()]
    assert state.sequence == 20

    # 第 21 题回到第一个构造器
    state, q = generate_next(state, rng, test_mode=True)
    assert q.builder == "table-rate"
    assert q.sequence == 21


def test_generate_next_does_not_mutate_state():
    state = QuizState(sequence=3, correct_count=2, current_streak=1)
    new_state, q = generate_next(state, random.Random(1))
    assert state == QuizState(sequence=3, correct_count=2, current_streak=1)
    assert new_state.sequence == 4
    assert new_state.correct_count == 2
    assert q.sequence == 4


def test_generate_next_with_restricted_registry():
    registry = [get_builder("vt-area")]
    _, q = generate_next(QuizState(), random.Random(2), registry=registry)
    assert q.builder == "vt-area"


def test_record_answer():
    state = QuizState(sequence=5, correct_count=2, current_streak=2)
    right = record_answer(state, True)
    assert (right.correct_count, right.current_streak) == (3, 3)
    wrong = record_answer(right, False)
    assert (wrong.correct_count, wrong.current_streak) == (3, 0)
    assert wrong.sequence == 5


# ── 阶段 ──

def test_build_options_keeps_fixed_options():
    fixed = (Option(1, "m/s", True, "A"), Option(2, "m/s", False, "B"), Option(3, "m/s", False, "C"))
    q = _question([], value=1)
    q = replace(q, fixed_options=fixed)
    built = build_options(q, random.Random(0))
    assert sorted(o.text for o in built.options) == ["A", "B", "C"]


def test_build_options_includes_provided_distractors():
    q = ensure_metadata(Question(
        id="q", prompt="", correct_answer=CorrectAnswer(10, "m"),
        answer_type="distance", distractors=(4,),
    ))
    built = build_options(q, random.Random(0))
    values = [o.value for o in built.options]
    assert 4 in values and 10 in values
    assert len(built.options) == 4


def test_check_question_accepts_valid():
    q = _question([Option(5, "m/s", True), Option(6, "m/s")])
    assert check_question(q) is q


def test_check_question_two_correct():
    q = _question([Option(5, "m/s", True), Option(6, "m/s", True)])
    with pytest.raises(QuestionInvariantError):
        check_question(q)


def test_check_question_no_correct():
    q = _question([Option(5, "m/s"), Option(6, "m/s")])
    with pytest.raises(QuestionInvariantError):
        check_question(q)


def test_check_question_duplicate_options():
    q = _question([Option(5, "m/s", True), Option(6, "m/s"), Option(6.0, "m/s")])
    with pytest.raises(QuestionInvariantError):
        check_question(q)


def test_check_question_value_mismatch():
    q = _question([Option(4, "m/s", True), Option(6, "m/s")])
    with pytest.raises(QuestionInvariantError):
        check_question(q)


# ── 批量 / 配置 ──

def test_generate_batch_is_reproducible():
    cfg = QuizConfig(seed=42, count=15)
    first = [q.to_dict() for q in generate_batch(cfg)]
    second = [q.to_dict() for q in generate_batch(cfg)]
    assert first == second
    assert [q["sequence"] for q in first] == list(range(1, 16))


def test_generate_batch_filters_family():
    cfg = QuizConfig(seed=1, count=10, families=["dual"])
    assert {q.family for q in generate_batch(cfg)} == {"dual"}


def test_generate_batch_filters_answer_type():
    cfg = QuizConfig(seed=1, count=10, answer_types=["time"])
    assert {q.builder for q in generate_batch(cfg)} == {"vt-stop"}


def test_resolve_registry_unknown_builder():
    with pytest.raises(ConfigError):
        resolve_registry(QuizConfig(builders=["nope"]))


def test_resolve_registry_empty_result():
    # dual 族里没有时间题
    with pytest.raises(ConfigError):
        resolve_registry(QuizConfig(families=["dual"], answer_types=["time"]))


# ── 会话 ──

def test_session_records_and_persists(tmp_path):
    store = ScoreStore(tmp_path / "stats.json")
    session = QuizSession(QuizConfig(seed=3, test_mode=True), store)
    q = session.next_question()
    assert session.answer(q.correct_index) is True
    assert (session.state.correct_count, session.state.current_streak) == (1, 1)
    assert store.load() == (1, 1)

    q = session.next_question()
    wrong = next(i for i, o in enumerate(q.options) if not o.is_correct)
    assert session.answer(wrong) is False
    assert store.load() == (1, 0)


def test_session_resumes_from_store(tmp_path):
    store = ScoreStore(tmp_path / "stats.json")
    store.save(7, 2)
    session = QuizSession(QuizConfig(seed=3), store)
    assert (session.state.correct_count, session.state.current_streak) == (7, 2)
    session.reset_score()
    assert store.load() == (0, 0)


def test_session_answer_errors():
    session = QuizSession(QuizConfig(seed=3))
    with pytest.raises(RuntimeError):
        session.answer(0)
    q = session.next_question()
    with pytest.raises(IndexError):
        session.answer(len(q.options))
    session.answer(0)
    with pytest.raises(RuntimeError):
        session.answer(0)
