"""
出题流水线。

generate_next 选出构造器并依次执行纯函数阶段：
    ensure_metadata → apply_unit_strategy → build_options → update_explanation
每个阶段接收并返回新的 Question；最后由 check_question 校验题目不变量。
"""
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass, replace
from linmotion_quiz.builders import BuilderEntry, all_builders, filter_builders
from linmotion_quiz.config import ConfigError, QuizConfig
from linmotion_quiz.distractors import DistractorSynthesizer
from linmotion_quiz.models import Option, Question
from linmotion_quiz.score import ScoreStore
from linmotion_quiz.units import apply_unit_strategy, ensure_metadata, update_explanation

logger = logging.getLogger(__name__)

VALUE_TOLERANCE = 1e-9


class QuestionInvariantError(Exception):
    """题目生成后违反不变量，属于程序缺陷"""


@dataclass(frozen=True)
class QuizState:
    sequence: int = 0            # 已生成的题目数
    correct_count: int = 0
    current_streak: int = 0


# ── 阶段 ──

def build_options(question: Question, rng: random.Random) -> Question:
    if question.fixed_options:
        options = list(question.fixed_options)
    else:
        correct = Option(
            value=question.correct_answer.value,
            unit=question.base_unit,
            is_correct=True,
            text=question.correct_answer.text,
        )
        provided = [Option(value=v, unit=question.base_unit) for v in question.distractors]
        existing = [correct, *provided]
        generated = DistractorSynthesizer(rng).synthesize(correct, question, existing)
        options = existing + generated
    rng.shuffle(options)
    return replace(question, options=tuple(options))


def _same_value(a, b) -> bool:
    if isinstance(a, str) or isinstance(b, str):
        return a == b
    return math.isclose(float(a), float(b), rel_tol=0, abs_tol=VALUE_TOLERANCE)


def check_question(question: Question) -> Question:
    correct = question.correct_options
    if len(correct) != 1:
        raise QuestionInvariantError(
            f"题目 {question.id} 应有且仅有一个正确选项，实际 {len(correct)} 个"
        )
    keys = [opt.dedup_key() for opt in question.options]
    if len(set(keys)) != len(keys):
        raise QuestionInvariantError(f"题目 {question.id} 存在重复选项: {keys}")
    if not _same_value(correct[0].value, question.correct_value):
        raise QuestionInvariantError(
            f"题目 {question.id} 正确选项 {correct[0].value!r} 与答案 {question.correct_value!r} 不一致"
        )
    if correct[0].display_unit is not None and correct[0].display_unit != question.answer_unit:
        raise QuestionInvariantError(f"题目 {question.id} 正确选项的显示单位与题目不一致")
    return question


def run_stages(question: Question, sequence: int, rng: random.Random) -> Question:
    question = ensure_metadata(question, question.answer_type or "speed")
    question = apply_unit_strategy(sequence, question)
    question = build_options(question, rng)
    question = update_explanation(question)
    return check_question(replace(question, sequence=sequence))


# ── 入口 ──

def pick_builder(state: QuizState, rng: random.Random, registry: list[BuilderEntry],
                 test_mode: bool = False) -> BuilderEntry:
    if not registry:
        raise ConfigError("没有可用的题目构造器")
    if test_mode:
        return registry[state.sequence % len(registry)]
    return rng.choice(registry)


def generate_next(
    state: QuizState,
    rng: random.Random,
    *,
    test_mode: bool = False,
    registry: list[BuilderEntry] | None = None,
) -> tuple[QuizState, Question]:
    registry = registry if registry is not None else all_builders()
    entry = pick_builder(state, rng, registry, test_mode)
    sequence = state.sequence + 1
    question = run_stages(entry.build(rng), sequence, rng)
    logger.debug("第 %d 题: %s (%s)", sequence, entry.name, question.id)
    return replace(state, sequence=sequence), question


def record_answer(state: QuizState, is_correct: bool) -> QuizState:
    if is_correct:
        return replace(
            state,
            correct_count=state.correct_count + 1,
            current_streak=state.current_streak + 1,
        )
    return replace(state, current_streak=0)


def resolve_registry(config: QuizConfig) -> list[BuilderEntry]:
    entries = all_builders()
    if config.builders:
        known = {e.name for e in entries}
        bad = set(config.builders) - known
        if bad:
            raise ConfigError(f"未知构造器: {sorted(bad)}")
    result = filter_builders(entries, config.families, config.answer_types, config.builders)
    if not result:
        raise ConfigError("过滤条件下没有可用的题目构造器")
    return result


def generate_batch(config: QuizConfig) -> list[Question]:
    rng = random.Random(config.seed)
    registry = resolve_registry(config)
    state = QuizState()
    questions = []
    for _ in range(config.count):
        state, question = generate_next(state, rng, test_mode=config.test_mode, registry=registry)
        questions.append(question)
    return questions


class QuizSession:
    """终端答题与 play API 共用：持有状态、随机源与成绩存储"""

    def __init__(self, config: QuizConfig, store: ScoreStore | None = None):
        self.config = config
        self.store = store
        self._rng = random.Random(config.seed)
        self.registry = resolve_registry(config)
        correct, streak = store.load() if store else (0, 0)
        self.state = QuizState(correct_count=correct, current_streak=streak)
        self.current: Question | None = None
        self.answered = False

    def next_question(self) -> Question:
        self.state, self.current = generate_next(
            self.state, self._rng, test_mode=self.config.test_mode, registry=self.registry,
        )
        self.answered = False
        return self.current

    def answer(self, index: int) -> bool:
        if self.current is None:
            raise RuntimeError("还没有出题")
        if self.answered:
            raise RuntimeError("本题已作答")
        if not 0 <= index < len(self.current.options):
            raise IndexError(f"选项序号越界: {index}")
        is_correct = self.current.options[index].is_correct
        self.state = record_answer(self.state, is_correct)
        self.answered = True
        if self.store:
            self.store.save(self.state.correct_count, self.state.current_streak)
        return is_correct

    def reset_score(self) -> None:
        self.state = replace(self.state, correct_count=0, current_streak=0)
        if self.store:
            self.store.clear()
