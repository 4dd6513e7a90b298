"""数值型干扰项生成"""
from __future__ import annotations
import logging
import math
import random
from linmotion_quiz.formatting import format_option, resolve_unit
from linmotion_quiz.models import AnswerUnit, Option, Question
from linmotion_quiz.units import ALTERNATE_UNITS

logger = logging.getLogger(__name__)

MIN_OPTIONS = 4
MAX_ATTEMPTS = 30
SAME_VALUE_EPS = 1e-9

MULTIPLIERS = (0.5, 0.75, 1.25, 1.5, 2)
NON_NEGATIVE_TYPES = {"distance", "time"}
# 正确值为 0 时得不到新数值的策略
ZERO_SKIPPED = {"multiplicative", "alternate_unit"}


def option_key(option: Option) -> tuple:
    return option.dedup_key()


def target_count(existing: list[Option]) -> int:
    return max(MIN_OPTIONS, len(existing) + 2)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _is_zero(value) -> bool:
    return abs(float(value)) < SAME_VALUE_EPS


class DistractorSynthesizer:
    """
    四种策略随机选取，逐个候选过滤：
      - additive:        正确值 ± randint(1, max(1, round(0.25·|正确值|)))
      - multiplicative:  正确值 × {0.5, 0.75, 1.25, 1.5, 2}
      - fractional:      正确值 ± 0.2..0.8
      - alternate_unit:  同一显示数值，换一个单位标签（正确值为 0 时不用）
    最多尝试 MAX_ATTEMPTS 次，不足时返回已得到的部分。
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self.strategies = {
            "additive": self._additive,
            "multiplicative": self._multiplicative,
            "fractional": self._fractional_nudge,
            "alternate_unit": self._alternate_unit,
        }

    # ── 策略 ──

    def _sign(self, correct: Option, question: Question) -> int:
        # 非负量为 0 时只向正方向扰动
        if question.answer_type in NON_NEGATIVE_TYPES and _is_zero(correct.value):
            return 1
        return -1 if self._rng.random() < 0.5 else 1

    def _additive(self, correct: Option, question: Question) -> Option | None:
        magnitude = max(1.0, abs(float(correct.value)))
        span = max(1, _round_half_up(magnitude * 0.25))
        delta = self._rng.randint(1, span) * self._sign(correct, question)
        return Option(value=correct.value + delta, unit=question.base_unit)

    def _multiplicative(self, correct: Option, question: Question) -> Option | None:
        factor = self._rng.choice(MULTIPLIERS)
        return Option(value=round(correct.value * factor, 2), unit=question.base_unit)

    def _fractional_nudge(self, correct: Option, question: Question) -> Option | None:
        shift = round((self._rng.random() * 0.6 + 0.2) * self._sign(correct, question), 2)
        return Option(value=round(correct.value + shift, 2), unit=question.base_unit)

    def _alternate_unit(self, correct: Option, question: Question) -> Option | None:
        # 0 在任何单位下都是 0，换标签只会多出正确答案
        if _is_zero(correct.value):
            return None
        current = question.answer_unit.label if question.answer_unit else question.base_unit
        pool = [u for u in ALTERNATE_UNITS.get(question.answer_type, ()) if u.label != current]
        if not pool:
            return None
        alt = self._rng.choice(pool)
        # 数值保持与正确答案显示值一致，只换单位标签
        multiplier = question.answer_unit.multiplier if question.answer_unit else 1.0
        return Option(
            value=correct.value,
            unit=question.base_unit,
            display_unit=AnswerUnit(multiplier, alt.label),
        )

    # ── 过滤 ──

    def _rejects(self, candidate: Option, correct: Option, question: Question,
                 keys: set, labels: set) -> str | None:
        base = question.correct_value if question.correct_value is not None else correct.value
        same_unit = resolve_unit(candidate, question).label == resolve_unit(correct, question).label
        if (
            not candidate.is_correct
            and (same_unit or _is_zero(base))
            and abs(candidate.value - base) < SAME_VALUE_EPS
        ):
            return "same-as-correct"
        if question.answer_type in NON_NEGATIVE_TYPES and base >= 0 and candidate.value < 0:
            return "negative"
        if option_key(candidate) in keys:
            return "duplicate-key"
        if format_option(candidate, question) in labels:
            return "duplicate-label"
        return None

    def synthesize(self, correct: Option, question: Question,
                   existing: list[Option] | None = None) -> list[Option]:
        existing = list(existing) if existing else [correct]
        target = target_count(existing)
        keys = {option_key(opt) for opt in existing}
        labels = {format_option(opt, question) for opt in existing}
        names = list(self.strategies)
        if _is_zero(correct.value):
            names = [n for n in names if n not in ZERO_SKIPPED] or names
        accepted: list[Option] = []

        attempts = 0
        while len(existing) + len(accepted) < target and attempts < MAX_ATTEMPTS:
            attempts += 1
            name = self._rng.choice(names)
            candidate = self.strategies[name](correct, question)
            if candidate is None:
                continue
            reason = self._rejects(candidate, correct, question, keys, labels)
            if reason:
                logger.debug("丢弃干扰项 %s (%s): %s", candidate.value, name, reason)
                continue
            accepted.append(candidate)
            keys.add(option_key(candidate))
            labels.add(format_option(candidate, question))

        if len(existing) + len(accepted) < target:
            logger.warning(
                "干扰项不足: 题目 %s 只得到 %d/%d 个选项",
                question.id, len(existing) + len(accepted), target,
            )
        return accepted


def synthesize(correct: Option, question: Question, existing: list[Option] | None = None,
               rng: random.Random | None = None) -> list[Option]:
    return DistractorSynthesizer(rng).synthesize(correct, question, existing)
