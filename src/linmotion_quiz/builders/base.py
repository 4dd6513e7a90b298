"""构造器共用的随机工具、固定选项去重与界面文案"""
from __future__ import annotations
import logging
import random
from typing import Callable
from linmotion_quiz.models import Option

logger = logging.getLogger(__name__)

BODY_A = "גוף A"
BODY_B = "גוף B"
EQUAL_TEXT = "שווים"
NO_INFO_TEXT = "אין מידע"
NO_ANSWER_TEXT = "אין תשובה"
MULTIPLE_TEXT = "יש יותר מאפשרות אחת נכונה"
NONE_TEXT = "אין תשובה מתאימה בין האפשרויות"

COLOR_A = "#2f80ed"
COLOR_B = "#eb5757"
COLOR_B_ALT = "#27ae60"

DEFAULT_STEPS = (1, 1, 2)
UNIQUE_ATTEMPTS = 20


def question_id(rng: random.Random, tag: str) -> str:
    return f"{tag}-{rng.getrandbits(32):08x}"


def random_times(rng: random.Random, count: int, step_options=DEFAULT_STEPS) -> list[int]:
    """从 0 开始、步长取自 step_options 的递增时刻序列"""
    times = [0]
    for _ in range(1, count):
        times.append(times[-1] + rng.choice(step_options))
    return times


def build_even_ticks(max_value: float, step: float) -> tuple[float, ...]:
    """0, step, 2·step ... 直到 max_value，末尾补上 max_value"""
    if step <= 0:
        raise ValueError("刻度步长必须为正数")
    ticks = []
    value = 0
    while value <= max_value:
        ticks.append(value)
        value += step
    if not ticks or ticks[-1] != max_value:
        ticks.append(max_value)
    return tuple(ticks)


def nonzero(value: int, fallback: int) -> int:
    return fallback if value == 0 else value


def unique_options(
    first: list[Option],
    makers: list[Callable[[], Option]],
    attempts: int = UNIQUE_ATTEMPTS,
) -> list[Option]:
    """
    依次调用 makers 生成固定选项，与已有选项去重键相同则重试。

    多数 maker 带随机扰动，重试即可得到新值；重试耗尽时放弃该选项。
    """
    options = list(first)
    keys = {opt.dedup_key() for opt in options}
    for make in makers:
        for _ in range(attempts):
            candidate = make()
            if candidate.dedup_key() not in keys:
                options.append(candidate)
                keys.add(candidate.dedup_key())
                break
        else:
            logger.debug("固定选项重试 %d 次仍重复，已跳过", attempts)
    return options
