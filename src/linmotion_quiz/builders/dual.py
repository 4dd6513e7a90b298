"""双物体比较：谁更快 / 谁走得更远 / 谁领先"""
from __future__ import annotations
import random
from linmotion_quiz.builders import register
from linmotion_quiz.builders.base import (
    BODY_A, BODY_B, COLOR_A, COLOR_B, COLOR_B_ALT, EQUAL_TEXT, NO_ANSWER_TEXT,
    NO_INFO_TEXT, question_id,
)
from linmotion_quiz.models import (
    CorrectAnswer, DualVtGraph, DualXtGraph, Option, Point, Question, Series,
)


def _constant_speed_graph(speed_a: int, speed_b: int, duration: int) -> DualVtGraph:
    return DualVtGraph(
        objects=(
            Series(BODY_A, COLOR_A, (Point(0, speed_a), Point(duration, speed_a))),
            Series(BODY_B, COLOR_B, (Point(0, speed_b), Point(duration, speed_b))),
        ),
        max_time=duration,
        min_velocity=0,
        max_velocity=max(speed_a, speed_b) + 2,
        x_ticks=(0, duration),
        y_ticks=tuple(sorted({speed_a, speed_b})),
    )


@register("dual-vt-speed", family="dual", answer_type="speed")
def build_dual_vt_speed(rng: random.Random, *, speed_a: int | None = None,
                        speed_b: int | None = None, duration: int | None = None) -> Question:
    speed_a = rng.randint(3, 5) if speed_a is None else speed_a
    speed_b = rng.randint(speed_a + 1, speed_a + 3) if speed_b is None else speed_b
    duration = rng.randint(3, 6) if duration is None else duration
    return Question(
        id=question_id(rng, "dual-vt-speed"),
        prompt="איזה גוף מהיר יותר?",
        representation=_constant_speed_graph(speed_a, speed_b, duration),
        correct_answer=CorrectAnswer(speed_b, "m/s", BODY_B),
        fixed_options=(
            Option(speed_a, "m/s", False, BODY_A),
            Option(speed_b, "m/s", True, BODY_B),
            Option(0, "m/s", False, EQUAL_TEXT),
            Option(0, "m/s", False, NO_INFO_TEXT),
        ),
        explanation=f"גוף B מתנייד ב־{speed_b} m/s, יותר מ־{speed_a} m/s של גוף A.",
    )


@register("dual-vt-distance", family="dual", answer_type="distance")
def build_dual_vt_distance(rng: random.Random, *, speed_a: int | None = None,
                           speed_b: int | None = None, duration: int | None = None) -> Question:
    speed_a = rng.randint(3, 5) if speed_a is None else speed_a
    speed_b = rng.randint(speed_a + 1, speed_a + 4) if speed_b is None else speed_b
    duration = rng.randint(3, 5) if duration is None else duration
    distance_a = speed_a * duration
    distance_b = speed_b * duration
    return Question(
        id=question_id(rng, "dual-vt-distance"),
        prompt=f"מי עובר מרחק גדול יותר אחרי {duration} שניות?",
        representation=_constant_speed_graph(speed_a, speed_b, duration),
        correct_answer=CorrectAnswer(distance_b, "m", BODY_B),
        fixed_options=(
            Option(distance_a, "m", False, BODY_A),
            Option(distance_b, "m", True, BODY_B),
            Option(min(distance_a, distance_b), "m", False, EQUAL_TEXT),
            Option(0, "m", False, NO_ANSWER_TEXT),
        ),
        explanation=f"גוף B עובר {distance_b} מ׳ לעומת {distance_a} מ׳ של גוף A.",
    )


@register("dual-xt-leader", family="dual", answer_type="distance")
def build_dual_xt_leader(rng: random.Random) -> Question:
    speed_a = rng.randint(3, 5)
    speed_b = rng.randint(2, 4)
    duration = rng.randint(3, 6)
    # B 从 x=2 出发
    head_start = 2
    position_a = speed_a * duration
    position_b = speed_b * duration + head_start
    leader = BODY_A if position_a > position_b else BODY_B
    lead = max(position_a, position_b)
    return Question(
        id=question_id(rng, "dual-xt-leader"),
        prompt=f"איזה גוף רחוק יותר לאחר {duration} שניות?",
        representation=DualXtGraph(
            objects=(
                Series(BODY_A, COLOR_A, (Point(0, 0), Point(duration, position_a))),
                Series(BODY_B, COLOR_B_ALT, (Point(0, head_start), Point(duration, position_b))),
            ),
            max_time=duration,
            min_distance=0,
            max_distance=lead,
            x_ticks=(0, duration),
            y_ticks=tuple(sorted({position_a, position_b})),
        ),
        correct_answer=CorrectAnswer(lead, "m", leader),
        fixed_options=(
            Option(position_a, "m", leader == BODY_A, BODY_A),
            Option(position_b, "m", leader == BODY_B, BODY_B),
            Option(0, "m", False, EQUAL_TEXT),
            Option(0, "m", False, NO_INFO_TEXT),
        ),
        explanation=f"{leader} נמצא ב־{lead} מטר.",
    )
