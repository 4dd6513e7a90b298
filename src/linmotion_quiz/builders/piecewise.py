"""分段运动：换速点、折返（位移与路程的区别）"""
from __future__ import annotations
import random
from linmotion_quiz.builders import register
from linmotion_quiz.builders.base import question_id
from linmotion_quiz.models import CorrectAnswer, Point, Question, XtGraph


def position_at(sample_time: float, switch_time: float,
                first_speed: float, second_speed: float, start: float = 0) -> float:
    """两段匀速运动在 sample_time 的位置；恰好落在换速点时按前一段计算"""
    if sample_time <= switch_time:
        return start + first_speed * sample_time
    return start + first_speed * switch_time + second_speed * (sample_time - switch_time)


@register("xt-switch", family="piecewise", answer_type="speed")
def build_xt_switch(rng: random.Random) -> Question:
    first_speed = rng.randint(2, 4)
    second_speed = rng.randint(first_speed - 2, first_speed + 4)
    switch_time = rng.randint(2, 3)
    total_time = switch_time + rng.randint(2, 4)
    first_distance = first_speed * switch_time
    end = first_distance + second_speed * (total_time - switch_time)
    fastest = max(first_speed, second_speed)
    slowest = min(first_speed, second_speed)
    return Question(
        id=question_id(rng, "xt-switch"),
        prompt="מה המהירות המקסימלית של הגוף?",
        representation=XtGraph(
            points=(Point(0, 0), Point(switch_time, first_distance), Point(total_time, end)),
            max_time=total_time,
            min_distance=0,
            max_distance=max(first_distance, end),
            x_ticks=(0, switch_time, total_time),
            y_ticks=tuple(sorted({0, first_distance, end})),
        ),
        correct_answer=CorrectAnswer(fastest, "m/s"),
        # 较慢一段的速度是最常见的误选
        distractors=(slowest,) if slowest != fastest else (),
        explanation=(
            f"מהירות ראשונה: {first_speed} m/s, מהירות שנייה: {second_speed} m/s → "
            f"מקסימום: {fastest} m/s."
        ),
    )


@register("xt-return", family="piecewise", answer_type="distance")
def build_xt_return(rng: random.Random, *, forward_speed: int | None = None,
                    backward_speed: int | None = None, forward_time: int | None = None,
                    backward_time: int | None = None, sample_time: int | None = None) -> Question:
    forward_speed = rng.randint(4, 7) if forward_speed is None else forward_speed
    backward_speed = rng.randint(2, 4) if backward_speed is None else backward_speed
    forward_time = rng.randint(2, 3) if forward_time is None else forward_time
    backward_time = rng.randint(2, 4) if backward_time is None else backward_time
    total_time = forward_time + backward_time
    sample_time = rng.randint(0, total_time) if sample_time is None else sample_time

    forward_distance = forward_speed * forward_time
    final = forward_distance - backward_speed * backward_time
    position = position_at(sample_time, forward_time, forward_speed, -backward_speed)
    return Question(
        id=question_id(rng, "xt-return"),
        prompt=f"מה המיקום של הגוף ברגע t={sample_time}s?",
        representation=XtGraph(
            points=(Point(0, 0), Point(forward_time, forward_distance), Point(total_time, final)),
            max_time=total_time,
            min_distance=min(0, final),
            max_distance=max(forward_distance, final),
            x_ticks=(0, forward_time, total_time),
            y_ticks=tuple(sorted({final, forward_distance})),
        ),
        correct_answer=CorrectAnswer(position, "m"),
        explanation=(
            f"עד t={forward_time}s הגוף נע קדימה ב־{forward_speed} m/s ואחר כך חוזר "
            f"ב־{backward_speed} m/s → x({sample_time}) = {position} m."
        ),
        meta={"switch_time": forward_time, "sample_time": sample_time},
    )


@register("xt-total-distance", family="piecewise", answer_type="distance")
def build_xt_total_distance(rng: random.Random) -> Question:
    forward_speed = rng.randint(3, 6)
    backward_speed = rng.randint(2, 4)
    forward_time = rng.randint(2, 4)
    backward_time = rng.randint(2, 3)
    forward_distance = forward_speed * forward_time
    backward_distance = backward_speed * backward_time
    total = forward_distance + backward_distance
    displacement = forward_distance - backward_distance
    end_time = forward_time + backward_time
    return Question(
        id=question_id(rng, "xt-total-distance"),
        prompt="כמה מטרים נסע הגוף בסך הכל?",
        representation=XtGraph(
            points=(Point(0, 0), Point(forward_time, forward_distance), Point(end_time, displacement)),
            max_time=end_time,
            min_distance=min(0, displacement),
            max_distance=forward_distance,
            x_ticks=(0, forward_time, end_time),
            y_ticks=tuple(sorted({displacement, forward_distance})),
        ),
        correct_answer=CorrectAnswer(total, "m"),
        # 位移而不是路程
        distractors=(displacement,) if displacement > 0 else (),
        explanation=(
            f"{forward_distance} מ׳ קדימה + {backward_distance} מ׳ אחורה = {total} מ׳."
        ),
    )
