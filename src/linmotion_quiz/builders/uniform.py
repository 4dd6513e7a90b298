"""匀速读数类：表格 / x-t 图 / 脚印图 → 速度"""
from __future__ import annotations
import random
from linmotion_quiz.builders import register
from linmotion_quiz.builders.base import build_even_ticks, question_id, random_times
from linmotion_quiz.formatting import format_number
from linmotion_quiz.models import (
    CorrectAnswer, FootprintDiagram, Point, Question, Step, TableRepresentation, XtGraph,
)


@register("table-rate", family="uniform", answer_type="speed")
def build_table_rate(rng: random.Random, *, speed: int | None = None,
                     start: int | None = None, times: list[int] | None = None) -> Question:
    speed = rng.randint(3, 7) if speed is None else speed
    start = rng.randint(0, 6) if start is None else start
    times = random_times(rng, 4) if times is None else list(times)
    rows = tuple((str(t), str(start + speed * t)) for t in times)
    return Question(
        id=question_id(rng, "table-rate"),
        prompt="לפניכם טבלת מיקום-זמן של גוף הנע במהירות קבועה. מה מהירות הגוף?",
        representation=TableRepresentation(rows=rows),
        correct_answer=CorrectAnswer(speed, "m/s"),
        explanation=f"המרחק גדל ב־{speed} מ׳ בכל שניה.",
        meta={"speed": speed, "start": start, "times": times},
    )


@register("table-average", family="uniform", answer_type="speed")
def build_table_average(rng: random.Random) -> Question:
    speeds = [rng.randint(3, 6), rng.randint(4, 7), rng.randint(5, 8)]
    durations = [rng.randint(1, 5), rng.randint(1, 3), rng.randint(5, 9)]
    rows = [("0", "0")]
    distance = 0
    elapsed = 0
    for speed, duration in zip(speeds, durations):
        distance += speed * duration
        elapsed += duration
        rows.append((str(elapsed), str(distance)))
    average = round(distance / elapsed, 2)
    return Question(
        id=question_id(rng, "table-average"),
        prompt="על פי טבלת המיקום-זמן שלפניכם, מה המהירות הממוצעת של הגוף?",
        representation=TableRepresentation(rows=tuple(rows)),
        correct_answer=CorrectAnswer(average, "m/s"),
        explanation=f"המרחק הכולל {distance} מטרים ב־{elapsed} שניות → {format_number(average)} m/s.",
        meta={"distance": distance, "time": elapsed},
    )


@register("xt-constant", family="uniform", answer_type="speed")
def build_xt_constant(rng: random.Random) -> Question:
    duration = rng.randint(3, 6)
    speed = rng.randint(-7, 7)
    start = rng.randint(-10, 10)
    end = start + speed * duration
    low, high = min(start, end), max(start, end)
    return Question(
        id=question_id(rng, "xt-constant"),
        prompt="מה מהירות הגוף לפי שיפוע הגרף?",
        representation=XtGraph(
            points=(Point(0, start), Point(duration, end)),
            max_time=duration,
            min_distance=low,
            max_distance=high,
            x_ticks=(0, duration / 2, duration),
            y_ticks=tuple(sorted({low, high})),
        ),
        correct_answer=CorrectAnswer(speed, "m/s"),
        explanation=f"{end - start} מטרים ב־{duration} שניות → {speed} m/s.",
    )


@register("footprint-constant", family="uniform", answer_type="speed")
def build_footprint_constant(rng: random.Random) -> Question:
    pace = rng.randint(2, 5)
    gap = rng.randint(1, 2)
    stride = pace * gap
    steps = tuple(Step(i * gap, stride * i) for i in range(4))
    return Question(
        id=question_id(rng, "footprint-constant"),
        prompt=f"מה המהירות לפי תרשים העקבות? פער הזמן בין כל שתי עקבות הוא {gap} שניות.",
        representation=FootprintDiagram(
            steps=steps,
            tick_positions=build_even_ticks(steps[-1].position, stride),
            time_between=gap,
        ),
        correct_answer=CorrectAnswer(pace, "m/s"),
        explanation=f"מהירות קבועה {pace} m/s. כל {gap} שניות מוסיפים {stride} מ׳.",
    )


@register("footprint-average", family="uniform", answer_type="speed")
def build_footprint_average(rng: random.Random) -> Question:
    segments = rng.randint(3, 5)
    gap = rng.randint(1, 3)
    base_step = rng.randint(2, 4)
    steps = [Step(0, 0)]
    for _ in range(segments):
        prev = steps[-1]
        steps.append(Step(prev.time + gap, prev.position + base_step * rng.randint(1, 4)))
    total_time = gap * segments
    total_distance = steps[-1].position - steps[0].position
    average = round(total_distance / total_time, 2)
    return Question(
        id=question_id(rng, "footprint-average"),
        prompt=f"מה המהירות הממוצעת? פער הזמן בין העקבות הוא {gap} שניות.",
        representation=FootprintDiagram(
            steps=tuple(steps),
            tick_positions=build_even_ticks(steps[-1].position, base_step),
            time_between=gap,
        ),
        correct_answer=CorrectAnswer(average, "m/s"),
        explanation=(
            f"הגוף עבר {total_distance} מ׳ ב־{total_time} שניות, ולכן מהירותו היא {format_number(average)} m/s."
        ),
    )
