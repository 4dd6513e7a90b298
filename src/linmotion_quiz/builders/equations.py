"""
方程类题目。

除 xt-equation-position 为数值答案外，其余构造器都给出完整的固定选项集：
一个正确方程加若干扰动过斜率/截距/符号的错误方程，不经过干扰项生成。
"""
from __future__ import annotations
import random
from dataclasses import replace
from linmotion_quiz.builders import register
from linmotion_quiz.builders.base import (
    MULTIPLE_TEXT, NONE_TEXT, nonzero, question_id, random_times, unique_options,
)
from linmotion_quiz.equations import (
    EQUATION_UNIT, build_equation_option, build_equation_representation, format_equation,
)
from linmotion_quiz.formatting import format_number
from linmotion_quiz.models import (
    CorrectAnswer, FootprintDiagram, Option, Point, Question, Step,
    TableRepresentation, VtGraph, XtGraph,
)

MEETING_OUTCOMES = ("equation", "multiple", "none")


def _equation_answer(option: Option) -> CorrectAnswer:
    return CorrectAnswer(option.value, EQUATION_UNIT, option.text)


@register("xt-equation-position", family="equation", answer_type="distance")
def build_xt_equation_position(rng: random.Random) -> Question:
    velocity = nonzero(rng.randint(-6, 8), 4)
    intercept = rng.randint(-10, 10)
    sample_time = rng.randint(2, 6)
    position = round(velocity * sample_time + intercept, 2)
    sign = "+" if intercept >= 0 else "-"
    return Question(
        id=question_id(rng, "xt-equation-position"),
        prompt=(
            "נתונה משוואת מיקום-זמן של גוף בתנועה קבועה. "
            f"מה מיקום הגוף בזמן t={sample_time}s?"
        ),
        representation=build_equation_representation(velocity, intercept),
        correct_answer=CorrectAnswer(position, "m"),
        explanation=(
            f"{format_equation(velocity, intercept)} → x({sample_time}) = "
            f"{velocity}·{sample_time} {sign} {abs(intercept)} = {format_number(position)} m."
        ),
    )


@register("xt-graph-equation", family="equation", answer_type="equation")
def build_xt_graph_equation(rng: random.Random) -> Question:
    velocity = nonzero(rng.randint(-6, 7), 5)
    intercept = rng.randint(-5, 6)
    duration = rng.randint(3, 7)
    end = intercept + velocity * duration
    low, high = min(intercept, end), max(intercept, end)
    correct = build_equation_option(velocity, intercept, is_correct=True)
    options = unique_options([correct], [
        lambda: build_equation_option(-velocity, intercept),
        lambda: build_equation_option(velocity + rng.choice((2, -2, 3)), intercept),
        lambda: build_equation_option(velocity, intercept + rng.choice((3, -3, 5))),
    ])
    return Question(
        id=question_id(rng, "xt-graph-equation"),
        prompt="לפי גרף x/t, איזו משוואה מתארת את התנועה?",
        representation=XtGraph(
            points=(Point(0, intercept), Point(duration, end)),
            max_time=duration,
            min_distance=low,
            max_distance=high,
            x_ticks=(0, duration / 2, duration),
            y_ticks=(low, high),
        ),
        correct_answer=_equation_answer(correct),
        fixed_options=tuple(options),
        explanation=f"שיפוע הגרף הוא {velocity} m/s והחותך {intercept} m → {correct.text}.",
    )


@register("vt-graph-equation", family="equation", answer_type="equation")
def build_vt_graph_equation(rng: random.Random) -> Question:
    velocity = rng.randint(2, 7)
    duration = rng.randint(4, 7)
    reference_time = rng.randint(2, duration)
    reference_position = rng.randint(-6, 12)
    intercept = round(reference_position - velocity * reference_time, 2)
    correct = build_equation_option(velocity, intercept, is_correct=True)
    options = unique_options([correct], [
        lambda: build_equation_option(velocity + rng.randint(1, 3), intercept),
        lambda: build_equation_option(max(1, velocity - rng.randint(1, 2)), intercept),
        lambda: build_equation_option(velocity, intercept + rng.choice((3, -3, 5))),
    ])
    return Question(
        id=question_id(rng, "vt-graph-equation"),
        prompt=(
            f"גרף v/t מראה תנועה קבועה. ידוע כי x={reference_position}m בזמן "
            f"t={reference_time} s. מה משוואת התנועה המתאימה?"
        ),
        representation=VtGraph(
            points=(Point(0, velocity), Point(duration, velocity)),
            max_time=duration,
            min_velocity=0,
            max_velocity=velocity + 2,
            x_ticks=(0, duration),
            y_ticks=(velocity,),
        ),
        correct_answer=_equation_answer(correct),
        fixed_options=tuple(options),
        explanation=(
            f"x({reference_time}) = {velocity}·{reference_time} + x₀ = {reference_position} "
            f"→ x₀={format_number(intercept)} → {correct.text}."
        ),
    )


@register("xt-table-equation", family="equation", answer_type="equation")
def build_xt_table_equation(rng: random.Random) -> Question:
    velocity = nonzero(rng.randint(-5, 7), 3)
    intercept = rng.randint(-4, 6)
    times = random_times(rng, 4)
    rows = tuple((str(t), str(intercept + velocity * t)) for t in times)
    correct = build_equation_option(velocity, intercept, is_correct=True)
    options = unique_options([correct], [
        lambda: build_equation_option(-velocity, intercept),
        lambda: build_equation_option(velocity, intercept + rng.choice((2, -2, 4))),
        lambda: build_equation_option(velocity + rng.choice((2, -2)), intercept),
    ])
    return Question(
        id=question_id(rng, "xt-table-equation"),
        prompt="גוף נע במהירות קבועה כמתואר בטבלה. מה משוואת x(t) המתאימה לתנועת הגוף?",
        representation=TableRepresentation(rows=rows),
        correct_answer=_equation_answer(correct),
        fixed_options=tuple(options),
        explanation=(
            f"ההפרש בין כל שתי שורות קבוע: מהירות {velocity} m/s והחותך {intercept} m "
            f"→ {correct.text}."
        ),
    )


@register("footprint-equation", family="equation", answer_type="equation")
def build_footprint_equation(rng: random.Random) -> Question:
    gap = rng.randint(1, 3)
    pace = rng.randint(2, 5)
    start = rng.randint(-3, 3)
    steps = tuple(Step(i * gap, start + pace * i * gap) for i in range(4))
    correct = build_equation_option(pace, start, is_correct=True)
    options = unique_options([correct], [
        lambda: build_equation_option(pace + 2, start),
        lambda: build_equation_option(pace - 1, start),
        lambda: build_equation_option(pace, start + rng.choice((3, -3))),
    ])
    return Question(
        id=question_id(rng, "footprint-equation"),
        prompt=(
            "בתרשים עקבות זה, העקבה הראשונה היא בזמן t=0s. "
            f"פער הזמן בין כל שתי עקבות הוא {gap} שניות. "
            "מהי משוואת x(t) המתאימה לתנועת הגוף?"
        ),
        representation=FootprintDiagram(
            steps=steps,
            tick_positions=tuple(s.position for s in steps),
            time_between=gap,
        ),
        correct_answer=_equation_answer(correct),
        fixed_options=tuple(options),
        explanation=(
            f"כל {gap} שניות מתווספים {pace * gap} מ׳ → מהירות {pace} m/s "
            f"והתחלה ב־{start} m → {correct.text}."
        ),
    )


def _pick_outcome(rng: random.Random) -> tuple[str, bool, bool]:
    """返回 (正确答案类型, 是否列出"多个正确", 是否列出"都不对")"""
    include_multiple = rng.random() < 0.25
    include_none = rng.random() < 0.25
    if include_multiple and rng.random() < 0.2:
        return "multiple", include_multiple, include_none
    if include_none and rng.random() < 0.2:
        return "none", include_multiple, include_none
    return "equation", include_multiple, include_none


@register("meeting-equation", family="equation", answer_type="equation")
def build_meeting_equation(rng: random.Random, *, outcome: str | None = None) -> Question:
    """
    与图中物体 A 在 meet_time 相遇的物体 B 的方程。

    正确答案可能是某个方程，也可能是"多个正确"或"都不对"，
    避免学生形成"总有且只有一个方程成立"的习惯。
    """
    velocity_a = rng.randint(2, 3)
    intercept_a = rng.randint(-7, 7)
    meet_time = rng.randint(3, 7)
    meet_position = intercept_a + velocity_a * meet_time
    max_time = meet_time + rng.randint(2, 4)
    end = intercept_a + velocity_a * max_time

    if outcome is None:
        outcome, include_multiple, include_none = _pick_outcome(rng)
    else:
        if outcome not in MEETING_OUTCOMES:
            raise ValueError(f"未知的相遇题答案类型: {outcome}")
        include_multiple = outcome == "multiple"
        include_none = outcome == "none"

    def pick_velocity(zero_fallback: int, clash_shift: int) -> int:
        v = rng.choice((rng.randint(-3, 2), rng.randint(3, 7)))
        v = nonzero(v, zero_fallback)
        return v + clash_shift if v == velocity_a else v

    def meeting_option() -> Option:
        v = pick_velocity(1, 1)
        return build_equation_option(v, round(meet_position - v * meet_time, 2))

    def missing_option() -> Option:
        v = pick_velocity(2, 2)
        shift = rng.choice((3, -3, 5))
        return build_equation_option(v, round(meet_position - v * meet_time + shift, 2))

    if outcome == "equation":
        correct = replace(meeting_option(), is_correct=True)
        options = unique_options([correct], [missing_option] * 3)
    elif outcome == "multiple":
        options = unique_options([], [meeting_option, meeting_option, missing_option])
    else:
        parallel = build_equation_option(velocity_a, intercept_a + 5)
        options = unique_options([parallel], [missing_option, missing_option])

    if include_multiple:
        options.append(Option("multiple", EQUATION_UNIT, outcome == "multiple", MULTIPLE_TEXT))
    if include_none:
        options.append(Option("none", EQUATION_UNIT, outcome == "none", NONE_TEXT))

    correct = next(opt for opt in options if opt.is_correct)
    base = f"בזמן t={meet_time} הגוף הראשון ב־x={meet_position} m."
    if outcome == "multiple":
        explanation = (
            f'{base} יותר ממשוואה אחת עומדת בתנאי, ולכן האפשרות הנכונה היא "{MULTIPLE_TEXT}".'
        )
    elif outcome == "none":
        explanation = (
            f"{base} אף אחת מהמשוואות המוצעות לא פוגשת בנקודה הזו, "
            f'ולכן יש לבחור "{NONE_TEXT}".'
        )
    else:
        explanation = f"{base} משוואה שמגיעה לנקודה הזו: {correct.text}."

    return Question(
        id=question_id(rng, "meeting-equation"),
        prompt=(
            "נתון לפניכם גרף מקום-זמן של גוף A. "
            f"גוף B נפגש עם גוף A בזמן t={meet_time}s. איזו משוואה יכולה לתאר את גוף B?"
        ),
        representation=XtGraph(
            points=(Point(0, intercept_a), Point(max_time, end)),
            max_time=max_time,
            min_distance=min(intercept_a, end),
            max_distance=max(intercept_a, end),
            x_ticks=(0, max_time),
            y_ticks=tuple(sorted({0, intercept_a, end})),
        ),
        correct_answer=_equation_answer(correct),
        fixed_options=tuple(options),
        explanation=explanation,
        meta={"outcome": outcome, "meet_time": meet_time, "meet_position": meet_position},
    )
