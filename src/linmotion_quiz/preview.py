"""题目的纯文本呈现，供终端预览、答题和 Word 导出共用"""
from __future__ import annotations
from linmotion_quiz.equations import equation_text
from linmotion_quiz.formatting import format_answer, format_cell, format_number, option_labels
from linmotion_quiz.models import (
    DualVtGraph, DualXtGraph, FootprintDiagram, Question, Representation,
    TableRepresentation, VtGraph, XtEquation, XtGraph,
)


def representation_table(rep: Representation | None) -> tuple[list[str], list[list[str]]]:
    """
    把表示形式展开为 (表头, 行)。

    图像给出采样点，脚印图给出每个脚印的时刻与位置，方程只有一行文本。
    """
    if rep is None:
        return [], []
    if isinstance(rep, TableRepresentation):
        return list(rep.headers), [[format_cell(t), format_cell(x)] for t, x in rep.rows]
    if isinstance(rep, (XtGraph, VtGraph)):
        return [rep.x_label, rep.y_label], [
            [format_number(p.t), format_number(p.value)] for p in rep.points
        ]
    if isinstance(rep, (DualXtGraph, DualVtGraph)):
        headers = ["", rep.x_label, rep.y_label]
        rows = [
            [obj.name, format_number(p.t), format_number(p.value)]
            for obj in rep.objects for p in obj.points
        ]
        return headers, rows
    if isinstance(rep, FootprintDiagram):
        return ["#", rep.axis_label], [
            [str(i), format_number(s.position)] for i, s in enumerate(rep.steps, 1)
        ]
    if isinstance(rep, XtEquation):
        return [], [[equation_text(rep)]]
    raise TypeError(f"未知的表示形式: {type(rep).__name__}")


def question_lines(q: Question, show_answer: bool = False) -> list[str]:
    lines = [f"[{q.sequence}] {q.builder} ({q.answer_type})", q.prompt]
    headers, rows = representation_table(q.representation)
    if q.representation is not None:
        lines.append(f"  〔{q.representation.type}〕")
    if headers:
        lines.append("  " + " | ".join(h for h in headers if h))
    for row in rows:
        lines.append("  " + " | ".join(cell for cell in row if cell))
    lines.extend(f"  {label}" for label in option_labels(q))
    if show_answer:
        lines.append(f"答案: {format_answer(q)}")
        lines.append(f"解析: {q.explanation}")
    return lines
