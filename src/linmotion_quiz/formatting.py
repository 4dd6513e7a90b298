"""数值与选项的规范化显示"""
from __future__ import annotations
from linmotion_quiz.models import AnswerUnit, Option, Question

OPTION_LABELS = "ABCDEFGHIJ"


def format_number(value: float) -> str:
    """
    所有显示数字的唯一出口。

    整数不带小数点；非整数按量级取精度（<1: 3 位, [1,10): 2 位, >=10: 1 位），
    再去掉末尾的 0 和小数点。
    """
    value = float(value)
    if value.is_integer():
        text = str(int(value))
    else:
        magnitude = abs(value)
        decimals = 2
        if magnitude >= 10:
            decimals = 1
        elif magnitude < 1:
            decimals = 3
        text = f"{value:.{decimals}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def number_text(value: float) -> str:
    """表格单元格的存储文本：保留完整精度，显示时再经 format_number"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_cell(text: str) -> str:
    return format_number(float(text))


def resolve_unit(option: Option, question: Question) -> AnswerUnit:
    if option.display_unit is not None:
        return option.display_unit
    if question.answer_unit is not None:
        return question.answer_unit
    return AnswerUnit(1.0, option.unit)


def format_option(option: Option, question: Question, math: bool = True) -> str:
    """选项文本：文本型选项原样（或 \\(latex\\)），数值型按显示单位换算"""
    if option.text:
        if option.latex and math:
            return f"\\({option.latex}\\)"
        return option.text
    unit = resolve_unit(option, question)
    display = float(option.value) * (unit.multiplier if unit.multiplier is not None else 1)
    return f"{format_number(display)} {unit.label}"


def option_labels(question: Question, math: bool = False) -> list[str]:
    """带字母前缀的选项列表，如 ["A. 5 m/s", ...]"""
    return [
        f"{OPTION_LABELS[i]}. {format_option(opt, question, math=math)}"
        for i, opt in enumerate(question.options)
    ]


def format_answer(question: Question, math: bool = False) -> str:
    for opt in question.options:
        if opt.is_correct:
            return format_option(opt, question, math=math)
    return ""
