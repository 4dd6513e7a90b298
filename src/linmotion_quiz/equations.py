"""位置-时间方程 x(t) = v·t ± x0 的构造与渲染"""
from __future__ import annotations
from linmotion_quiz.formatting import format_number
from linmotion_quiz.models import Option, XtEquation

EQUATION_UNIT = "equation"


def _terms(velocity: float, intercept: float) -> tuple[str, str, str]:
    sign = "+" if intercept >= 0 else "-"
    return format_number(velocity), format_number(abs(intercept)), sign


def format_equation(velocity: float, intercept: float,
                    distance_label: str = "m", time_label: str = "s") -> str:
    v_text, x0_text, sign = _terms(velocity, intercept)
    return f"x(t) = {v_text} {distance_label}/{time_label} · t {sign} {x0_text} {distance_label}"


def format_equation_latex(velocity: float, intercept: float,
                          distance_label: str = "m", time_label: str = "s") -> str:
    v_text, x0_text, sign = _terms(velocity, intercept)
    velocity_term = f"{v_text}\\,\\frac{{{distance_label}}}{{{time_label}}}"
    intercept_term = f"{x0_text}\\,{distance_label}"
    return f"x(t)={velocity_term}\\,t\\,{sign}\\,{intercept_term}"


def build_equation_option(velocity: float, intercept: float,
                          distance_label: str = "m", time_label: str = "s",
                          is_correct: bool = False) -> Option:
    """方程选项：value 与 text 相同，两方程相等当且仅当渲染文本相等"""
    text = format_equation(velocity, intercept, distance_label, time_label)
    latex = format_equation_latex(velocity, intercept, distance_label, time_label)
    return Option(value=text, unit=EQUATION_UNIT, is_correct=is_correct, text=text, latex=latex)


def build_equation_representation(velocity: float, intercept: float,
                                  distance_label: str = "m", time_label: str = "s") -> XtEquation:
    return XtEquation(velocity, intercept, distance_label, time_label)


def equation_text(rep: XtEquation) -> str:
    return format_equation(rep.velocity, rep.intercept, rep.distance_label, rep.time_label)


def equation_latex(rep: XtEquation) -> str:
    return format_equation_latex(rep.velocity, rep.intercept, rep.distance_label, rep.time_label)
