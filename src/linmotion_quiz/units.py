"""单位策略与题目元数据归一化"""
from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from linmotion_quiz.formatting import format_number
from linmotion_quiz.models import AnswerUnit, Question, TableRepresentation, VELOCITY_TYPES
from linmotion_quiz.scaling import scale_by_time, scale_by_value

logger = logging.getLogger(__name__)

# 干扰项"换单位"策略使用的备选单位池
ALTERNATE_UNITS: dict[str, tuple[AnswerUnit, ...]] = {
    "speed": (
        AnswerUnit(3.6, "km/h"),
        AnswerUnit(100, "cm/s"),
        AnswerUnit(60, "m/min"),
    ),
    "distance": (
        AnswerUnit(100, "cm"),
        AnswerUnit(0.001, "km"),
    ),
    "time": (
        AnswerUnit(1 / 60, "min"),
    ),
}


@dataclass(frozen=True)
class UnitTransform:
    """
    一种显示单位换算。

    value_factor 作用于数值轴；velocity_only=True 时只缩放速度图像。
    time_factor 先于 value_factor 作用于时间轴。
    """
    name: str
    unit: AnswerUnit
    value_factor: float | None = None
    distance_unit: str = "m"        # 位置轴换算后的单位
    velocity_unit: str = "m/s"      # 速度轴换算后的单位
    velocity_only: bool = False
    time_factor: float | None = None
    time_label: str = "t (s)"
    scale_table_time: bool = True   # False 时表格保留秒，只换算答案单位

    def value_label(self, rep_type: str) -> str:
        if rep_type in VELOCITY_TYPES:
            return f"v ({self.velocity_unit})"
        return f"x ({self.distance_unit})"

    def apply(self, question: Question) -> Question:
        rep = question.representation
        if rep is not None:
            if self.time_factor is not None and (
                self.scale_table_time or not isinstance(rep, TableRepresentation)
            ):
                rep = scale_by_time(rep, self.time_factor, self.time_label)
            if self.value_factor is not None:
                if not self.velocity_only or rep.type in VELOCITY_TYPES:
                    rep = scale_by_value(rep, self.value_factor, self.value_label(rep.type))
        return replace(question, representation=rep, answer_unit=self.unit)


KMH = UnitTransform(
    "km/h", AnswerUnit(3.6, "km/h"),
    value_factor=3.6, velocity_unit="km/h", velocity_only=True,
)
KM = UnitTransform(
    "km", AnswerUnit(0.001, "km"),
    value_factor=0.001, distance_unit="km", velocity_unit="km/s",
)
M_PER_MIN = UnitTransform(
    "m/min", AnswerUnit(60, "m/min"),
    value_factor=60, velocity_unit="m/min", velocity_only=True,
    time_factor=1 / 60, time_label="t (min)", scale_table_time=False,
)
CM_PER_S = UnitTransform(
    "cm/s", AnswerUnit(100, "cm/s"),
    value_factor=100, velocity_unit="cm/s", velocity_only=True,
)
CM = UnitTransform(
    "cm", AnswerUnit(100, "cm"),
    value_factor=100, distance_unit="cm", velocity_unit="cm/s",
)
MINUTES = UnitTransform(
    "min", AnswerUnit(1 / 60, "min"),
    time_factor=1 / 60, time_label="t (min)",
)

# (n mod k, answer_type, 换算)，按顺序取第一条命中的规则
UNIT_RULES: tuple[tuple[int, str, UnitTransform], ...] = (
    (7, "speed", KMH),
    (6, "distance", KM),
    (5, "speed", M_PER_MIN),
    (4, "speed", CM_PER_S),
    (3, "distance", CM),
    (2, "time", MINUTES),
)


def pick_unit_transform(sequence: int, answer_type: str) -> UnitTransform | None:
    """纯函数：同一 (sequence, answer_type) 总是得到同一结果"""
    for mod, rule_type, transform in UNIT_RULES:
        if sequence % mod == 0 and answer_type == rule_type:
            return transform
    return None


def ensure_metadata(question: Question, default_type: str = "speed") -> Question:
    """补全派生字段：answer_type / base_unit / correct_value / explanation_base / answer_unit"""
    answer_type = question.answer_type or default_type
    base_unit = question.base_unit or question.correct_answer.unit
    correct_value = question.correct_value
    if correct_value is None:
        correct_value = question.correct_answer.value
    explanation_base = question.explanation_base or question.explanation
    answer_unit = question.answer_unit or AnswerUnit(1.0, base_unit)
    return replace(
        question,
        answer_type=answer_type,
        base_unit=base_unit,
        correct_value=correct_value,
        explanation_base=explanation_base,
        answer_unit=answer_unit,
    )


def apply_unit_strategy(sequence: int, question: Question) -> Question:
    transform = pick_unit_transform(sequence, question.answer_type)
    if transform is None:
        return question
    logger.debug("题目 %s 第 %d 题: 显示单位 %s", question.id, sequence, transform.name)
    return transform.apply(question)


def update_explanation(question: Question) -> Question:
    """显示单位与基准单位不同时，在解析末尾附上换算；文本型答案不附"""
    base_text = question.explanation_base or question.explanation
    unit = question.answer_unit
    value = question.correct_value
    if (
        unit is None
        or not question.base_unit
        or value is None
        or isinstance(value, str)
        or question.correct_answer.text
        or unit.label == question.base_unit
    ):
        return replace(question, explanation=base_text)
    display = format_number(value * unit.multiplier)
    explanation = (
        f"{base_text} ({display} {unit.label} = {format_number(value)} {question.base_unit})"
    )
    return replace(question, explanation=explanation)
