"""统一题目模型：表示形式 (representation)、选项、题目"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import ClassVar, Union


@dataclass(frozen=True)
class AnswerUnit:
    """显示单位：显示值 = 基准值 × multiplier"""
    multiplier: float = 1.0
    label: str = ""


@dataclass(frozen=True)
class CorrectAnswer:
    value: float | str
    unit: str
    text: str | None = None      # 答案本身是一段文本（如方程、"גוף B"）时填写


@dataclass(frozen=True)
class Option:
    value: float | str
    unit: str
    is_correct: bool = False
    text: str | None = None
    latex: str | None = None
    display_unit: AnswerUnit | None = None

    @property
    def unit_label(self) -> str:
        """有效单位标签：display_unit 优先"""
        if self.display_unit is not None:
            return self.display_unit.label
        return self.unit

    def dedup_key(self) -> tuple:
        """(text, 单位标签, 数值) 三元组，相同即视为同一选项"""
        value = self.value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = round(float(value), 9)
        return (self.text or "", self.unit_label, value)


# ── 表示形式的基本元素 ──

@dataclass(frozen=True)
class Point:
    """图像上的一个采样点，value 为位置或速度（视图像类型而定）"""
    t: float
    value: float


@dataclass(frozen=True)
class Step:
    """脚印图中的一个脚印"""
    time: float
    position: float


@dataclass(frozen=True)
class Series:
    """双物体图像中的一条曲线"""
    name: str
    color: str
    points: tuple[Point, ...]


# ── 表示形式（封闭联合类型）──

@dataclass(frozen=True)
class TableRepresentation:
    type: ClassVar[str] = "table"
    rows: tuple[tuple[str, str], ...]
    headers: tuple[str, str] = ("t (s)", "x (m)")


@dataclass(frozen=True)
class XtGraph:
    type: ClassVar[str] = "xt-graph"
    points: tuple[Point, ...]
    max_time: float | None = None
    min_distance: float | None = None
    max_distance: float | None = None
    x_ticks: tuple[float, ...] | None = None
    y_ticks: tuple[float, ...] | None = None
    x_label: str = "t (s)"
    y_label: str = "x (m)"


@dataclass(frozen=True)
class VtGraph:
    type: ClassVar[str] = "vt-graph"
    points: tuple[Point, ...]
    max_time: float | None = None
    min_velocity: float | None = None
    max_velocity: float | None = None
    x_ticks: tuple[float, ...] | None = None
    y_ticks: tuple[float, ...] | None = None
    x_label: str = "t (s)"
    y_label: str = "v (m/s)"


@dataclass(frozen=True)
class FootprintDiagram:
    type: ClassVar[str] = "footprint"
    steps: tuple[Step, ...]
    tick_positions: tuple[float, ...] = ()
    axis_label: str = "x (m)"
    time_between: float | None = None


@dataclass(frozen=True)
class DualXtGraph:
    type: ClassVar[str] = "dual-xt"
    objects: tuple[Series, ...]
    max_time: float | None = None
    min_distance: float | None = None
    max_distance: float | None = None
    x_ticks: tuple[float, ...] | None = None
    y_ticks: tuple[float, ...] | None = None
    x_label: str = "t (s)"
    y_label: str = "x (m)"


@dataclass(frozen=True)
class DualVtGraph:
    type: ClassVar[str] = "dual-vt"
    objects: tuple[Series, ...]
    max_time: float | None = None
    min_velocity: float | None = None
    max_velocity: float | None = None
    x_ticks: tuple[float, ...] | None = None
    y_ticks: tuple[float, ...] | None = None
    x_label: str = "t (s)"
    y_label: str = "v (m/s)"


@dataclass(frozen=True)
class XtEquation:
    type: ClassVar[str] = "xt-equation"
    velocity: float
    intercept: float
    distance_label: str = "m"
    time_label: str = "s"


Representation = Union[
    TableRepresentation, XtGraph, VtGraph, FootprintDiagram,
    DualXtGraph, DualVtGraph, XtEquation,
]

# 数值轴为速度 (v) 的图像类型，其余为位置 (x)
VELOCITY_TYPES = {"vt-graph", "dual-vt"}

ANSWER_TYPES = ("speed", "distance", "time", "equation")


def _rename_points(points: list[dict], axis: str) -> list[dict]:
    return [{"t": p["t"], axis: p["value"]} for p in points]


def representation_to_dict(rep: Representation | None) -> dict | None:
    """序列化为 {type, ...}，采样点按图像类型输出为 {t, x} 或 {t, v}"""
    if rep is None:
        return None
    data = {"type": rep.type, **asdict(rep)}
    axis = "v" if rep.type in VELOCITY_TYPES else "x"
    if "points" in data:
        data["points"] = _rename_points(data["points"], axis)
    if "objects" in data:
        for obj in data["objects"]:
            obj["points"] = _rename_points(obj["points"], axis)
    return data


def _option_to_dict(opt: Option) -> dict:
    d = asdict(opt)
    d["unit_label"] = opt.unit_label
    return d


@dataclass(frozen=True)
class Question:
    """一道生成的题目，所有流水线阶段均返回新值"""
    id: str
    prompt: str
    correct_answer: CorrectAnswer
    representation: Representation | None = None
    builder: str = ""                            # 注册表中的名字
    family: str = ""                             # 场景族
    answer_type: str = ""                        # speed / distance / time / equation
    explanation: str = ""                        # 按显示单位渲染后的解析
    explanation_base: str = ""                   # 基准单位下的解析模板
    fixed_options: tuple[Option, ...] = ()       # 题目自带的完整选项集
    distractors: tuple[float, ...] = ()          # 题目自带的额外错误数值
    base_unit: str = ""
    correct_value: float | str | None = None
    answer_unit: AnswerUnit | None = None
    options: tuple[Option, ...] = ()
    sequence: int = 0
    meta: dict = field(default_factory=dict, compare=False)

    @property
    def correct_options(self) -> list[Option]:
        return [opt for opt in self.options if opt.is_correct]

    @property
    def correct_index(self) -> int | None:
        for i, opt in enumerate(self.options):
            if opt.is_correct:
                return i
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "builder": self.builder,
            "family": self.family,
            "sequence": self.sequence,
            "prompt": self.prompt,
            "answerType": self.answer_type,
            "representation": representation_to_dict(self.representation),
            "correctAnswer": asdict(self.correct_answer),
            "baseUnit": self.base_unit,
            "correctValue": self.correct_value,
            "answerUnit": asdict(self.answer_unit) if self.answer_unit else None,
            "options": [_option_to_dict(o) for o in self.options],
            "explanationBase": self.explanation_base,
            "explanation": self.explanation,
        }
