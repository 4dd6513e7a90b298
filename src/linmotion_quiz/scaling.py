"""
表示形式的单位缩放。

scale_by_value 缩放数值轴（位置/速度），scale_by_time 缩放时间轴。
两者都返回新的表示形式，只改动与该轴相关的字段；未显式给出的边界
按缩放后的采样点重新计算。
"""
from __future__ import annotations
import re
from dataclasses import replace
from linmotion_quiz.formatting import number_text
from linmotion_quiz.models import (
    DualVtGraph, DualXtGraph, FootprintDiagram, Point, Representation,
    TableRepresentation, VtGraph, XtEquation, XtGraph,
)

_UNIT_IN_LABEL = re.compile(r".*\(([^)]+)\).*")

# 各图像类型的数值轴边界字段
_VALUE_BOUNDS = {
    XtGraph: ("min_distance", "max_distance"),
    VtGraph: ("min_velocity", "max_velocity"),
    DualXtGraph: ("min_distance", "max_distance"),
    DualVtGraph: ("min_velocity", "max_velocity"),
}


def unit_from_label(label: str) -> str:
    """"x (km)" → "km"；没有括号时原样返回"""
    m = _UNIT_IN_LABEL.match(label)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return label


def _scale_ticks(ticks: tuple[float, ...] | None, factor: float) -> tuple[float, ...] | None:
    if ticks is None:
        return None
    return tuple(tick * factor for tick in ticks)


def _scale_bound(current: float | None, factor: float, derived: float) -> float:
    if current is not None:
        return current * factor
    return derived


def _all_points(rep) -> list[Point]:
    if isinstance(rep, (DualXtGraph, DualVtGraph)):
        return [p for obj in rep.objects for p in obj.points]
    return list(rep.points)


def _with_points(rep, fn):
    if isinstance(rep, (DualXtGraph, DualVtGraph)):
        objects = tuple(
            replace(obj, points=tuple(fn(p) for p in obj.points)) for obj in rep.objects
        )
        return replace(rep, objects=objects)
    return replace(rep, points=tuple(fn(p) for p in rep.points))


def _scale_graph_values(rep, factor: float, label: str):
    lo_field, hi_field = _VALUE_BOUNDS[type(rep)]
    rep = _with_points(rep, lambda p: Point(p.t, p.value * factor))
    values = [p.value for p in _all_points(rep)]
    return replace(
        rep,
        **{
            lo_field: _scale_bound(getattr(rep, lo_field), factor, min(values)),
            hi_field: _scale_bound(getattr(rep, hi_field), factor, max(values)),
        },
        y_ticks=_scale_ticks(rep.y_ticks, factor),
        y_label=label,
    )


def _scale_graph_time(rep, factor: float, label: str):
    rep = _with_points(rep, lambda p: Point(p.t * factor, p.value))
    times = [p.t for p in _all_points(rep)]
    return replace(
        rep,
        max_time=_scale_bound(rep.max_time, factor, max(times)),
        x_ticks=_scale_ticks(rep.x_ticks, factor),
        x_label=label,
    )


def scale_by_value(rep: Representation | None, factor: float, label: str) -> Representation | None:
    if rep is None:
        return None
    if isinstance(rep, TableRepresentation):
        rows = tuple((t, number_text(float(x) * factor)) for t, x in rep.rows)
        return replace(rep, rows=rows, headers=(rep.headers[0], label))
    if isinstance(rep, (XtGraph, VtGraph, DualXtGraph, DualVtGraph)):
        return _scale_graph_values(rep, factor, label)
    if isinstance(rep, FootprintDiagram):
        return replace(
            rep,
            steps=tuple(replace(s, position=s.position * factor) for s in rep.steps),
            tick_positions=tuple(tick * factor for tick in rep.tick_positions),
            axis_label=label,
        )
    if isinstance(rep, XtEquation):
        return replace(
            rep,
            velocity=rep.velocity * factor,
            intercept=rep.intercept * factor,
            distance_label=unit_from_label(label),
        )
    raise TypeError(f"未知的表示形式: {type(rep).__name__}")


def scale_by_time(rep: Representation | None, factor: float, label: str) -> Representation | None:
    if rep is None:
        return None
    if isinstance(rep, TableRepresentation):
        rows = tuple((number_text(float(t) * factor), x) for t, x in rep.rows)
        return replace(rep, rows=rows, headers=(label, rep.headers[1]))
    if isinstance(rep, (XtGraph, VtGraph, DualXtGraph, DualVtGraph)):
        return _scale_graph_time(rep, factor, label)
    if isinstance(rep, FootprintDiagram):
        time_between = rep.time_between * factor if rep.time_between is not None else None
        return replace(
            rep,
            steps=tuple(replace(s, time=s.time * factor) for s in rep.steps),
            time_between=time_between,
        )
    if isinstance(rep, XtEquation):
        # v = x / t
        return replace(
            rep,
            velocity=rep.velocity / (factor or 1),
            time_label=unit_from_label(label),
        )
    raise TypeError(f"未知的表示形式: {type(rep).__name__}")
