"""批量出题的统计分析"""
from __future__ import annotations
from collections import Counter
import unicodedata
from linmotion_quiz.models import Question


def _display_width(s: str) -> int:
    """计算字符串在终端的显示宽度"""
    return sum(2 if unicodedata.east_asian_width(c) in ("F", "W") else 1 for c in s)


def _pad_right(s: str, width: int) -> str:
    return s + " " * (width - _display_width(s))


def _display_unit(q: Question) -> str:
    if q.answer_unit is not None and q.answer_unit.label:
        return q.answer_unit.label
    return q.base_unit


def summarize(questions: list[Question]) -> dict:
    by_builder = Counter()
    by_family = Counter()
    by_answer_type = Counter()
    by_representation = Counter()
    by_unit = Counter()
    total_options = 0

    for q in questions:
        by_builder[q.builder] += 1
        by_family[q.family] += 1
        by_answer_type[q.answer_type] += 1
        by_representation[q.representation.type if q.representation else "none"] += 1
        by_unit[_display_unit(q)] += 1
        total_options += len(q.options)

    return {
        "total": len(questions),
        "by_builder": dict(by_builder.most_common()),
        "by_family": dict(by_family.most_common()),
        "by_answer_type": dict(by_answer_type.most_common()),
        "by_representation": dict(by_representation.most_common()),
        "by_unit": dict(by_unit.most_common()),
        "avg_options": round(total_options / len(questions), 2) if questions else 0,
    }


def print_summary(questions: list[Question]) -> None:
    """打印统计摘要到终端"""
    s = summarize(questions)
    total = s["total"] or 1
    print(f"\n{'='*50}")
    print("📊 出题统计")
    print(f"{'='*50}")
    print(f"总题数: {s['total']} 道, 平均选项数: {s['avg_options']}")

    def _print_section(title: str, data: dict, show_bar: bool = True):
        print(f"\n{title}:")
        if not data:
            print("  (无数据)")
            return
        labels = {k: (k if k.strip() else "未知") for k in data}
        col_width = max(_display_width(v) for v in labels.values()) + 2
        max_count = max(data.values())
        for key, count in data.items():
            padded = _pad_right(labels[key], col_width)
            bar = " " + "■" * round(count / max_count * 20) if show_bar else ""
            print(f"  {padded} {count:>5d} ({count / total * 100:>5.1f}%){bar}")

    _print_section("按场景族", s["by_family"])
    _print_section("按答案类型", s["by_answer_type"])
    _print_section("按表示形式", s["by_representation"])
    _print_section("按显示单位", s["by_unit"])
    _print_section("按构造器", s["by_builder"], show_bar=False)
    print(f"{'='*50}\n")
