from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from linmotion_quiz.formatting import OPTION_LABELS, format_answer, format_option
from linmotion_quiz.models import Question

MAX_OPTIONS = 6

BASE_COLUMNS = [
    "id", "sequence", "builder", "family", "answer_type",
    "prompt", "representation", "display_unit",
]
TAIL_COLUMNS = ["answer", "explanation"]


class BaseExporter(ABC):

    @abstractmethod
    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        ...

    @staticmethod
    def _detect_max_options(questions: list[Question]) -> int:
        """扫描所有题目，确定最大选项数"""
        max_opt = max((len(q.options) for q in questions), default=0)
        return min(max_opt, MAX_OPTIONS)

    @staticmethod
    def get_columns(max_opt: int) -> list[str]:
        opt_cols = [f"option_{OPTION_LABELS[i]}" for i in range(max_opt)]
        return BASE_COLUMNS + opt_cols + TAIL_COLUMNS

    @staticmethod
    def flatten(questions: list[Question]) -> tuple[list[dict], list[str]]:
        """
        每道题一行。

        选项按显示单位渲染为纯文本（方程不带 LaTeX 包装），
        answer 为正确选项的文本。
        """
        max_opt = BaseExporter._detect_max_options(questions)
        columns = BaseExporter.get_columns(max_opt)

        rows = []
        for q in questions:
            unit = q.answer_unit.label if q.answer_unit else q.base_unit
            row = {
                "id":             q.id,
                "sequence":       q.sequence,
                "builder":        q.builder,
                "family":         q.family,
                "answer_type":    q.answer_type,
                "prompt":         q.prompt,
                "representation": q.representation.type if q.representation else "",
                "display_unit":   unit,
                "answer":         format_answer(q),
                "explanation":    q.explanation,
            }
            for j in range(max_opt):
                key = f"option_{OPTION_LABELS[j]}"
                row[key] = format_option(q.options[j], q, math=False) if j < len(q.options) else ""
            rows.append(row)

        return rows, columns
