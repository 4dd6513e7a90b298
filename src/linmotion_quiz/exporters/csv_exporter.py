from __future__ import annotations
import csv
from pathlib import Path
from linmotion_quiz.models import Question
from linmotion_quiz.exporters import register
from linmotion_quiz.exporters.base import BaseExporter


@register("csv")
class CsvExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".csv")

        rows, columns = self.flatten(questions)

        # utf-8-sig 便于 Excel 直接打开希伯来文
        with open(fp, "w", newline="", encoding="utf-8-sig") as f:
            writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
            writer.writeheader()
            writer.writerows(rows)

        print(f"[INFO] CSV 导出完成: {fp} ({len(rows)} 行, {len(columns)} 列)")
