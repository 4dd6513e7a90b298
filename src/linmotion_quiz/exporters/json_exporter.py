from __future__ import annotations
import json
from pathlib import Path
from linmotion_quiz.models import Question
from linmotion_quiz.exporters import register
from linmotion_quiz.exporters.base import BaseExporter


@register("json")
class JsonExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".json")

        data = [q.to_dict() for q in questions]

        fp.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        print(f"[INFO] JSON 导出完成: {fp} ({len(data)} 题)")
