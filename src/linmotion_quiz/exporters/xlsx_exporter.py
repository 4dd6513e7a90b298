from __future__ import annotations
from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from linmotion_quiz.formatting import OPTION_LABELS
from linmotion_quiz.models import Question
from linmotion_quiz.exporters import register
from linmotion_quiz.exporters.base import BaseExporter

# 中文表头映射
HEADER_LABELS = {
    "id":             "编号",
    "sequence":       "序号",
    "builder":        "构造器",
    "family":         "场景族",
    "answer_type":    "答案类型",
    "prompt":         "题目",
    "representation": "表示形式",
    "display_unit":   "显示单位",
    "answer":         "答案",
    "explanation":    "解析",
}
for _label in OPTION_LABELS:
    HEADER_LABELS[f"option_{_label}"] = f"选项{_label}"

COL_WIDTHS = {
    "id":             22,
    "sequence":       8,
    "builder":        22,
    "prompt":         50,
    "explanation":    50,
    "answer":         25,
}
for _label in OPTION_LABELS:
    COL_WIDTHS[f"option_{_label}"] = 25

_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
# 换算过显示单位的题目，单位格标浅黄
_UNIT_FILL   = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")


@register("xlsx")
class XlsxExporter(BaseExporter):

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".xlsx")

        rows, columns = self.flatten(questions)
        base_units = [q.base_unit for q in questions]

        wb = Workbook()
        ws = wb.active
        ws.title = "题目"

        header_font = Font(bold=True, color="FFFFFF")
        col_index = {key: i + 1 for i, key in enumerate(columns)}

        # 表头
        for col_idx, col_key in enumerate(columns, 1):
            cell = ws.cell(row=1, column=col_idx, value=HEADER_LABELS.get(col_key, col_key))
            cell.font = header_font
            cell.fill = _HEADER_FILL
            cell.alignment = Alignment(horizontal="center")

        # 数据行
        converted = 0
        for row_idx, (row, base_unit) in enumerate(zip(rows, base_units), 2):
            for col_idx, col_key in enumerate(columns, 1):
                cell = ws.cell(row=row_idx, column=col_idx, value=row.get(col_key, ""))
                cell.alignment = Alignment(wrap_text=True, vertical="top")
            if row["display_unit"] != base_unit:
                ws.cell(row=row_idx, column=col_index["display_unit"]).fill = _UNIT_FILL
                converted += 1

        # 列宽
        for col_idx, col_key in enumerate(columns, 1):
            letter = get_column_letter(col_idx)
            ws.column_dimensions[letter].width = COL_WIDTHS.get(col_key, 14)

        # 冻结首行
        ws.freeze_panes = "A2"
        last_col = get_column_letter(len(columns))
        ws.auto_filter.ref = f"A1:{last_col}{len(rows) + 1}"

        wb.save(fp)
        print(f"[INFO] XLSX 导出完成: {fp} ({len(rows)} 行, {len(columns)} 列, 换算单位: {converted} 题)")
