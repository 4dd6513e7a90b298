from __future__ import annotations
from pathlib import Path
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, RGBColor
from linmotion_quiz.formatting import OPTION_LABELS, format_answer, option_labels
from linmotion_quiz.models import Question
from linmotion_quiz.preview import representation_table
from linmotion_quiz.exporters import register
from linmotion_quiz.exporters.base import BaseExporter

FONT_NAME = "Arial"
_ANSWER_COLOR = RGBColor(0, 128, 0)
_MUTED_COLOR = RGBColor(100, 100, 100)


def _set_font(run, name: str = FONT_NAME, size: Pt | None = None):
    """同时设置西文与复杂文种（希伯来文）字体"""
    run.font.name = name
    rPr = run._element.get_or_add_rPr()
    rFonts = rPr.find(qn("w:rFonts"))
    if rFonts is None:
        rFonts = OxmlElement("w:rFonts")
        rPr.insert(0, rFonts)
    rFonts.set(qn("w:cs"), name)
    if size is not None:
        run.font.size = size


@register("docx")
class DocxExporter(BaseExporter):
    """可打印练习卷：题目、数据表、选项，末尾附答案页"""

    def export(self, questions: list[Question], output_path: Path, **kwargs) -> None:
        title = kwargs.get("title", "תנועה שוות מהירות - תרגול")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fp = output_path.with_suffix(".docx")

        doc = Document()
        self._set_default_font(doc)
        doc.add_heading(title, level=0).alignment = WD_ALIGN_PARAGRAPH.CENTER

        for idx, q in enumerate(questions, 1):
            self._add_question(doc, idx, q)

        # 答案页
        doc.add_paragraph().add_run().add_break(WD_BREAK.PAGE)
        doc.add_heading("פתרונות", level=1)
        for idx, q in enumerate(questions, 1):
            letter = OPTION_LABELS[q.correct_index] if q.correct_index is not None else "?"
            p = doc.add_paragraph()
            run = p.add_run(f"{idx}. {letter}  {format_answer(q)}")
            run.font.color.rgb = _ANSWER_COLOR
            _set_font(run)
            if q.explanation:
                run = doc.add_paragraph().add_run(q.explanation)
                run.font.color.rgb = _MUTED_COLOR
                _set_font(run, size=Pt(9))

        doc.save(fp)
        print(f"[INFO] DOCX 导出完成: {fp} ({len(questions)} 题)")

    @staticmethod
    def _add_question(doc, idx: int, q: Question):
        p = doc.add_paragraph()
        run = p.add_run(f"{idx}. {q.prompt}")
        run.bold = True
        _set_font(run)

        headers, rows = representation_table(q.representation)
        if rows:
            width = max(len(headers), max(len(r) for r in rows))
            table = doc.add_table(rows=0, cols=width)
            table.style = "Table Grid"
            if headers:
                cells = table.add_row().cells
                for i, h in enumerate(headers):
                    cells[i].text = h
            for r in rows:
                cells = table.add_row().cells
                for i, value in enumerate(r):
                    cells[i].text = value

        for label in option_labels(q):
            run = doc.add_paragraph(style="List Bullet").add_run(label)
            _set_font(run)

        doc.add_paragraph("—" * 40)

    @staticmethod
    def _set_default_font(doc: Document):
        style = doc.styles["Normal"]
        style.font.name = FONT_NAME
        style.font.size = Pt(10.5)
        rPr = style.element.get_or_add_rPr()
        rFonts = rPr.find(qn("w:rFonts"))
        if rFonts is None:
            rFonts = OxmlElement("w:rFonts")
            rPr.insert(0, rFonts)
        rFonts.set(qn("w:cs"), FONT_NAME)
