"""导出器测试：四种格式都能落盘，扁平化列与题目对应"""
import csv
import json
import tempfile
from pathlib import Path

import pytest
from docx import Document
from openpyxl import load_workbook

from linmotion_quiz.config import QuizConfig
from linmotion_quiz.exporters import available, discover, get_exporter
from linmotion_quiz.exporters.base import BASE_COLUMNS, BaseExporter
from linmotion_quiz.pipeline import generate_batch

# 测试模式前 20 题正好覆盖所有构造器
QUESTIONS = generate_batch(QuizConfig(seed=5, count=20, test_mode=True))


def test_all_formats_registered():
    discover()
    assert set(available()) >= {"json", "csv", "xlsx", "docx"}


def test_unknown_format():
    discover()
    with pytest.raises(KeyError):
        get_exporter("pdf")


def test_flatten():
    rows, columns = BaseExporter.flatten(QUESTIONS)
    assert len(rows) == 20
    assert columns[:len(BASE_COLUMNS)] == BASE_COLUMNS
    assert columns[-2:] == ["answer", "explanation"]
    assert "option_A" in columns and "option_D" in columns
    for row, q in zip(rows, QUESTIONS):
        assert row["builder"] == q.builder
        assert row["answer"]
        # 方程选项导出为纯文本
        assert "\\(" not in row["option_A"]


def test_json_export():
    discover()
    with tempfile.TemporaryDirectory() as tmpdir:
        get_exporter("json").export(QUESTIONS, Path(tmpdir) / "questions")
        data = json.loads((Path(tmpdir) / "questions.json").read_text(encoding="utf-8"))
        assert len(data) == 20
        assert data[0]["builder"] == "table-rate"
        assert data[0]["representation"]["type"] == "table"
        assert {"options", "correctAnswer", "explanation", "answerUnit"} <= set(data[0])


def test_csv_export():
    discover()
    with tempfile.TemporaryDirectory() as tmpdir:
        get_exporter("csv").export(QUESTIONS, Path(tmpdir) / "questions")
        with open(Path(tmpdir) / "questions.csv", encoding="utf-8-sig", newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 20
        assert rows[-1]["builder"] == "dual-xt-leader"


def test_xlsx_export():
    discover()
    with tempfile.TemporaryDirectory() as tmpdir:
        get_exporter("xlsx").export(QUESTIONS, Path(tmpdir) / "questions")
        wb = load_workbook(Path(tmpdir) / "questions.xlsx")
        ws = wb["题目"]
        assert ws.max_row == 21
        assert ws.cell(row=1, column=1).value == "编号"
        assert ws.freeze_panes == "A2"


def test_docx_export():
    discover()
    with tempfile.TemporaryDirectory() as tmpdir:
        get_exporter("docx").export(QUESTIONS, Path(tmpdir) / "questions", title="בדיקה")
        doc = Document(str(Path(tmpdir) / "questions.docx"))
        text = "\n".join(p.text for p in doc.paragraphs)
        assert "בדיקה" in text
        assert "פתרונות" in text
        assert QUESTIONS[0].prompt in text
        # 表格题与图像题都有数据表
        assert len(doc.tables) >= 1
