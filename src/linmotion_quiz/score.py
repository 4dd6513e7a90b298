"""答对数 / 连对数的持久化"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STATS_STORAGE_KEY = "physics-quiz-stats"


def _is_count(value) -> bool:
    # bool 是 int 的子类，需要单独排除
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class ScoreSnapshot:
    correct_count: int = 0
    current_streak: int = 0

    def to_payload(self) -> dict:
        return {"correctCount": self.correct_count, "currentStreak": self.current_streak}

    @classmethod
    def from_payload(cls, payload) -> "ScoreSnapshot":
        """格式不对时抛 ValueError"""
        if not isinstance(payload, dict):
            raise ValueError(f"成绩记录应为对象，实际为 {type(payload).__name__}")
        correct = payload.get("correctCount")
        streak = payload.get("currentStreak")
        if not (_is_count(correct) and _is_count(streak)):
            raise ValueError(f"成绩记录字段无效: {payload!r}")
        return cls(correct, streak)


class ScoreStore:
    """
    JSON 文件中的一个键保存 {"correctCount", "currentStreak"}。

    读取失败一律回退为 (0, 0) 并记日志；写入为原子操作，保留文件中的其他键。
    """

    def __init__(self, path: str | Path, key: str = STATS_STORAGE_KEY) -> None:
        self.path = Path(path)
        self.key = key

    # ── 读取 ────────────────────────────────────────────
    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("成绩文件损坏，按零分处理: %s (%s)", self.path, exc)
            return {}
        if not isinstance(raw, dict):
            logger.warning("成绩文件格式错误，按零分处理: %s", self.path)
            return {}
        return raw

    def load(self) -> tuple[int, int]:
        data = self._read_all()
        if self.key not in data:
            logger.debug("成绩记录不存在，从零开始: %s[%s]", self.path, self.key)
            return 0, 0
        try:
            snap = ScoreSnapshot.from_payload(data[self.key])
        except ValueError as exc:
            logger.warning("成绩记录无效，按零分处理: %s", exc)
            return 0, 0
        return snap.correct_count, snap.current_streak

    # ── 写入 ────────────────────────────────────────────
    def save(self, correct_count: int, current_streak: int) -> None:
        data = self._read_all()
        data[self.key] = ScoreSnapshot(correct_count, current_streak).to_payload()
        self._flush(data)

    def clear(self) -> None:
        data = self._read_all()
        if self.key in data:
            del data[self.key]
            self._flush(data)
            logger.info("成绩记录已清除: %s[%s]", self.path, self.key)

    # ── 私有：原子写盘 ───────────────────────────────────
    def _flush(self, data: dict) -> None:
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}_", suffix=".tmp")
        except OSError:
            logger.exception("成绩写盘失败: %s", self.path)
            return
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            # 写盘失败不能中断答题，只记日志
            logger.exception("成绩写盘失败: %s", self.path)
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
