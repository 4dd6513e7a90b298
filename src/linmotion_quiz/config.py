"""出题配置：config.yaml → QuizConfig，命令行参数优先"""
from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
import yaml

DEFAULT_CONFIG_PATH = "config.yaml"


class ConfigError(Exception):
    pass


@dataclass
class QuizConfig:
    seed: int | None = None
    test_mode: bool = False                  # 按注册顺序轮流出题
    count: int = 20

    # 构造器过滤
    families: list[str] = field(default_factory=list)
    answer_types: list[str] = field(default_factory=list)
    builders: list[str] = field(default_factory=list)

    # 导出
    output_dir: str = "./data/output"
    formats: list[str] = field(default_factory=lambda: ["json"])

    # 成绩持久化
    stats_path: str = "./data/quiz_stats.json"
    storage_key: str = "physics-quiz-stats"

    # play API
    host: str = "127.0.0.1"
    port: int = 5000

    @classmethod
    def from_dict(cls, raw: dict) -> "QuizConfig":
        if not isinstance(raw, dict):
            raise ConfigError(f"配置文件顶层必须是映射，实际为 {type(raw).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ConfigError(f"未知配置项: {sorted(unknown)}")
        cfg = cls(**raw)
        cfg.validate()
        return cfg

    def merged(self, **overrides) -> "QuizConfig":
        """返回覆盖后的新配置，值为 None 或空序列的参数视为未指定"""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in data:
                raise ConfigError(f"未知配置项: {key}")
            if value is None or (isinstance(value, (list, tuple)) and not value):
                continue
            data[key] = list(value) if isinstance(value, tuple) else value
        cfg = QuizConfig(**data)
        cfg.validate()
        return cfg

    def validate(self) -> None:
        from linmotion_quiz.builders import FAMILIES
        from linmotion_quiz.models import ANSWER_TYPES

        if not isinstance(self.count, int) or self.count < 1:
            raise ConfigError(f"count 必须是正整数: {self.count!r}")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ConfigError(f"seed 必须是整数: {self.seed!r}")
        bad = set(self.families) - set(FAMILIES)
        if bad:
            raise ConfigError(f"无效场景族: {sorted(bad)}，支持: {', '.join(FAMILIES)}")
        bad = set(self.answer_types) - set(ANSWER_TYPES)
        if bad:
            raise ConfigError(f"无效答案类型: {sorted(bad)}，支持: {', '.join(ANSWER_TYPES)}")


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> QuizConfig:
    """文件不存在时返回默认配置"""
    p = Path(config_path)
    if not p.exists():
        return QuizConfig()
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"配置文件解析失败: {p} ({e})") from e
    return QuizConfig.from_dict(raw)
