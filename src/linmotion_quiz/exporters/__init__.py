"""导出器注册表"""
from __future__ import annotations
import importlib

_BUILTIN = ("json_exporter", "csv_exporter", "xlsx_exporter", "docx_exporter")

_REGISTRY: dict[str, type] = {}


def register(name: str):
    def decorator(cls):
        _REGISTRY[name] = cls
        return cls
    return decorator


def get_exporter(name: str):
    if name not in _REGISTRY:
        raise KeyError(f"未知导出格式: {name}，可用: {list(_REGISTRY.keys())}")
    return _REGISTRY[name]()


def available() -> list[str]:
    return list(_REGISTRY.keys())


def discover():
    for mod in _BUILTIN:
        importlib.import_module(f"linmotion_quiz.exporters.{mod}")
