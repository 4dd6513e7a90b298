"""
题目构造器注册表。

每个构造器是一个 build(rng, **params) -> Question 函数，通过 @register
声明名字、场景族与答案类型；注册顺序即测试模式下的出题顺序。
"""
from __future__ import annotations
import importlib
import random
from dataclasses import dataclass, replace
from typing import Callable
from linmotion_quiz.models import ANSWER_TYPES, Question

FAMILIES = ("uniform", "piecewise", "velocity-area", "equation", "dual")

# 内置构造器模块，按出题顺序排列
_BUILTIN_MODULES = ("uniform", "piecewise", "velocity", "equations", "dual")

_REGISTRY: dict[str, "BuilderEntry"] = {}


@dataclass(frozen=True)
class BuilderEntry:
    name: str
    family: str
    answer_type: str
    fn: Callable[..., Question]

    def build(self, rng: random.Random | None = None, **params) -> Question:
        """调用构造器并写入注册信息"""
        question = self.fn(rng or random.Random(), **params)
        return replace(
            question,
            builder=self.name,
            family=self.family,
            answer_type=self.answer_type,
        )


def register(name: str, *, family: str, answer_type: str):
    if family not in FAMILIES:
        raise ValueError(f"未知场景族: {family}")
    if answer_type not in ANSWER_TYPES:
        raise ValueError(f"未知答案类型: {answer_type}")

    def decorator(fn):
        _REGISTRY[name] = BuilderEntry(name, family, answer_type, fn)
        return fn
    return decorator


def get_builder(name: str) -> BuilderEntry:
    if name not in _REGISTRY:
        raise KeyError(f"未知构造器: {name}，可用: {list(_REGISTRY.keys())}")
    return _REGISTRY[name]


def all_builders() -> list[BuilderEntry]:
    discover()
    return list(_REGISTRY.values())


def discover():
    """导入所有内置构造器模块，触发注册"""
    for mod in _BUILTIN_MODULES:
        importlib.import_module(f"linmotion_quiz.builders.{mod}")


def filter_builders(
    entries: list[BuilderEntry],
    families: list[str] | None = None,
    answer_types: list[str] | None = None,
    names: list[str] | None = None,
) -> list[BuilderEntry]:
    result = entries
    if families:
        result = [e for e in result if e.family in families]
    if answer_types:
        result = [e for e in result if e.answer_type in answer_types]
    if names:
        result = [e for e in result if e.name in names]
    return result
