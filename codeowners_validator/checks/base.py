"""Check registry.

Maps configured check names to factories. Each built-in check module
exposes register(registry); the registry imports and registers them lazily
on first use.
"""

import importlib
from dataclasses import dataclass
from typing import Callable, Sequence

from codeowners_validator.config import AppConfig, ConfigError
from codeowners_validator.core.check import Check


@dataclass
class CheckSpec:
    """Registered check."""
    name: str
    factory: Callable[[AppConfig], Check]
    experimental: bool = False


class CheckRegistry:
    """Registry for checks.

    检查器通过以下方式注册：
    1. 内置检查器模块首次使用时由 _ensure_initialized() 加载
    2. 调用方直接调用 CheckRegistry.register()
    """

    _specs: dict[str, CheckSpec] = {}  # name -> spec
    _initialized: bool = False

    BUILTIN_MODULES = [
        "codeowners_validator.checks.duplicated_pattern",
        "codeowners_validator.checks.file_exists",
        "codeowners_validator.checks.not_owned_file",
    ]

    @classmethod
    def register(
        cls,
        name: str,
        factory: Callable[[AppConfig], Check],
        experimental: bool = False,
    ) -> None:
        """Register a check factory by its config name (prevents duplicates)."""
        if name not in cls._specs:
            cls._specs[name] = CheckSpec(name=name, factory=factory, experimental=experimental)

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._specs.pop(name, None)

    @classmethod
    def clear(cls) -> None:
        cls._specs.clear()
        cls._initialized = False

    @classmethod
    def _ensure_initialized(cls) -> None:
        if cls._initialized:
            return
        cls._initialized = True
        for module_name in cls.BUILTIN_MODULES:
            module = importlib.import_module(module_name)
            module.register(cls)

    @classmethod
    def get(cls, name: str) -> CheckSpec | None:
        cls._ensure_initialized()
        return cls._specs.get(name)

    @classmethod
    def stable_names(cls) -> list[str]:
        cls._ensure_initialized()
        return [s.name for s in cls._specs.values() if not s.experimental]

    @classmethod
    def experimental_names(cls) -> list[str]:
        cls._ensure_initialized()
        return [s.name for s in cls._specs.values() if s.experimental]


def load_checks(
    selected: Sequence[str],
    experimental: Sequence[str],
    config: AppConfig,
) -> list[Check]:
    """
    根据配置实例化检查器

    Args:
        selected: 启用的稳定检查器名称，为空表示全部
        experimental: 启用的实验性检查器名称
        config: 应用配置

    Returns:
        检查器列表（按配置顺序）

    Raises:
        ConfigError: 未知的检查器名称，或实验性检查器未通过 experimental 启用
    """
    names = list(selected) or CheckRegistry.stable_names()
    checks: list[Check] = []
    seen: set[str] = set()

    for name, want_experimental in [(n, False) for n in names] + [(n, True) for n in experimental]:
        if name in seen:
            continue
        seen.add(name)

        spec = CheckRegistry.get(name)
        if spec is None:
            available = ", ".join(CheckRegistry.stable_names() + CheckRegistry.experimental_names())
            raise ConfigError(f"Unknown check {name!r} (available: {available})")
        if spec.experimental != want_experimental:
            kind = "experimental" if spec.experimental else "stable"
            option = "experimental checks" if spec.experimental else "checks"
            raise ConfigError(f"Check {name!r} is {kind}; enable it via {option}")

        checks.append(spec.factory(config))

    return checks
