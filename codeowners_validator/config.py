"""
配置模块 - 合并默认值、YAML 配置文件和命令行/环境变量

优先级（从低到高）：
1. 默认值
2. YAML 配置文件（codeowners-config.yaml 或 --config 指定）
3. 环境变量（CODEOWNERS_ 前缀）和命令行选项
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from codeowners_validator.core.models import SeverityType

logger = logging.getLogger(__name__)


# ============================================================
# 配置常量
# ============================================================

DEFAULT_CONFIG_FILENAME = "codeowners-config.yaml"
ENV_PREFIX = "CODEOWNERS_"

CONFIG_KEYS = (
    "repository_path",
    "check_failure_level",
    "checks",
    "experimental_checks",
    "not_owned_checker_skip_patterns",
    "not_owned_checker_subdirectories",
    "not_owned_checker_trust_workspace",
)


class ConfigError(ValueError):
    """配置错误"""
    pass


# ============================================================
# 数据模型
# ============================================================

@dataclass
class NotOwnedFileConfig:
    """
    未归属文件检查器配置

    Attributes:
        trust_workspace: 是否将仓库注册为 git safe.directory
            (see https://github.com/actions/checkout/issues/766)
        skip_patterns: 不作为排除规则应用的模式
        subdirectories: 仅检查这些子目录（为空表示整个仓库）
    """
    trust_workspace: bool = False
    skip_patterns: list[str] = field(default_factory=list)
    subdirectories: list[str] = field(default_factory=list)


@dataclass
class AppConfig:
    """
    应用配置

    Attributes:
        repository_path: 仓库路径
        check_failure_level: 失败阈值
        checks: 启用的检查器（为空表示全部稳定检查器）
        experimental_checks: 启用的实验性检查器
        not_owned: 未归属文件检查器配置
    """
    repository_path: Path = Path(".")
    check_failure_level: SeverityType = SeverityType.WARNING
    checks: list[str] = field(default_factory=list)
    experimental_checks: list[str] = field(default_factory=list)
    not_owned: NotOwnedFileConfig = field(default_factory=NotOwnedFileConfig)


# ============================================================
# 解析函数
# ============================================================

def split_list(value: Any) -> list[str]:
    """Accept a YAML list or a comma-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    raise ConfigError(f"Expected a list or comma-separated string, got {type(value).__name__}")


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"Invalid boolean value: {value!r}")


def read_config_file(path: Path) -> dict[str, Any]:
    """
    读取 YAML 配置文件

    Raises:
        ConfigError: 文件无法读取或格式错误
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    for key in data:
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown config key {key!r} in {path}")
    return {k: v for k, v in data.items() if k in CONFIG_KEYS}


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> AppConfig:
    """
    加载配置

    Args:
        config_path: YAML 配置文件路径；为空时使用当前目录下的默认文件（如果存在）
        overrides: 命令行/环境变量提供的值，None 表示未设置

    Returns:
        AppConfig 对象

    Raises:
        ConfigError: 配置无效
    """
    values: dict[str, Any] = {}

    if config_path is None:
        default_path = Path(DEFAULT_CONFIG_FILENAME)
        if default_path.is_file():
            config_path = default_path
    if config_path is not None:
        logger.debug(f"Loading config file {config_path}")
        values.update(read_config_file(Path(config_path)))

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    try:
        failure_level = SeverityType.parse(values.get("check_failure_level", SeverityType.WARNING))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    return AppConfig(
        repository_path=Path(values.get("repository_path") or "."),
        check_failure_level=failure_level,
        checks=split_list(values.get("checks")),
        experimental_checks=split_list(values.get("experimental_checks")),
        not_owned=NotOwnedFileConfig(
            trust_workspace=parse_bool(values.get("not_owned_checker_trust_workspace", False)),
            skip_patterns=split_list(values.get("not_owned_checker_skip_patterns")),
            subdirectories=split_list(values.get("not_owned_checker_subdirectories")),
        ),
    )
