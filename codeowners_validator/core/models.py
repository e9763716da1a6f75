"""
数据模型定义

包含检查器和运行器共享的所有数据类。
"""

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from codeowners_validator.core.errors import CheckError


class SeverityType(IntEnum):
    """
    严重程度（全序：info < warning < error）
    """
    INFO = 1
    WARNING = 2
    ERROR = 3

    @classmethod
    def parse(cls, value: "str | SeverityType") -> "SeverityType":
        """从字符串解析严重程度（不区分大小写）"""
        if isinstance(value, SeverityType):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            allowed = ", ".join(str(s) for s in cls)
            raise ValueError(f"Unknown severity level {value!r} (allowed: {allowed})") from None

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


@dataclass(frozen=True)
class OwnershipEntry:
    """
    CODEOWNERS 条目

    Attributes:
        pattern: 文件路径模式
        owners: 所有者列表（按声明顺序）
        line_no: 源文件中的行号 (1-based，未知时为 0)
    """
    pattern: str
    owners: tuple[str, ...] = ()
    line_no: int = 0


@dataclass(frozen=True)
class CheckInput:
    """
    检查输入 - 所有检查器收到相同的输入

    Attributes:
        repo_dir: 仓库根目录
        entries: CODEOWNERS 条目列表
    """
    repo_dir: Path
    entries: list[OwnershipEntry] = field(default_factory=list)


@dataclass
class Issue:
    """检查问题"""
    message: str


@dataclass
class CheckOutput:
    """
    检查输出

    issues 为空表示检查通过。
    """
    issues: list[Issue] = field(default_factory=list)


class OutputBuilder:
    """Collects issues reported by a single check run."""

    def __init__(self) -> None:
        self._issues: list[Issue] = []

    def report_issue(self, message: str) -> "OutputBuilder":
        self._issues.append(Issue(message=message))
        return self

    def output(self) -> CheckOutput:
        return CheckOutput(issues=list(self._issues))


@dataclass
class CheckResult:
    """
    单个检查器的执行结果

    Attributes:
        name: 检查器名称
        severity: 检查器的严重程度
        output: 检查输出
        duration_ms: 执行耗时（毫秒）
    """
    name: str
    severity: SeverityType
    output: CheckOutput
    duration_ms: int = 0

    @property
    def passed(self) -> bool:
        return not self.output.issues


@dataclass
class AggregateResult:
    """
    一次运行的汇总结果

    Attributes:
        threshold: 失败阈值
        results: 检查器名称 -> 执行结果（按执行顺序）
        error: 导致运行中止的操作错误
        interrupted: 运行是否被取消
    """
    threshold: SeverityType
    results: dict[str, CheckResult] = field(default_factory=dict)
    error: Optional["CheckError"] = None
    interrupted: bool = False

    def should_fail(self) -> bool:
        """任一已执行且报告了问题的检查器，其严重程度达到阈值即判定失败"""
        return any(
            not result.passed and result.severity >= self.threshold
            for result in self.results.values()
        )

    @property
    def total_issues(self) -> int:
        return sum(len(r.output.issues) for r in self.results.values())
