"""
Core Layer - 核心层

包含数据模型、错误类型、取消令牌、排除规则计算和检查运行器。
"""

from codeowners_validator.core.models import (
    AggregateResult,
    CheckInput,
    CheckOutput,
    CheckResult,
    Issue,
    OutputBuilder,
    OwnershipEntry,
    SeverityType,
)
from codeowners_validator.core.errors import (
    CheckCancelled,
    CheckError,
    GitOperationError,
    MultiError,
    WorkspaceError,
)
from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.check import Check
from codeowners_validator.core.patterns import compute_excluded_patterns
from codeowners_validator.core.runner import CheckRunner

__all__ = [
    # models
    "AggregateResult",
    "CheckInput",
    "CheckOutput",
    "CheckResult",
    "Issue",
    "OutputBuilder",
    "OwnershipEntry",
    "SeverityType",
    # errors
    "CheckCancelled",
    "CheckError",
    "GitOperationError",
    "MultiError",
    "WorkspaceError",
    # runner
    "CancellationToken",
    "Check",
    "compute_excluded_patterns",
    "CheckRunner",
]
