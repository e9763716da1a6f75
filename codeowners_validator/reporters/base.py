"""
报告器基类 - 定义报告器接口
"""

from typing import Protocol

from codeowners_validator.core.models import AggregateResult


class Reporter(Protocol):
    """报告器协议"""

    def report(self, result: AggregateResult, target: str) -> None:
        """生成报告"""
        ...
