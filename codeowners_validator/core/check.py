"""
检查器接口 - 所有检查器实现的共同能力
"""

from typing import Protocol

from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.models import CheckInput, CheckOutput, SeverityType


class Check(Protocol):
    """检查器协议"""

    name: str
    severity: SeverityType

    def check(self, check_input: CheckInput, token: CancellationToken) -> CheckOutput:
        """
        执行检查

        Raises:
            CheckError: 底层操作失败
            CheckCancelled: 运行被取消
        """
        ...
