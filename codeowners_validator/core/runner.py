"""
检查运行器 - 依次执行检查器并汇总结果

执行规则：
1. 每个检查器启动前检查取消令牌，已取消则不再启动后续检查器
2. 检查器抛出操作错误时立即中止整次运行
3. 检查器报告的问题不会中止运行
4. 检查器串行执行，修改工作区的检查器因此总是独占仓库
"""

import logging
import time
from typing import Sequence

from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.check import Check
from codeowners_validator.core.errors import CheckCancelled, CheckError
from codeowners_validator.core.models import (
    AggregateResult,
    CheckInput,
    CheckResult,
    SeverityType,
)

logger = logging.getLogger(__name__)


class CheckRunner:
    """Runs the configured checks against one shared input."""

    def __init__(
        self,
        checks: Sequence[Check],
        check_input: CheckInput,
        failure_level: SeverityType = SeverityType.WARNING,
    ):
        self.checks = list(checks)
        self.check_input = check_input
        self.failure_level = failure_level
        self.result = AggregateResult(threshold=failure_level)

    def run(self, token: CancellationToken) -> AggregateResult:
        """
        执行所有检查器

        Args:
            token: 共享的取消令牌

        Returns:
            AggregateResult 对象
        """
        self.result = AggregateResult(threshold=self.failure_level)

        for check in self.checks:
            if token.cancelled:
                logger.warning(f"Cancelled before running {check.name}: {token.reason}")
                self.result.interrupted = True
                break

            logger.debug(f"==> Executing {check.name}")
            start_time = time.monotonic()
            try:
                output = check.check(self.check_input, token)
            except CheckCancelled as e:
                logger.warning(f"{check.name} was cancelled: {e}")
                self.result.interrupted = True
                break
            except CheckError as e:
                logger.error(f"{check.name} failed, aborting remaining checks: {e}")
                self.result.error = e
                if token.cancelled:
                    self.result.interrupted = True
                break

            duration_ms = int((time.monotonic() - start_time) * 1000)
            self.result.results[check.name] = CheckResult(
                name=check.name,
                severity=check.severity,
                output=output,
                duration_ms=duration_ms,
            )
            logger.debug(
                f"<== {check.name} finished in {duration_ms}ms with {len(output.issues)} issue(s)"
            )

        return self.result

    def should_exit_with_check_failure(self) -> bool:
        """是否有检查器的严重程度达到失败阈值"""
        return self.result.should_fail()
