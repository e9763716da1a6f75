"""
JSON 报告器 - 输出 JSON 格式报告
"""

import json
import sys
from typing import TextIO

from codeowners_validator.core.models import AggregateResult


class JsonReporter:
    """JSON 报告器"""

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def report(self, result: AggregateResult, target: str) -> None:
        """生成 JSON 格式报告"""
        report_data = {
            "target": target,
            "threshold": str(result.threshold),
            "checks": [
                {
                    "name": check.name,
                    "severity": str(check.severity),
                    "passed": check.passed,
                    "duration_ms": check.duration_ms,
                    "issues": [issue.message for issue in check.output.issues],
                }
                for check in result.results.values()
            ],
            "summary": {
                "total_issues": result.total_issues,
                "interrupted": result.interrupted,
                "error": str(result.error) if result.error else None,
                "passed": not result.should_fail() and result.error is None and not result.interrupted,
            },
        }

        json_str = json.dumps(report_data, indent=2, ensure_ascii=False)
        print(json_str, file=self.output)
