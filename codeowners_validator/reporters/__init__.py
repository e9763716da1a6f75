"""
Reporters Layer - 报告层

包含 Rich 终端报告器和 JSON 报告器。
"""

from codeowners_validator.reporters.base import Reporter
from codeowners_validator.reporters.rich_reporter import RichReporter
from codeowners_validator.reporters.json_reporter import JsonReporter

__all__ = [
    "Reporter",
    "RichReporter",
    "JsonReporter",
]
