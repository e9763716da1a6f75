"""Check system for codeowners-validator.

Stable checks run by default; experimental checks run only when enabled
explicitly and report at a lower severity.

检查器通过 CheckRegistry 按名称注册和加载。
"""

from codeowners_validator.checks.base import (
    CheckRegistry,
    CheckSpec,
    load_checks,
)

__all__ = [
    "CheckRegistry",
    "CheckSpec",
    "load_checks",
]
