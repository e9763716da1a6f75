"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from codeowners_validator.cli.app import app, check, version

__all__ = [
    "app",
    "check",
    "version",
]
