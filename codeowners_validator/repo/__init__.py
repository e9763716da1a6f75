"""
Repository Layer - 仓库层

负责 CODEOWNERS 加载和 git 工作区操作。
"""

from codeowners_validator.repo.codeowners import (
    CODEOWNERS_CANDIDATES,
    find_codeowners,
    load_entries,
    parse_entries,
)
from codeowners_validator.repo.workspace import GitWorkspace, IGNORE_FILE_NAME

__all__ = [
    # codeowners
    "CODEOWNERS_CANDIDATES",
    "find_codeowners",
    "load_entries",
    "parse_entries",
    # workspace
    "GitWorkspace",
    "IGNORE_FILE_NAME",
]
