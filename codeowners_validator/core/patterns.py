"""
排除规则计算 - 决定哪些 CODEOWNERS 模式会被写入 .gitignore
"""

from typing import Collection, Iterable

from codeowners_validator.core.models import OwnershipEntry


def compute_excluded_patterns(
    entries: Iterable[OwnershipEntry],
    skip_patterns: Collection[str],
) -> list[str]:
    """
    计算需要作为忽略规则应用的模式

    保持条目顺序，不去重；skip_patterns 中的模式（精确匹配）被跳过。

    Args:
        entries: CODEOWNERS 条目
        skip_patterns: 不参与排除的模式集合

    Returns:
        模式列表
    """
    return [entry.pattern for entry in entries if entry.pattern not in skip_patterns]
