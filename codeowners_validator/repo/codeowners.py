"""
CODEOWNERS 加载器 - 定位并读取 CODEOWNERS 文件

只做按行切分（模式 + 所有者），不做语法校验。
"""

from pathlib import Path

from codeowners_validator.core.models import OwnershipEntry


# CODEOWNERS 文件候选位置（按 GitHub 的查找顺序）
CODEOWNERS_CANDIDATES = [
    ".github/CODEOWNERS",
    "CODEOWNERS",
    "docs/CODEOWNERS",
]


def find_codeowners(repo_path: Path) -> Path | None:
    """
    在仓库中查找 CODEOWNERS 文件

    Args:
        repo_path: 仓库根目录

    Returns:
        CODEOWNERS 文件路径，如果未找到则返回 None
    """
    for candidate in CODEOWNERS_CANDIDATES:
        path = repo_path / candidate
        if path.is_file():
            return path
    return None


def _strip_comment(line: str) -> str:
    # "\#" 是转义的字面量 #
    for i, ch in enumerate(line):
        if ch == "#" and (i == 0 or line[i - 1] != "\\"):
            return line[:i]
    return line


def parse_entries(content: str) -> list[OwnershipEntry]:
    """
    将 CODEOWNERS 内容切分为条目

    Args:
        content: 文件内容

    Returns:
        条目列表（保持文件中的顺序）
    """
    entries: list[OwnershipEntry] = []
    for line_no, raw in enumerate(content.splitlines(), 1):
        fields = _strip_comment(raw).split()
        if not fields:
            continue
        entries.append(OwnershipEntry(
            pattern=fields[0],
            owners=tuple(fields[1:]),
            line_no=line_no,
        ))
    return entries


def load_entries(repo_path: Path) -> list[OwnershipEntry]:
    """
    加载仓库的 CODEOWNERS 条目

    Raises:
        FileNotFoundError: 仓库中没有 CODEOWNERS 文件
        ValueError: 文件不是合法的 UTF-8
    """
    path = find_codeowners(repo_path)
    if path is None:
        tried = ", ".join(CODEOWNERS_CANDIDATES)
        raise FileNotFoundError(f"No CODEOWNERS file found in {repo_path} (tried: {tried})")
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"{path} is not valid UTF-8: {e}") from e
    return parse_entries(content)
