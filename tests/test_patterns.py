from __future__ import annotations

from codeowners_validator.core import OwnershipEntry, compute_excluded_patterns


def _entries(*patterns: str) -> list[OwnershipEntry]:
    return [OwnershipEntry(pattern=p, owners=("@owner",)) for p in patterns]


def test_keeps_entry_order() -> None:
    assert compute_excluded_patterns(_entries("b/", "*.py", "a.txt"), set()) == ["b/", "*.py", "a.txt"]


def test_removes_skipped_patterns_by_exact_match() -> None:
    entries = _entries("a.txt", "/a.txt", "docs/")
    assert compute_excluded_patterns(entries, {"a.txt"}) == ["/a.txt", "docs/"]


def test_preserves_duplicates() -> None:
    assert compute_excluded_patterns(_entries("*", "*", "x"), []) == ["*", "*", "x"]


def test_empty_entries() -> None:
    assert compute_excluded_patterns([], {"a.txt"}) == []
