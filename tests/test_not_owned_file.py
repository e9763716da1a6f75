from __future__ import annotations

from pathlib import Path

import pytest

from codeowners_validator.checks.not_owned_file import (
    DIRTY_STATE_MESSAGE,
    EMPTY_CODEOWNERS_MESSAGE,
    NotOwnedFile,
)
from codeowners_validator.config import NotOwnedFileConfig
from codeowners_validator.core import (
    CancellationToken,
    CheckCancelled,
    CheckInput,
    GitOperationError,
    MultiError,
    OwnershipEntry,
    SeverityType,
)
from codeowners_validator.repo.workspace import GitWorkspace
from helpers import git_status, staged_entries, tracked_files

ABC_FILES = {"a.txt": "a\n", "b.txt": "b\n", "c.txt": "c\n"}


def _entries(*patterns: str) -> list[OwnershipEntry]:
    return [OwnershipEntry(pattern=p, owners=("@org/team",), line_no=i) for i, p in enumerate(patterns, 1)]


def _run(repo_dir: Path, entries: list[OwnershipEntry], **config) -> list[str]:
    check = NotOwnedFile(NotOwnedFileConfig(**config))
    output = check.check(CheckInput(repo_dir=repo_dir, entries=entries), CancellationToken())
    return [issue.message for issue in output.issues]


def test_check_identity() -> None:
    check = NotOwnedFile()
    assert check.name == "[Experimental] Not Owned File Checker"
    assert check.severity == SeverityType.WARNING


def test_empty_entries_reports_without_touching_git(tmp_path: Path) -> None:
    # tmp_path is not a git repository: any git call would fail
    messages = _run(tmp_path, [])
    assert messages == [EMPTY_CODEOWNERS_MESSAGE]
    assert not (tmp_path / ".gitignore").exists()


def test_dirty_tree_short_circuits(make_repo) -> None:
    repo_dir = make_repo({**ABC_FILES, ".gitignore": "*.log\n"})
    (repo_dir / "untracked.txt").write_text("new\n", encoding="utf-8")

    messages = _run(repo_dir, _entries("a.txt"))

    assert messages == [DIRTY_STATE_MESSAGE]
    assert (repo_dir / ".gitignore").read_text(encoding="utf-8") == "*.log\n"
    assert tracked_files(repo_dir) == [".gitignore", "a.txt", "b.txt", "c.txt"]


def test_modified_tracked_file_is_dirty(make_repo) -> None:
    repo_dir = make_repo(ABC_FILES)
    (repo_dir / "a.txt").write_text("changed\n", encoding="utf-8")

    assert _run(repo_dir, _entries("a.txt")) == [DIRTY_STATE_MESSAGE]
    assert not (repo_dir / ".gitignore").exists()
    assert (repo_dir / "a.txt").read_text(encoding="utf-8") == "changed\n"


def test_reports_only_unowned_file(make_repo) -> None:
    repo_dir = make_repo(ABC_FILES)

    messages = _run(repo_dir, _entries("a.txt", "b.txt"))

    assert messages == ['Found 1 not owned files (skipped patterns: ""):\n            * c.txt']


def test_skipped_pattern_is_not_excluded(make_repo) -> None:
    repo_dir = make_repo(ABC_FILES)

    messages = _run(repo_dir, _entries("a.txt", "b.txt"), skip_patterns=["a.txt"])

    assert messages == [
        'Found 2 not owned files (skipped patterns: "a.txt"):\n'
        "            * a.txt\n"
        "            * c.txt"
    ]


def test_fully_owned_repository_passes(make_repo) -> None:
    repo_dir = make_repo({"docs/guide.md": "x\n", "src/main.py": "x\n"})

    assert _run(repo_dir, _entries("docs/", "*.py")) == []


def test_subdirectories_restrict_listing(make_repo) -> None:
    repo_dir = make_repo({"docs/guide.md": "x\n", "src/main.py": "x\n", "README.md": "x\n"})

    messages = _run(repo_dir, _entries("*.txt"), subdirectories=["docs"])

    assert messages == ['Found 1 not owned files (skipped patterns: ""):\n            * docs/guide.md']


def test_paths_with_spaces_are_reported_verbatim(make_repo) -> None:
    repo_dir = make_repo({"my notes.txt": "x\n", "owned.txt": "x\n"})

    messages = _run(repo_dir, _entries("owned.txt"))

    assert messages == ['Found 1 not owned files (skipped patterns: ""):\n            * my notes.txt']


def test_tracked_ignore_file_is_restored_byte_for_byte(make_repo) -> None:
    repo_dir = make_repo({**ABC_FILES, ".gitignore": "*.log"})
    before_bytes = (repo_dir / ".gitignore").read_bytes()
    before_tracked = tracked_files(repo_dir)
    before_index = staged_entries(repo_dir)

    messages = _run(repo_dir, _entries("a.txt", "b.txt", "c.txt"))

    # .gitignore itself is tracked and not owned by any pattern
    assert messages == ['Found 1 not owned files (skipped patterns: ""):\n            * .gitignore']
    assert (repo_dir / ".gitignore").read_bytes() == before_bytes
    assert tracked_files(repo_dir) == before_tracked
    assert staged_entries(repo_dir) == before_index
    assert git_status(repo_dir) == ""


def test_created_ignore_file_is_removed(make_repo) -> None:
    repo_dir = make_repo(ABC_FILES)
    before_index = staged_entries(repo_dir)

    _run(repo_dir, _entries("*"))

    assert staged_entries(repo_dir) == before_index
    assert not (repo_dir / ".gitignore").exists()
    assert git_status(repo_dir) == ""
    assert tracked_files(repo_dir) == ["a.txt", "b.txt", "c.txt"]


def test_operational_error_still_restores(make_repo, monkeypatch) -> None:
    repo_dir = make_repo(ABC_FILES)

    def boom(self, subdirectories=()):
        raise GitOperationError(["git", "ls-files"], 128, "fatal: boom")

    monkeypatch.setattr(GitWorkspace, "list_files", boom)

    with pytest.raises(GitOperationError, match="fatal: boom"):
        _run(repo_dir, _entries("a.txt"))

    assert not (repo_dir / ".gitignore").exists()
    assert git_status(repo_dir) == ""
    assert tracked_files(repo_dir) == ["a.txt", "b.txt", "c.txt"]


def test_restoration_failure_is_combined_with_in_flight_error(make_repo, monkeypatch) -> None:
    repo_dir = make_repo(ABC_FILES)

    def list_boom(self, subdirectories=()):
        raise GitOperationError(["git", "ls-files"], 128, "fatal: list failed")

    def reset_boom(self):
        raise GitOperationError(["git", "reset", "--hard"], 128, "fatal: reset failed")

    monkeypatch.setattr(GitWorkspace, "list_files", list_boom)
    monkeypatch.setattr(GitWorkspace, "reset", reset_boom)

    with pytest.raises(MultiError) as excinfo:
        _run(repo_dir, _entries("a.txt"))

    messages = [str(e) for e in excinfo.value.errors]
    assert len(messages) == 2
    assert "list failed" in messages[0]
    assert "reset failed" in messages[1]
    assert "2 errors occurred" in str(excinfo.value)


def test_restoration_failure_on_success_path_is_raised(make_repo, monkeypatch) -> None:
    repo_dir = make_repo(ABC_FILES)

    def reset_boom(self):
        raise GitOperationError(["git", "reset", "--hard"], 128, "fatal: reset failed")

    monkeypatch.setattr(GitWorkspace, "reset", reset_boom)

    with pytest.raises(GitOperationError, match="reset failed"):
        _run(repo_dir, _entries("a.txt"))


def test_trust_workspace_runs_before_status(make_repo, monkeypatch) -> None:
    repo_dir = make_repo(ABC_FILES)
    calls: list[Path] = []
    monkeypatch.setattr(GitWorkspace, "trust", lambda self: calls.append(self.repo_dir))

    _run(repo_dir, _entries("*"), trust_workspace=True)

    assert calls == [repo_dir]


def test_cancelled_token_stops_check(make_repo) -> None:
    repo_dir = make_repo(ABC_FILES)
    token = CancellationToken()
    token.cancel()

    with pytest.raises(CheckCancelled):
        NotOwnedFile().check(CheckInput(repo_dir=repo_dir, entries=_entries("a.txt")), token)

    assert not (repo_dir / ".gitignore").exists()


def test_cancellation_mid_check_restores(make_repo, monkeypatch) -> None:
    repo_dir = make_repo(ABC_FILES)
    token = CancellationToken()
    original = GitWorkspace.remove_ignored_from_index

    def cancel_then_prune(self):
        removed = original(self)
        token.cancel("interrupted in test")
        return removed

    monkeypatch.setattr(GitWorkspace, "remove_ignored_from_index", cancel_then_prune)

    with pytest.raises(CheckCancelled, match="interrupted in test"):
        NotOwnedFile().check(CheckInput(repo_dir=repo_dir, entries=_entries("a.txt")), token)

    assert not (repo_dir / ".gitignore").exists()
    assert git_status(repo_dir) == ""
    assert tracked_files(repo_dir) == ["a.txt", "b.txt", "c.txt"]
