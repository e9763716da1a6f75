from __future__ import annotations

from pathlib import Path

from git import Repo


def git_status(repo_dir: Path) -> str:
    return Repo(repo_dir).git.status("--porcelain")


def tracked_files(repo_dir: Path) -> list[str]:
    return Repo(repo_dir).git.ls_files().splitlines()


def staged_entries(repo_dir: Path) -> str:
    """Mode, blob id and stage of every index entry (`git ls-files -s`)."""
    return Repo(repo_dir).git.ls_files("-s")
