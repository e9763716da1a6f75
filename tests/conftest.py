from pathlib import Path
from typing import Callable

import pytest
from git import Repo


def _init_repo(repo_dir: Path, files: dict[str, str]) -> Repo:
    repo_dir.mkdir(parents=True, exist_ok=True)
    repo = Repo.init(repo_dir)
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test User")
        cw.set_value("user", "email", "test@example.com")
        cw.set_value("commit", "gpgsign", "false")
    for rel, content in files.items():
        path = repo_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    repo.git.add(A=True)
    repo.git.commit("-m", "initial")
    return repo


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Create a committed git repository with the given files."""
    def _make(files: dict[str, str]) -> Path:
        repo_dir = tmp_path / "repo"
        _init_repo(repo_dir, files)
        return repo_dir
    return _make
