"""Git working-tree access for checks that temporarily mutate a repository.

All git commands go through GitPython. The mutation window is guarded by a
per-repository lock, and restoring() guarantees the working tree, the index
and the root .gitignore end up exactly as they were before the window opened.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence

from git import Git
from git.exc import CommandError

from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.errors import GitOperationError, MultiError, WorkspaceError

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"

# Max paths passed to a single `git rm --cached` call
RM_CHUNK_SIZE = 500

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _workspace_lock(repo_dir: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(repo_dir.resolve(), threading.Lock())


def _clean_stderr(stderr: str) -> str:
    # GitPython renders stderr as "\n  stderr: '<text>'"
    text = (stderr or "").strip()
    if text.startswith("stderr: '") and text.endswith("'"):
        text = text[len("stderr: '"):-1]
    return text.strip()


def _split_nul(output: str) -> list[str]:
    return [p for p in output.split("\0") if p]


class GitWorkspace:
    """Exclusive, restorable access to one git working directory."""

    def __init__(self, repo_dir: Path, token: Optional[CancellationToken] = None):
        """
        Initialize the workspace.

        Args:
            repo_dir: Repository root path
            token: Cancellation token consulted before every git command
        """
        self.repo_dir = Path(repo_dir)
        self.token = token or CancellationToken()
        self._git = Git(str(self.repo_dir))

    @property
    def ignore_file(self) -> Path:
        return self.repo_dir / IGNORE_FILE_NAME

    @contextmanager
    def exclusive(self) -> Iterator["GitWorkspace"]:
        """Hold the repository lock for the whole mutation window."""
        lock = _workspace_lock(self.repo_dir)
        with lock:
            yield self

    def _execute(self, args: Sequence[str], git: Optional[Git] = None, check_cancel: bool = True) -> str:
        if check_cancel:
            self.token.raise_if_cancelled()

        command = ["git", *args]
        logger.debug(f"Running {' '.join(command)} in {self.repo_dir}")
        try:
            return (git or self._git).execute(command)
        except CommandError as e:
            status = e.status if isinstance(e.status, int) else None
            raise GitOperationError(command, status, _clean_stderr(e.stderr)) from e

    def trust(self) -> None:
        """Register the repository as a git safe.directory (global config)."""
        self._execute(
            ["config", "--global", "--add", "safe.directory", str(self.repo_dir)],
            git=Git(),
        )

    def status(self) -> str:
        """Return `git status --porcelain` output; empty means a clean tree."""
        return self._execute(["status", "--porcelain"]).strip()

    def append_ignore_rules(self, patterns: Sequence[str]) -> None:
        """
        Append patterns to the root .gitignore, one per line.

        The block always starts on a fresh line regardless of whether the
        existing file ends with a newline.
        """
        content = "\n" + "".join(f"{p}\n" for p in patterns)
        try:
            with open(self.ignore_file, "a", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise WorkspaceError(f"Failed to update {self.ignore_file}: {e}") from e

    def remove_ignored_from_index(self) -> list[str]:
        """
        Untrack files that are tracked but now matched by the ignore rules.

        Files are removed from the index only; the working tree is untouched.

        Returns:
            Paths removed from the index
        """
        out = self._execute(["ls-files", "-ci", "--exclude-standard", "-z"])
        paths = _split_nul(out)
        for i in range(0, len(paths), RM_CHUNK_SIZE):
            chunk = paths[i:i + RM_CHUNK_SIZE]
            self._execute(["rm", "--cached", "--quiet", "--", *(f":(literal){p}" for p in chunk)])
        logger.debug(f"Removed {len(paths)} ignored file(s) from the index")
        return paths

    def list_files(self, subdirectories: Sequence[str] = ()) -> list[str]:
        """List tracked files, optionally restricted to subdirectories."""
        args = ["ls-files", "-z"]
        if subdirectories:
            args += ["--", *subdirectories]
        return _split_nul(self._execute(args))

    def reset(self) -> None:
        """Hard reset the working tree and index to HEAD."""
        self._execute(["reset", "--hard"], check_cancel=False)

    def _snapshot_ignore_file(self) -> Optional[bytes]:
        try:
            if not self.ignore_file.exists():
                return None
            return self.ignore_file.read_bytes()
        except OSError as e:
            raise WorkspaceError(f"Failed to read {self.ignore_file}: {e}") from e

    def _restore_ignore_file(self, snapshot: Optional[bytes]) -> None:
        try:
            if snapshot is None:
                if self.ignore_file.exists():
                    self.ignore_file.unlink()
            elif not self.ignore_file.exists() or self.ignore_file.read_bytes() != snapshot:
                self.ignore_file.write_bytes(snapshot)
        except OSError as e:
            raise WorkspaceError(f"Failed to restore {self.ignore_file}: {e}") from e

    def restore(self, snapshot: Optional[bytes]) -> None:
        """Reset the tree, then bring .gitignore back to the snapshot."""
        errors: list[BaseException] = []
        try:
            self.reset()
        except GitOperationError as e:
            errors.append(e)
        # untracked or newly created ignore files survive `reset --hard`
        try:
            self._restore_ignore_file(snapshot)
        except WorkspaceError as e:
            errors.append(e)

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise MultiError(*errors)

    @contextmanager
    def restoring(self) -> Iterator[None]:
        """
        Guarantee restoration of the working tree on every exit path.

        If restoration fails while another exception is in flight, both are
        raised together as a MultiError.
        """
        snapshot = self._snapshot_ignore_file()
        try:
            yield
        except BaseException as exc:
            try:
                self.restore(snapshot)
            except (GitOperationError, WorkspaceError, MultiError) as restore_err:
                logger.error(f"Failed to restore {self.repo_dir}: {restore_err}")
                raise MultiError(exc, restore_err) from exc
            raise
        self.restore(snapshot)
