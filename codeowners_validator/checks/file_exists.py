"""File exist check.

Reports CODEOWNERS patterns that do not match any file in the repository,
using the pathspec library's gitwildmatch semantics (the same syntax
CODEOWNERS borrows from .gitignore).
"""

from pathlib import Path

import pathspec

from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.models import (
    CheckInput,
    CheckOutput,
    OutputBuilder,
    SeverityType,
)
from codeowners_validator.repo.workspace import GitWorkspace


def list_repo_files(repo_path: Path) -> list[str]:
    """All files under repo_path as posix paths, excluding the .git directory."""
    files = []
    for path in repo_path.rglob("*"):
        relative = path.relative_to(repo_path)
        if relative.parts[0] == ".git" or not path.is_file():
            continue
        files.append(relative.as_posix())
    return sorted(files)


class FileExists:
    """Checks that every pattern matches at least one file."""

    name = "File Exist Checker"
    severity = SeverityType.ERROR

    def check(self, check_input: CheckInput, token: CancellationToken) -> CheckOutput:
        token.raise_if_cancelled()

        builder = OutputBuilder()
        workspace = GitWorkspace(check_input.repo_dir, token)

        # the working tree must not be read while another check has it mutated
        with workspace.exclusive():
            files = list_repo_files(Path(check_input.repo_dir))

        for entry in check_input.entries:
            token.raise_if_cancelled()
            try:
                spec = pathspec.PathSpec.from_lines("gitwildmatch", [entry.pattern])
            except ValueError as e:
                # pathspec rejects malformed patterns, e.g. a trailing backslash
                builder.report_issue(f'"{entry.pattern}" is not a valid pattern: {e}')
                continue
            if not any(spec.match_file(f) for f in files):
                builder.report_issue(f'"{entry.pattern}" does not match any files in repository')

        return builder.output()


def register(registry) -> None:
    registry.register("files", lambda config: FileExists())
