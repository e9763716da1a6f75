"""Not-owned file check.

Reports tracked files that are not matched by any CODEOWNERS pattern.

The check applies every (non-skipped) pattern as a .gitignore rule, untracks
the tracked files those rules now ignore, and lists what is still tracked.
The working tree is reset afterwards on every exit path.
"""

import logging

from codeowners_validator.config import NotOwnedFileConfig
from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.models import (
    CheckInput,
    CheckOutput,
    OutputBuilder,
    SeverityType,
)
from codeowners_validator.core.patterns import compute_excluded_patterns
from codeowners_validator.repo.workspace import GitWorkspace

logger = logging.getLogger(__name__)

EMPTY_CODEOWNERS_MESSAGE = (
    "The CODEOWNERS file is empty. The files in the repository don't have any owner."
)
DIRTY_STATE_MESSAGE = "git state is dirty: commit all changes before executing this check"


def format_list(items: list[str]) -> str:
    """Basic formatter that outputs a bullet point list."""
    return "\n".join(f"            * {item}" for item in items)


class NotOwnedFile:
    """Checks that every tracked file is covered by a CODEOWNERS pattern."""

    name = "[Experimental] Not Owned File Checker"
    severity = SeverityType.WARNING

    def __init__(self, config: NotOwnedFileConfig | None = None):
        config = config or NotOwnedFileConfig()
        self.skip_patterns = set(config.skip_patterns)
        self.subdirectories = list(config.subdirectories)
        self.trust_workspace = config.trust_workspace

    def check(self, check_input: CheckInput, token: CancellationToken) -> CheckOutput:
        token.raise_if_cancelled()

        builder = OutputBuilder()

        if not check_input.entries:
            builder.report_issue(EMPTY_CODEOWNERS_MESSAGE)
            return builder.output()

        patterns = compute_excluded_patterns(check_input.entries, self.skip_patterns)
        workspace = GitWorkspace(check_input.repo_dir, token)

        with workspace.exclusive():
            if self.trust_workspace:
                workspace.trust()

            if workspace.status():
                builder.report_issue(DIRTY_STATE_MESSAGE)
                return builder.output()

            with workspace.restoring():
                workspace.append_ignore_rules(patterns)
                workspace.remove_ignored_from_index()
                files = workspace.list_files(self.subdirectories)

        if files:
            logger.debug(f"Found {len(files)} not owned file(s) in {check_input.repo_dir}")
            builder.report_issue(
                f'Found {len(files)} not owned files (skipped patterns: "{self.skip_patterns_list()}"):\n'
                f"{format_list(files)}"
            )

        return builder.output()

    def skip_patterns_list(self) -> str:
        return ",".join(sorted(self.skip_patterns))


def register(registry) -> None:
    registry.register(
        "notowned",
        lambda config: NotOwnedFile(config.not_owned),
        experimental=True,
    )
