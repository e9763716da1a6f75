"""Duplicated pattern check.

Reports CODEOWNERS patterns declared more than once. Only the last matching
declaration takes effect, so earlier ones are dead rules.
"""

from codeowners_validator.core.cancel import CancellationToken
from codeowners_validator.core.models import (
    CheckInput,
    CheckOutput,
    OutputBuilder,
    OwnershipEntry,
    SeverityType,
)


class DuplicatedPattern:
    """Reports patterns that appear in more than one entry."""

    name = "Duplicated Pattern Checker"
    severity = SeverityType.ERROR

    def check(self, check_input: CheckInput, token: CancellationToken) -> CheckOutput:
        token.raise_if_cancelled()

        by_pattern: dict[str, list[OwnershipEntry]] = {}
        for entry in check_input.entries:
            by_pattern.setdefault(entry.pattern, []).append(entry)

        builder = OutputBuilder()
        for pattern, entries in by_pattern.items():
            if len(entries) < 2:
                continue
            builder.report_issue(
                f'Pattern "{pattern}" is defined {len(entries)} times in lines: \n'
                f"{self._format_entries(entries)}"
            )
        return builder.output()

    def _format_entries(self, entries: list[OwnershipEntry]) -> str:
        points = []
        for entry in entries:
            owners = " ".join(entry.owners)
            points.append(f"            * {entry.line_no}: {entry.pattern} {owners}".rstrip())
        return "\n".join(points)


def register(registry) -> None:
    registry.register("duppatterns", lambda config: DuplicatedPattern())
