"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from codeowners_validator.core.models import AggregateResult, CheckResult, SeverityType


SEVERITY_STYLES = {
    SeverityType.ERROR: "red",
    SeverityType.WARNING: "yellow",
    SeverityType.INFO: "cyan",
}


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, result: AggregateResult, target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.print("─" * 80, style="dim")
        self.console.print("CODEOWNERS validation report", style="bold cyan", justify="center")
        self.console.print("─" * 80, style="dim")

        self._print_checks_table(result)

        for check in result.results.values():
            if not check.passed:
                self._print_issues(check)

        self._print_conclusion(result, target)

    def _print_checks_table(self, result: AggregateResult) -> None:
        """打印检查器列表"""
        self.console.print()
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("Check", style="cyan", width=42)
        table.add_column("Severity", width=10)
        table.add_column("Duration", justify="right", width=10)
        table.add_column("Status", width=20)

        for check in result.results.values():
            if check.passed:
                status = "[green]✓ passed[/green]"
            else:
                style = self._failure_style(check, result.threshold)
                status = f"[{style}]✗ {len(check.output.issues)} issue(s)[/{style}]"
            table.add_row(
                check.name,
                str(check.severity),
                f"{check.duration_ms}ms",
                status,
            )

        self.console.print(table)

    def _failure_style(self, check: CheckResult, threshold: SeverityType) -> str:
        # issues below the threshold are shown but do not fail the run
        if check.severity < threshold:
            return "dim"
        return SEVERITY_STYLES[check.severity]

    def _print_issues(self, check: CheckResult) -> None:
        """打印单个检查器的问题详情"""
        style = SEVERITY_STYLES[check.severity]
        self.console.print()
        self.console.print(f"[bold]◆ {check.name}[/bold]")
        for issue in check.output.issues:
            self.console.print(Text(f"    [{check.severity}]", style=style), Text(issue.message))

    def _print_conclusion(self, result: AggregateResult, target: str) -> None:
        """打印总结"""
        self.console.print()

        if result.interrupted:
            title, color = "Interrupted", "yellow"
            body = "The run was cancelled before all checks finished."
        elif result.error is not None:
            title, color = "Aborted", "red"
            body = f"A check failed to run: {result.error}"
        elif result.should_fail():
            title, color = "Failed", "red"
            body = (
                f"Found {result.total_issues} issue(s); "
                f"at least one check reached the '{result.threshold}' failure level."
            )
        elif result.total_issues:
            title, color = "Passed with warnings", "yellow"
            body = f"Found {result.total_issues} issue(s) below the '{result.threshold}' failure level."
        else:
            title, color = "Passed", "green"
            body = "All checks passed."

        content = Text()
        content.append(f"{title}\n", style=f"bold {color}")
        content.append(f"{body}\n\n")
        content.append(f"Target: {target}", style="dim")
        self.console.print(Panel(content, border_style=color))
        self.console.print()
