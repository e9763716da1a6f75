"""
CLI 入口模块 - 使用 Typer 构建命令行界面

检查流程：
1. 加载配置（YAML 文件、环境变量、命令行选项）
2. 读取 CODEOWNERS 条目
3. 加载检查器
4. 执行检查（支持 SIGINT/SIGTERM 取消）
5. 生成报告
6. 设置退出码
"""

import logging
import signal
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from codeowners_validator.checks import load_checks
from codeowners_validator.config import ENV_PREFIX, ConfigError, load_config
from codeowners_validator.core import CancellationToken, CheckInput, CheckRunner
from codeowners_validator.repo import load_entries
from codeowners_validator.reporters import JsonReporter, RichReporter

# 退出码
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 2
EXIT_CHECK_FAILURE = 3

# 创建 Typer 应用实例
app = typer.Typer(
    name="codeowners-validator",
    help="Ensures the correctness of your CODEOWNERS file.",
    add_completion=False,
)

# Rich Console 用于输出；日志写到 stderr，保证 JSON 报告可被解析
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """配置包日志器，使用 Rich 输出到 stderr"""
    package_logger = logging.getLogger("codeowners_validator")
    package_logger.handlers.clear()
    package_logger.addHandler(RichHandler(console=err_console, show_path=verbose))
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@contextmanager
def cancel_on_signals(token: CancellationToken) -> Iterator[None]:
    """在执行期间将 SIGINT/SIGTERM 转换为取消请求"""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum, frame) -> None:
        token.cancel(f"received {signal.Signals(signum).name}")

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, prev in previous.items():
            signal.signal(sig, prev)


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


@app.command()
def check(
    repository_path: Optional[str] = typer.Argument(
        None,
        envvar=_env("REPOSITORY_PATH"),
        help="Path to the git repository to check [default: .]",
        show_default=False,
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar=_env("CONFIG"),
        help="YAML config file [default: ./codeowners-config.yaml if present]",
    ),
    checks: Optional[str] = typer.Option(
        None,
        "--checks",
        envvar=_env("CHECKS"),
        help="Comma-separated stable checks to run [default: all]",
    ),
    experimental_checks: Optional[str] = typer.Option(
        None,
        "--experimental-checks",
        envvar=_env("EXPERIMENTAL_CHECKS"),
        help="Comma-separated experimental checks to enable, e.g. notowned",
    ),
    check_failure_level: Optional[str] = typer.Option(
        None,
        "--check-failure-level",
        envvar=_env("CHECK_FAILURE_LEVEL"),
        help="Minimum severity that fails the run: info, warning or error [default: warning]",
    ),
    skip_patterns: Optional[str] = typer.Option(
        None,
        "--skip-patterns",
        envvar=_env("NOT_OWNED_CHECKER_SKIP_PATTERNS"),
        help="Comma-separated CODEOWNERS patterns the not-owned check should ignore",
    ),
    subdirectories: Optional[str] = typer.Option(
        None,
        "--subdirectories",
        envvar=_env("NOT_OWNED_CHECKER_SUBDIRECTORIES"),
        help="Comma-separated subdirectories the not-owned check is restricted to",
    ),
    trust_workspace: Optional[bool] = typer.Option(
        None,
        "--trust-workspace/--no-trust-workspace",
        envvar=_env("NOT_OWNED_CHECKER_TRUST_WORKSPACE"),
        help="Register the repository as a git safe.directory before checking",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logs",
    ),
) -> None:
    """
    Validate a repository against its CODEOWNERS file.

    Exit codes: 0 passed, 1 error, 2 interrupted, 3 check failure.

    Examples:
        codeowners-validator check
        codeowners-validator check ./repo --experimental-checks notowned
        codeowners-validator check --checks files,duppatterns --format json
    """
    setup_logging(verbose)

    # 1. 加载配置
    try:
        cfg = load_config(config_file, {
            "repository_path": repository_path,
            "checks": checks,
            "experimental_checks": experimental_checks,
            "check_failure_level": check_failure_level,
            "not_owned_checker_skip_patterns": skip_patterns,
            "not_owned_checker_subdirectories": subdirectories,
            "not_owned_checker_trust_workspace": trust_workspace,
        })
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    repo_path = cfg.repository_path.resolve()
    if not repo_path.is_dir():
        err_console.print(f"[red]Error:[/red] Path is not a directory: {cfg.repository_path}")
        raise typer.Exit(EXIT_ERROR)

    # 2. 读取 CODEOWNERS
    try:
        entries = load_entries(repo_path)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)
    logger.debug(f"Loaded {len(entries)} CODEOWNERS entries")

    # 3. 加载检查器
    try:
        selected = load_checks(cfg.checks, cfg.experimental_checks, cfg)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    # 4. 执行检查
    token = CancellationToken()
    runner = CheckRunner(selected, CheckInput(repo_dir=repo_path, entries=entries), cfg.check_failure_level)
    with cancel_on_signals(token):
        result = runner.run(token)

    # 5. 生成报告
    reporter = JsonReporter() if format == "json" else RichReporter(console)
    reporter.report(result, str(repo_path))

    # 6. 设置退出码
    if result.interrupted or token.cancelled:
        logger.error("Application was interrupted by operating system")
        raise typer.Exit(EXIT_INTERRUPTED)
    if result.error is not None:
        raise typer.Exit(EXIT_ERROR)
    if runner.should_exit_with_check_failure():
        raise typer.Exit(EXIT_CHECK_FAILURE)
    raise typer.Exit(EXIT_OK)


@app.command()
def version() -> None:
    """Show the version of codeowners-validator."""
    from codeowners_validator import __version__
    console.print(f"[bold]codeowners-validator[/bold] v{__version__}")


if __name__ == "__main__":
    app()
