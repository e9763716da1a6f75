"""
错误类型定义

- CheckError: 操作错误（git 命令失败、文件读写失败），中止整次运行
- MultiError: 同时保留多个独立的失败
- CheckCancelled: 运行被取消，不属于 CheckError
"""

from typing import Optional, Sequence


class CheckError(Exception):
    """检查器操作错误基类"""
    pass


class GitOperationError(CheckError):
    """git command exited with a non-zero status or could not be started."""

    def __init__(self, command: Sequence[str], status: Optional[int] = None, stderr: str = ""):
        self.command = list(command)
        self.status = status
        self.stderr = stderr.strip()
        message = f"'{' '.join(self.command)}' failed"
        if status is not None:
            message += f" with exit code {status}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class WorkspaceError(CheckError):
    """工作区文件读写错误"""
    pass


class MultiError(CheckError):
    """Aggregates one or more errors without losing any of them."""

    def __init__(self, *errors: BaseException):
        flat: list[BaseException] = []
        for err in errors:
            if isinstance(err, MultiError):
                flat.extend(err.errors)
            elif err is not None:
                flat.append(err)
        self.errors = flat
        super().__init__(self._render())

    def _render(self) -> str:
        if len(self.errors) == 1:
            return f"1 error occurred:\n\t* {self.errors[0]}"
        points = "\n".join(f"\t* {err}" for err in self.errors)
        return f"{len(self.errors)} errors occurred:\n{points}"


class CheckCancelled(Exception):
    """运行被取消（信号或调用方）"""

    def __init__(self, message: str = "check execution was cancelled"):
        super().__init__(message)
