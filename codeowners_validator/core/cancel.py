"""Cooperative cancellation shared by the runner and every check."""

import threading

from codeowners_validator.core.errors import CheckCancelled


class CancellationToken:
    """
    Thread-safe cancellation flag.

    Checks call raise_if_cancelled() at entry and before every git
    invocation. Subprocesses already running are not interrupted.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason = "check execution was cancelled"

    def cancel(self, reason: str | None = None) -> None:
        if reason:
            self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str:
        return self._reason

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CheckCancelled(self._reason)
