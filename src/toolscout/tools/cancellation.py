"""Cancellation signal passed through to tools that accept one."""

import threading

from toolscout.tools.exceptions import ToolCancelledError


class CancellationToken:
    """A cooperative cancellation signal.

    Tools that declare a parameter of this type receive the orchestrator's
    token on invocation. The parameter is never listed in a tool's
    documentation or argument schema.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ToolCancelledError if cancellation has been requested."""
        if self.cancelled:
            raise ToolCancelledError("Operation was cancelled")
