"""Cooperative cancellation for conversion jobs."""

from __future__ import annotations

import threading

from atem.errors import JobCancelledError


class CancellationToken:
    """Thread-safe flag used to stop a conversion job.

    A host (the HTTP surface, a GUI thread) calls cancel() from any thread.
    The pipeline checks the token between steps and the subprocess runner
    polls it while an external tool is running, killing the process once
    the token is set.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, stage: str) -> None:
        """Raise JobCancelledError if cancellation was requested.

        Args:
            stage: Short description of where the check happens, used in
                the error message (e.g. "after probing").
        """
        if self._event.is_set():
            raise JobCancelledError(f"Job cancelled {stage}")
