"""Cooperative cancellation for long-running analyses."""

import threading

from .errors import AnalysisCancelledError


class CancellationToken:
    """Flag checked by extractors at every page and archive entry boundary."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        """Raise AnalysisCancelledError if cancellation was requested."""
        if self._event.is_set():
            raise AnalysisCancelledError()
