"""Makes every provider call look synchronous to the runners.

A provider operation either finishes on the spot (``Status.OK`` or an
exception) or reports ``IN_PROGRESS``/``BUSY`` and completes the request's
future later from its own thread. :meth:`Bridge.invoke` hides the difference.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError
from typing import Callable, Optional

from .errors import RunInterruptedError
from .interfaces import Request, Status

log = logging.getLogger(__name__)

_PENDING = (Status.IN_PROGRESS, Status.BUSY)


class Bridge:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inflight: Optional[Request] = None
        self._cancelled = False

    def invoke(self, request: Request, operation: Callable[[Request], Status]) -> Status:
        """Run ``operation(request)`` and block until it has really finished.

        Exceptions raised by the operation, or delivered through the
        completion, propagate unchanged. Cancellation from another thread
        raises :class:`RunInterruptedError`.
        """
        with self._lock:
            if self._cancelled:
                raise RunInterruptedError("run cancelled before the operation was issued")
            self._inflight = request
        try:
            status = operation(request)
            if status not in _PENDING:
                return status
            log.debug("operation deferred (%s), waiting for completion", status.value)
            try:
                status = request.wait()
            except CancelledError as exc:
                raise RunInterruptedError("wait for completion interrupted") from exc
            request.reset()
            return status
        finally:
            with self._lock:
                self._inflight = None

    def cancel(self) -> None:
        """Interrupt the current wait (if any) and refuse further operations."""
        with self._lock:
            self._cancelled = True
            request = self._inflight
        if request is not None:
            request.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled
