"""Single-worker debounce for query recomputation.

Requests collapse to the newest query: each submit bumps a generation
counter, and the worker only computes once no newer request has arrived for
the quiescence window. Results are handed to ``commit`` together with their
generation so the receiver can drop anything a later request superseded.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Generic, TypeVar

from ..log import get_logger

logger = get_logger(__name__)

ResultT = TypeVar("ResultT")

STOP_JOIN_TIMEOUT_SECONDS = 1.0


class DebounceWorker(Generic[ResultT]):
    """Serialize debounced recomputations on one long-lived daemon thread."""

    def __init__(
        self,
        compute: Callable[[str], ResultT],
        commit: Callable[[int, str, ResultT], bool],
        delay_seconds: float,
        *,
        name: str = "lazypick-debounce",
    ) -> None:
        """Bind the compute/commit callbacks; the thread starts on first submit."""
        self._compute = compute
        self._commit = commit
        self._delay = max(0.0, delay_seconds)
        self._name = name
        self._cond = threading.Condition()
        self._generation = 0
        self._pending: tuple[int, str, float] | None = None
        self._busy = False
        self._stopped = False
        self._thread: threading.Thread | None = None
        self.committed = 0
        self.discarded = 0

    @property
    def generation(self) -> int:
        """Generation of the newest request or invalidation."""
        with self._cond:
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._cond:
            return generation == self._generation

    def submit(self, query: str) -> int:
        """Queue ``query``, replacing any request that has not started yet."""
        with self._cond:
            if self._stopped:
                return self._generation
            self._generation += 1
            self._pending = (self._generation, query, time.monotonic())
            if self._thread is None:
                self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
                self._thread.start()
            self._cond.notify_all()
            return self._generation

    def invalidate(self) -> int:
        """Drop the pending request and mark in-flight work as stale."""
        with self._cond:
            self._generation += 1
            self._pending = None
            self._cond.notify_all()
            return self._generation

    def is_idle(self) -> bool:
        with self._cond:
            return self._pending is None and not self._busy

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until nothing is pending or running; return ``False`` on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending is None and not self._busy, timeout)

    def stop(self) -> None:
        """Stop the worker thread; pending requests are dropped."""
        with self._cond:
            self._stopped = True
            self._pending = None
            self._generation += 1
            self._cond.notify_all()
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(STOP_JOIN_TIMEOUT_SECONDS)

    def _next_request(self) -> tuple[int, str] | None:
        """Wait for a request to go quiet for the delay window, then claim it."""
        with self._cond:
            while True:
                if self._stopped:
                    return None
                if self._pending is None:
                    self._cond.wait()
                    continue
                generation, query, submitted_at = self._pending
                remaining = submitted_at + self._delay - time.monotonic()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue
                self._pending = None
                self._busy = True
                return generation, query

    def _run(self) -> None:
        while True:
            request = self._next_request()
            if request is None:
                return
            generation, query = request
            try:
                result = self._compute(query)
                if self._commit(generation, query, result):
                    self.committed += 1
                else:
                    self.discarded += 1
            except Exception:
                # Keep the worker alive; the previous view stays in place.
                logger.exception("recomputation failed", extra={"context": {"query": query}})
            finally:
                with self._cond:
                    self._busy = False
                    self._cond.notify_all()
