"""Synchronous and fire-and-forget dispatch of send jobs."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List

__all__ = ["AsyncDispatcher", "Dispatcher", "ErrorCallback", "SyncDispatcher", "log_async_error"]

logger = logging.getLogger(__name__)

Job = Callable[[], None]
ErrorCallback = Callable[[BaseException], None]


class Dispatcher(ABC):
    """Runs send jobs; ``blocking`` tells whether errors reach the caller."""

    blocking: bool = True

    @abstractmethod
    def dispatch(self, job: Job) -> None:
        """Run or schedule ``job``."""

    def wait(self, timeout: float | None = None) -> bool:
        return True

    def close(self, timeout: float | None = None) -> None:
        self.wait(timeout)


class SyncDispatcher(Dispatcher):
    """Run the job on the caller's thread; errors propagate."""

    blocking = True

    def dispatch(self, job: Job) -> None:
        job()


class AsyncDispatcher(Dispatcher):
    """Run every job on its own daemon thread and return at once.

    Failures never reach the caller. They are handed to ``on_error`` when one
    is supplied and dropped otherwise.
    """

    blocking = False

    def __init__(self, *, on_error: ErrorCallback | None = None) -> None:
        self.on_error = on_error
        self._lock = threading.Lock()
        self._threads: List[threading.Thread] = []

    def dispatch(self, job: Job) -> None:
        thread = threading.Thread(target=self._run, args=(job,), name="ovhlogs-send", daemon=True)
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
        thread.start()

    def _run(self, job: Job) -> None:
        try:
            job()
        except Exception as exc:
            if self.on_error is not None:
                self.on_error(exc)

    def pending(self) -> int:
        with self._lock:
            return sum(1 for t in self._threads if t.is_alive())

    def wait(self, timeout: float | None = None) -> bool:
        """Join the jobs dispatched so far; ``False`` if some are still running."""

        with self._lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            return not self._threads


def log_async_error(exc: BaseException) -> None:
    logger.warning("asynchronous GELF send failed: %s", exc)
