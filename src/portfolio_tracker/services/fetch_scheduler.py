"""Sequential task queue with an enforced gap between items."""

import threading
import time
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class PacedTaskQueue:
    """
    Runs tasks one at a time with at least min_interval_seconds between the
    end of one task and the start of the next.

    The gap is tracked across calls, so back-to-back batches and single
    submissions share the same pacing. Only one task is ever in flight.
    """

    def __init__(
        self,
        min_interval_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")
        self._interval = min_interval_seconds
        self._sleep = sleep
        self._clock = clock
        self._lock = threading.Lock()
        self._last_finished: Optional[float] = None

    @property
    def min_interval_seconds(self) -> float:
        return self._interval

    def submit(self, item: T, handler: Callable[[T], R]) -> R:
        """Run handler(item) once the pacing gap has elapsed."""
        with self._lock:
            self._wait_for_slot()
            try:
                return handler(item)
            finally:
                self._last_finished = self._clock()

    def run(
        self,
        items: Iterable[T],
        handler: Callable[[T], R],
        on_result: Optional[Callable[[R], None]] = None,
    ) -> list[R]:
        """
        Run handler over items in order; returns results in the same order.

        on_result, if given, sees each result after the queue lock is
        released, so it may submit further work to this queue.
        """
        results = []
        for item in items:
            result = self.submit(item, handler)
            if on_result is not None:
                on_result(result)
            results.append(result)
        return results

    def _wait_for_slot(self) -> None:
        if self._last_finished is None or self._interval <= 0:
            return
        remaining = self._interval - (self._clock() - self._last_finished)
        if remaining > 0:
            self._sleep(remaining)
