"""Frame-interval coalescing for high-frequency input samples."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from tilepuzzle.runtime.scheduler import Scheduler

TSample = TypeVar("TSample")

DEFAULT_FRAME_INTERVAL_SECONDS = 1.0 / 60.0

_NOTHING = object()


class LatestSampleThrottle(Generic[TSample]):
    """Run ``handler`` at most once per interval with the newest sample.

    The first sample after a quiet period runs immediately. Samples arriving
    inside the interval replace each other, and the survivor runs when the
    interval elapses.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        handler: Callable[[TSample], None],
        *,
        interval_seconds: float = DEFAULT_FRAME_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds < 0.0:
            raise ValueError("interval_seconds must be >= 0")
        self._scheduler = scheduler
        self._handler = handler
        self._interval_seconds = interval_seconds
        self._last_run_seconds: float | None = None
        self._pending: object = _NOTHING
        self._task_id: int | None = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not _NOTHING

    def submit(self, sample: TSample) -> bool:
        """Offer a sample; return whether the handler ran immediately."""
        now = self._scheduler.now_seconds
        last = self._last_run_seconds
        if last is None or now - last >= self._interval_seconds:
            self._cancel_timer()
            self._run(sample)
            return True
        self._pending = sample
        if self._task_id is None:
            self._task_id = self._scheduler.call_later(
                max(0.0, last + self._interval_seconds - now),
                self._on_due,
            )
        return False

    def flush(self) -> bool:
        """Run the pending sample now, if any."""
        self._cancel_timer()
        if self._pending is _NOTHING:
            return False
        sample = self._pending
        self._run(sample)  # type: ignore[arg-type]
        return True

    def cancel(self) -> None:
        """Drop the pending sample without running it."""
        self._cancel_timer()
        self._pending = _NOTHING

    def reset(self) -> None:
        """Forget prior runs so the next sample is applied immediately."""
        self.cancel()
        self._last_run_seconds = None

    def _on_due(self) -> None:
        self._task_id = None
        if self._pending is not _NOTHING:
            sample = self._pending
            self._run(sample)  # type: ignore[arg-type]

    def _run(self, sample: TSample) -> None:
        self._pending = _NOTHING
        self._last_run_seconds = self._scheduler.now_seconds
        self._handler(sample)

    def _cancel_timer(self) -> None:
        if self._task_id is not None:
            self._scheduler.cancel(self._task_id)
            self._task_id = None
