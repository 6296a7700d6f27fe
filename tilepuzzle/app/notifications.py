"""Completion message delivery."""

from __future__ import annotations

import logging

from tilepuzzle.app.events import PuzzleSolved
from tilepuzzle.app.ports import NotificationSink
from tilepuzzle.core.errors import RECOVERABLE_ERRORS, log_recoverable
from tilepuzzle.runtime.scheduler import Scheduler

DEFAULT_NOTIFY_DELAY_SECONDS = 0.5

logger = logging.getLogger(__name__)


def format_completion_message(elapsed_seconds: float) -> str:
    return f"Puzzle complete! Time: {elapsed_seconds:.2f} s"


class CompletionNotifier:
    """Deliver a completion message after a short delay.

    The delay lets the final board frame be presented before the message.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        sink: NotificationSink,
        *,
        delay_seconds: float = DEFAULT_NOTIFY_DELAY_SECONDS,
    ) -> None:
        self._scheduler = scheduler
        self._sink = sink
        self._delay_seconds = delay_seconds
        self._task_id: int | None = None

    def on_solved(self, event: PuzzleSolved) -> None:
        message = format_completion_message(event.elapsed_seconds)
        self._task_id = self._scheduler.call_later(self._delay_seconds, lambda: self._deliver(message))

    def cancel(self) -> None:
        if self._task_id is not None:
            self._scheduler.cancel(self._task_id)
            self._task_id = None

    def _deliver(self, message: str) -> None:
        self._task_id = None
        try:
            self._sink(message)
        except RECOVERABLE_ERRORS:
            log_recoverable(logger, "completion_sink_failed")
