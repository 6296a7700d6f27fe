"""Puzzle error types and recoverable-exception policy."""

from __future__ import annotations

import logging
from typing import TypeAlias


class InvalidConfigurationError(ValueError):
    """Raised when a board cannot be derived from an image and grid size."""


class PuzzleNotReadyError(RuntimeError):
    """Raised when a session operation needs an image that was never loaded."""


# Bounded set tolerated at host boundaries (image IO, notification sinks).
RecoverableErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_ERRORS: RecoverableErrors = (
    OSError,
    ValueError,
    RuntimeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.WARNING,
) -> None:
    """Emit observability for a tolerated recoverable exception."""
    logger.log(level, message, exc_info=True)
