from __future__ import annotations

from typing import Any


class StepRunnerError(Exception):
    """Base class for every error that aborts a run."""


class ValidationError(StepRunnerError):
    """The task is structurally invalid. Raised before any browser is started.

    `index` is the 0-based position of the offending step, or None when the
    task as a whole is rejected.
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class ExecutionError(StepRunnerError):
    """A step handler failed while the browser session was open."""

    def __init__(self, index: int, step: Any, reason: str) -> None:
        super().__init__(f"Step {index}: {reason}")
        self.index = index
        self.step = step
        self.reason = reason


class TaskFileError(StepRunnerError):
    """The task file could not be read or is not valid JSON."""
