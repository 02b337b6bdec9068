"""Runtime environment for the solver: a restartable time budget."""

from __future__ import annotations

from time import monotonic


class SolverTimeout(Exception):
    """Raised when the solver has used up its time budget."""

    def __str__(self) -> str:
        return "Timeout"


class Env:
    """Tracks elapsed time against a maximum duration in seconds."""

    def __init__(self, max_duration: float) -> None:
        self.max_duration = max_duration
        self._start = monotonic()

    def reset_timer(self) -> None:
        """Restart the clock."""
        self._start = monotonic()

    def check_timeout(self) -> None:
        """Raise :class:`SolverTimeout` once the budget has elapsed."""
        if monotonic() - self._start >= self.max_duration:
            raise SolverTimeout()