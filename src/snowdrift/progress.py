"""Progress bar for simulation runs using tqdm."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from tqdm.auto import tqdm


class ProgressTracker:
    """Track simulation progress with a tqdm progress bar.

    Parameters
    ----------
    total
        Total number of time steps.
    enabled
        If False, the bar is created disabled and draws nothing.

    """

    def __init__(self, total: int, enabled: bool = True) -> None:
        self._total = total
        self._bar = tqdm(total=total, desc="Simulating", unit="step", disable=not enabled)

    def update(self, accumulated_mass: float) -> None:
        """Advance the bar by one step and show the deposited mass so far."""
        self._bar.set_postfix(deposited=f"{accumulated_mass:.4g}", refresh=False)
        self._bar.update(1)

    def close(self) -> None:
        """Close the progress bar if not already closed."""
        if not self._bar.disable:
            self._bar.close()


@contextmanager
def progress_context(total: int, enabled: bool = True) -> Generator[ProgressTracker, None, None]:
    """Context manager for progress tracking during a run.

    Ensures the progress bar is properly closed even if an exception occurs.

    Parameters
    ----------
    total
        Total number of time steps.
    enabled
        Whether to draw the bar.

    Yields
    ------
    ProgressTracker
        The progress tracker instance.

    """
    tracker = ProgressTracker(total, enabled=enabled)
    try:
        yield tracker
    finally:
        tracker.close()
