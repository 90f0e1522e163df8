"""Typing speed and accuracy."""

from __future__ import annotations

import time
from typing import Callable, Optional

from .constants import TypeingConstants


class TypingStats:
    """Counts keystrokes of one test and derives WPM and accuracy.

    The clock starts at the first recorded keystroke.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.typed = 0
        self.correct = 0
        self.started_at: Optional[float] = None
        self.finished_at: Optional[float] = None

    def record(self, correct: bool) -> None:
        if self.started_at is None:
            self.started_at = self._clock()
        self.typed += 1
        if correct:
            self.correct += 1

    def finish(self) -> None:
        self.finished_at = self._clock()

    @property
    def elapsed(self) -> float:
        """Seconds between the first keystroke and finish() (or now)."""
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else self._clock()
        return max(0.0, end - self.started_at)

    @property
    def wpm(self) -> float:
        minutes = self.elapsed / 60
        if minutes <= 0:
            return 0.0
        return (self.correct / TypeingConstants.CHARS_PER_WORD) / minutes

    @property
    def accuracy(self) -> float:
        """Percentage of keystrokes that were correct."""
        if self.typed == 0:
            return 0.0
        return self.correct / self.typed * 100

    def summary(self) -> str:
        return f"{self.wpm:.0f} wpm   {self.accuracy:.1f}% accuracy"
