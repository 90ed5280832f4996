"""Frame timing: delta time, frame-rate measurement and frame capping."""

from __future__ import annotations

import time
from typing import Callable, Optional

SECOND = 1000.0


def _monotonic_ms_since(start: float) -> Callable[[], float]:
    def ticks() -> float:
        return (time.monotonic() - start) * SECOND

    return ticks


class FrameClock:
    """Tracks time between frames and caps the frame rate.

    ``ticks`` returns elapsed milliseconds; ``sleep`` waits a number of seconds.
    """

    def __init__(
        self,
        frame_rate: int,
        ticks: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive")
        self.ticks = ticks if ticks is not None else _monotonic_ms_since(time.monotonic())
        self.sleep = sleep if sleep is not None else time.sleep
        self.delta = 0.0
        self.now = 0.0
        self.last = 0.0
        self.frame_last = 0.0
        self.frame_delay = SECOND / frame_rate
        self.frame_time = 0.0
        self.frame_rate = frame_rate
        self.frame_count = 0

    def update(self) -> None:
        """Start a frame: compute the delta and refresh the measured frame rate."""
        self.now = float(self.ticks())
        self.delta = (self.now - self.last) / SECOND
        self.last = self.now
        self.frame_count += 1

        if self.now - self.frame_last >= SECOND:
            self.frame_rate = self.frame_count
            self.frame_count = 0
            self.frame_last = self.now

    def update_late(self) -> None:
        """End a frame: sleep for whatever remains of the frame budget."""
        self.frame_time = float(self.ticks()) - self.now
        if self.frame_delay > self.frame_time:
            self.sleep(int(self.frame_delay - self.frame_time) / SECOND)