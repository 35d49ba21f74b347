"""Fixed-timestep accumulator that turns frame deltas into whole ticks."""

from typing import Optional

from .game import GameState
from .models import GameStatus


class FixedStepLoop:
    """Drives ``GameState.tick`` from a host's per-frame callback.

    The host calls :meth:`frame` once per refresh with the current time.
    Elapsed time piles up in the accumulator and is paid out one tick
    interval at a time, so simulation speed does not depend on frame rate.
    """

    def __init__(self, state: GameState):
        self.state = state
        self.accumulator = 0.0
        self.last_frame: Optional[float] = None

    def start(self, now: float):
        self.accumulator = 0.0
        self.last_frame = now

    def resume(self, now: float):
        # Only the reference time moves; leftover fractional time carries over.
        self.last_frame = now

    def frame(self, now: float) -> int:
        """Run every tick owed since the last frame and return how many ran."""
        if self.state.status != GameStatus.PLAYING:
            return 0
        if self.last_frame is None:
            self.last_frame = now
        self.accumulator += now - self.last_frame
        self.last_frame = now

        interval = self.state.current_speed(now)
        ticks = 0
        while self.accumulator >= interval:
            self.state.tick(now)
            self.accumulator -= interval
            ticks += 1
            if self.state.status != GameStatus.PLAYING:
                break
        return ticks
