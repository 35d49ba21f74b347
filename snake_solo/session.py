"""One player's game session: state, loop and persisted records."""

import logging
import random
import time
from typing import Callable, Optional

from .constants import DIRECTIONS
from .game import GameState
from .loop import FixedStepLoop
from .models import GameStatus, Settings
from .storage import Storage

logger = logging.getLogger(__name__)


def now_ms() -> float:
    return time.monotonic() * 1000


class GameSession:
    """Owns the single ``GameState`` of a session and every transition on it.

    Ticks only happen inside :meth:`frame`; everything else is a status
    change driven by player signals.
    """

    def __init__(self, storage: Storage, clock: Callable[[], float] = now_ms,
                 rng: Optional[random.Random] = None):
        self.storage = storage
        self.clock = clock
        self.rng = rng
        self.settings = storage.get_settings()
        self._new_state()

    def _new_state(self):
        self.state = GameState(self.settings, best=self.storage.get_best_score(), rng=self.rng)
        self.loop = FixedStepLoop(self.state)
        self.saved_best = self.state.best

    @property
    def status(self) -> GameStatus:
        return self.state.status

    def start(self):
        self.state.reset()
        self.state.status = GameStatus.PLAYING
        self.loop.start(self.clock())
        logger.info("Game started on %dx%d board (%s walls, %s curve)",
                    self.state.board.cols, self.state.board.rows,
                    self.settings.wall_mode.value, self.settings.difficulty_curve.value)

    def restart(self):
        self.start()

    def pause(self) -> bool:
        if self.state.status != GameStatus.PLAYING:
            return False
        self.state.status = GameStatus.PAUSED
        return True

    def resume(self) -> bool:
        if self.state.status != GameStatus.PAUSED:
            return False
        self.state.status = GameStatus.PLAYING
        self.loop.resume(self.clock())
        return True

    def show_menu(self):
        self.state.status = GameStatus.MENU

    def save_settings(self, settings: Settings):
        self.settings = settings
        self.storage.save_settings(settings)
        self._new_state()
        self.state.status = GameStatus.MENU

    def handle_direction(self, name: str) -> bool:
        direction = DIRECTIONS.get(name) if isinstance(name, str) else None
        if direction is None:
            return False
        return self.state.queue_direction(direction)

    def frame(self) -> int:
        ticks = self.loop.frame(self.clock())
        self.persist_best()
        return ticks

    def persist_best(self):
        if self.state.best > self.saved_best:
            self.storage.set_best_score(self.state.best)
            self.saved_best = self.state.best
