"""Board geometry and free-cell placement."""

import logging
import random
from typing import Iterable, Iterator, Optional

from .constants import BOARD_SIZES, PLACEMENT_ATTEMPTS
from .models import Cell, Settings, WallMode

logger = logging.getLogger(__name__)


class Board:
    def __init__(self, settings: Settings):
        self.cols, self.rows = BOARD_SIZES[settings.board_size.value]
        self.wall_mode = settings.wall_mode

    @property
    def wraps(self) -> bool:
        return self.wall_mode == WallMode.WRAP

    @property
    def center(self) -> Cell:
        return self.cols // 2, self.rows // 2

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.cols and 0 <= y < self.rows

    def wrap(self, cell: Cell) -> Cell:
        x, y = cell
        return x % self.cols, y % self.rows

    def cells(self) -> Iterator[Cell]:
        for y in range(self.rows):
            for x in range(self.cols):
                yield x, y

    def find_empty_position(self, occupied: Iterable[Cell], rng: random.Random) -> Optional[Cell]:
        """Return a free cell, or None when every cell is taken.

        Tries random draws first and falls back to a row-major scan so a
        nearly full board still yields its remaining cells.
        """
        occupied = set(occupied)
        for _ in range(PLACEMENT_ATTEMPTS):
            cell = (rng.randint(0, self.cols - 1), rng.randint(0, self.rows - 1))
            if cell not in occupied:
                return cell

        logger.debug("Random placement missed %d times, scanning board", PLACEMENT_ATTEMPTS)
        for cell in self.cells():
            if cell not in occupied:
                return cell
        return None
