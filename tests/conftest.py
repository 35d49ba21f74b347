import random

import pytest

from snake_solo.game import GameState
from snake_solo.models import BoardSize, DifficultyCurve, GameStatus, Settings, WallMode


class FixedRollRandom(random.Random):
    """Placement stays random; every ``random()`` roll returns ``roll``.

    ``getrandbits`` is defined here so ``randint``/``choice`` keep drawing
    from bits instead of from the fixed roll.
    """

    roll = 0.5

    def random(self):
        return self.roll

    def getrandbits(self, k):
        return super().getrandbits(k)


class NoItemRandom(FixedRollRandom):
    roll = 1.0


class AlwaysItemRandom(FixedRollRandom):
    roll = 0.0


@pytest.fixture
def make_game():
    def _make(board_size=BoardSize.SMALL, wall_mode=WallMode.SOLID,
              curve=DifficultyCurve.NORMAL, best=0, rng=None):
        game = GameState(Settings(board_size, wall_mode, curve), best=best,
                         rng=rng or NoItemRandom(7))
        game.status = GameStatus.PLAYING
        game.food = None
        return game
    return _make
