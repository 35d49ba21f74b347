"""Level, tick speed and food scoring."""

from .constants import (
    DIFFICULTY_CURVES, FOOD_BASE_POINTS, FOODS_PER_LEVEL,
    INITIAL_SPEED, MIN_SPEED, SLOW_FACTOR,
)
from .effects import Combo, Effects
from .models import DifficultyCurve


def level_for(foods_eaten: int) -> int:
    return foods_eaten // FOODS_PER_LEVEL + 1


def tick_interval(level: int, curve: DifficultyCurve) -> int:
    step = DIFFICULTY_CURVES[curve.value]
    return max(MIN_SPEED, INITIAL_SPEED - (level - 1) * step)


def effective_interval(interval: float, effects: Effects, now: float) -> float:
    if effects.slow(now):
        return interval * SLOW_FACTOR
    return interval


def speed_multiplier(interval: float) -> float:
    return INITIAL_SPEED / interval


def food_points(level: int, combo: Combo, effects: Effects, now: float) -> int:
    """Points for one food: base plus streak bonus, doubled under multiplier."""
    total = FOOD_BASE_POINTS + level + combo.bonus
    if effects.multiplier(now):
        total *= 2
    return total
