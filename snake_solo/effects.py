"""Timed power-up effects and the food combo streak.

Nothing here runs on a timer. Every query takes the caller's ``now`` and
compares it against a stored expiry, so an effect or streak simply stops
counting once its instant has passed.
"""

import math
from dataclasses import dataclass

from .constants import COMBO_BONUS, COMBO_DURATION, ITEM_DURATION
from .models import ItemKind


@dataclass
class Effects:
    slow_until: float = 0.0
    ghost_until: float = 0.0
    mult_until: float = 0.0

    def expiry(self, kind: ItemKind) -> float:
        if kind == ItemKind.SLOW:
            return self.slow_until
        if kind == ItemKind.GHOST:
            return self.ghost_until
        return self.mult_until

    def activate(self, kind: ItemKind, now: float):
        until = now + ITEM_DURATION
        if kind == ItemKind.SLOW:
            self.slow_until = until
        elif kind == ItemKind.GHOST:
            self.ghost_until = until
        else:
            self.mult_until = until

    def active(self, kind: ItemKind, now: float) -> bool:
        return self.expiry(kind) > now

    def slow(self, now: float) -> bool:
        return self.slow_until > now

    def ghost(self, now: float) -> bool:
        return self.ghost_until > now

    def multiplier(self, now: float) -> bool:
        return self.mult_until > now

    def remaining_seconds(self, now: float) -> list[tuple[ItemKind, int]]:
        """Active effects with whole seconds left, rounded up."""
        return [
            (kind, math.ceil((self.expiry(kind) - now) / 1000))
            for kind in ItemKind
            if self.active(kind, now)
        ]


@dataclass
class Combo:
    streak: int = 0
    expires_at: float = 0.0

    @property
    def bonus(self) -> int:
        return self.streak * COMBO_BONUS

    def hit(self, now: float):
        self.streak += 1
        self.expires_at = now + COMBO_DURATION

    def expire(self, now: float):
        if now > self.expires_at and self.streak > 0:
            self.streak = 0

    def remaining_fraction(self, now: float) -> float:
        if self.streak > 0 and self.expires_at > now:
            return (self.expires_at - now) / COMBO_DURATION
        return 0.0
