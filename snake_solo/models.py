"""Data models."""

from dataclasses import dataclass
from enum import Enum

from .constants import ITEM_DURATION

Cell = tuple[int, int]


class GameStatus(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameover"


class BoardSize(Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class WallMode(Enum):
    SOLID = "solid"
    WRAP = "wrap"


class DifficultyCurve(Enum):
    GENTLE = "gentle"
    NORMAL = "normal"
    STEEP = "steep"


class ItemKind(Enum):
    SLOW = "slow"
    GHOST = "ghost"
    MULTIPLIER = "multiplier"


class CollisionKind(Enum):
    WALL = "wall"
    BODY = "body"
    OBSTACLE = "obstacle"


def _enum_or_default(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    board_size: BoardSize = BoardSize.MEDIUM
    wall_mode: WallMode = WallMode.SOLID
    difficulty_curve: DifficultyCurve = DifficultyCurve.NORMAL

    def to_dict(self) -> dict:
        return {
            "boardSize": self.board_size.value,
            "wallMode": self.wall_mode.value,
            "difficultyCurve": self.difficulty_curve.value,
        }

    @classmethod
    def from_dict(cls, data) -> "Settings":
        """Build settings from a saved record, field by field.

        Missing or unknown values fall back to the default for that field.
        """
        if not isinstance(data, dict):
            return cls()
        defaults = cls()
        return cls(
            board_size=_enum_or_default(BoardSize, data.get("boardSize"), defaults.board_size),
            wall_mode=_enum_or_default(WallMode, data.get("wallMode"), defaults.wall_mode),
            difficulty_curve=_enum_or_default(
                DifficultyCurve, data.get("difficultyCurve"), defaults.difficulty_curve
            ),
        )


@dataclass
class Item:
    kind: ItemKind
    pos: Cell
    spawned_at: float

    def time_left(self, now: float) -> float:
        return ITEM_DURATION - (now - self.spawned_at)

    def expired(self, now: float) -> bool:
        return now - self.spawned_at > ITEM_DURATION


@dataclass
class PendingObstacle:
    pos: Cell
    activates_at: float

    def ready(self, now: float) -> bool:
        return now >= self.activates_at
