"""Game constants."""

import os
from pathlib import Path

BOARD_SIZES = {
    "small": (20, 15),
    "medium": (25, 20),
    "large": (30, 25),
}

# Tick intervals, milliseconds per tick
INITIAL_SPEED = 140
MIN_SPEED = 60
SLOW_FACTOR = 1.5
DIFFICULTY_CURVES = {
    "gentle": 4,
    "normal": 6,
    "steep": 8,
}

FOODS_PER_LEVEL = 5
FOOD_BASE_POINTS = 10
COMBO_DURATION = 2500
COMBO_BONUS = 2

ITEM_DURATION = 5000
ITEM_SPAWN_CHANCE = 0.15
ITEM_POINTS = 5
ITEM_BLINK_WINDOW = 1000
ITEM_BLINK_PERIOD = 200

OBSTACLE_SPAWN_LEVEL = 3
OBSTACLE_WARNING = 1500

PLACEMENT_ATTEMPTS = 100
MAX_QUEUED_DIRECTIONS = 2
FRAME_RATE = 60

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def _default_data_dir() -> Path:
    base = os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / "snake-solo"


DATA_DIR = Path(os.getenv("SNAKE_DATA_DIR") or _default_data_dir())
DATA_FILE = Path(os.getenv("SNAKE_DATA_FILE") or DATA_DIR / "storage.json")

HOST = os.getenv("SNAKE_HOST", "0.0.0.0")
PORT = int(os.getenv("SNAKE_PORT", "8765"))
