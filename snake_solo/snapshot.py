"""State serialization for the renderer and HUD."""

import json
import math

from .constants import INITIAL_SPEED, ITEM_BLINK_PERIOD, ITEM_BLINK_WINDOW
from .game import GameState
from .progression import speed_multiplier


def cells_to_list(cells) -> list[list[int]]:
    return [[x, y] for x, y in cells]


def item_visible(item, now: float) -> bool:
    """Items blink during their last second before expiring."""
    if item.time_left(now) >= ITEM_BLINK_WINDOW:
        return True
    return math.floor(now / ITEM_BLINK_PERIOD) % 2 != 0


def build_hud(state: GameState, now: float) -> dict:
    return {
        "score": state.score,
        "best": state.best,
        "level": state.level,
        "speed": round(speed_multiplier(state.current_speed(now)), 1),
        "combo": state.combo.streak,
        "combo_fraction": state.combo.remaining_fraction(now),
        "effects": [
            {"kind": kind.value, "seconds": seconds}
            for kind, seconds in state.effects.remaining_seconds(now)
        ],
    }


def build_state(state: GameState, now: float) -> dict:
    return {
        "type": "state",
        "status": state.status.value,
        "grid": [state.board.cols, state.board.rows],
        "snake": cells_to_list(state.snake),
        "direction": list(state.direction),
        "ghost": state.effects.ghost(now),
        "food": list(state.food) if state.food is not None else None,
        "items": [
            {"kind": item.kind.value, "pos": list(item.pos), "visible": item_visible(item, now)}
            for item in state.items
        ],
        "obstacles": cells_to_list(sorted(state.obstacles)),
        "warnings": cells_to_list(warn.pos for warn in state.pending_obstacles),
        "hud": build_hud(state, now),
        "events": state.drain_events(),
    }


def build_state_msg(state: GameState, now: float) -> str:
    return json.dumps(build_state(state, now))


def build_game_over_msg(state: GameState) -> str:
    return json.dumps({
        "type": "game_over",
        "score": state.score,
        "best": state.best,
        "new_best": state.new_best,
        "collision": state.collision.value if state.collision else None,
    })


def build_welcome_msg(state: GameState) -> str:
    return json.dumps({
        "type": "welcome",
        "settings": state.settings.to_dict(),
        "best": state.best,
        "grid": [state.board.cols, state.board.rows],
        "initial_speed": INITIAL_SPEED,
    })
