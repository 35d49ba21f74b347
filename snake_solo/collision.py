"""Collision checks for a candidate head cell."""

from typing import Optional, Sequence

from .board import Board
from .effects import Effects
from .models import Cell, CollisionKind


def check_collision(
    board: Board,
    snake: Sequence[Cell],
    obstacles: set[Cell],
    effects: Effects,
    cell: Cell,
    now: float,
) -> Optional[CollisionKind]:
    """Return what the head would hit at ``cell``, or None if the move is safe.

    Under wrap mode the cell must already be wrapped. Ghost only lets the
    head pass through the body; active obstacles always block.
    """
    if not board.wraps and not board.in_bounds(cell):
        return CollisionKind.WALL
    if not effects.ghost(now) and cell in snake[1:]:
        return CollisionKind.BODY
    if cell in obstacles:
        return CollisionKind.OBSTACLE
    return None
