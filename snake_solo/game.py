"""Core game state and logic."""

import logging
import random
from typing import Iterable, Optional

from .board import Board
from .collision import check_collision
from .constants import (
    DIRECTIONS, INITIAL_SPEED, ITEM_POINTS, ITEM_SPAWN_CHANCE,
    MAX_QUEUED_DIRECTIONS, OBSTACLE_SPAWN_LEVEL, OBSTACLE_WARNING,
)
from .effects import Combo, Effects
from .models import (
    Cell, CollisionKind, GameStatus, Item, ItemKind, PendingObstacle, Settings,
)
from .progression import effective_interval, food_points, level_for, tick_interval

logger = logging.getLogger(__name__)


class GameState:
    def __init__(self, settings: Optional[Settings] = None, best: int = 0,
                 rng: Optional[random.Random] = None):
        self.settings = settings or Settings()
        self.board = Board(self.settings)
        self.rng = rng or random.Random()
        self.status = GameStatus.MENU
        self.best = best
        self.reset()

    def reset(self):
        self.snake: list[Cell] = [self.board.center]
        self.direction: Cell = DIRECTIONS["right"]
        self.dir_queue: list[Cell] = []
        self.food: Optional[Cell] = None
        self.items: list[Item] = []
        self.obstacles: set[Cell] = set()
        self.pending_obstacles: list[PendingObstacle] = []

        self.score = 0
        self.level = 1
        self.foods_eaten = 0
        self.combo = Combo()
        self.effects = Effects()
        self.tick_interval = INITIAL_SPEED

        self.collision: Optional[CollisionKind] = None
        self.new_best = False
        self.events: list[dict] = []

        self.spawn_food()

    def occupied_cells(self) -> set[Cell]:
        occupied = set(self.snake)
        if self.food is not None:
            occupied.add(self.food)
        occupied.update(item.pos for item in self.items)
        occupied.update(self.obstacles)
        occupied.update(warn.pos for warn in self.pending_obstacles)
        return occupied

    def find_empty_position(self, reserved: Iterable[Cell] = ()) -> Optional[Cell]:
        # reserved: cells claimed this tick that are not in the snake yet
        return self.board.find_empty_position(self.occupied_cells() | set(reserved), self.rng)

    def spawn_food(self, reserved: Iterable[Cell] = ()):
        self.food = self.find_empty_position(reserved)

    def spawn_item(self, now: float, reserved: Iterable[Cell] = ()):
        if self.rng.random() > ITEM_SPAWN_CHANCE:
            return
        pos = self.find_empty_position(reserved)
        if pos is None:
            return
        kind = self.rng.choice(list(ItemKind))
        self.items.append(Item(kind=kind, pos=pos, spawned_at=now))
        logger.debug("Spawned %s item at %s", kind.value, pos)

    def spawn_obstacle(self, now: float, reserved: Iterable[Cell] = ()):
        if self.level < OBSTACLE_SPAWN_LEVEL:
            return
        pos = self.find_empty_position(reserved)
        if pos is None:
            return
        self.pending_obstacles.append(PendingObstacle(pos=pos, activates_at=now + OBSTACLE_WARNING))
        self.events.append({"type": "obstacle", "pos": list(pos)})
        logger.debug("Obstacle pending at %s", pos)

    def promote_obstacles(self, now: float):
        still_pending = []
        for warn in self.pending_obstacles:
            if warn.ready(now):
                self.obstacles.add(warn.pos)
            else:
                still_pending.append(warn)
        self.pending_obstacles = still_pending

    def update_level(self, now: float, reserved: Iterable[Cell] = ()):
        new_level = level_for(self.foods_eaten)
        if new_level > self.level:
            self.level = new_level
            self.tick_interval = tick_interval(self.level, self.settings.difficulty_curve)
            self.events.append({"type": "level_up", "level": self.level})
            logger.info("Level %d reached, tick interval %dms", self.level, self.tick_interval)
            if self.level >= OBSTACLE_SPAWN_LEVEL:
                self.spawn_obstacle(now, reserved)

    def current_speed(self, now: float) -> float:
        return effective_interval(self.tick_interval, self.effects, now)

    def add_score(self, points: int):
        self.score += points
        if self.score > self.best:
            self.best = self.score

    def queue_direction(self, direction: Cell) -> bool:
        """Buffer a turn for a coming tick.

        Turns equal or opposite to the last queued direction (or the current
        one when the queue is empty) are dropped, as are turns beyond the
        queue limit.
        """
        if self.status != GameStatus.PLAYING:
            return False
        last = self.dir_queue[-1] if self.dir_queue else self.direction
        if direction == last or direction == (-last[0], -last[1]):
            return False
        if len(self.dir_queue) >= MAX_QUEUED_DIRECTIONS:
            return False
        self.dir_queue.append(direction)
        return True

    def game_over(self, kind: CollisionKind):
        self.status = GameStatus.GAME_OVER
        self.collision = kind
        self.new_best = self.score == self.best and self.score > 0
        logger.info("Game over (%s collision) with score %d", kind.value, self.score)

    def tick(self, now: float) -> bool:
        """Advance one step. Returns False once the game is over."""
        if self.status != GameStatus.PLAYING:
            return False

        if self.dir_queue:
            self.direction = self.dir_queue.pop(0)

        hx, hy = self.snake[0]
        dx, dy = self.direction
        head = (hx + dx, hy + dy)
        if self.board.wraps:
            head = self.board.wrap(head)

        kind = check_collision(self.board, self.snake, self.obstacles, self.effects, head, now)
        if kind is not None:
            self.game_over(kind)
            return False

        ate_food = False
        if self.food is not None and head == self.food:
            ate_food = True
            self.foods_eaten += 1
            self.add_score(food_points(self.level, self.combo, self.effects, now))
            self.combo.hit(now)
            self.events.append({"type": "food", "pos": list(head), "combo": self.combo.streak})

            self.spawn_food(reserved=(head,))
            self.spawn_item(now, reserved=(head,))
            self.update_level(now, reserved=(head,))

        kept = []
        for item in self.items:
            if item.pos == head:
                self.effects.activate(item.kind, now)
                self.add_score(ITEM_POINTS)
                self.events.append({"type": "item", "kind": item.kind.value, "pos": list(head)})
            elif not item.expired(now):
                kept.append(item)
        self.items = kept

        self.snake.insert(0, head)
        if not ate_food:
            self.snake.pop()

        self.combo.expire(now)
        self.promote_obstacles(now)
        return True

    def drain_events(self) -> list[dict]:
        events, self.events = self.events, []
        return events
