import pytest

from snake_solo.constants import DIRECTIONS, INITIAL_SPEED, ITEM_DURATION
from snake_solo.game import GameState
from snake_solo.models import (
    BoardSize, CollisionKind, DifficultyCurve, GameStatus, Item, ItemKind,
    PendingObstacle, Settings, WallMode,
)

from conftest import AlwaysItemRandom, NoItemRandom

RIGHT, LEFT, UP, DOWN = DIRECTIONS["right"], DIRECTIONS["left"], DIRECTIONS["up"], DIRECTIONS["down"]


def test_new_game_starts_in_menu_with_food():
    game = GameState(Settings(board_size=BoardSize.SMALL))
    assert game.status == GameStatus.MENU
    assert game.snake == [(10, 7)]
    assert game.direction == RIGHT
    assert game.food is not None
    assert game.food not in game.snake
    assert game.tick_interval == INITIAL_SPEED


def test_tick_does_nothing_unless_playing():
    game = GameState(Settings(board_size=BoardSize.SMALL))
    assert game.tick(1000) is False
    assert game.snake == [(10, 7)]


def test_eating_food_scores_and_grows(make_game):
    game = make_game()
    game.snake = [(10, 10)]
    game.food = (11, 10)

    assert game.tick(1000)

    assert game.snake[0] == (11, 10)
    assert len(game.snake) == 2
    assert game.score == 11
    assert game.foods_eaten == 1
    assert game.combo.streak == 1
    assert game.combo.expires_at == 3500
    assert game.food is not None and game.food not in game.snake


def test_length_constant_without_food(make_game):
    game = make_game()
    game.snake = [(5, 5), (4, 5), (3, 5)]
    for now in range(100, 600, 100):
        game.tick(now)
        assert len(game.snake) == 3
    assert game.snake[0] == (10, 5)


def test_solid_wall_ends_game(make_game):
    game = make_game()
    game.snake = [(0, 10), (1, 10), (2, 10)]
    game.direction = LEFT
    game.score = 40

    assert game.tick(1000) is False

    assert game.status == GameStatus.GAME_OVER
    assert game.collision == CollisionKind.WALL
    assert game.snake == [(0, 10), (1, 10), (2, 10)]
    assert game.score == 40
    assert game.tick(1100) is False


def test_wrap_mode_crosses_edge(make_game):
    game = make_game(wall_mode=WallMode.WRAP)
    game.snake = [(19, 10), (18, 10)]
    assert game.tick(1000)
    assert game.snake == [(0, 10), (19, 10)]

    game.direction = UP
    game.snake = [(4, 0)]
    assert game.tick(1100)
    assert game.snake == [(4, 14)]


def test_self_collision(make_game):
    game = make_game()
    game.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    game.direction = DOWN
    assert game.tick(1000) is False
    assert game.collision == CollisionKind.BODY


def test_ghost_passes_through_body(make_game):
    game = make_game()
    game.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    game.direction = DOWN
    game.effects.activate(ItemKind.GHOST, 0)
    assert game.tick(1000)
    assert game.snake[0] == (5, 6)


def test_ghost_does_not_pass_obstacles(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.obstacles = {(6, 5)}
    game.effects.activate(ItemKind.GHOST, 0)
    assert game.tick(1000) is False
    assert game.collision == CollisionKind.OBSTACLE


def test_multiplier_and_combo_score(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.food = (6, 5)
    game.effects.activate(ItemKind.MULTIPLIER, 10_000)
    game.combo.streak = 2
    game.combo.expires_at = 11_000

    game.tick(10_500)

    assert game.score == 30
    assert game.combo.streak == 3


def test_combo_bonus_applies_before_lazy_reset(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.food = (6, 5)
    game.combo.streak = 3
    game.combo.expires_at = 1000

    game.tick(1001)

    assert game.score == 11 + 6
    assert game.combo.streak == 4


def test_combo_resets_lazily_after_expiry(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.combo.streak = 2
    game.combo.expires_at = 1000

    game.tick(1000)
    assert game.combo.streak == 2
    game.tick(1001)
    assert game.combo.streak == 0


def test_item_pickup_is_flat_bonus(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.items = [Item(kind=ItemKind.SLOW, pos=(6, 5), spawned_at=0)]
    game.effects.activate(ItemKind.MULTIPLIER, 0)
    game.combo.streak = 4
    game.combo.expires_at = 2000

    game.tick(1000)

    assert game.score == 5
    assert game.items == []
    assert game.effects.slow_until == 1000 + ITEM_DURATION
    assert len(game.snake) == 1


def test_items_expire(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    fresh = Item(kind=ItemKind.GHOST, pos=(0, 0), spawned_at=1000)
    stale = Item(kind=ItemKind.SLOW, pos=(0, 1), spawned_at=0)
    game.items = [fresh, stale]

    game.tick(ITEM_DURATION)
    assert game.items == [fresh, stale]
    game.tick(ITEM_DURATION + 1)
    assert game.items == [fresh]


def test_item_spawn_on_food(make_game):
    game = make_game(rng=AlwaysItemRandom(5))
    game.snake = [(5, 5)]
    game.food = (6, 5)
    game.tick(1000)
    assert len(game.items) == 1
    item = game.items[0]
    assert item.spawned_at == 1000
    assert item.pos not in game.snake
    assert item.pos != game.food


def test_level_up_speeds_up(make_game):
    game = make_game(curve=DifficultyCurve.STEEP)
    game.snake = [(5, 5)]
    game.foods_eaten = 4
    game.food = (6, 5)

    game.tick(1000)

    assert game.foods_eaten == 5
    assert game.level == 2
    assert game.tick_interval == 132
    assert game.pending_obstacles == []


def test_obstacle_spawns_pending_at_level_three(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.foods_eaten = 9
    game.level = 2
    game.food = (6, 5)

    game.tick(1000)

    assert game.level == 3
    assert len(game.pending_obstacles) == 1
    warn = game.pending_obstacles[0]
    assert warn.activates_at == 2500
    assert warn.pos not in game.snake
    assert game.obstacles == set()


def test_pending_obstacle_does_not_block(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.pending_obstacles = [PendingObstacle(pos=(6, 5), activates_at=1500)]

    assert game.tick(1499)
    assert game.snake == [(6, 5)]
    assert game.obstacles == set()


def test_obstacle_activates_and_blocks(make_game):
    game = make_game()
    game.snake = [(5, 5)]
    game.pending_obstacles = [PendingObstacle(pos=(8, 5), activates_at=1500)]

    game.tick(1499)
    assert game.obstacles == set()
    game.tick(1500)
    assert game.obstacles == {(8, 5)}
    assert game.pending_obstacles == []

    assert game.tick(1600) is False
    assert game.collision == CollisionKind.OBSTACLE


def test_occupied_cells_cover_everything(make_game):
    game = make_game()
    game.snake = [(1, 1), (2, 1)]
    game.food = (3, 3)
    game.items = [Item(kind=ItemKind.GHOST, pos=(4, 4), spawned_at=0)]
    game.obstacles = {(5, 5)}
    game.pending_obstacles = [PendingObstacle(pos=(6, 6), activates_at=0)]
    assert game.occupied_cells() == {(1, 1), (2, 1), (3, 3), (4, 4), (5, 5), (6, 6)}


def test_full_board_food_spawn_is_noop(make_game):
    game = make_game(wall_mode=WallMode.WRAP)
    game.snake = [(5, 5)]
    game.obstacles = set(game.board.cells()) - {(5, 5), (6, 5), (7, 5)}
    game.food = (6, 5)

    assert game.tick(1000)
    assert game.food == (7, 5)

    assert game.tick(1100)
    assert game.food is None
    assert game.status == GameStatus.PLAYING
    assert len(game.snake) == 3


def test_queue_direction_rules(make_game):
    game = make_game()
    assert not game.queue_direction(RIGHT)
    assert not game.queue_direction(LEFT)
    assert game.queue_direction(UP)
    assert not game.queue_direction(DOWN)
    assert not game.queue_direction(UP)
    assert game.queue_direction(LEFT)
    assert not game.queue_direction(DOWN)
    assert game.dir_queue == [UP, LEFT]


def test_queue_direction_rejected_when_not_playing(make_game):
    game = make_game()
    game.status = GameStatus.PAUSED
    assert not game.queue_direction(UP)
    assert game.dir_queue == []


def test_queued_turns_apply_one_per_tick(make_game):
    game = make_game()
    game.snake = [(5, 5), (4, 5)]
    game.queue_direction(UP)
    game.queue_direction(LEFT)

    game.tick(100)
    assert game.snake[0] == (5, 4)
    game.tick(200)
    assert game.snake[0] == (4, 4)
    assert game.direction == LEFT
    assert game.dir_queue == []


@pytest.mark.parametrize("score,best,expected", [(50, 50, True), (30, 50, False), (0, 0, False)])
def test_new_best_flag(make_game, score, best, expected):
    game = make_game(best=best)
    game.score = score
    game.snake = [(0, 0)]
    game.direction = UP
    game.tick(100)
    assert game.new_best is expected


def test_best_tracks_score(make_game):
    game = make_game(best=12)
    game.snake = [(5, 5)]
    game.food = (6, 5)
    game.tick(100)
    assert game.best == 12
    game.food = (7, 5)
    game.tick(200)
    assert game.score == 11 + 13
    assert game.best == 24


def test_reset_clears_run(make_game):
    game = make_game()
    game.score = 99
    game.level = 4
    game.obstacles = {(1, 1)}
    game.effects.activate(ItemKind.GHOST, 0)
    game.reset()
    assert game.score == 0
    assert game.level == 1
    assert game.obstacles == set()
    assert not game.effects.ghost(1)
    assert game.snake == [game.board.center]


def test_fixed_item_roll_keeps_placement_random():
    rng = NoItemRandom(7)
    draws = {rng.randint(0, 19) for _ in range(200)}
    assert len(draws) > 1
    assert draws <= set(range(20))
    assert rng.choice(list(ItemKind)) in ItemKind


def test_game_builds_with_fixed_roll_rng():
    game = GameState(Settings(board_size=BoardSize.SMALL), rng=NoItemRandom(3))
    assert game.food is not None
    assert game.food not in game.snake
