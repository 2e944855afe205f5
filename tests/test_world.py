import math
import random

import pytest

from oneclicker.components import COIN_DESPAWN_TIME, COIN_SPAWN_TIME, CoinPickup, DelayedDespawn
from oneclicker.input import ClickEvent, HoverEvent, MouseButton
from oneclicker.tiles import TilePosition
from oneclicker.world import GameWorld, coin_font_size, update_delayed_despawn


@pytest.fixture
def world():
    return GameWorld(rng=random.Random(7))


def _ready_coin(world, value, position):
    entity = world.spawn_coin(value, position, (0.0, 0.0), 0.6)
    world.update_coins(COIN_SPAWN_TIME, [])
    return entity


def test_font_size_single_digit():
    assert coin_font_size(1) == 180.0


def test_font_size_depends_on_digit_count():
    assert coin_font_size(10) == coin_font_size(99)
    assert coin_font_size(100) < coin_font_size(99) < coin_font_size(9)


def test_font_size_negative_rejected():
    with pytest.raises(ValueError):
        coin_font_size(-1)


def test_delayed_despawn_fires_once():
    items = [("hint", DelayedDespawn.with_children(0.3))]
    assert update_delayed_despawn(items, 0.2) == []
    assert update_delayed_despawn(items, 0.2) == [("hint", True)]
    assert update_delayed_despawn(items, 0.2) == []


def test_new_world_state(world):
    assert world.balance.coins == 0
    assert world.camera.scale == 4.0
    assert world.depth.depth == 0.1
    assert world.coins == {}


def test_spawn_coin_registers_coin(world):
    entity = world.spawn_coin(5, (10.0, 20.0), (1.0, 0.0), 0.6)
    coin = world.coins[entity]
    assert coin.value == 5
    assert coin.position == (10.0, 20.0)
    assert coin.depth == 0.1
    assert world.depth.depth == pytest.approx(0.1 + world.depth.step)
    assert coin.coin.pickable() is False
    assert coin.scale == 0.0


def test_spawned_ids_are_unique(world):
    ids = {world.spawn_coin(1, (0.0, 0.0), (0.0, 0.0), 0.6) for _ in range(5)}
    assert len(ids) == 5


def test_left_click_spawns_one_valued_coin(world):
    events = [
        ClickEvent(MouseButton.LEFT, (300.0, -40.0)),
        ClickEvent(MouseButton.RIGHT, (0.0, 0.0)),
        HoverEvent((0.0, 0.0)),
    ]
    created = world.click_coins(events, False)
    assert len(created) == 1
    coin = world.coins[created[0]]
    assert coin.value == 1
    assert coin.position == (300.0, -40.0)
    assert math.hypot(*coin.particle.velocity) == pytest.approx(80.0)
    assert coin.particle.damping == 0.6


def test_click_ignored_while_ghost_active(world):
    created = world.click_coins([ClickEvent(MouseButton.LEFT, (0.0, 0.0))], True)
    assert created == []
    assert world.coins == {}


def test_move_particles_applies_velocity_then_damping(world):
    entity = world.spawn_coin(1, (0.0, 0.0), (10.0, 0.0), 0.5)
    world.move_particles()
    assert world.coins[entity].position == (10.0, 0.0)
    assert world.coins[entity].particle.velocity == (5.0, 0.0)
    world.move_particles()
    assert world.coins[entity].position == (15.0, 0.0)


def test_coin_becomes_pickable_after_spawn_time(world):
    entity = _ready_coin(world, 1, (0.0, 0.0))
    assert world.coins[entity].coin.pickable() is True
    assert world.coins[entity].scale == 1.0


def test_pickup_with_money_adds_to_balance(world):
    entity = _ready_coin(world, 7, (0.0, 0.0))
    removed = world.update_coins(COIN_DESPAWN_TIME, [CoinPickup(entity, (0.0, 0.0), True)])
    assert removed == [entity]
    assert world.balance.coins == 7
    assert entity not in world.coins


def test_pickup_without_money_leaves_balance(world):
    entity = _ready_coin(world, 7, (0.0, 0.0))
    removed = world.update_coins(COIN_DESPAWN_TIME, [CoinPickup(entity, (0.0, 0.0), False)])
    assert removed == [entity]
    assert world.balance.coins == 0


def test_pickup_of_unknown_entity_is_ignored(world):
    assert world.update_coins(COIN_DESPAWN_TIME, [CoinPickup(999, (0.0, 0.0), True)]) == []
    assert world.balance.coins == 0


def test_pickup_moves_coin_toward_target(world):
    entity = _ready_coin(world, 1, (0.0, 0.0))
    world.update_coins(COIN_DESPAWN_TIME / 2, [CoinPickup(entity, (100.0, 0.0), True)])
    coin = world.coins[entity]
    assert 0.0 < coin.position[0] < 100.0
    assert 0.0 < coin.scale < 1.0
    assert coin.coin.pickable() is False


def test_hover_picks_up_nearby_coin(world):
    entity = _ready_coin(world, 1, (10.0, 10.0))
    world.track_tiles()
    pickups = world.hover_coins([HoverEvent((50.0, 10.0))])
    assert pickups == [CoinPickup(entity, (50.0, 10.0), True)]


def test_hover_ignores_distant_coin(world):
    _ready_coin(world, 1, (10.0, 10.0))
    world.track_tiles()
    assert world.hover_coins([HoverEvent((310.0, 10.0))]) == []


def test_hover_ignores_coin_still_spawning(world):
    world.spawn_coin(1, (10.0, 10.0), (0.0, 0.0), 0.6)
    world.track_tiles()
    assert world.hover_coins([HoverEvent((10.0, 10.0))]) == []


def test_track_tiles_indexes_coins(world):
    entity = world.spawn_coin(1, (600.0, -30.0), (0.0, 0.0), 0.6)
    world.track_tiles()
    assert world.tiles.entities_in(TilePosition.from_world((600.0, -30.0))) == (entity,)