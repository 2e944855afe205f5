"""Coins in the game world: spawning, movement, pickup and tile tracking."""

import math
import random
from dataclasses import dataclass
from itertools import count
from typing import Optional

from .components import (
    COIN_DESPAWN_TIME,
    Balance,
    Coin,
    CoinPickup,
    NextCoinDepth,
    Particle,
)
from .input import Camera, ClickEvent, HoverEvent, MouseButton, WorldMouse
from .tiles import TilePosition, TileTrackedEntities

BASE_COIN_FONT_SIZE = 180.0
CLICK_COIN_SPEED = 80.0
COIN_DAMPING = 0.6
HOVER_PICKUP_RADIUS = 192.0
STARTING_ZOOM = 4.0


def _cubic_in(t):
    return t * t * t


def _cubic_out(t):
    return 1.0 - (1.0 - t) ** 3


def _progress(timer):
    if timer.duration <= 0:
        return 1.0
    return min(timer.elapsed / timer.duration, 1.0)


def _lerp(start, end, t):
    return (start[0] + (end[0] - start[0]) * t, start[1] + (end[1] - start[1]) * t)


def coin_font_size(value):
    """Font size of the number drawn on a coin; shrinks as the value gets more digits."""
    if value < 0:
        raise ValueError("coin value must not be negative")
    if value == 0:
        return 0.0
    digits = len(str(int(value)))
    return BASE_COIN_FONT_SIZE / digits ** 0.75


def update_delayed_despawn(items, delta):
    """Tick (entity, DelayedDespawn) pairs; return (entity, recursive) for those due now."""
    finished = []
    for entity, delayed in items:
        delayed.timer.tick(delta)
        if delayed.timer.just_finished:
            finished.append((entity, delayed.recursive))
    return finished


@dataclass
class CoinEntity:
    """A coin lying in the world together with its motion and pickup animation."""

    coin: Coin
    particle: Particle
    position: tuple
    depth: float
    pickup_from: Optional[tuple] = None
    pickup_target: Optional[tuple] = None

    @property
    def value(self):
        return self.coin.value

    @property
    def picking_up(self):
        return self.pickup_target is not None

    @property
    def scale(self):
        """Draw scale: grows in after spawning, shrinks away while being picked up."""
        if self.picking_up:
            return 1.0 - _cubic_in(_progress(self.coin.despawn_timer))
        return _cubic_out(_progress(self.coin.spawn_timer))


class GameWorld:
    """Everything that lives on the playing field during gameplay."""

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self.balance = Balance()
        self.depth = NextCoinDepth(depth=0.1, step=0.00000001)
        self.mouse = WorldMouse()
        self.camera = Camera(scale=STARTING_ZOOM)
        self.tiles = TileTrackedEntities()
        self.coins = {}
        self.machines = {}
        self.spots = {}
        self._ids = count(1)

    def new_entity(self):
        """Allocate a fresh entity identifier."""
        return next(self._ids)

    def spawn_coin(self, value, position, velocity, damping):
        """Create a coin worth `value` and return its entity id."""
        entity = self.new_entity()
        self.coins[entity] = CoinEntity(
            coin=Coin(value),
            particle=Particle(velocity=tuple(velocity), damping=damping),
            position=tuple(position),
            depth=self.depth.advance(),
        )
        return entity

    def click_coins(self, events, ghost_active):
        """Spawn a one-valued coin for each left click; return the new entity ids."""
        if ghost_active:
            return []
        created = []
        for event in events:
            if isinstance(event, ClickEvent) and event.button is MouseButton.LEFT:
                angle = self.rng.random() * 2.0 * math.pi
                velocity = (
                    math.cos(angle) * CLICK_COIN_SPEED,
                    math.sin(angle) * CLICK_COIN_SPEED,
                )
                created.append(self.spawn_coin(1, event.position, velocity, COIN_DAMPING))
        return created

    def update_coins(self, delta, pickups):
        """Start requested pickups, advance coin timers; return the coins removed."""
        for pickup in pickups:
            entity = self.coins.get(pickup.coin)
            if entity is None:
                continue
            coin = entity.coin
            coin.despawn_timer.set_duration(COIN_DESPAWN_TIME)
            coin.despawn_timer.unpause()
            coin.has_money = pickup.add_money
            entity.pickup_from = entity.position
            entity.pickup_target = tuple(pickup.target)

        removed = []
        for entity_id, entity in self.coins.items():
            coin = entity.coin
            coin.spawn_timer.tick(delta)
            coin.despawn_timer.tick(delta)
            if entity.picking_up:
                progress = _cubic_in(_progress(coin.despawn_timer))
                entity.position = _lerp(entity.pickup_from, entity.pickup_target, progress)
            if coin.despawn_timer.just_finished:
                if coin.has_money:
                    self.balance.coins += coin.value
                removed.append(entity_id)

        for entity_id in removed:
            del self.coins[entity_id]
        return removed

    def hover_coins(self, events):
        """Pickups for pickable coins near each hover position."""
        pickups = []
        for event in events:
            if not isinstance(event, HoverEvent):
                continue
            position = event.position
            center = TilePosition.from_world(position)
            for dy in (-1, 0, 1):
                for dx in (-1, 0, 1):
                    for entity_id in self.tiles.entities_in(center.offset(dx, dy)):
                        entity = self.coins.get(entity_id)
                        if entity is None or not entity.coin.pickable():
                            continue
                        if math.dist(position, entity.position) <= HOVER_PICKUP_RADIUS:
                            pickups.append(CoinPickup(entity_id, tuple(position), True))
        return pickups

    def move_particles(self):
        """Move each free coin by its velocity, then damp the velocity."""
        for entity in self.coins.values():
            if entity.picking_up:
                continue
            particle = entity.particle
            vx, vy = particle.velocity
            entity.position = (entity.position[0] + vx, entity.position[1] + vy)
            particle.velocity = (vx * particle.damping, vy * particle.damping)

    def track_tiles(self):
        """Rebuild the tile index from coins, machines and spots."""
        self.tiles.track(
            (item.position, entity_id)
            for group in (self.coins, self.machines, self.spots)
            for entity_id, item in group.items()
        )