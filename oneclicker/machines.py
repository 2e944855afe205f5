"""Machines placed on tiles: what they cost, how they act on coins, and their spots."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from .components import CoinPickup, Timer, TimerMode
from .tiles import HALF_TILE_SIZE, TILE_SIZE, TilePosition

SPEW_SPREAD = math.pi / 4.0
SPEW_BASE_SPEED = 80.0
SPEW_EXTRA_SPEED = 30.0
SPEW_DAMPING = 0.6

_UP = (0, 1)
_DOWN = (0, -1)
_LEFT = (-1, 0)
_RIGHT = (1, 0)


class _MachineSpec(NamedTuple):
    display_name: str
    image: str
    cost: int
    period: float
    spots: tuple


class Machine(Enum):
    """Every kind of machine that can be bought and placed."""

    MINER = _MachineSpec("Miner", "miner.png", 20, 1.0, (_DOWN,))
    COLLECTOR = _MachineSpec("Collector", "collector.png", 200, 0.1, (_UP,))
    CONVEYOR_UP = _MachineSpec("Up Conveyor", "conveyor-up.png", 10, 0.2, (_UP, _DOWN))
    CONVEYOR_DOWN = _MachineSpec("Down Conveyor", "conveyor-down.png", 10, 0.2, (_UP, _DOWN))
    CONVEYOR_LEFT = _MachineSpec(
        "Left Conveyor", "conveyor-left.png", 10, 0.2, (_LEFT, _RIGHT)
    )
    CONVEYOR_RIGHT = _MachineSpec(
        "Right Conveyor", "conveyor-right.png", 10, 0.2, (_LEFT, _RIGHT)
    )
    ADDER = _MachineSpec("Adder", "adder.png", 500, 1.0, (_DOWN, _LEFT, _RIGHT))
    MULTIPLIER = _MachineSpec("Multiplier", "multiplier.png", 1000, 1.0, (_DOWN, _LEFT, _RIGHT))

    @classmethod
    def list(cls):
        """All machines in toolbar order."""
        return tuple(cls)

    def cost(self):
        return self.value.cost

    def name(self):
        """Name shown on the toolbar."""
        return self.value.display_name

    def image_name(self):
        return self.value.image

    def action_period(self):
        """Seconds between two actions of the machine."""
        return self.value.period

    def spot_offsets(self):
        """Tile offsets of the input/output spots, in up, down, left, right order."""
        return self.value.spots


# Where each conveyor takes coins from (besides its own tile) and where it throws them.
_CONVEYORS = {
    Machine.CONVEYOR_UP: (_DOWN, math.pi / 2.0),
    Machine.CONVEYOR_DOWN: (_UP, -math.pi / 2.0),
    Machine.CONVEYOR_LEFT: (_RIGHT, math.pi),
    Machine.CONVEYOR_RIGHT: (_LEFT, 0.0),
}


@dataclass
class PlacedMachine:
    """A machine standing in the world, centred on its tile."""

    machine: Machine
    position: tuple
    action_timer: Timer = None

    def __post_init__(self):
        if self.action_timer is None:
            self.action_timer = Timer(self.machine.action_period(), TimerMode.REPEATING)


@dataclass
class Spot:
    """A marker on a tile next to a machine; hidden while a machine covers it."""

    position: tuple
    owner: int
    visible: bool = True


@dataclass(frozen=True)
class MachinePlaceRequest:
    machine: Machine
    position: TilePosition


@dataclass(frozen=True)
class MachineDeleteRequest:
    position: TilePosition


@dataclass(frozen=True)
class UpdateSpotsRequest:
    position: TilePosition


@dataclass
class _Action:
    world: object
    position: tuple
    pickups: list
    consumed: list = field(default_factory=list)

    def find_coin(self, tile):
        for entity_id in self.world.tiles.entities_in(tile):
            entity = self.world.coins.get(entity_id)
            if entity is not None and entity.coin.pickable():
                return entity_id, entity
        return None

    def take(self, entity_id, add_money):
        self.consumed.append(entity_id)
        self.pickups.append(CoinPickup(entity_id, self.position, add_money))

    def spew(self, value, angle):
        rng = self.world.rng
        speed = SPEW_BASE_SPEED + SPEW_EXTRA_SPEED * rng.random()
        direction = rng.random() * SPEW_SPREAD - SPEW_SPREAD / 2.0 + angle
        velocity = (math.cos(direction) * speed, math.sin(direction) * speed)
        self.world.spawn_coin(value, self.position, velocity, SPEW_DAMPING)


def _combine(action, tile, operation):
    left = action.find_coin(tile.offset(-1, 0))
    right = action.find_coin(tile.offset(1, 0))
    if left is None or right is None:
        return
    (left_id, left_coin), (right_id, right_coin) = left, right
    action.take(left_id, False)
    action.take(right_id, False)
    action.spew(operation(left_coin.value, right_coin.value), -math.pi / 2.0)


def act_machines(world, delta):
    """Advance every machine's timer and let due machines act; return coin pickups."""
    pickups = []
    for placed in world.machines.values():
        placed.action_timer.tick(delta)
        if not placed.action_timer.just_finished:
            continue

        action = _Action(world, placed.position, pickups)
        tile = TilePosition.from_world(placed.position)
        machine = placed.machine

        if machine is Machine.MINER:
            action.spew(1, -math.pi / 2.0)
        elif machine is Machine.COLLECTOR:
            found = action.find_coin(tile.offset(0, 1))
            if found is not None:
                action.take(found[0], True)
        elif machine is Machine.ADDER:
            _combine(action, tile, lambda a, b: a + b)
        elif machine is Machine.MULTIPLIER:
            _combine(action, tile, lambda a, b: a * b)
        else:
            (dx, dy), angle = _CONVEYORS[machine]
            found = action.find_coin(tile) or action.find_coin(tile.offset(dx, dy))
            if found is not None:
                entity_id, entity = found
                action.take(entity_id, False)
                action.spew(entity.value, angle)

        for entity_id in action.consumed:
            world.coins[entity_id].coin.alive = False
    return pickups


def _machine_in_tile(world, tile):
    return any(entity_id in world.machines for entity_id in world.tiles.entities_in(tile))


def place_machines(world, requests):
    """Buy and place requested machines on free tiles; return spot update requests."""
    updates = []
    for request in requests:
        machine = request.machine
        cost = machine.cost()
        if cost > world.balance.coins:
            continue
        if _machine_in_tile(world, request.position):
            continue

        world.balance.coins -= cost
        corner_x, corner_y = request.position.to_world()
        position = (corner_x + HALF_TILE_SIZE, corner_y + HALF_TILE_SIZE)
        machine_id = world.new_entity()
        world.machines[machine_id] = PlacedMachine(machine, position)
        world.tiles.add(position, machine_id)

        for dx, dy in machine.spot_offsets():
            spot_position = (position[0] + dx * TILE_SIZE, position[1] + dy * TILE_SIZE)
            spot_id = world.new_entity()
            world.spots[spot_id] = Spot(spot_position, machine_id)
            world.tiles.add(spot_position, spot_id)

        tile = request.position
        for neighbour in (
            tile,
            tile.offset(-1, 0),
            tile.offset(1, 0),
            tile.offset(0, -1),
            tile.offset(0, 1),
        ):
            updates.append(UpdateSpotsRequest(neighbour))
    return updates


def delete_machines(world, requests):
    """Remove machines (and their spots) from requested tiles; return spot updates."""
    updates = []
    for request in requests:
        did_delete = False
        for entity_id in world.tiles.entities_in(request.position):
            if world.machines.pop(entity_id, None) is None:
                continue
            did_delete = True
            owned = [spot_id for spot_id, spot in world.spots.items() if spot.owner == entity_id]
            for spot_id in owned:
                del world.spots[spot_id]
        if did_delete:
            updates.append(UpdateSpotsRequest(request.position))
    return updates


def update_spots(world, requests):
    """Hide spots on tiles covered by a machine and show them elsewhere."""
    for request in requests:
        entities = world.tiles.entities_in(request.position)
        has_machine = any(entity_id in world.machines for entity_id in entities)
        for entity_id in entities:
            spot = world.spots.get(entity_id)
            if spot is not None:
                spot.visible = not has_machine