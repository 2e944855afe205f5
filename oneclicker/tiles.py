"""Tile grid coordinates and a per-tile index of tracked entities."""

import math
from collections import defaultdict
from dataclasses import dataclass

TILE_SIZE = 64.0 * 4.0
HALF_TILE_SIZE = TILE_SIZE / 2.0


@dataclass(frozen=True)
class TilePosition:
    """Integer coordinates of a tile on the world grid."""

    x: int
    y: int

    @classmethod
    def from_world(cls, position):
        px, py = position
        return cls(math.floor(px / TILE_SIZE), math.floor(py / TILE_SIZE))

    def to_world(self):
        """World coordinates of the tile's lower-left corner."""
        return (self.x * TILE_SIZE, self.y * TILE_SIZE)

    @classmethod
    def from_vec(cls, vec):
        vx, vy = vec
        return cls(math.floor(vx), math.floor(vy))

    def to_vec(self):
        return (float(self.x), float(self.y))

    def offset(self, x, y):
        return TilePosition(self.x + x, self.y + y)

    @staticmethod
    def snap_world(position):
        """Snap a world position to the corner of the tile containing it."""
        return TilePosition.from_world(position).to_world()


class TileTrackedEntities:
    """Maps each tile to the entities currently located in it."""

    def __init__(self):
        self._map = defaultdict(list)

    def clear(self):
        self._map.clear()

    def add(self, world_position, entity):
        self._map[TilePosition.from_world(world_position)].append(entity)

    def entities_in(self, tile_pos):
        """Entities in the given tile, in insertion order."""
        return tuple(self._map.get(tile_pos, ()))

    def track(self, items):
        """Rebuild the index from (world_position, entity) pairs."""
        self.clear()
        for world_position, entity in items:
            self.add(world_position, entity)