"""The tool ghost that follows the mouse and turns clicks and drags into requests."""

from dataclasses import dataclass, field
from typing import Optional

from .input import ClickEvent, DragEvent, Dragging, MouseButton
from .machines import Machine, MachineDeleteRequest, MachinePlaceRequest
from .tiles import HALF_TILE_SIZE, TilePosition
from .toolbar import Toolbar

GHOST_DEPTH = 0.1
GHOST_MOVE_TIME = 0.1


def _cubic_out(t):
    return 1.0 - (1.0 - t) ** 3


def tile_line(start_world, end_world):
    """Tiles stepped through from the start tile towards (not including) the end tile.

    At least one tile, the start tile, is always returned.
    """
    start_tile = TilePosition.from_world(start_world)
    end_tile = TilePosition.from_world(end_world)
    num_steps = max(abs(end_tile.x - start_tile.x), abs(end_tile.y - start_tile.y), 1)

    sx, sy = start_tile.to_vec()
    ex, ey = end_tile.to_vec()
    step_x, step_y = (ex - sx) / num_steps, (ey - sy) / num_steps
    return [
        TilePosition.from_vec((sx + step_x * i, sy + step_y * i)) for i in range(num_steps)
    ]


def _left_button_tiles(events):
    for event in events:
        if event.button is not MouseButton.LEFT if hasattr(event, "button") else True:
            continue
        if isinstance(event, ClickEvent):
            yield TilePosition.from_world(event.position)
        elif isinstance(event, DragEvent):
            yield from tile_line(event.start_world, event.end_world)


def ghost_place_machine(machine, events):
    """Place requests for every tile clicked or dragged over with the left button."""
    if machine is None:
        return []
    return [MachinePlaceRequest(machine, tile) for tile in _left_button_tiles(events)]


def ghost_delete_machine(events):
    """Delete requests for every tile clicked or dragged over with the left button."""
    return [MachineDeleteRequest(tile) for tile in _left_button_tiles(events)]


def hide_ghost_on_right_click(ghost_active, events):
    """A deselection ([None]) when a ghost is shown and the right button was clicked."""
    if not ghost_active:
        return []
    for event in events:
        if isinstance(event, ClickEvent) and event.button is MouseButton.RIGHT:
            return [None]
    return []


@dataclass
class ToolGhost:
    """The semi-transparent preview of the selected tool; `machine` is None for delete."""

    machine: Optional[Machine]
    start_tile: TilePosition
    end_tile: TilePosition
    origin: tuple
    target: tuple
    tween_elapsed: float = field(default=GHOST_MOVE_TIME)
    depth: float = GHOST_DEPTH

    @property
    def is_delete(self):
        return self.machine is None

    @property
    def position(self):
        """Current drawn position, eased from `origin` towards `target`."""
        progress = min(max(self.tween_elapsed / GHOST_MOVE_TIME, 0.0), 1.0)
        t = _cubic_out(progress)
        return (
            self.origin[0] + (self.target[0] - self.origin[0]) * t,
            self.origin[1] + (self.target[1] - self.origin[1]) * t,
        )


class Hud:
    """Holds the toolbar and the ghost of the currently selected tool."""

    def __init__(self, toolbar=None):
        self.toolbar = toolbar if toolbar is not None else Toolbar()
        self.ghost = None

    def show_hide_ghost(self, selected, mouse_world):
        """Replace the ghost with one for the selected button (or none); return it."""
        self.ghost = None
        if selected is None:
            return None
        if not 0 <= selected < len(self.toolbar.buttons):
            raise IndexError(f"no toolbar button at index {selected}")

        button = self.toolbar.buttons[selected]
        tile = TilePosition.from_world(mouse_world)
        position = tile.to_world()
        self.ghost = ToolGhost(
            machine=button.machine,
            start_tile=tile,
            end_tile=tile,
            origin=position,
            target=position,
        )
        return self.ghost

    def drag_ghost(self, world_mouse):
        """Ease the ghost towards the tile under the mouse unless the view is being panned."""
        if isinstance(world_mouse.buttons.get(MouseButton.MIDDLE), Dragging):
            return
        if self.ghost is None:
            return

        ghost = self.ghost
        mouse_tile = TilePosition.from_world(world_mouse.position_world)
        if ghost.end_tile != mouse_tile:
            corner_x, corner_y = mouse_tile.to_world()
            ghost.origin = ghost.position
            ghost.target = (corner_x + HALF_TILE_SIZE, corner_y + HALF_TILE_SIZE)
            ghost.tween_elapsed = 0.0
        else:
            ghost.start_tile = mouse_tile