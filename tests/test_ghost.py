import pytest

from oneclicker.ghost import (
    Hud,
    ToolGhost,
    ghost_delete_machine,
    ghost_place_machine,
    hide_ghost_on_right_click,
    tile_line,
)
from oneclicker.input import (
    ClickEvent,
    DragEvent,
    Dragging,
    HoverEvent,
    MouseButton,
    WorldMouse,
)
from oneclicker.machines import Machine, MachineDeleteRequest, MachinePlaceRequest
from oneclicker.tiles import HALF_TILE_SIZE, TILE_SIZE, TilePosition


def test_tile_line_same_tile_is_single_start_tile():
    assert tile_line((10.0, 10.0), (20.0, 30.0)) == [TilePosition(0, 0)]


def test_tile_line_horizontal_excludes_end_tile():
    line = tile_line((10.0, 10.0), (3 * TILE_SIZE + 10.0, 10.0))
    assert line == [TilePosition(0, 0), TilePosition(1, 0), TilePosition(2, 0)]


@pytest.mark.parametrize(
    "start,end",
    [
        ((0.0, 0.0), (5 * TILE_SIZE, 2 * TILE_SIZE)),
        ((-3 * TILE_SIZE, 0.0), (0.0, -7 * TILE_SIZE)),
        ((TILE_SIZE, TILE_SIZE), (TILE_SIZE, 4 * TILE_SIZE)),
    ],
)
def test_tile_line_length_and_start(start, end):
    line = tile_line(start, end)
    s = TilePosition.from_world(start)
    e = TilePosition.from_world(end)
    assert len(line) == max(abs(e.x - s.x), abs(e.y - s.y), 1)
    assert line[0] == s
    assert e not in line


def test_place_on_left_click():
    events = [ClickEvent(MouseButton.LEFT, (TILE_SIZE + 1.0, 2.0))]
    requests = ghost_place_machine(Machine.MINER, events)
    assert requests == [MachinePlaceRequest(Machine.MINER, TilePosition(1, 0))]


def test_place_ignores_other_buttons_and_hover():
    events = [
        ClickEvent(MouseButton.RIGHT, (0.0, 0.0)),
        DragEvent(MouseButton.MIDDLE, (0.0, 0.0), (3 * TILE_SIZE, 0.0)),
        HoverEvent((0.0, 0.0)),
    ]
    assert ghost_place_machine(Machine.ADDER, events) == []


def test_place_on_left_drag_follows_tile_line():
    start, end = (0.0, 0.0), (0.0, 3 * TILE_SIZE)
    requests = ghost_place_machine(
        Machine.CONVEYOR_UP, [DragEvent(MouseButton.LEFT, start, end)]
    )
    assert [r.position for r in requests] == tile_line(start, end)
    assert all(r.machine is Machine.CONVEYOR_UP for r in requests)


def test_place_without_machine_gives_nothing():
    assert ghost_place_machine(None, [ClickEvent(MouseButton.LEFT, (0.0, 0.0))]) == []


def test_delete_on_click_and_drag():
    drag = DragEvent(MouseButton.LEFT, (0.0, 0.0), (2 * TILE_SIZE, 0.0))
    click = ClickEvent(MouseButton.LEFT, (-1.0, -1.0))
    requests = ghost_delete_machine([click, drag, ClickEvent(MouseButton.RIGHT, (0.0, 0.0))])
    assert requests == [
        MachineDeleteRequest(TilePosition(-1, -1)),
        MachineDeleteRequest(TilePosition(0, 0)),
        MachineDeleteRequest(TilePosition(1, 0)),
    ]


def test_hide_on_right_click_only_when_ghost_active():
    events = [ClickEvent(MouseButton.RIGHT, (0.0, 0.0))]
    assert hide_ghost_on_right_click(True, events) == [None]
    assert hide_ghost_on_right_click(False, events) == []


def test_hide_ignores_left_click_and_drag():
    events = [
        ClickEvent(MouseButton.LEFT, (0.0, 0.0)),
        DragEvent(MouseButton.RIGHT, (0.0, 0.0), (1.0, 1.0)),
    ]
    assert hide_ghost_on_right_click(True, events) == []


def test_show_ghost_for_machine_button():
    hud = Hud()
    mouse = (TILE_SIZE * 2 + 5.0, -3.0)
    ghost = hud.show_hide_ghost(0, mouse)
    tile = TilePosition.from_world(mouse)
    assert hud.ghost is ghost
    assert ghost.machine is Machine.list()[0]
    assert ghost.start_tile == tile and ghost.end_tile == tile
    assert ghost.position == tile.to_world()


def test_show_ghost_for_delete_button():
    hud = Hud()
    ghost = hud.show_hide_ghost(len(hud.toolbar.buttons) - 1, (0.0, 0.0))
    assert ghost.is_delete


def test_deselect_removes_ghost():
    hud = Hud()
    hud.show_hide_ghost(1, (0.0, 0.0))
    assert hud.show_hide_ghost(None, (0.0, 0.0)) is None
    assert hud.ghost is None


def test_show_ghost_bad_index():
    with pytest.raises(IndexError):
        Hud().show_hide_ghost(99, (0.0, 0.0))


def test_drag_ghost_moves_towards_new_tile_centre():
    hud = Hud()
    hud.show_hide_ghost(0, (0.0, 0.0))
    mouse = WorldMouse(position_world=(TILE_SIZE * 3 + 1.0, 1.0))
    hud.drag_ghost(mouse)
    ghost = hud.ghost
    expected = (3 * TILE_SIZE + HALF_TILE_SIZE, HALF_TILE_SIZE)
    assert ghost.target == expected
    assert ghost.position == (0.0, 0.0)
    ghost.tween_elapsed = 1.0
    assert ghost.position == expected


def test_drag_ghost_same_tile_updates_start_only():
    hud = Hud()
    hud.show_hide_ghost(0, (10.0, 10.0))
    before = hud.ghost.target
    hud.drag_ghost(WorldMouse(position_world=(20.0, 20.0)))
    assert hud.ghost.target == before
    assert hud.ghost.start_tile == TilePosition(0, 0)


def test_drag_ghost_frozen_while_panning():
    hud = Hud()
    hud.show_hide_ghost(0, (0.0, 0.0))
    mouse = WorldMouse(position_world=(TILE_SIZE * 5, 0.0))
    mouse.buttons[MouseButton.MIDDLE] = Dragging((0.0, 0.0))
    hud.drag_ghost(mouse)
    assert hud.ghost.target == (0.0, 0.0)


def test_tool_ghost_position_interpolates_between_endpoints():
    ghost = ToolGhost(
        machine=None,
        start_tile=TilePosition(0, 0),
        end_tile=TilePosition(0, 0),
        origin=(0.0, 0.0),
        target=(100.0, 0.0),
        tween_elapsed=0.05,
    )
    x, y = ghost.position
    assert 0.0 < x < 100.0
    assert y == 0.0