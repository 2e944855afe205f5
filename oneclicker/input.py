"""Mouse handling in world space: clicks, hovers, drags, camera pan and zoom."""

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple, Optional, Union

CLICK_DURATION = 0.2
CLICK_DISTANCE = 10.0
MIN_ZOOM = 1.0
MAX_ZOOM = 20.0


def _sub(a, b):
    return (a[0] - b[0], a[1] - b[1])


class MouseButton(Enum):
    LEFT = auto()
    MIDDLE = auto()
    RIGHT = auto()


class Interaction(Enum):
    NONE = auto()
    HOVERED = auto()
    CLICKED = auto()


class MouseState(Enum):
    NONE = auto()
    HOVERING = auto()
    DRAGGING = auto()

    def priority(self):
        return {MouseState.NONE: 0, MouseState.HOVERING: 1, MouseState.DRAGGING: 2}[self]


@dataclass(frozen=True)
class Pressed:
    time: float
    position_window: tuple
    position_world: tuple


@dataclass(frozen=True)
class Dragging:
    last_position: tuple


ButtonState = Optional[Union[Pressed, Dragging]]


@dataclass
class WorldMouse:
    """Where the mouse is in the world and what each button is doing."""

    position_world: tuple = (0.0, 0.0)
    state: MouseState = MouseState.NONE
    buttons: dict = field(default_factory=lambda: {button: None for button in MouseButton})


@dataclass(frozen=True)
class ClickEvent:
    button: MouseButton
    position: tuple


@dataclass(frozen=True)
class HoverEvent:
    position: tuple


@dataclass(frozen=True)
class DragEvent:
    button: MouseButton
    start_world: tuple
    end_world: tuple


@dataclass
class Camera:
    """A 2D camera with a translation and a uniform zoom scale."""

    translation: tuple = (0.0, 0.0)
    scale: float = 1.0

    def screen_to_world(self, position):
        """Map a position relative to the window centre into world space."""
        return (
            self.translation[0] + self.scale * position[0],
            self.translation[1] + self.scale * position[1],
        )

    def window_to_world(self, position, window_size):
        """Map a window position (origin at the bottom-left) into world space."""
        half = (window_size[0] / 2.0, window_size[1] / 2.0)
        return self.screen_to_world(_sub(position, half))


class ScrollUnit(Enum):
    LINE = auto()
    PIXEL = auto()


@dataclass(frozen=True)
class ScrollEvent:
    unit: ScrollUnit
    y: float


class ButtonUpdate(NamedTuple):
    state: ButtonState
    mouse_state: MouseState
    events: list


def update_mouse_button_state(button, state, cursor_window, camera, now, released):
    """Advance one button's press/drag state; return the new state and events."""
    to_world = camera.screen_to_world

    if isinstance(state, Dragging):
        events = [DragEvent(button, to_world(state.last_position), to_world(cursor_window))]
        if released:
            return ButtonUpdate(None, MouseState.NONE, events)
        return ButtonUpdate(Dragging(cursor_window), MouseState.DRAGGING, events)

    if isinstance(state, Pressed):
        duration = now - state.time
        distance = math.dist(cursor_window, state.position_window)
        suitable_for_click = duration < CLICK_DURATION and distance < CLICK_DISTANCE

        if released:
            if suitable_for_click:
                event = ClickEvent(button, state.position_world)
            else:
                event = DragEvent(
                    button, to_world(cursor_window), to_world(state.position_window)
                )
            return ButtonUpdate(None, MouseState.NONE, [event])

        if not suitable_for_click:
            start = to_world(state.position_window)
            return ButtonUpdate(
                Dragging(cursor_window),
                MouseState.DRAGGING,
                [DragEvent(button, start, start)],
            )
        return ButtonUpdate(state, MouseState.NONE, [])

    return ButtonUpdate(None, MouseState.NONE, [])


def handle_bg_input(
    world_mouse, now, interaction, cursor_window, window_size, camera, just_pressed, just_released
):
    """Process one frame of background mouse input; return the world events it produced."""
    if cursor_window is None:
        return []

    cursor_world = camera.window_to_world(cursor_window, window_size)
    relative = _sub(cursor_window, (window_size[0] / 2.0, window_size[1] / 2.0))
    world_mouse.position_world = cursor_world
    events = []

    if interaction in (Interaction.HOVERED, Interaction.CLICKED):
        pressed = Pressed(now, relative, cursor_world)
        for button in MouseButton:
            if button in just_pressed:
                world_mouse.buttons[button] = pressed
        if world_mouse.state in (MouseState.NONE, MouseState.HOVERING):
            events.append(HoverEvent(cursor_world))
            world_mouse.state = MouseState.HOVERING
    else:
        world_mouse.state = MouseState.NONE
        world_mouse.buttons = {button: None for button in MouseButton}

    mouse_states = []
    for button in MouseButton:
        update = update_mouse_button_state(
            button,
            world_mouse.buttons[button],
            relative,
            camera,
            now,
            button in just_released,
        )
        world_mouse.buttons[button] = update.state
        mouse_states.append(update.mouse_state)
        events.extend(update.events)

    world_mouse.state = max(mouse_states, key=MouseState.priority)
    return events


def drag_camera(camera, events):
    """Pan the camera by every right-button drag."""
    for event in events:
        if isinstance(event, DragEvent) and event.button is MouseButton.RIGHT:
            dx, dy = _sub(event.end_world, event.start_world)
            camera.translation = (camera.translation[0] - dx, camera.translation[1] - dy)


def zoom_camera(camera, scroll_events):
    """Zoom the camera by the accumulated scroll, within the allowed range."""
    scroll = 1.0
    for event in scroll_events:
        if event.unit is ScrollUnit.LINE:
            scroll -= event.y * 0.2
        else:
            scroll -= (event.y / 100.0) * 0.2
    camera.scale = min(max(camera.scale * scroll, MIN_ZOOM), MAX_ZOOM)