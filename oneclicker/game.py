"""The game itself: state switching, the per-frame schedule and the desktop window."""

import argparse
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from .ghost import (
    Hud,
    ghost_delete_machine,
    ghost_place_machine,
    hide_ghost_on_right_click,
)
from .input import (
    Interaction,
    MouseButton,
    ScrollEvent,
    ScrollUnit,
    drag_camera,
    handle_bg_input,
    zoom_camera,
)
from .machines import act_machines, delete_machines, place_machines, update_spots
from .palette import BLUE, DARK_BLUE, LIGHT_BLUE, LIGHT_BROWN, OFF_WHITE, ORANGE, to_rgb255
from .tiles import TILE_SIZE
from .title import VERSION, TitleScreen
from .toolbar import LOCKED_ICON
from .world import GameWorld, coin_font_size

WINDOW_TITLE = "One Clicker"
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60

_BUTTON_WIDTH = 90
_BUTTON_HEIGHT = 128
_PANEL_MARGIN = 12
_PANEL_BOTTOM = 16
_ICON_SIZE = 64
_COIN_RADIUS = 96.0

_PYGAME_BUTTONS = {1: MouseButton.LEFT, 2: MouseButton.MIDDLE, 3: MouseButton.RIGHT}


class GameState(Enum):
    TITLE = auto()
    GAMEPLAY = auto()


@dataclass
class InputHandlingBehavior:
    """Whether the game may react to the mouse and keyboard this frame."""

    can_use_mouse: bool = True
    can_use_keyboard: bool = True


@dataclass(frozen=True)
class FrameInput:
    """Everything the player did during one frame.

    `cursor_window` has its origin at the bottom-left of the window, or is None
    when the cursor is outside it. `toolbar_clicks` are indices of toolbar buttons.
    """

    interaction: Interaction = Interaction.NONE
    cursor_window: Optional[tuple] = None
    window_size: tuple = (float(DEFAULT_WINDOW_SIZE[0]), float(DEFAULT_WINDOW_SIZE[1]))
    just_pressed: frozenset = frozenset()
    just_released: frozenset = frozenset()
    scroll_events: tuple = ()
    toolbar_clicks: tuple = ()


def _toolbar_rects(window_size, count):
    """Screen rectangles (x, y, w, h; origin top-left) of the toolbar buttons."""
    width, height = window_size
    left = (width - count * _BUTTON_WIDTH) / 2.0
    top = height - _BUTTON_HEIGHT - _PANEL_BOTTOM
    return [(left + i * _BUTTON_WIDTH, top, _BUTTON_WIDTH, _BUTTON_HEIGHT) for i in range(count)]


def _hit(rects, position):
    px, py = position
    return next(
        (i for i, (x, y, w, h) in enumerate(rects) if x <= px < x + w and y <= py < y + h),
        None,
    )


class Game:
    """Runs the title screen and the gameplay one frame at a time."""

    def __init__(self, rng=None, version=VERSION, window_size=DEFAULT_WINDOW_SIZE):
        self.rng = rng if rng is not None else random.Random()
        self.window_size = tuple(window_size)
        self.clear_color = OFF_WHITE
        self.behavior = InputHandlingBehavior()
        self.state = GameState.TITLE
        self.title = TitleScreen(version)
        self.world = None
        self.hud = None
        self.time = 0.0
        self._spot_updates = []

    def step(self, delta, frame_input=None):
        """Advance the game by `delta` seconds of the given input; return the state."""
        if delta < 0:
            raise ValueError("frame delta must not be negative")
        frame = frame_input if frame_input is not None else FrameInput()
        self.time += delta

        if self.title is not None:
            self.title.update(delta)

        if self.state is GameState.TITLE:
            if self.behavior.can_use_mouse and self.title.handle_click(frame.interaction):
                self._enter_gameplay()
        else:
            self._step_gameplay(delta, frame)
        return self.state

    def _enter_gameplay(self):
        self.state = GameState.GAMEPLAY
        self.world = GameWorld(rng=self.rng)
        self.hud = Hud()
        self.hud.toolbar.update_balance(self.world.balance.coins)
        self._spot_updates = []

    def _step_gameplay(self, delta, frame):
        world, hud = self.world, self.hud
        events = []
        selections = []
        place_requests = []
        delete_requests = []

        # Input handling
        if self.behavior.can_use_mouse:
            events = handle_bg_input(
                world.mouse,
                self.time,
                frame.interaction,
                frame.cursor_window,
                frame.window_size,
                world.camera,
                frame.just_pressed,
                frame.just_released,
            )
            zoom_camera(world.camera, frame.scroll_events)
            ghost = hud.ghost
            selections.extend(hide_ghost_on_right_click(ghost is not None, events))
            if ghost is not None:
                if ghost.is_delete:
                    delete_requests = ghost_delete_machine(events)
                else:
                    place_requests = ghost_place_machine(ghost.machine, events)

        # Pre-update
        world.track_tiles()
        update_spots(world, self._spot_updates)
        self._spot_updates = []

        # Update
        drag_camera(world.camera, events)
        world.click_coins(events, hud.ghost is not None)
        pickups = world.hover_coins(events)
        pickups.extend(act_machines(world, delta))
        world.update_coins(delta, pickups)
        world.move_particles()
        hud.toolbar.update_balance(world.balance.coins)
        for index in frame.toolbar_clicks:
            selections.extend(hud.toolbar.select(index))
        if hud.ghost is not None:
            hud.ghost.tween_elapsed += delta
            hud.drag_ghost(world.mouse)
        self._spot_updates.extend(place_machines(world, place_requests))
        self._spot_updates.extend(delete_machines(world, delete_requests))

        # Post-update
        for selected in selections:
            hud.toolbar.apply_selection(selected)
            hud.show_hide_ghost(selected, world.mouse.position_world)

    def run(self):
        """Open a window and play until it is closed."""
        import pygame

        pygame.init()
        try:
            screen = pygame.display.set_mode(self.window_size, pygame.RESIZABLE)
            pygame.display.set_caption(WINDOW_TITLE)
            renderer = _Renderer(pygame, screen)
            clock = pygame.time.Clock()
            running = True
            while running:
                delta = clock.tick(FPS) / 1000.0
                self.window_size = screen.get_size()
                running, frame = self._collect_input(pygame)
                if not running:
                    break
                self.step(delta, frame)
                self._draw(renderer)
                pygame.display.flip()
        finally:
            pygame.quit()

    def _current_toolbar_rects(self):
        if self.state is not GameState.GAMEPLAY:
            return []
        return _toolbar_rects(self.window_size, len(self.hud.toolbar.buttons))

    def _collect_input(self, pygame):
        width, height = self.window_size
        rects = self._current_toolbar_rects()
        just_pressed, just_released = set(), set()
        scroll, clicks = [], []
        running = True

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in _PYGAME_BUTTONS:
                index = _hit(rects, event.pos)
                if index is None:
                    just_pressed.add(_PYGAME_BUTTONS[event.button])
                elif event.button == 1:
                    clicks.append(index)
            elif event.type == pygame.MOUSEBUTTONUP and event.button in _PYGAME_BUTTONS:
                just_released.add(_PYGAME_BUTTONS[event.button])
            elif event.type == pygame.MOUSEWHEEL:
                scroll.append(ScrollEvent(ScrollUnit.LINE, float(event.y)))

        mouse_x, mouse_y = pygame.mouse.get_pos()
        focused = pygame.mouse.get_focused()
        over_toolbar = _hit(rects, (mouse_x, mouse_y)) is not None
        if not focused or over_toolbar:
            interaction = Interaction.NONE
        elif pygame.mouse.get_pressed()[0]:
            interaction = Interaction.CLICKED
        else:
            interaction = Interaction.HOVERED

        frame = FrameInput(
            interaction=interaction,
            cursor_window=(float(mouse_x), float(height - mouse_y)) if focused else None,
            window_size=(float(width), float(height)),
            just_pressed=frozenset(just_pressed),
            just_released=frozenset(just_released),
            scroll_events=tuple(scroll),
            toolbar_clicks=tuple(clicks),
        )
        return running, frame

    def _draw(self, renderer):
        renderer.screen.fill(to_rgb255(self.clear_color))
        if self.state is GameState.GAMEPLAY:
            self._draw_world(renderer)
            self._draw_hud(renderer)
        if self.title is not None and not self.title.done:
            self._draw_title(renderer)

    def _draw_title(self, renderer):
        title = self.title
        width, height = self.window_size
        dx = title.slide * width
        layout = {
            title.title: (width / 2.0, height * 0.2),
            title.prompt: (width / 2.0, height * 0.5 + title.prompt_offset),
            title.credits: (width / 2.0, height * 0.75),
        }
        for element in title.elements:
            if element is title.version_label:
                renderer.text(
                    element.text,
                    element.font_size,
                    element.color,
                    topleft=(8 + dx, height - 8 - element.font_size),
                )
            else:
                cx, cy = layout[element]
                renderer.text(element.text, element.font_size, element.color, center=(cx + dx, cy))

    def _draw_world(self, renderer):
        pygame = renderer.pg
        world = self.world
        camera = world.camera
        width, height = self.window_size
        tile_px = TILE_SIZE / camera.scale

        def to_screen(point):
            return (
                (point[0] - camera.translation[0]) / camera.scale + width / 2.0,
                height / 2.0 - (point[1] - camera.translation[1]) / camera.scale,
            )

        def tile_rect(center, shrink=0.0):
            cx, cy = to_screen(center)
            size = tile_px * (1.0 - shrink)
            return pygame.Rect(round(cx - size / 2), round(cy - size / 2), round(size), round(size))

        for spot in world.spots.values():
            if spot.visible:
                pygame.draw.rect(renderer.screen, to_rgb255(LIGHT_BLUE), tile_rect(spot.position, 0.6))

        for placed in world.machines.values():
            rect = tile_rect(placed.position, 0.1)
            pygame.draw.rect(renderer.screen, to_rgb255(LIGHT_BLUE), rect)
            pygame.draw.rect(renderer.screen, to_rgb255(DARK_BLUE), rect, 2)
            renderer.text(
                placed.machine.name(), 80.0 / camera.scale, DARK_BLUE, center=rect.center
            )

        for entity in sorted(world.coins.values(), key=lambda item: item.depth):
            scale = entity.scale
            radius = _COIN_RADIUS / camera.scale * scale
            if radius < 1:
                continue
            center = to_screen(entity.position)
            position = (round(center[0]), round(center[1]))
            pygame.draw.circle(renderer.screen, to_rgb255(ORANGE), position, round(radius))
            size = coin_font_size(entity.value) / camera.scale * scale
            if size >= 1:
                renderer.text(str(entity.value), size, DARK_BLUE, center=position)

        ghost = self.hud.ghost
        if ghost is not None:
            rect = tile_rect(ghost.position, 0.1)
            pygame.draw.rect(renderer.screen, to_rgb255(BLUE), rect, 3)
            label = "Delete" if ghost.is_delete else ghost.machine.name()
            renderer.text(label, 80.0 / camera.scale, BLUE, center=rect.center)

    def _draw_hud(self, renderer):
        pygame = renderer.pg
        toolbar = self.hud.toolbar

        pygame.draw.circle(renderer.screen, to_rgb255(ORANGE), (32, 32), 24)
        renderer.text("1", 40, DARK_BLUE, center=(32, 32))
        renderer.text(toolbar.money_text, 48, DARK_BLUE, topleft=(72, 12))

        rects = _toolbar_rects(self.window_size, len(toolbar.buttons))
        if not rects:
            return
        left, top = rects[0][0], rects[0][1]
        panel = pygame.Rect(
            round(left - _PANEL_MARGIN),
            round(top - _PANEL_MARGIN),
            round(len(rects) * _BUTTON_WIDTH + 2 * _PANEL_MARGIN),
            round(_BUTTON_HEIGHT + _PANEL_MARGIN + _PANEL_BOTTOM),
        )
        pygame.draw.rect(renderer.screen, to_rgb255(LIGHT_BLUE), panel, border_radius=_PANEL_MARGIN)

        for button, (x, y, w, _h) in zip(toolbar.buttons, rects):
            y -= button.offset_target
            center_x = x + w / 2.0
            renderer.text(button.label, 20, LIGHT_BROWN, center=(center_x, y + 14))
            icon = pygame.Rect(
                round(center_x - _ICON_SIZE / 2), round(y + 28), _ICON_SIZE, _ICON_SIZE
            )
            if button.is_delete:
                colour = BLUE
            elif button.icon == LOCKED_ICON:
                colour = LIGHT_BROWN
            else:
                colour = ORANGE
            pygame.draw.rect(renderer.screen, to_rgb255(colour), icon, border_radius=8)
            if button.selected:
                pygame.draw.rect(renderer.screen, to_rgb255(DARK_BLUE), icon, 2, border_radius=8)
            renderer.text(button.cost_text, 28, DARK_BLUE, center=(center_x, y + 28 + _ICON_SIZE + 16))


@dataclass
class _Renderer:
    pg: object
    screen: object
    _fonts: dict = field(default_factory=dict)

    def font(self, size):
        size = max(int(round(size)), 1)
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = self.pg.font.Font(None, size)
        return font

    def text(self, text, size, color, center=None, topleft=None):
        surface = self.font(size).render(text, True, to_rgb255(color))
        rect = surface.get_rect()
        if center is not None:
            rect.center = (round(center[0]), round(center[1]))
        elif topleft is not None:
            rect.topleft = (round(topleft[0]), round(topleft[1]))
        self.screen.blit(surface, rect)


def main(argv=None):
    """Start the game in a desktop window."""
    parser = argparse.ArgumentParser(prog="oneclicker", description=WINDOW_TITLE)
    parser.add_argument("--width", type=int, default=DEFAULT_WINDOW_SIZE[0])
    parser.add_argument("--height", type=int, default=DEFAULT_WINDOW_SIZE[1])
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("window size must be positive")

    game = Game(rng=random.Random(args.seed), window_size=(args.width, args.height))
    game.run()
    return 0