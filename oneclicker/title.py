"""The title screen: a click starts the game and slides the hints away."""

from dataclasses import dataclass

from .components import DelayedDespawn
from .input import Interaction
from .palette import BLUE, DARK_BLUE, LIGHT_BLUE, LIGHT_BROWN
from .world import update_delayed_despawn

FADE_OUT_TIME = 0.3
VERSION = "0.1.3"
TITLE_TEXT = "One Clicker"
PROMPT_TEXT = "Click to start"
CREDITS_TEXT = "Made for Bevy Jam #2"
PROMPT_BOB = 20.0
PROMPT_PERIOD = 1.0

_CONTAINER = "container"
_CREDITS = "credits"


def version_text(version):
    return f"Version {version} (post-jam)"


def _cubic_out(t):
    return 1.0 - (1.0 - t) ** 3


def _quadratic_in_out(t):
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - (-2.0 * t + 2.0) ** 2 / 2.0


@dataclass(frozen=True)
class TitleText:
    text: str
    font_size: float
    color: tuple


class TitleScreen:
    """Texts shown before play starts, and their fade-out after a click."""

    def __init__(self, version=VERSION):
        self.title = TitleText(TITLE_TEXT, 64.0, DARK_BLUE)
        self.prompt = TitleText(PROMPT_TEXT, 48.0, BLUE)
        self.credits = TitleText(CREDITS_TEXT, 32.0, LIGHT_BROWN)
        self.version_label = TitleText(version_text(version), 32.0, LIGHT_BLUE)
        self.elements = [self.title, self.prompt, self.credits, self.version_label]
        self.elapsed = 0.0
        self._hints = {_CONTAINER, _CREDITS}
        self._fades = {}

    @property
    def fading(self):
        return bool(self._fades)

    @property
    def done(self):
        return not self.elements

    def handle_click(self, interaction):
        """Start the fade-out on a click; return True when gameplay should begin."""
        if interaction is not Interaction.CLICKED:
            return False
        for hint in self._hints:
            self._fades[hint] = DelayedDespawn.with_children(FADE_OUT_TIME)
        return True

    def update(self, delta):
        """Advance animations and remove faded hints; return True once nothing is left."""
        self.elapsed += delta
        for hint, _recursive in update_delayed_despawn(list(self._fades.items()), delta):
            self._fades.pop(hint, None)
            self._hints.discard(hint)
            if hint == _CONTAINER:
                self.elements.clear()
            elif self.credits in self.elements:
                self.elements.remove(self.credits)
        return self.done

    @property
    def slide(self):
        """Horizontal offset of the hints as a fraction of the screen width (0 to -1)."""
        fade = self._fades.get(_CONTAINER)
        if fade is None:
            return -1.0 if self.done else 0.0
        timer = fade.timer
        progress = 1.0 if timer.duration <= 0 else min(timer.elapsed / timer.duration, 1.0)
        return -_cubic_out(progress)

    @property
    def prompt_offset(self):
        """Vertical bob of the prompt, mirrored back and forth every period."""
        cycle, remainder = divmod(self.elapsed, PROMPT_PERIOD)
        t = remainder / PROMPT_PERIOD
        if int(cycle) % 2 == 1:
            t = 1.0 - t
        return -PROMPT_BOB + 2.0 * PROMPT_BOB * _quadratic_in_out(t)