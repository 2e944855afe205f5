"""Timers and plain data attached to game objects."""

from dataclasses import dataclass, field
from enum import Enum, auto

COIN_SPAWN_TIME = 0.2
COIN_DESPAWN_TIME = 0.1


class TimerMode(Enum):
    ONCE = auto()
    REPEATING = auto()


@dataclass
class Timer:
    """A countdown over `duration` seconds, either one-shot or repeating."""

    duration: float
    mode: TimerMode = TimerMode.ONCE
    elapsed: float = 0.0
    paused: bool = False
    finished: bool = False
    times_finished_this_tick: int = 0

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError("timer duration must not be negative")

    @property
    def just_finished(self):
        return self.times_finished_this_tick > 0

    def tick(self, delta):
        """Advance the timer by `delta` seconds."""
        if delta < 0:
            raise ValueError("cannot tick a timer backwards")
        if self.paused:
            self.times_finished_this_tick = 0
            if self.mode is TimerMode.REPEATING:
                self.finished = False
            return self
        if self.mode is not TimerMode.REPEATING and self.finished:
            self.times_finished_this_tick = 0
            return self

        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if not self.finished:
            self.times_finished_this_tick = 0
        elif self.mode is TimerMode.REPEATING:
            if self.duration > 0:
                self.times_finished_this_tick = int(self.elapsed // self.duration)
                self.elapsed %= self.duration
            else:
                self.times_finished_this_tick = 1
                self.elapsed = 0.0
        else:
            self.times_finished_this_tick = 1
            self.elapsed = self.duration
        return self

    def pause(self):
        self.paused = True

    def unpause(self):
        self.paused = False

    def set_duration(self, duration):
        if duration < 0:
            raise ValueError("timer duration must not be negative")
        self.duration = duration


@dataclass
class Balance:
    coins: int = 0


@dataclass
class Particle:
    velocity: tuple
    damping: float


def _paused_despawn_timer():
    timer = Timer(COIN_DESPAWN_TIME)
    timer.pause()
    return timer


@dataclass
class Coin:
    """A coin worth `value` that pops in, can be picked up, then shrinks away."""

    value: int
    spawn_timer: Timer = field(default_factory=lambda: Timer(COIN_SPAWN_TIME))
    despawn_timer: Timer = field(default_factory=_paused_despawn_timer)
    has_money: bool = True
    alive: bool = True

    def pickable(self):
        return self.alive and self.spawn_timer.finished and self.despawn_timer.paused


@dataclass
class NextCoinDepth:
    """Hands out slowly increasing draw depths so newer coins render on top."""

    depth: float = 0.1
    step: float = 0.00000001

    def advance(self):
        """Return the depth to use now and move on to the next one."""
        current = self.depth
        self.depth += self.step
        if self.depth >= 0.2:
            self.depth = 0.1
        return current


@dataclass(frozen=True)
class CoinPickup:
    coin: object
    target: tuple
    add_money: bool


@dataclass
class DelayedDespawn:
    timer: Timer
    recursive: bool = False

    @classmethod
    def with_children(cls, delay):
        return cls(timer=Timer(delay, TimerMode.ONCE), recursive=True)