"""
state.py — Playback State
=========================
Immutable value describing where playback is:

    (current_step_index, total_steps, status, speed)

Invariant: total_steps == 0  ⇒  current_step_index == -1  (nothing loaded);
otherwise 0 ≤ current_step_index < total_steps.  Violations raise
ValueError at construction, so an invalid state can never be observed.
"""

from dataclasses import dataclass, replace
from enum import Enum

from config import DEFAULT_SPEED


class PlaybackStatus(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED  = "paused"


@dataclass(frozen=True)
class PlaybackState:
    current_step_index: int            = -1
    total_steps:        int            = 0
    status:             PlaybackStatus = PlaybackStatus.STOPPED
    speed:              float          = DEFAULT_SPEED

    def __post_init__(self):
        if self.total_steps < 0:
            raise ValueError("total_steps must be >= 0")
        if not isinstance(self.status, PlaybackStatus):
            raise ValueError(f"status must be a PlaybackStatus, got {self.status!r}")
        if self.speed <= 0.0:
            raise ValueError("speed must be > 0.0")
        if self.total_steps == 0:
            if self.current_step_index != -1:
                raise ValueError("current_step_index must be -1 when total_steps is 0")
        elif not 0 <= self.current_step_index < self.total_steps:
            raise ValueError("current_step_index out of range")

    @classmethod
    def initial(cls, speed: float = DEFAULT_SPEED) -> "PlaybackState":
        return cls(-1, 0, PlaybackStatus.STOPPED, speed)

    # ------------------------------------------------------------------
    # Transitions (each returns a new value)
    # ------------------------------------------------------------------
    def with_step_index(self, index: int) -> "PlaybackState":
        return replace(self, current_step_index=index)

    def with_status(self, status: PlaybackStatus) -> "PlaybackState":
        return replace(self, status=status)

    def with_speed(self, speed: float) -> "PlaybackState":
        return replace(self, speed=speed)

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------
    @property
    def has_algorithm(self) -> bool:
        return self.total_steps > 0

    @property
    def is_at_start(self) -> bool:
        return self.has_algorithm and self.current_step_index == 0

    @property
    def is_at_end(self) -> bool:
        return self.has_algorithm and self.current_step_index == self.total_steps - 1

    @property
    def can_step_forward(self) -> bool:
        return self.has_algorithm and not self.is_at_end

    @property
    def can_step_backward(self) -> bool:
        return self.has_algorithm and self.current_step_index > 0

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.status is PlaybackStatus.PAUSED

    @property
    def is_stopped(self) -> bool:
        return self.status is PlaybackStatus.STOPPED

    def to_dict(self) -> dict:
        return {
            "current_step": self.current_step_index,
            "total_steps":  self.total_steps,
            "status":       self.status.value,
            "speed":        self.speed,
        }

    def __str__(self) -> str:
        shown = self.current_step_index + 1 if self.has_algorithm else 0
        return f"PlaybackState[step={shown}/{self.total_steps}, status={self.status.value}, speed={self.speed}]"
