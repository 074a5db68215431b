"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object a viewer talks to while replaying a run.
It holds a finished AlgorithmResult, a PlaybackState value, and exposes a
play / pause / stop / step / speed API.  Every transition replaces the
state value and notifies state listeners; moves also emit the new Step
to step listeners.

State machine:
    EMPTY    →  load()          →  STOPPED @ 0
    STOPPED  →  play()          →  PLAYING
    PAUSED   →  play()          →  PLAYING   (rewinds first when at the end)
    PLAYING  →  pause()         →  PAUSED
    PLAYING  →  (last step)     →  PAUSED @ last
    any      →  step_*()        →  PAUSED
    any      →  stop()/reset()  →  STOPPED @ 0
    any      →  dispose()       →  EMPTY

Automatic advance:
  A cancellable timer fires every BASE_STEP_INTERVAL / speed seconds.
  Each scheduled tick carries the generation number it was armed with;
  pause / stop / load / dispose bump the generation, so a tick that
  already left the timer queue finds itself stale and does nothing.

Thread safety:
  Callers should drive the Stepper from one thread.  The timer callback
  runs on its own thread, so every transition holds a re-entrant lock.

Listeners calling back in:
  A state listener may call any Stepper method, dispose() included.  The
  Step to emit is read before state listeners run, and it is dropped when
  a listener moved playback to another index or result.  A tick only
  re-arms the timer if no listener changed the generation meanwhile.
"""

import logging
import threading
from typing import Callable, Optional

from config import BASE_STEP_INTERVAL, MAX_SPEED
from algorithms import AlgorithmResult, AlgorithmStep
from playback.listeners import Listeners, Subscription
from playback.state import PlaybackState, PlaybackStatus

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], "threading.Timer"]


def _thread_timer(interval: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class Stepper:
    """
    Attributes:
        state        : Current PlaybackState (immutable value).
        result       : The loaded AlgorithmResult, or None.
        current_step : Step at the current index, or None.
    """

    def __init__(
        self,
        timer_factory: Optional[TimerFactory] = None,
        base_interval: float = BASE_STEP_INTERVAL,
    ):
        if base_interval <= 0:
            raise ValueError("base_interval must be > 0")
        self._result:          Optional[AlgorithmResult] = None
        self._state:           PlaybackState             = PlaybackState.initial()
        self._step_listeners:  Listeners[AlgorithmStep]  = Listeners("step")
        self._state_listeners: Listeners[PlaybackState]  = Listeners("state")
        self._timer_factory:   TimerFactory              = timer_factory or _thread_timer
        self._base_interval:   float                     = base_interval
        self._timer                                      = None
        self._generation:      int                       = 0
        self._lock                                       = threading.RLock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, result: AlgorithmResult) -> None:
        """Attach a finished run and show step 0 (status STOPPED)."""
        if result is None or result.step_count() == 0:
            raise ValueError("AlgorithmResult must be non-None with at least one step")
        with self._lock:
            self._halt()
            self._result = result
            self._state  = PlaybackState(0, result.step_count(), PlaybackStatus.STOPPED, self._state.speed)
            logger.debug("loaded %s result with %d steps", result.algorithm or "algorithm", result.step_count())
            self._publish(0)

    def dispose(self) -> None:
        """Stop everything, drop listeners, forget the result."""
        with self._lock:
            self._halt()
            self._step_listeners.clear()
            self._state_listeners.clear()
            self._result = None
            self._state  = PlaybackState.initial()

    # ------------------------------------------------------------------
    # Play / Pause / Stop
    # ------------------------------------------------------------------
    def play(self) -> None:
        with self._lock:
            if not self.has_algorithm() or self._state.is_playing:
                return
            if self._state.is_at_end:
                self._state = self._at(0, PlaybackStatus.STOPPED)
                if not self._publish(0):
                    return
            self._state = self._state.with_status(PlaybackStatus.PLAYING)
            generation  = self._generation
            self._notify_state()
            self._rearm_if_current(generation)

    def pause(self) -> None:
        with self._lock:
            if not self._state.is_playing:
                return
            self._halt()
            self._state = self._state.with_status(PlaybackStatus.PAUSED)
            self._notify_state()

    def toggle_play(self) -> None:
        with self._lock:
            if self._state.is_playing:
                self.pause()
            else:
                self.play()

    def stop(self) -> None:
        with self._lock:
            self._halt()
            if not self.has_algorithm():
                self._state = PlaybackState.initial(self._state.speed)
                self._notify_state()
                return
            self._state = self._at(0, PlaybackStatus.STOPPED)
            self._publish(0)

    def reset(self) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> None:
        with self._lock:
            if not self._state.can_step_forward:
                return
            if self._state.is_playing:
                self.pause()
                if not self._state.can_step_forward:
                    return
            index = min(self._state.current_step_index + 1, self._state.total_steps - 1)
            self._move_paused(index)

    def step_backward(self) -> None:
        with self._lock:
            if not self._state.can_step_backward:
                return
            if self._state.is_playing:
                self.pause()
                if not self._state.can_step_backward:
                    return
            index = max(self._state.current_step_index - 1, 0)
            self._move_paused(index)

    def goto_step(self, index: int) -> None:
        """Jump to an arbitrary step index (status becomes PAUSED)."""
        with self._lock:
            if not self.has_algorithm():
                raise ValueError("No algorithm loaded")
            if not 0 <= index < self._state.total_steps:
                raise ValueError(f"Step index {index} out of range 0..{self._state.total_steps - 1}")
            if self._state.is_playing:
                self.pause()
                if not 0 <= index < self._state.total_steps:
                    return
            self._move_paused(index)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, multiplier: float) -> None:
        if isinstance(multiplier, bool) or not isinstance(multiplier, (int, float)):
            raise ValueError(f"speed must be a number, got {multiplier!r}")
        if not 0.0 < multiplier <= MAX_SPEED:
            raise ValueError(f"speed must be in (0, {MAX_SPEED}]")
        with self._lock:
            self._state = self._state.with_speed(float(multiplier))
            if self._state.is_playing:
                # re-arm the pending tick at the new interval
                self._halt()
                self._arm()
            self._notify_state()

    @property
    def interval(self) -> float:
        """Seconds between automatic steps at the current speed."""
        return self._base_interval / self._state.speed

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_step_listener(self, handler: Callable[[AlgorithmStep], None]) -> Subscription:
        return self._step_listeners.add(handler)

    def add_state_listener(self, handler: Callable[[PlaybackState], None]) -> Subscription:
        return self._state_listeners.add(handler)

    def remove_step_listener(self, handler: Callable[[AlgorithmStep], None]) -> None:
        self._step_listeners.remove(handler)

    def remove_state_listener(self, handler: Callable[[PlaybackState], None]) -> None:
        self._state_listeners.remove(handler)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def result(self) -> Optional[AlgorithmResult]:
        return self._result

    @property
    def current_step(self) -> Optional[AlgorithmStep]:
        if self._result is None:
            return None
        idx = self._state.current_step_index
        if 0 <= idx < self._result.step_count():
            return self._result.steps[idx]
        return None

    def has_algorithm(self) -> bool:
        return self._result is not None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _tick(self, generation: int) -> None:
        """Timer callback: advance one step while PLAYING."""
        with self._lock:
            if generation != self._generation or not self._state.is_playing or self._result is None:
                return
            self._timer = None
            total = self._state.total_steps
            nxt   = self._state.current_step_index + 1
            if nxt >= total:
                self._halt()
                self._state = self._at(total - 1, PlaybackStatus.PAUSED)
                logger.debug("playback reached the last step")
                self._notify_state()
                return
            self._state = self._at(nxt, PlaybackStatus.PLAYING)
            if self._publish(nxt):
                self._rearm_if_current(generation)

    def _arm(self) -> None:
        generation  = self._generation
        self._timer = self._timer_factory(self.interval, lambda: self._tick(generation))
        self._timer.start()

    def _halt(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _at(self, index: int, status: PlaybackStatus) -> PlaybackState:
        return PlaybackState(index, self._state.total_steps, status, self._state.speed)

    def _rearm_if_current(self, generation: int) -> None:
        # a listener that paused, stopped, reloaded or re-timed playback
        # bumped the generation and owns the timer now
        if generation == self._generation and self._state.is_playing:
            self._arm()

    def _move_paused(self, index: int) -> None:
        self._state = self._at(index, PlaybackStatus.PAUSED)
        self._publish(index)

    def _publish(self, index: int) -> bool:
        """
        State listeners first, then the Step at `index`.  The Step is taken
        before any listener runs and is only sent if playback still shows
        that index of the same result afterwards.  Returns False when a
        state listener moved playback elsewhere.
        """
        result = self._result
        step   = result.steps[index]
        self._notify_state()
        if self._result is not result or self._state.current_step_index != index:
            return False
        self._step_listeners.notify(step)
        return True

    def _notify_state(self) -> None:
        self._state_listeners.notify(self._state)
