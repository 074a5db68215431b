"""
playback/
---------
Replay layer over a finished AlgorithmResult.

    from playback import Stepper, PlaybackState, PlaybackStatus
"""

from playback.state     import PlaybackState, PlaybackStatus
from playback.listeners import Listeners, Subscription
from playback.stepper   import Stepper

__all__ = [
    "Stepper",
    "PlaybackState",
    "PlaybackStatus",
    "Listeners",
    "Subscription",
]
