"""
engine/
-------
Playback, projection & recording layer.

    from engine import PlaybackController, Recorder, compare, project
"""

from engine.token      import CancellationToken
from engine.clock      import StepClock
from engine.projector  import project, finalize, replay
from engine.controller import (
    PlaybackController, PlaybackState, SPEED_PRESETS, MIN_SPEED_MS, MAX_SPEED_MS, DEFAULT_SPEED_MS,
)
from engine.recorder   import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "CancellationToken",
    "StepClock",
    "project",
    "finalize",
    "replay",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "MIN_SPEED_MS",
    "MAX_SPEED_MS",
    "DEFAULT_SPEED_MS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
