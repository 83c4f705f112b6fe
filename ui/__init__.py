"""
ui/
---
Presentation layer.

    from ui import render_state
    from ui import playback_controls, algorithm_selector, code_viewer, …
"""

from ui.canvas import render_state, CanvasConfig, fill_for

from ui.controls import (
    playback_controls,
    algorithm_selector,
    code_viewer,
    explanation_panel,
    analytics_panel,
    comparison_panel,
)

__all__ = [
    "render_state",
    "CanvasConfig",
    "fill_for",
    "playback_controls",
    "algorithm_selector",
    "code_viewer",
    "explanation_panel",
    "analytics_panel",
    "comparison_panel",
]
