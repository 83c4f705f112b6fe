"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – start/pause/resume/reset/step + speed
  • algorithm_selector  – dropdown grouped by kind + parameter inputs
  • code_viewer         – code text with the current step's lines lit up
  • explanation_panel   – "what just happened" for the current operation
  • analytics_panel     – live counters of the running visualizer
  • comparison_panel    – side-by-side metrics of two recorded sorts

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import Any, Dict, List, Optional, Sequence

from algorithms import AlgoInfo
from algorithms.step import StepDescriptor
from engine import SPEED_PRESETS, ComparisonResult
from structures.state import Counters


def _escape(text: Any) -> str:
    return str(text).replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;').replace('"', '&quot;')


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    state: str = "idle",
    current_step: Optional[int] = None,
    total_steps: int = 0,
    speed_ms: int = SPEED_PRESETS["medium"],
    structure: bool = False,
) -> str:
    running = state == "running"
    disabled = 'disabled' if running else ''

    structure_row = ''
    if structure:
        keep = '' if state == "complete" else 'disabled'
        structure_row = f"""
      <div class="button-row">
        <button id="btn-commit" class="btn-primary" title="Start the next operation from this result" {keep}>✓ Keep result</button>
        <button id="btn-clear" class="btn-secondary" title="Empty the structure" {disabled}>✕ Clear</button>
      </div>"""

    if running:
        main_button = '<button id="btn-pause" title="Pause">⏸ Pause</button>'
    elif state == "paused":
        main_button = '<button id="btn-resume" title="Resume">▶ Resume</button>'
    else:
        main_button = '<button id="btn-start" title="Start">▶ Start</button>'

    preset_options = []
    for name, ms in SPEED_PRESETS.items():
        sel = 'selected' if ms == speed_ms else ''
        preset_options.append(f'<option value="{name}" {sel}>{name.capitalize()} ({ms} ms)</option>')

    shown = "–" if current_step is None else current_step + 1
    badge = ' <span class="finished-badge">COMPLETE</span>' if state == "complete" else ''

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        {main_button}
        <button id="btn-step" title="Apply one step" {disabled}>⏭ Step</button>
        <button id="btn-reset" title="Reset to the input">⏮ Reset</button>
      </div>{structure_row}
      <div class="step-info">
        Step <span id="current-step">{shown}</span> / <span id="total-steps">{total_steps}</span>{badge}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector" {disabled}>
          {''.join(preset_options)}
        </select>
        <input type="range" id="speed-slider" min="0" max="2000" step="50" value="{speed_ms}" {disabled}>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "bubble_sort",
    params: Optional[Dict[str, Any]] = None,
) -> str:
    groups: Dict[str, List[str]] = {}
    selected: Optional[AlgoInfo] = None
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        if sel:
            selected = algo
        groups.setdefault(algo.kind, []).append(
            f'<option value="{algo.key}" data-kind="{algo.kind}" {sel}>{algo.label} — {algo.complexity_time}</option>'
        )

    optgroups = [
        f'<optgroup label="{kind.replace("_", " ").title()}">{"".join(options)}</optgroup>'
        for kind, options in groups.items()
    ]

    values = dict(selected.params) if selected else {}
    values.update(params or {})
    inputs = []
    for name, value in values.items():
        shown = ", ".join(str(v) for v in value) if isinstance(value, (list, tuple)) else value
        inputs.append(
            f'<label>{name}: <input type="text" class="param-input" data-param="{name}" '
            f'value="{_escape(shown)}"></label>'
        )

    description = f'<p class="hint">{_escape(selected.description)}</p>' if selected else ''

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Visualizer</h3>
      <select id="algo-selector" data-kind="{selected.kind if selected else ''}">
        {''.join(optgroups)}
      </select>
      {description}
      <div class="param-inputs">
        {''.join(inputs)}
      </div>
      <button id="btn-load" class="btn-primary">Load</button>
      <button id="btn-randomize" class="btn-secondary">🎲 Random Values</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Code Viewer
# ---------------------------------------------------------------------------
def code_viewer(
    code: str,
    steps: Sequence[StepDescriptor] = (),
    current_step: Optional[int] = None,
) -> str:
    """
    Render the code text with every line of the current step lit up.
    Code lines in a StepDescriptor are 1-based.
    """
    if not code:
        return """
        <div class="code-block">
          <div style="color: #7d8590; padding: 20px; text-align: center;">
            Select a visualizer to view its code
          </div>
        </div>
        """

    lit = set()
    caption = ""
    if current_step is not None and 0 <= current_step < len(steps):
        lit = set(steps[current_step].code_lines)
        caption = steps[current_step].description

    lines_html = []
    for number, line in enumerate(code.split("\n"), start=1):
        highlight = 'highlight' if number in lit else ''
        lines_html.append(
            f'<div class="code-line {highlight}" data-line="{number}">'
            f'<span class="line-no">{number}</span>{_escape(line) or "&nbsp;"}</div>'
        )

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    <div class="step-caption">{_escape(caption)}</div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "", messages: Sequence[str] = ()) -> str:
    if not explanation:
        explanation = "▶ Load a visualizer and press <strong>Start</strong> to see what happens at each step."
    else:
        explanation = _escape(explanation)

    notes = "".join(f'<div class="message">{_escape(m)}</div>' for m in messages)
    return f"""<div class="explanation-text">{explanation}</div>{notes}"""


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(counters: Optional[Counters] = None, label: str = "", applied: int = 0) -> str:
    if counters is None:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Load a visualizer to see live counters.</p>
        </div>
        """

    rows = [("Operations", applied)]
    rows += [(name.replace("_", " ").capitalize(), value)
             for name, value in counters.to_dict().items() if value]
    body = "".join(f"<tr><td>{name}:</td><td><strong>{value}</strong></td></tr>" for name, value in rows)

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {_escape(label)}</h3>
      <table>
        {body}
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison Mode</h3>
          <p class="placeholder">Run two sorts on the same input to compare.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ Comparison: {left.algo_label} vs {right.algo_label}</h3>
      <table class="comparison-table">
        <thead>
          <tr>
            <th>Metric</th>
            <th>{left.algo_label}</th>
            <th>{right.algo_label}</th>
            <th>Winner</th>
          </tr>
        </thead>
        <tbody>
          <tr>
            <td>Comparisons</td>
            <td>{left.comparisons}</td>
            <td>{right.comparisons}</td>
            <td>{winner_badge(comp.winner_comparisons)}</td>
          </tr>
          <tr>
            <td>Swaps</td>
            <td>{left.swaps}</td>
            <td>{right.swaps}</td>
            <td>{winner_badge(comp.winner_swaps)}</td>
          </tr>
          <tr>
            <td>Operations</td>
            <td>{left.total_ops}</td>
            <td>{right.total_ops}</td>
            <td>{winner_badge(comp.winner_ops)}</td>
          </tr>
          <tr>
            <td>Wall Time</td>
            <td>{left.wall_time_ms:.2f} ms</td>
            <td>{right.wall_time_ms:.2f} ms</td>
            <td>—</td>
          </tr>
        </tbody>
      </table>
    </div>
    """
