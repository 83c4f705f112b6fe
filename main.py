"""
main.py — DSA Visualizer Flask App
====================================
The web server that powers the visualizer.

Routes:
  GET  /                        – main UI
  GET  /api/algorithms          – registry listing
  POST /api/load                – install a run {algo_key, params}
  POST /api/randomize           – fresh random values {length}
  POST /api/control/<action>    – start / pause / resume / reset / step / commit / clear
  POST /api/config/speed        – {speed_ms} or {preset}
  GET  /api/state               – snapshot + playback + rendered panels (polling)
  POST /api/compare             – run two sorts on one input, side by side

State management:
  Every browser session owns one PlaybackController.  All controllers
  live on ONE background asyncio loop (EngineLoop); request handlers never
  touch a controller directly, they marshal the command onto that loop and
  wait for its answer.  Event callbacks (validation errors, failures,
  completion) are queued per session and drained by /api/state.
"""

import asyncio
import logging
import secrets
import threading
from collections import OrderedDict, deque
from typing import Any, Callable, Deque, Dict, Optional

from flask import Flask, render_template_string, request, jsonify, session

from algorithms import SORT, get_algorithm, list_algorithms
from engine import DEFAULT_SPEED_MS, PlaybackController, Recorder, compare
from structures.errors import ValidationError
from ui import (
    render_state,
    playback_controls,
    algorithm_selector,
    code_viewer,
    explanation_panel,
    analytics_panel,
    comparison_panel,
)

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.config.from_mapping(
    SECRET_KEY=secrets.token_hex(32),
    DEFAULT_SPEED_MS=DEFAULT_SPEED_MS,
    RANDOM_LENGTH=8,
    DEFAULT_ALGORITHM="bubble_sort",
    MAX_SESSIONS=256,
)
app.config.from_prefixed_env("DSA_VIZ")


# ---------------------------------------------------------------------------
# Engine loop (one event loop thread for every controller)
# ---------------------------------------------------------------------------
class EngineLoop:
    """Background thread running the asyncio loop all controllers share."""

    def __init__(self):
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._loop.run_forever, name="engine-loop", daemon=True,
                )
                self._thread.start()
                logger.info("engine loop started")
        return self._loop

    def call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run fn(*args) on the engine loop and return its result (or raise its error)."""
        async def invoke():
            return fn(*args, **kwargs)

        future = asyncio.run_coroutine_threadsafe(invoke(), self.loop)
        return future.result(timeout=5)


ENGINE = EngineLoop()


class VisualizerSession:
    """One controller plus the messages its callbacks produced."""

    def __init__(self, speed_ms: int):
        self.controller = PlaybackController(speed_ms=speed_ms)
        self.messages: Deque[str] = deque(maxlen=20)
        self.controller.on_validation_error = self.messages.append
        self.controller.on_failure = self.messages.append
        self.controller.on_complete = self._completed

    def _completed(self, result: Any) -> None:
        label = self.controller.algo.label if self.controller.algo else "Run"
        if result is None:
            self.messages.append(f"{label} complete")
        else:
            self.messages.append(f"{label} complete: result = {_format_result(result)}")

    def drain(self):
        items = list(self.messages)
        self.messages.clear()
        return items


# least recently used first; bounded by MAX_SESSIONS
SESSIONS: "OrderedDict[str, VisualizerSession]" = OrderedDict()
_sessions_lock = threading.Lock()


def _format_result(result: Any) -> str:
    if isinstance(result, list):
        return "[" + ", ".join(str(v) for v in result) + "]"
    return str(result)


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_session() -> VisualizerSession:
    """The caller's VisualizerSession, created (and loaded) on first use."""
    sid = session.get("sid")
    if sid is None:
        sid = secrets.token_hex(8)
        session["sid"] = sid

    with _sessions_lock:
        viz = SESSIONS.get(sid)
        if viz is not None:
            SESSIONS.move_to_end(sid)
            return viz

        viz = ENGINE.call(VisualizerSession, int(app.config["DEFAULT_SPEED_MS"]))
        ENGINE.call(viz.controller.load, app.config["DEFAULT_ALGORITHM"])
        SESSIONS[sid] = viz
        logger.info("new session %s", sid)

        while len(SESSIONS) > int(app.config["MAX_SESSIONS"]):
            old_sid, old = SESSIONS.popitem(last=False)
            ENGINE.call(old.controller.close)
            logger.info("evicted session %s", old_sid)
    return viz


def get_json() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def panels(viz: VisualizerSession) -> Dict[str, Any]:
    """Everything the page needs to redraw, as of now."""
    ctrl = viz.controller
    snapshot = ctrl.snapshot
    algo = ctrl.algo
    total = len(algo.steps) if algo else 0
    return {
        "svg":         render_state(snapshot, algo.kind if algo else SORT),
        "controls":    playback_controls(
            state=ctrl.state.value,
            current_step=ctrl.current_step_index,
            total_steps=total,
            speed_ms=ctrl.speed_ms,
            structure=bool(algo and algo.is_structure),
        ),
        "code":        code_viewer(algo.code if algo else "", algo.steps if algo else (),
                                   ctrl.current_step_index),
        "explanation": explanation_panel(snapshot.explanation),
        "analytics":   analytics_panel(snapshot.counters, algo.label if algo else "", ctrl.applied),
    }


def page_view(viz: VisualizerSession) -> Dict[str, Any]:
    """Panels plus the selector, for the first render of the page."""
    ctrl = viz.controller
    view = panels(viz)
    view["algo_selector"] = algorithm_selector(
        algorithms=list_algorithms(),
        selected_key=ctrl.algo.key if ctrl.algo else app.config["DEFAULT_ALGORITHM"],
        params=ctrl.params,
    )
    return view


def state_payload(viz: VisualizerSession) -> Dict[str, Any]:
    ctrl = viz.controller
    payload = {
        "algo_key": ctrl.algo.key if ctrl.algo else None,
        "params":   ctrl.params,
        "snapshot": ctrl.snapshot.to_dict(),
        "playback": ctrl.playback(),
        "result":   ctrl.result,
        "messages": viz.drain(),
    }
    payload.update(panels(viz))
    return payload


def run_command(viz: VisualizerSession, command: Callable[[], Any]) -> Dict[str, Any]:
    """Apply one controller command and snapshot the outcome in the same loop turn."""
    try:
        accepted = command()
    except ValidationError:
        # the message goes back in the 400 response, not through /api/state
        viz.drain()
        raise
    payload = state_payload(viz)
    payload["accepted"] = accepted is not False
    return payload


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    viz = get_session()
    view = ENGINE.call(page_view, viz)

    html = render_template_string(INDEX_TEMPLATE,
        svg=view["svg"],
        playback=view["controls"],
        algo_selector=view["algo_selector"],
        code=view["code"],
        explanation=view["explanation"],
        analytics=view["analytics"],
        comparison=comparison_panel(),
    )
    return html


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Input
# ---------------------------------------------------------------------------
@app.route("/api/load", methods=["POST"])
def api_load():
    data = get_json()
    algo_key = data.get("algo_key", app.config["DEFAULT_ALGORITHM"])
    params = data.get("params") or {}
    if not isinstance(params, dict):
        return jsonify({"error": "params must be an object"}), 400
    params.pop("algo_key", None)

    viz = get_session()
    try:
        payload = ENGINE.call(run_command, viz, lambda: viz.controller.load(algo_key, **params))
    except ValidationError as exc:
        return jsonify({"error": exc.message}), 400

    payload["algo_selector"] = algorithm_selector(
        algorithms=list_algorithms(), selected_key=algo_key, params=payload["params"],
    )
    return jsonify(payload)


@app.route("/api/randomize", methods=["POST"])
def api_randomize():
    length = get_json().get("length", app.config["RANDOM_LENGTH"])
    viz = get_session()
    try:
        payload = ENGINE.call(run_command, viz, lambda: viz.controller.randomize(length))
    except ValidationError as exc:
        return jsonify({"error": exc.message}), 400

    payload["algo_selector"] = algorithm_selector(
        algorithms=list_algorithms(), selected_key=payload["algo_key"], params=payload["params"],
    )
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
ACTIONS = ("start", "pause", "resume", "reset", "step", "commit", "clear")

# actions that replace the run's input, so the selector form is redrawn
INPUT_ACTIONS = ("commit", "clear")


@app.route("/api/control/<action>", methods=["POST"])
def api_control(action):
    if action not in ACTIONS:
        return jsonify({"error": f"Unknown action: {action}"}), 400

    viz = get_session()
    try:
        payload = ENGINE.call(run_command, viz, getattr(viz.controller, action))
    except ValidationError as exc:
        return jsonify({"error": exc.message}), 400
    if action in INPUT_ACTIONS:
        payload["algo_selector"] = algorithm_selector(
            algorithms=list_algorithms(), selected_key=payload["algo_key"], params=payload["params"],
        )
    return jsonify(payload)


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data = get_json()
    viz = get_session()
    if "preset" in data:
        command = lambda: viz.controller.set_speed_preset(data["preset"])
    else:
        command = lambda: viz.controller.set_speed(data.get("speed_ms"))
    try:
        payload = ENGINE.call(run_command, viz, command)
    except ValidationError as exc:
        return jsonify({"error": exc.message}), 400
    payload["speed_ms"] = payload["playback"]["speed_ms"]
    return jsonify(payload)


@app.route("/api/state")
def api_state():
    viz = get_session()
    return jsonify(ENGINE.call(state_payload, viz))


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = get_json()
    left_key = data.get("left", "bubble_sort")
    right_key = data.get("right", "heap_sort")

    for key in (left_key, right_key):
        info = get_algorithm(key)
        if info is None:
            return jsonify({"error": f"Unknown algorithm: {key}"}), 400
        if info.kind != SORT:
            return jsonify({"error": "Comparison mode only supports sorting algorithms"}), 400

    params = {}
    if "values" in data:
        params["values"] = data["values"]

    recorders = []
    try:
        for key in (left_key, right_key):
            rec = Recorder()
            rec.start(key, **params)
            rec.run_to_completion()
            recorders.append(rec)
    except ValidationError as exc:
        return jsonify({"error": exc.message}), 400

    comp = compare(*recorders)
    return jsonify({
        "comparison": comp.to_dict(),
        "html":       comparison_panel(comp),
    })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>DSA Visualizer</title>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-emerald: #10b981;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: 'DM Sans', -apple-system, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 340px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 24px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      min-height: 300px;
      max-height: 380px;
    }

    #code-container, #explanation-container {
      display: flex;
      flex-direction: column;
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      overflow: hidden;
    }

    h3 {
      font-size: 13px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      margin-bottom: 12px;
      color: var(--accent-cyan);
    }

    .code-block {
      background: var(--bg-darker);
      border-radius: 8px;
      padding: 12px;
      overflow-y: auto;
      flex: 1;
      font-family: 'JetBrains Mono', monospace;
      font-size: 13px;
      white-space: pre;
    }
    .code-line { padding: 2px 8px; border-radius: 4px; }
    .code-line.highlight {
      background: rgba(6, 182, 212, 0.15);
      border-left: 3px solid var(--accent-cyan);
    }
    .line-no { color: var(--text-secondary); display: inline-block; width: 28px; }
    .step-caption { margin-top: 8px; color: var(--text-secondary); font-size: 13px; }

    .explanation-text { color: var(--text-secondary); line-height: 1.8; font-size: 14px; }
    .message {
      margin-top: 10px;
      padding: 8px 12px;
      border-left: 3px solid var(--accent-rose);
      background: var(--bg-darker);
      font-size: 13px;
    }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }

    .button-row { display: flex; gap: 8px; margin-bottom: 12px; }

    button {
      background: linear-gradient(135deg, var(--accent-cyan), var(--accent-teal));
      color: #fff;
      border: none;
      padding: 9px 14px;
      border-radius: 8px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: linear-gradient(135deg, var(--accent-emerald), #059669); }
    .btn-secondary { background: var(--bg-darker); border: 1px solid var(--border); }

    select, input[type="text"], input[type="range"] {
      width: 100%;
      padding: 8px 10px;
      margin: 6px 0;
      background: var(--bg-darker);
      border: 1px solid var(--border);
      border-radius: 8px;
      color: var(--text-primary);
    }

    label { display: block; margin: 8px 0 2px; font-size: 12px; color: var(--text-secondary); }

    .step-info {
      font-size: 13px;
      margin: 10px 0;
      font-family: 'JetBrains Mono', monospace;
      padding: 8px 12px;
      background: var(--bg-darker);
      border-left: 3px solid var(--accent-cyan);
    }

    .finished-badge {
      background: var(--accent-emerald);
      padding: 2px 8px;
      border-radius: 6px;
      font-size: 11px;
    }

    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); }
    .hint, .placeholder { font-size: 12px; color: var(--text-secondary); margin: 6px 0; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="algo-selector-wrap">{{ algo_selector|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="code-container">
        <h3>Code</h3>
        <div id="code">{{ code|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>What just happened</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let polling = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function showError(message) {
      document.getElementById('explanation').insertAdjacentHTML(
        'beforeend', '<div class="message"></div>');
      const notes = document.querySelectorAll('#explanation .message');
      notes[notes.length - 1].textContent = message;
    }

    function apply(data) {
      if (data.error) { showError(data.error); return; }
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.code) document.getElementById('code').innerHTML = data.code;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      if (data.controls) {
        document.getElementById('playback').innerHTML = data.controls;
        bindPlayback();
      }
      if (data.algo_selector) {
        document.getElementById('algo-selector-wrap').innerHTML = data.algo_selector;
        bindSelector();
      }
      (data.messages || []).forEach(showError);
      const running = !!(data.playback && data.playback.is_running);
      if (running && !polling) polling = setInterval(refresh, 100);
      if (!running && polling) { clearInterval(polling); polling = null; }
    }

    async function refresh() {
      const res = await fetch('/api/state');
      apply(await res.json());
    }

    function readParams() {
      const params = {};
      document.querySelectorAll('.param-input').forEach(input => {
        const name = input.dataset.param;
        if (name === 'values') {
          params[name] = input.value.split(',').map(v => v.trim()).filter(v => v !== '');
        } else {
          params[name] = input.value;
        }
      });
      return params;
    }

    function bindSelector() {
      document.getElementById('algo-selector')?.addEventListener('change', async (e) => {
        // another operation on the same structure keeps the current values
        const kind = e.target.selectedOptions[0].dataset.kind;
        const data = {algo_key: e.target.value};
        if (kind === e.target.dataset.kind) {
          data.params = {values: readParams().values};
        }
        apply(await post('/api/load', data));
      });
      document.getElementById('btn-load')?.addEventListener('click', async () => {
        const key = document.getElementById('algo-selector').value;
        apply(await post('/api/load', {algo_key: key, params: readParams()}));
      });
      document.getElementById('btn-randomize')?.addEventListener('click', async () => {
        apply(await post('/api/randomize', {}));
      });
    }

    function bindPlayback() {
      ['start', 'pause', 'resume', 'reset', 'step', 'commit', 'clear'].forEach(action => {
        document.getElementById('btn-' + action)?.addEventListener('click', async () => {
          apply(await post('/api/control/' + action, {}));
        });
      });
      document.getElementById('speed-selector')?.addEventListener('change', async (e) => {
        apply(await post('/api/config/speed', {preset: e.target.value}));
      });
      document.getElementById('speed-slider')?.addEventListener('change', async (e) => {
        apply(await post('/api/config/speed', {speed_ms: +e.target.value}));
      });
    }

    bindSelector();
    bindPlayback();
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("=" * 60)
    print("  DSA Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=False, threaded=True, port=5000)
