"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete run non-interactively (every VisualState the projector
produces), then computes the metrics the UI needs for the Analytics panel
and Comparison Mode.

Usage:
    rec = Recorder()
    rec.start("heap_sort", values=[64, 34, 25, 12, 22, 11, 90])
    rec.run_to_completion()          # exhausts the driver
    metrics = rec.get_metrics()      # the analytics card
    rec.states[k]                    # the snapshot after k operations

The recorded states are the reference run: a live, paused run that has
applied k operations must show exactly `states[k]`.

Comparison Mode:
    The UI holds two Recorders (one per algorithm), runs both to
    completion on the SAME input, then calls compare(rec1, rec2).
"""

import time
import sys
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generator, List, Optional

from algorithms import AlgoInfo, get_algorithm
from algorithms.step import Operation
from engine.projector import finalize, project
from structures.errors import ValidationError
from structures.state import VisualState


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:     str   = ""
    algo_label:   str   = ""
    input_size:   int   = 0
    total_ops:    int   = 0          # number of operations applied
    comparisons:  int   = 0
    swaps:        int   = 0
    shifts:       int   = 0
    writes:       int   = 0
    moves:        int   = 0          # Hanoi disk moves
    calls:        int   = 0          # frames pushed
    max_depth:    int   = 0
    result:       Any   = None       # the driver's return value
    wall_time_ms: float = 0.0        # wall-clock time to run to completion
    memory_bytes: int   = 0          # approx size of the recorded states

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algorithm compared less
    winner_swaps:       str = ""
    winner_ops:         str = ""   # fewer operations overall

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left":               self.left.to_dict(),
            "right":              self.right.to_dict(),
            "winner_comparisons": self.winner_comparisons,
            "winner_swaps":       self.winner_swaps,
            "winner_ops":         self.winner_ops,
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        ops     : Every Operation the driver emitted, in order.
        states  : states[0] is the seed, states[k] the snapshot after k ops.
        final   : The finalized snapshot (all elements terminal).
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.ops:     List[Operation]       = []
        self.states:  List[VisualState]     = []
        self.final:   Optional[VisualState] = None
        self.metrics: Optional[RunMetrics]  = None

        self._algo_info: Optional[AlgoInfo] = None
        self._params:    Dict[str, Any]     = {}
        self._driver:    Optional[Generator[Operation, None, Any]] = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, **params: Any) -> None:
        """Validate the input and initialise the driver for this run."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValidationError(f"Unknown algorithm: {algo_key}")

        resolved = info.resolve(params)
        self._driver    = info.fn(**resolved)
        self._algo_info = info
        self._params    = resolved
        self.ops        = []
        self.states     = [info.seed(resolved)]
        self.final      = None
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the driver, record every state, compute metrics."""
        if self._driver is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        result = None
        state = self.states[-1]
        while True:
            try:
                op = next(self._driver)
            except StopIteration as stop:
                result = stop.value
                break
            state = project(state, op)
            self.ops.append(op)
            self.states.append(state)
        wall_ms = (time.monotonic() - started) * 1000

        self._driver = None
        self.final = finalize(state)
        self.metrics = self._compute_metrics(result, wall_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    def state_after(self, count: int) -> VisualState:
        """Reference snapshot after `count` applied operations."""
        return self.states[count]

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   dict(self._params),
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "states":   [s.to_dict() for s in self.states],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, result: Any, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        counters = self.states[-1].counters

        # approximate memory: sizeof the state buffer
        mem = sys.getsizeof(self.states)
        for s in self.states:
            mem += sys.getsizeof(s) + sys.getsizeof(s.elements)

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            input_size=len(self.states[0].elements),
            total_ops=len(self.ops),
            comparisons=counters.comparisons,
            swaps=counters.swaps,
            shifts=counters.shifts,
            writes=counters.writes,
            moves=counters.moves,
            calls=counters.calls,
            max_depth=counters.max_depth,
            result=result,
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps=winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_ops=winner(l.total_ops, r.total_ops, l.algo_label, r.algo_label),
    )
