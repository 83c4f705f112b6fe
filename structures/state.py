"""
state.py — Renderable Snapshot
===============================
A VisualState is a frozen-in-time picture of everything one visualizer
needs to draw a frame:

    • the structural elements (array slots, stack entries, list nodes, …)
    • the call stack (recursion visualizers only)
    • the three Hanoi pegs (Tower of Hanoi only)
    • which step of the code catalog is executing right now
    • running counters (comparisons, swaps, depth, …)
    • a free-form overlay for algorithm-specific extras

The projector is the only writer; it never mutates a snapshot, it builds a
new one.  Readers can therefore use identity (`is`) to detect change.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from structures.element import Element
from structures.frame import CallFrame


PEG_NAMES: Tuple[str, str, str] = ("A", "B", "C")


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Counters:
    comparisons: int = 0
    swaps:       int = 0
    shifts:      int = 0
    writes:      int = 0
    moves:       int = 0      # Hanoi disk moves
    calls:       int = 0      # frame pushes
    depth:       int = 0      # current call-stack depth
    max_depth:   int = 0

    def bump(self, **deltas: int) -> "Counters":
        return replace(self, **{k: getattr(self, k) + v for k, v in deltas.items()})

    def to_dict(self) -> Dict[str, int]:
        return dict(self.__dict__)


# ---------------------------------------------------------------------------
# VisualState
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VisualState:
    """
    Attributes:
        elements    : Structural elements in display order.
        frames      : Call stack, outermost call first (top of stack last).
        pegs        : Hanoi pegs, each a tuple of disk sizes bottom → top.
        step_index  : Index into the step catalog, or None before the run starts.
        explanation : Human-readable "what just happened" for the current op.
        counters    : Running tallies.
        overlay     : Algorithm-specific extras (merge ranges, key value, …).
        next_id     : Identity handed to the next freshly inserted element.
    """

    elements:    Tuple[Element, ...]          = ()
    frames:      Tuple[CallFrame, ...]        = ()
    pegs:        Tuple[Tuple[int, ...], ...]  = ()
    step_index:  Optional[int]                = None
    explanation: str                          = ""
    counters:    Counters                     = field(default_factory=Counters)
    overlay:     Mapping[str, Any]            = field(default_factory=dict)
    next_id:     int                          = 0

    # ------------------------------------------------------------------
    # Seeds
    # ------------------------------------------------------------------
    @classmethod
    def from_values(cls, values: Iterable[Any]) -> "VisualState":
        elements = tuple(Element(value=v, id=i) for i, v in enumerate(values))
        return cls(elements=elements, next_id=len(elements))

    @classmethod
    def with_pegs(cls, disks: int) -> "VisualState":
        """All `disks` disks stacked on peg A, largest at the bottom."""
        return cls(pegs=(tuple(range(disks, 0, -1)), (), ()))

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def values(self) -> Tuple[Any, ...]:
        return tuple(e.value for e in self.elements)

    @property
    def top_frame(self) -> Optional[CallFrame]:
        return self.frames[-1] if self.frames else None

    @property
    def sorted_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, e in enumerate(self.elements) if e.is_sorted)

    # ------------------------------------------------------------------
    # Serialisation (for the JSON API)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "elements":    [e.to_dict() for e in self.elements],
            "frames":      [f.to_dict() for f in self.frames],
            "pegs":        {name: list(peg) for name, peg in zip(PEG_NAMES, self.pegs)},
            "step_index":  self.step_index,
            "explanation": self.explanation,
            "counters":    self.counters.to_dict(),
            "overlay":     dict(self.overlay),
        }
