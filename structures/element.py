from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, FrozenSet, Dict


# ---------------------------------------------------------------------------
# Highlight flags — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class Flag(Enum):
    COMPARING   = "comparing"    # yellow — the pair (or slot) being compared RIGHT NOW
    SWAPPING    = "swapping"     # red — the two slots exchanging values
    SHIFTING    = "shifting"     # orange — value copied one slot over (insertion / array ops)
    ACTIVE      = "active"       # blue — pointer position / node being visited
    KEY         = "key"          # purple — insertion-sort key, value being placed
    MINIMUM     = "minimum"      # cyan — selection-sort running minimum
    MERGING     = "merging"      # teal — slot just written by the merge step
    DIVIDING    = "dividing"     # indigo — range being split by merge sort
    INSERTING   = "inserting"    # green outline — freshly created slot / node
    REMOVING    = "removing"     # red outline — about to disappear
    HIGHLIGHTED = "highlighted"  # generic emphasis (peek, search hit)
    EXTRACTED   = "extracted"    # heap root just moved behind the boundary
    SORTED      = "sorted"       # green — final position, persists across steps


# only these survive a step boundary; everything else is cleared by the projector
TERMINAL_FLAGS: FrozenSet[Flag] = frozenset({Flag.SORTED})


# ---------------------------------------------------------------------------
# Element
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Element:
    """
    One slot of the visualised structure: array cell, stack / queue entry,
    linked-list node or heap slot.

    Attributes:
        value : The payload shown on screen (None for a freshly opened gap).
        id    : Stable identity so the renderer can animate moves.
        flags : Small set of highlight Flags; their combination picks the style.
    """

    value: Any                 = None
    id:    int                 = 0
    flags: FrozenSet[Flag]     = field(default_factory=frozenset)

    # ------------------------------------------------------------------
    # Flag helpers (every helper returns a NEW element)
    # ------------------------------------------------------------------
    def flagged(self, *flags: Flag) -> "Element":
        return replace(self, flags=self.flags | frozenset(flags))

    def without_transient(self) -> "Element":
        kept = self.flags & TERMINAL_FLAGS
        if kept == self.flags:
            return self
        return replace(self, flags=kept)

    def with_value(self, value: Any) -> "Element":
        return replace(self, value=value)

    @property
    def is_sorted(self) -> bool:
        return Flag.SORTED in self.flags

    def has(self, flag: Flag) -> bool:
        return flag in self.flags

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":    self.id,
            "value": self.value,
            "flags": sorted(f.value for f in self.flags),
        }
