"""
structures/
-----------
Core data layer.  Public API:

    from structures import Element, Flag, CallFrame, VisualState, Counters
    from structures import ValidationError, Cancelled, InvariantViolation
"""

from structures.element import Element, Flag, TERMINAL_FLAGS
from structures.frame   import CallFrame
from structures.state   import VisualState, Counters, PEG_NAMES
from structures.errors  import EngineError, ValidationError, Cancelled, InvariantViolation

__all__ = [
    "Element",     "Flag",       "TERMINAL_FLAGS",
    "CallFrame",
    "VisualState", "Counters",   "PEG_NAMES",
    "EngineError", "ValidationError", "Cancelled", "InvariantViolation",
]
