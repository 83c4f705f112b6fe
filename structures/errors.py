"""
errors.py — Engine Error Taxonomy
==================================
Three kinds of trouble can happen while a visualizer runs:

  • ValidationError     – bad user input (index out of range, not a number,
                          popping an empty stack).  Raised BEFORE any
                          operation is emitted; the command is rejected and
                          the state is left untouched.
  • Cancelled           – not an error at all.  The step clock raises it when
                          the run it belongs to was paused or reset.  The
                          controller swallows it and freezes state.
  • InvariantViolation  – the driver asked for something impossible
                          (popping an empty call stack, an illegal disk move).
                          Fatal for the current run: abort and reset.
"""


class EngineError(Exception):
    """Base class for everything the engine raises on purpose."""


class ValidationError(EngineError, ValueError):
    """User input rejected before the run touched any state."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Cancelled(EngineError):
    """A wait (or write) belonging to a superseded / paused generation."""

    def __init__(self, generation: int):
        super().__init__(f"generation {generation} cancelled")
        self.generation = generation


class InvariantViolation(EngineError, RuntimeError):
    """Structural invariant broken by an operation — the run cannot go on."""
