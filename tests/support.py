"""Shared helpers for the test-suite."""

from typing import Any, List, Tuple

from algorithms.step import OpKind, Operation
from engine.projector import replay
from structures.state import VisualState


def drain(driver) -> Tuple[List[Operation], Any]:
    """Exhaust a driver generator; return its operations and its return value."""
    ops: List[Operation] = []
    while True:
        try:
            ops.append(next(driver))
        except StopIteration as stop:
            return ops, stop.value


def of_kind(ops: List[Operation], kind: OpKind) -> List[Operation]:
    return [op for op in ops if op.kind is kind]


def final_state(initial: VisualState, driver) -> Tuple[VisualState, Any]:
    ops, result = drain(driver)
    return replay(initial, ops), result
