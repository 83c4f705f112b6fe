"""
projector.py — State Projector
===============================
    project(prior: VisualState, op: Operation) -> VisualState

Pure: `prior` is never touched, the result always carries fresh element
and frame tuples.  Order of work for every operation:

  1. clear transient flags on every element (SORTED survives)
  2. apply the structural change of the operation
  3. apply the op's extra highlight marks
  4. move the code pointer, replace the explanation, merge the overlay

A malformed operation (bad index, popping a frame that is not on top, an
illegal disk move, …) raises InvariantViolation and produces nothing.
"""

from dataclasses import replace
from typing import Any, Callable, Dict, List, Sequence, Tuple

from algorithms.step import OpKind, Operation
from structures.element import Element, Flag
from structures.errors import InvariantViolation
from structures.frame import CallFrame
from structures.state import Counters, VisualState


_Change = Tuple[List[Element], Tuple[CallFrame, ...], Tuple[Tuple[int, ...], ...], Counters, int]


def project(prior: VisualState, op: Operation) -> VisualState:
    elements = [e.without_transient() for e in prior.elements]
    frames   = prior.frames
    pegs     = prior.pegs
    counters = prior.counters
    next_id  = prior.next_id

    handler = _HANDLERS.get(op.kind)
    if handler is None:
        raise InvariantViolation(f"unknown operation kind {op.kind!r}")
    elements, frames, pegs, counters, next_id = handler(op, elements, frames, pegs, counters, next_id)

    for index, flag in op.marks:
        _check_index(elements, index, op)
        elements[index] = elements[index].flagged(flag)

    overlay: Dict[str, Any] = dict(prior.overlay)
    overlay.update(op.overlay)

    return VisualState(
        elements=tuple(elements),
        frames=tuple(frames),
        pegs=pegs,
        step_index=op.step if op.step is not None else prior.step_index,
        explanation=op.explanation or prior.explanation,
        counters=counters,
        overlay=overlay,
        next_id=next_id,
    )


def finalize(state: VisualState) -> VisualState:
    """Completion: every element terminal, no transient highlight left."""
    elements = tuple(e.without_transient().flagged(Flag.SORTED) for e in state.elements)
    return replace(state, elements=elements)


def replay(initial: VisualState, ops: Sequence[Operation]) -> VisualState:
    """Fold a sequence of operations over `initial`."""
    state = initial
    for op in ops:
        state = project(state, op)
    return state


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------
def _check_index(elements: Sequence[Element], index: int, op: Operation) -> None:
    if not 0 <= index < len(elements):
        raise InvariantViolation(
            f"{op.kind.value}: index {index} out of range for {len(elements)} element(s)")


def _check_arity(op: Operation, count: int) -> None:
    if len(op.indices) != count:
        raise InvariantViolation(f"{op.kind.value}: expected {count} index(es), got {len(op.indices)}")


# ---------------------------------------------------------------------------
# Element operations
# ---------------------------------------------------------------------------
def _step(op, elements, frames, pegs, counters, next_id):
    return elements, frames, pegs, counters, next_id


def _compare(op, elements, frames, pegs, counters, next_id):
    if not op.indices:
        raise InvariantViolation("compare: no indices")
    for i in op.indices:
        _check_index(elements, i, op)
        elements[i] = elements[i].flagged(Flag.COMPARING)
    return elements, frames, pegs, counters.bump(comparisons=1), next_id


def _swap(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 2)
    i, j = op.indices
    _check_index(elements, i, op)
    _check_index(elements, j, op)
    # identities travel with their values so the renderer can animate the exchange
    elements[i], elements[j] = elements[j].flagged(Flag.SWAPPING), elements[i].flagged(Flag.SWAPPING)
    return elements, frames, pegs, counters.bump(swaps=1), next_id


def _shift(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 2)
    source, target = op.indices
    _check_index(elements, source, op)
    _check_index(elements, target, op)
    elements[target] = elements[target].with_value(elements[source].value).flagged(Flag.SHIFTING)
    return elements, frames, pegs, counters.bump(shifts=1), next_id


def _write(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 1)
    i = op.indices[0]
    _check_index(elements, i, op)
    elements[i] = elements[i].with_value(op.value).flagged(op.flag or Flag.ACTIVE)
    return elements, frames, pegs, counters.bump(writes=1), next_id


def _insert(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 1)
    i = op.indices[0]
    if not 0 <= i <= len(elements):
        raise InvariantViolation(f"insert: index {i} out of range for {len(elements)} element(s)")
    elements.insert(i, Element(value=op.value, id=next_id).flagged(Flag.INSERTING))
    return elements, frames, pegs, counters.bump(writes=1), next_id + 1


def _remove(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 1)
    i = op.indices[0]
    _check_index(elements, i, op)
    del elements[i]
    return elements, frames, pegs, counters, next_id


def _set_flag(op, elements, frames, pegs, counters, next_id):
    if op.flag is None:
        raise InvariantViolation("set_flag: no flag given")
    for i in op.indices:
        _check_index(elements, i, op)
        elements[i] = elements[i].flagged(op.flag)
    return elements, frames, pegs, counters, next_id


def _mark_terminal(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 2)
    start, stop = op.indices
    if not 0 <= start <= stop <= len(elements):
        raise InvariantViolation(
            f"mark_terminal: range [{start}, {stop}) invalid for {len(elements)} element(s)")
    for i in range(start, stop):
        elements[i] = elements[i].flagged(Flag.SORTED)
    return elements, frames, pegs, counters, next_id


# ---------------------------------------------------------------------------
# Call-stack operations
# ---------------------------------------------------------------------------
def _push_frame(op, elements, frames, pegs, counters, next_id):
    if op.frame_id is None:
        raise InvariantViolation("push_frame: no frame id")
    if any(f.id == op.frame_id for f in frames):
        raise InvariantViolation(f"push_frame: frame {op.frame_id} is already on the stack")
    below = tuple(replace(f, is_active=False) if f.is_active else f for f in frames)
    frame = CallFrame(
        id=op.frame_id,
        function_name=op.function_name,
        parameters=op.parameters,
        depth=len(frames),
        is_active=True,
    )
    frames = below + (frame,)
    depth = len(frames)
    counters = replace(counters.bump(calls=1), depth=depth, max_depth=max(counters.max_depth, depth))
    return elements, frames, pegs, counters, next_id


def _update_frame(op, elements, frames, pegs, counters, next_id):
    for pos, frame in enumerate(frames):
        if frame.id == op.frame_id:
            try:
                patched = frame.patched(**op.patch)
            except KeyError as exc:
                raise InvariantViolation(f"update_frame: {exc.args[0]}") from exc
            return elements, frames[:pos] + (patched,) + frames[pos + 1:], pegs, counters, next_id
    raise InvariantViolation(f"update_frame: frame {op.frame_id} is not on the stack")


def _pop_frame(op, elements, frames, pegs, counters, next_id):
    if not frames:
        raise InvariantViolation("pop_frame: call stack is empty")
    top = frames[-1]
    if top.id != op.frame_id:
        raise InvariantViolation(f"pop_frame: frame {op.frame_id} is not on top (top is {top.id})")
    frames = frames[:-1]
    if frames:
        frames = frames[:-1] + (replace(frames[-1], is_active=True),)
    return elements, frames, pegs, replace(counters, depth=len(frames)), next_id


# ---------------------------------------------------------------------------
# Tower of Hanoi
# ---------------------------------------------------------------------------
def _move_disk(op, elements, frames, pegs, counters, next_id):
    _check_arity(op, 2)
    source, target = op.indices
    if len(pegs) != 3:
        raise InvariantViolation("move_disk: no pegs on this state")
    if source == target or not (0 <= source < 3 and 0 <= target < 3):
        raise InvariantViolation(f"move_disk: illegal peg pair {source} -> {target}")
    if not pegs[source]:
        raise InvariantViolation(f"move_disk: peg {source} is empty")
    disk = pegs[source][-1]
    if pegs[target] and pegs[target][-1] < disk:
        raise InvariantViolation(f"move_disk: disk {disk} cannot go on top of disk {pegs[target][-1]}")
    moved = list(pegs)
    moved[source] = pegs[source][:-1]
    moved[target] = pegs[target] + (disk,)
    return elements, frames, tuple(moved), counters.bump(moves=1), next_id


_HANDLERS: Dict[OpKind, Callable[..., _Change]] = {
    OpKind.STEP:          _step,
    OpKind.COMPARE:       _compare,
    OpKind.SWAP:          _swap,
    OpKind.SHIFT:         _shift,
    OpKind.WRITE:         _write,
    OpKind.INSERT:        _insert,
    OpKind.REMOVE:        _remove,
    OpKind.SET_FLAG:      _set_flag,
    OpKind.MARK_TERMINAL: _mark_terminal,
    OpKind.PUSH_FRAME:    _push_frame,
    OpKind.UPDATE_FRAME:  _update_frame,
    OpKind.POP_FRAME:     _pop_frame,
    OpKind.MOVE_DISK:     _move_disk,
}
