"""
step.py — Step Catalogs & the Operation Vocabulary
===================================================
Every algorithm is a generator that yields Operation objects.

A StepDescriptor is one entry of the fixed, ordered catalog an algorithm
ships next to its code text:

    • which source lines are executing (1-based, into the CODE string)
    • a plain-English description of the phase

An Operation is one atomic mutation request the projector knows how to
apply:

    compare · swap · shift · write · insert · remove · set_flag
    push_frame · update_frame · pop_frame · mark_terminal · move_disk
    enter_step (moves the code pointer, no structural change)

Design decisions:
  - Operation is a frozen dataclass.  The driver is the only producer,
    the projector is the only consumer, nobody mutates one in flight.
  - `step` tags the op with the catalog index it belongs to, so the code
    pointer always moves together with the structural change it explains.
  - `marks` carries extra (index, Flag) highlights that only make sense
    for this one op (e.g. the running minimum during a selection compare).
  - `overlay` is a free-form dict so different algorithms can push
    whatever extra context they want (merge ranges, the insertion key, …).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from structures.element import Flag


# ---------------------------------------------------------------------------
# Step catalog
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StepDescriptor:
    index:       int
    code_lines:  Tuple[int, ...]
    description: str


def catalog(entries: Sequence[Tuple[Union[int, Sequence[int]], str]]) -> Tuple[StepDescriptor, ...]:
    """
    Build an indexed catalog from (lines, description) pairs.

        STEPS = catalog([
            ((2,),   "Get the length of the array"),
            ((4, 5), "Start outer loop for number of passes"),
        ])
    """
    out: List[StepDescriptor] = []
    for idx, (lines, description) in enumerate(entries):
        if isinstance(lines, int):
            lines = (lines,)
        out.append(StepDescriptor(index=idx, code_lines=tuple(lines), description=description))
    return tuple(out)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------
class OpKind(Enum):
    STEP          = "step"
    COMPARE       = "compare"
    SWAP          = "swap"
    SHIFT         = "shift"
    WRITE         = "write"
    INSERT        = "insert"
    REMOVE        = "remove"
    SET_FLAG      = "set_flag"
    MARK_TERMINAL = "mark_terminal"
    PUSH_FRAME    = "push_frame"
    UPDATE_FRAME  = "update_frame"
    POP_FRAME     = "pop_frame"
    MOVE_DISK     = "move_disk"


Marks = Tuple[Tuple[int, Flag], ...]


@dataclass(frozen=True)
class Operation:
    """
    Attributes:
        kind          : Which mutation this is.
        indices       : Element indices (or peg indices for MOVE_DISK,
                        a half-open [start, stop) range for MARK_TERMINAL).
        value         : Payload for WRITE / INSERT, the compared value(s) for a COMPARE.
        flag          : Flag for SET_FLAG, style override for WRITE.
        frame_id      : Target frame for the frame operations.
        function_name : Name of the call being pushed.
        parameters    : Arguments of the call being pushed.
        patch         : Field updates for UPDATE_FRAME.
        step          : Catalog index this op belongs to (None = unchanged).
        explanation   : Human-readable "why" text.
        marks         : Extra (index, Flag) highlights for this op only.
        overlay       : Extra context merged into the snapshot overlay.
    """

    kind:          OpKind
    indices:       Tuple[int, ...]        = ()
    value:         Any                    = None
    flag:          Optional[Flag]         = None
    frame_id:      Optional[int]          = None
    function_name: str                    = ""
    parameters:    Tuple[Any, ...]        = ()
    patch:         Dict[str, Any]         = field(default_factory=dict)
    step:          Optional[int]          = None
    explanation:   str                    = ""
    marks:         Marks                  = ()
    overlay:       Dict[str, Any]         = field(default_factory=dict)


def highlight(indices: Iterable[int], flag: Flag = Flag.ACTIVE) -> Marks:
    """Shorthand for building `marks`: highlight((0, 3)) → ((0, ACTIVE), (3, ACTIVE))."""
    return tuple((i, flag) for i in indices)


# ---------------------------------------------------------------------------
# Constructors — so drivers read like the algorithm, not like kwargs soup
# ---------------------------------------------------------------------------
def enter_step(step: int, explanation: str = "", marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.STEP, step=step, explanation=explanation, marks=marks, overlay=overlay)


def compare(*indices: int, value: Any = None, step: Optional[int] = None,
            explanation: str = "", marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.COMPARE, indices=tuple(indices), value=value, step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def swap(i: int, j: int, step: Optional[int] = None, explanation: str = "",
         marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.SWAP, indices=(i, j), step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def shift(source: int, target: int, step: Optional[int] = None, explanation: str = "",
          marks: Marks = (), **overlay: Any) -> Operation:
    """Copy the value in slot `source` into slot `target`."""
    return Operation(OpKind.SHIFT, indices=(source, target), step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def write(i: int, value: Any, flag: Flag = Flag.ACTIVE, step: Optional[int] = None,
          explanation: str = "", marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.WRITE, indices=(i,), value=value, flag=flag, step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def insert(i: int, value: Any, step: Optional[int] = None, explanation: str = "",
           marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.INSERT, indices=(i,), value=value, step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def remove(i: int, step: Optional[int] = None, explanation: str = "",
           marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.REMOVE, indices=(i,), step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def set_flag(indices: Iterable[int], flag: Flag, step: Optional[int] = None,
             explanation: str = "", marks: Marks = (), **overlay: Any) -> Operation:
    return Operation(OpKind.SET_FLAG, indices=tuple(indices), flag=flag, step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def mark_terminal(start: int, stop: int, step: Optional[int] = None,
                  explanation: str = "", marks: Marks = (), **overlay: Any) -> Operation:
    """Mark the half-open range [start, stop) as sorted."""
    return Operation(OpKind.MARK_TERMINAL, indices=(start, stop), step=step,
                     explanation=explanation, marks=marks, overlay=overlay)


def push_frame(frame_id: int, function_name: str, parameters: Sequence[Any],
               step: Optional[int] = None, explanation: str = "", **overlay: Any) -> Operation:
    return Operation(OpKind.PUSH_FRAME, frame_id=frame_id, function_name=function_name,
                     parameters=tuple(parameters), step=step,
                     explanation=explanation, overlay=overlay)


def update_frame(frame_id: int, step: Optional[int] = None, explanation: str = "",
                 **patch: Any) -> Operation:
    return Operation(OpKind.UPDATE_FRAME, frame_id=frame_id, patch=patch, step=step,
                     explanation=explanation)


def pop_frame(frame_id: int, step: Optional[int] = None, explanation: str = "",
              **overlay: Any) -> Operation:
    return Operation(OpKind.POP_FRAME, frame_id=frame_id, step=step,
                     explanation=explanation, overlay=overlay)


def move_disk(source: int, target: int, step: Optional[int] = None,
              explanation: str = "", **overlay: Any) -> Operation:
    return Operation(OpKind.MOVE_DISK, indices=(source, target), step=step,
                     explanation=explanation, overlay=overlay)
