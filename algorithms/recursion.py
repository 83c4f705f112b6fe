"""
recursion.py — Recursion Visualizers
=====================================
Every recursive procedure here is described as DATA, not executed as a
Python recursive function:

    is_base(args)     → does this call hit the base case?
    base_plan(args)   → actions the base case performs (Hanoi moves a disk)
    base_value(args)  → what the base case returns
    plan(args)        → the recursive case as a list of actions, in order:
                          Call(...)  – a child invocation
                          Move(...)  – a Tower-of-Hanoi disk move
                          Emit(...)  – a print() side effect
    combine(args, results) → return value from the children's results

A single iterative loop walks an explicit frame arena (a Python list used
as the call stack).  Every call is a push_frame, every return an
update_frame(is_returning) followed by a pop_frame, so deep inputs can
never hit the interpreter's recursion limit and every frame transition is
an interruptible step.

Families (the recursion "types" of the learning page):
  direct    factorial · sum_to · power
  tail      tail_factorial
  indirect  is_even ⇄ is_odd
  head      print_reverse
  tree      fibonacci · count_paths · hanoi
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional, Sequence, Tuple, Union

from algorithms.inputs import check_bound
from algorithms.step import (
    Operation, StepDescriptor, catalog, enter_step, move_disk, pop_frame, push_frame, update_frame,
)
from structures.state import PEG_NAMES


MAX_N           = 10
MAX_FIBONACCI_N = 8
MAX_GRID_SIDE   = 5
MAX_DISKS       = 6


# ---------------------------------------------------------------------------
# Plan actions
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Call:
    phase:     str
    procedure: str
    args:      Tuple[Any, ...]


@dataclass(frozen=True)
class Move:
    phase:  str
    disk:   int
    source: str
    target: str


@dataclass(frozen=True)
class Emit:
    phase: str
    value: Any


Action = Union[Call, Move, Emit]


def _nothing(*args: Any) -> Tuple[Action, ...]:
    return ()


def _first(args: Tuple[Any, ...], results: List[Any]) -> Any:
    return results[0]


def _total(args: Tuple[Any, ...], results: List[Any]) -> Any:
    return sum(results)


# ---------------------------------------------------------------------------
# Procedures & programs
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Procedure:
    """
    Attributes:
        name       : Function name shown on the frame ("is_odd", "hanoi").
        phases     : Ordered (phase, code_lines, description) triples; each
                     becomes one step of the program's catalog.
        is_base    : Base-case predicate over the call's arguments.
        base_value : Return value of the base case.
        plan       : Recursive-case body as a list of actions.
        combine    : Return value of the recursive case.
        base_plan  : Actions run by the base case before returning.
    """

    name:       str
    phases:     Tuple[Tuple[str, Tuple[int, ...], str], ...]
    is_base:    Callable[..., bool]
    base_value: Callable[..., Any]
    plan:       Callable[..., Sequence[Action]]
    combine:    Callable[[Tuple[Any, ...], List[Any]], Any]
    base_plan:  Callable[..., Sequence[Action]] = _nothing


@dataclass
class Program:
    """One selectable visualizer: code text plus the procedures it defines."""

    key:        str
    code:       str
    procedures: Tuple[Procedure, ...]
    steps:      Tuple[StepDescriptor, ...]      = field(init=False)
    _index:     Dict[Tuple[str, str], int]      = field(init=False, repr=False)

    def __post_init__(self):
        entries = []
        self._index = {}
        for proc in self.procedures:
            for phase, lines, description in proc.phases:
                self._index[(proc.name, phase)] = len(entries)
                entries.append((lines, description))
        self.steps = catalog(entries)

    def procedure(self, name: str) -> Procedure:
        for proc in self.procedures:
            if proc.name == name:
                return proc
        raise KeyError(name)

    def step(self, procedure: str, phase: str) -> int:
        return self._index[(procedure, phase)]


def _direct(name: str, base_text: str, recurse_text: str, return_text: str) -> Tuple:
    """Phase table shared by the single-call, one-line-body procedures."""
    return (
        ("call",        (1,),    f"Call {name}: push a new frame on the call stack"),
        ("base_check",  (2, 3),  "Check the base case"),
        ("base_return", (4,),    base_text),
        ("recurse",     (6, 7),  recurse_text),
        ("return",      (7,),    return_text),
    )


def _branching(name: str, base_text: str, left_text: str, right_text: str, return_text: str) -> Tuple:
    """Phase table for two sequential child calls (tree recursion)."""
    return (
        ("call",          (1,),    f"Call {name}: push a new frame on the call stack"),
        ("base_check",    (2, 3),  "Check the base case"),
        ("base_return",   (4,),    base_text),
        ("recurse_left",  (6, 7),  left_text),
        ("recurse_right", (8,),    right_text),
        ("return",        (9,),    return_text),
    )


FACTORIAL = Program(
    key="factorial",
    code="""\
def factorial(n):
    # Base case
    if n == 0:
        return 1

    # Recursive case: n * (n - 1)!
    return n * factorial(n - 1)""",
    procedures=(
        Procedure(
            name="factorial",
            phases=_direct("factorial", "Base case reached: 0! = 1",
                           "Recursive case: call factorial(n - 1)",
                           "Multiply n by the returned value and return"),
            is_base=lambda n: n == 0,
            base_value=lambda n: 1,
            plan=lambda n: (Call("recurse", "factorial", (n - 1,)),),
            combine=lambda args, results: args[0] * results[0],
        ),
    ),
)

SUM_TO = Program(
    key="sum_to",
    code="""\
def sum_to(n):
    # Base case
    if n <= 0:
        return 0

    # Recursive case: n + sum of the rest
    return n + sum_to(n - 1)""",
    procedures=(
        Procedure(
            name="sum_to",
            phases=_direct("sum_to", "Base case reached: the empty sum is 0",
                           "Recursive case: call sum_to(n - 1)",
                           "Add n to the returned value and return"),
            is_base=lambda n: n <= 0,
            base_value=lambda n: 0,
            plan=lambda n: (Call("recurse", "sum_to", (n - 1,)),),
            combine=lambda args, results: args[0] + results[0],
        ),
    ),
)

POWER = Program(
    key="power",
    code="""\
def power(base, exp):
    # Base case: anything to the power 0 is 1
    if exp == 0:
        return 1

    # Recursive case: one more factor of base
    return base * power(base, exp - 1)""",
    procedures=(
        Procedure(
            name="power",
            phases=_direct("power", "Base case reached: base ** 0 = 1",
                           "Recursive case: call power(base, exp - 1)",
                           "Multiply base by the returned value and return"),
            is_base=lambda base, exp: exp == 0,
            base_value=lambda base, exp: 1,
            plan=lambda base, exp: (Call("recurse", "power", (base, exp - 1)),),
            combine=lambda args, results: args[0] * results[0],
        ),
    ),
)

TAIL_FACTORIAL = Program(
    key="tail_factorial",
    code="""\
def tail_factorial(n, acc=1):
    # Base case: the accumulator holds the answer
    if n <= 1:
        return acc

    # Tail call: nothing is left to do after it returns
    return tail_factorial(n - 1, n * acc)""",
    procedures=(
        Procedure(
            name="tail_factorial",
            phases=_direct("tail_factorial", "Base case reached: return the accumulator",
                           "Tail call: pass n * acc down as the new accumulator",
                           "Hand the result straight back to the caller"),
            is_base=lambda n, acc: n <= 1,
            base_value=lambda n, acc: acc,
            plan=lambda n, acc: (Call("recurse", "tail_factorial", (n - 1, n * acc)),),
            combine=_first,
        ),
    ),
)

EVEN_ODD = Program(
    key="is_even",
    code="""\
def is_even(n):
    # Base case
    if n == 0:
        return True

    # Hand the rest over to is_odd
    return is_odd(n - 1)


def is_odd(n):
    # Base case
    if n == 0:
        return False

    # Hand the rest over to is_even
    return is_even(n - 1)""",
    procedures=(
        Procedure(
            name="is_even",
            phases=_direct("is_even", "Base case reached: 0 is even",
                           "Indirect call: ask is_odd(n - 1)",
                           "Return is_odd's answer unchanged"),
            is_base=lambda n: n == 0,
            base_value=lambda n: True,
            plan=lambda n: (Call("recurse", "is_odd", (n - 1,)),),
            combine=_first,
        ),
        Procedure(
            name="is_odd",
            phases=(
                ("call",        (10,),      "Call is_odd: push a new frame on the call stack"),
                ("base_check",  (11, 12),   "Check the base case"),
                ("base_return", (13,),      "Base case reached: 0 is not odd"),
                ("recurse",     (15, 16),   "Indirect call: ask is_even(n - 1)"),
                ("return",      (16,),      "Return is_even's answer unchanged"),
            ),
            is_base=lambda n: n == 0,
            base_value=lambda n: False,
            plan=lambda n: (Call("recurse", "is_even", (n - 1,)),),
            combine=_first,
        ),
    ),
)

PRINT_REVERSE = Program(
    key="print_reverse",
    code="""\
def print_reverse(n):
    # Base case: nothing to print
    if n <= 0:
        return

    # Recurse first
    print_reverse(n - 1)

    # Then do the work on the way back up
    print(n)""",
    procedures=(
        Procedure(
            name="print_reverse",
            phases=(
                ("call",        (1,),       "Call print_reverse: push a new frame on the call stack"),
                ("base_check",  (2, 3),     "Check the base case"),
                ("base_return", (4,),       "Base case reached: return without printing"),
                ("recurse",     (6, 7),     "Head recursion: make the recursive call first"),
                ("act",         (9, 10),    "Print n after the recursive call has returned"),
                ("return",      (10,),      "Function ends: return to the caller"),
            ),
            is_base=lambda n: n <= 0,
            base_value=lambda n: None,
            plan=lambda n: (Call("recurse", "print_reverse", (n - 1,)), Emit("act", n)),
            combine=lambda args, results: None,
        ),
    ),
)

FIBONACCI = Program(
    key="fibonacci",
    code="""\
def fibonacci(n):
    # Base cases: fib(0) = 0, fib(1) = 1
    if n <= 1:
        return n

    # Two recursive calls form a tree
    left = fibonacci(n - 1)
    right = fibonacci(n - 2)
    return left + right""",
    procedures=(
        Procedure(
            name="fibonacci",
            phases=_branching("fibonacci", "Base case reached: return n",
                              "First branch: call fibonacci(n - 1)",
                              "Second branch: call fibonacci(n - 2)",
                              "Add both branches and return"),
            is_base=lambda n: n <= 1,
            base_value=lambda n: n,
            plan=lambda n: (Call("recurse_left", "fibonacci", (n - 1,)),
                            Call("recurse_right", "fibonacci", (n - 2,))),
            combine=_total,
        ),
    ),
)

COUNT_PATHS = Program(
    key="count_paths",
    code="""\
def count_paths(rows, cols):
    # Base case: a single row or column has exactly one path
    if rows == 1 or cols == 1:
        return 1

    # Paths arriving from above plus paths arriving from the left
    down = count_paths(rows - 1, cols)
    right = count_paths(rows, cols - 1)
    return down + right""",
    procedures=(
        Procedure(
            name="count_paths",
            phases=_branching("count_paths", "Base case reached: exactly one path",
                              "First branch: call count_paths(rows - 1, cols)",
                              "Second branch: call count_paths(rows, cols - 1)",
                              "Add both path counts and return"),
            is_base=lambda rows, cols: rows == 1 or cols == 1,
            base_value=lambda rows, cols: 1,
            plan=lambda rows, cols: (Call("recurse_left", "count_paths", (rows - 1, cols)),
                                     Call("recurse_right", "count_paths", (rows, cols - 1))),
            combine=_total,
        ),
    ),
)

HANOI = Program(
    key="hanoi",
    code="""\
def hanoi(n, source, target, spare):
    # Base case: a single disk moves directly
    if n == 1:
        move(source, target)
        return 1

    # Move n - 1 disks out of the way
    moves = hanoi(n - 1, source, spare, target)

    # Move the largest disk
    move(source, target)

    # Move the n - 1 disks back on top of it
    moves += hanoi(n - 1, spare, target, source)
    return moves + 1""",
    procedures=(
        Procedure(
            name="hanoi",
            phases=(
                ("call",          (1,),       "Call hanoi: push a new frame on the call stack"),
                ("base_check",    (2, 3),     "Check the base case: a single disk"),
                ("base_return",   (4, 5),     "Base case: move the disk directly and return 1"),
                ("recurse_left",  (7, 8),     "Move the n - 1 smaller disks onto the spare peg"),
                ("act",           (10, 11),   "Move the largest disk to the target peg"),
                ("recurse_right", (13, 14),   "Move the n - 1 smaller disks onto the target peg"),
                ("return",        (15,),      "Return the number of moves made"),
            ),
            is_base=lambda n, source, target, spare: n == 1,
            base_plan=lambda n, source, target, spare: (Move("base_return", n, source, target),),
            base_value=lambda n, source, target, spare: 1,
            plan=lambda n, source, target, spare: (
                Call("recurse_left", "hanoi", (n - 1, source, spare, target)),
                Move("act", n, source, target),
                Call("recurse_right", "hanoi", (n - 1, spare, target, source)),
            ),
            combine=lambda args, results: sum(results) + 1,
        ),
    ),
)

PROGRAMS: Dict[str, Program] = {
    p.key: p for p in (FACTORIAL, SUM_TO, POWER, TAIL_FACTORIAL, EVEN_ODD,
                       PRINT_REVERSE, FIBONACCI, COUNT_PATHS, HANOI)
}


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def factorial(n: Any = 5) -> Generator[Operation, None, Any]:
    return run_program(FACTORIAL, "factorial", (check_bound(n, 0, MAX_N),))


def sum_to(n: Any = 5) -> Generator[Operation, None, Any]:
    return run_program(SUM_TO, "sum_to", (check_bound(n, 0, MAX_N),))


def power(base: Any = 2, exp: Any = 5) -> Generator[Operation, None, Any]:
    args = (check_bound(base, -MAX_N, MAX_N, "base"), check_bound(exp, 0, MAX_N, "exp"))
    return run_program(POWER, "power", args)


def tail_factorial(n: Any = 5) -> Generator[Operation, None, Any]:
    return run_program(TAIL_FACTORIAL, "tail_factorial", (check_bound(n, 0, MAX_N), 1))


def is_even(n: Any = 4) -> Generator[Operation, None, Any]:
    return run_program(EVEN_ODD, "is_even", (check_bound(n, 0, MAX_N),))


def print_reverse(n: Any = 4) -> Generator[Operation, None, Any]:
    return run_program(PRINT_REVERSE, "print_reverse", (check_bound(n, 0, MAX_N),))


def fibonacci(n: Any = 5) -> Generator[Operation, None, Any]:
    return run_program(FIBONACCI, "fibonacci", (check_bound(n, 0, MAX_FIBONACCI_N),))


def count_paths(rows: Any = 3, cols: Any = 3) -> Generator[Operation, None, Any]:
    args = (check_bound(rows, 1, MAX_GRID_SIDE, "rows"), check_bound(cols, 1, MAX_GRID_SIDE, "cols"))
    return run_program(COUNT_PATHS, "count_paths", args)


def hanoi(disks: Any = 3) -> Generator[Operation, None, Any]:
    n = check_bound(disks, 1, MAX_DISKS, "disks")
    return run_program(HANOI, "hanoi", (n, PEG_NAMES[0], PEG_NAMES[2], PEG_NAMES[1]))


# ---------------------------------------------------------------------------
# Interpreter
# ---------------------------------------------------------------------------
@dataclass
class _Activation:
    frame_id:  int
    procedure: Procedure
    args:      Tuple[Any, ...]
    plan:      Optional[Sequence[Action]] = None
    is_base:   bool                       = False
    cursor:    int                        = 0
    results:   List[Any]                  = field(default_factory=list)

    @property
    def call(self) -> str:
        return _call_text(self.procedure.name, self.args)


def _call_text(name: str, args: Sequence[Any]) -> str:
    rendered = ", ".join(repr(a) if isinstance(a, str) else str(a) for a in args)
    return f"{name}({rendered})"


def run_program(program: Program, entry: str, args: Tuple[Any, ...]) -> Generator[Operation, None, Any]:
    """
    Drive `entry(*args)` to completion one frame transition at a time.
    Returns the outermost call's return value.
    """
    root = _Activation(0, program.procedure(entry), args)
    stack: List[_Activation] = [root]
    next_id = 1
    output: List[Any] = []
    result: Any = None

    yield push_frame(root.frame_id, entry, args, step=program.step(entry, "call"),
                     explanation=f"Call {root.call}.")

    while stack:
        act = stack[-1]
        proc = act.procedure
        name = proc.name

        if act.plan is None:
            act.is_base = bool(proc.is_base(*act.args))
            act.plan = tuple(proc.base_plan(*act.args) if act.is_base else proc.plan(*act.args))
            yield enter_step(program.step(name, "base_check"),
                             f"{act.call}: base case? {'Yes' if act.is_base else 'No'}.")
            continue

        if act.cursor < len(act.plan):
            action = act.plan[act.cursor]
            act.cursor += 1

            if isinstance(action, Call):
                child = _Activation(next_id, program.procedure(action.procedure), action.args)
                next_id += 1
                yield update_frame(act.frame_id, step=program.step(name, action.phase),
                                   explanation=f"{act.call} calls {child.call}.",
                                   note=f"waiting for {child.call}")
                stack.append(child)
                yield push_frame(child.frame_id, child.procedure.name, child.args,
                                 step=program.step(child.procedure.name, "call"),
                                 explanation=f"Call {child.call} (depth {len(stack) - 1}).")
            elif isinstance(action, Move):
                yield move_disk(PEG_NAMES.index(action.source), PEG_NAMES.index(action.target),
                                step=program.step(name, action.phase),
                                explanation=f"Move disk {action.disk} from {action.source} to {action.target}.")
            else:
                output.append(action.value)
                yield enter_step(program.step(name, action.phase), f"print({action.value})",
                                 output=tuple(output))
            continue

        if act.is_base:
            value = proc.base_value(*act.args)
            phase = "base_return"
        else:
            value = proc.combine(act.args, act.results)
            phase = "return"
        returned = f"{act.call} returns {value}." if value is not None else f"{act.call} returns."
        yield update_frame(act.frame_id, step=program.step(name, phase), explanation=returned,
                           return_value=value, is_returning=True, note="")
        yield pop_frame(act.frame_id, step=program.step(name, phase),
                        explanation=f"Pop {act.call} off the call stack.")
        stack.pop()
        if stack:
            stack[-1].results.append(value)
        else:
            result = value

    return result
