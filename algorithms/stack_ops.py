"""
stack_ops.py — Stack (LIFO)
============================
The stack is drawn as a list of elements whose LAST entry is the top.
Push appends, pop removes the last element, peek only highlights it.
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import MAX_ELEMENTS, coerce_number, coerce_values
from algorithms.step import Operation, catalog, enter_step, highlight, insert, remove, set_flag
from structures.element import Flag
from structures.errors import ValidationError


PUSH_CODE = """\
def push(stack, value):
    # Add element to the top of stack
    stack.items[stack.top + 1] = value

    # Move top pointer forward
    stack.top += 1

    # Increment stack size
    stack.size += 1

    return stack"""

PUSH_STEPS = catalog([
    ((2, 3),    "Add the new element to the top of the stack"),
    ((5, 6),    "Move the top pointer to the new element"),
    ((8, 9),    "Increment the stack size counter"),
    ((11,),     "Return the modified stack"),
])

POP_CODE = """\
def pop(stack):
    # Check if stack is empty
    if stack.size == 0:
        raise IndexError("Stack underflow")

    # Get top element
    top_element = stack.items[stack.top]

    # Move top pointer back
    stack.top -= 1

    # Decrement stack size
    stack.size -= 1

    return top_element"""

POP_STEPS = catalog([
    ((2, 3, 4),     "Check if the stack is empty (underflow condition)"),
    ((6, 7),        "Get reference to the top element"),
    ((9, 10),       "Move the top pointer down one position"),
    ((12, 13),      "Decrement the stack size counter"),
    ((15,),         "Return the removed element"),
])

PEEK_CODE = """\
def peek(stack):
    # Check if stack is empty
    if stack.size == 0:
        return None

    # Return top element without removing
    return stack.items[stack.top]"""

PEEK_STEPS = catalog([
    ((2, 3, 4),     "Check if the stack is empty"),
    ((6, 7),        "Return the top element without removing it"),
])


def push(values: Sequence[Any] = (), value: Any = None) -> Generator[Operation, None, List[Any]]:
    stack = coerce_values(values)
    if len(stack) >= MAX_ELEMENTS:
        raise ValidationError(f"Stack is full! At most {MAX_ELEMENTS} elements can be visualised")
    return _push(stack, coerce_number(value, "value"))


def pop(values: Sequence[Any] = ()) -> Generator[Operation, None, Any]:
    stack = coerce_values(values)
    if not stack:
        raise ValidationError("Stack is empty! Cannot pop from empty stack")
    return _pop(stack)


def peek(values: Sequence[Any] = ()) -> Generator[Operation, None, Any]:
    stack = coerce_values(values)
    if not stack:
        raise ValidationError("Stack is empty! Nothing to peek")
    return _peek(stack)


def _push(stack: List[Any], value: Any) -> Generator[Operation, None, List[Any]]:
    stack.append(value)
    top = len(stack) - 1
    yield insert(top, value, step=0, explanation=f"Place {value} on top of the stack.")
    yield enter_step(1, f"top now points at index {top}.", marks=highlight((top,)), top=top)
    yield enter_step(2, f"The stack holds {len(stack)} element(s).", size=len(stack))
    yield enter_step(3, f"Successfully pushed {value} to the stack.")
    return list(stack)


def _pop(stack: List[Any]) -> Generator[Operation, None, Any]:
    top = len(stack) - 1
    yield enter_step(0, f"The stack holds {len(stack)} element(s), so it is not empty.",
                     size=len(stack), top=top)
    yield set_flag((top,), Flag.HIGHLIGHTED, step=1, explanation=f"top_element = {stack[top]}.")
    yield set_flag((top,), Flag.REMOVING, step=2,
                   explanation=f"top moves down to index {top - 1}.", top=top - 1)
    value = stack.pop()
    yield remove(top, step=3, explanation=f"The stack now holds {len(stack)} element(s).",
                 size=len(stack))
    yield enter_step(4, f"Successfully popped {value} from the stack.", popped=value)
    return value


def _peek(stack: List[Any]) -> Generator[Operation, None, Any]:
    top = len(stack) - 1
    yield enter_step(0, f"The stack holds {len(stack)} element(s), so it is not empty.")
    yield set_flag((top,), Flag.HIGHLIGHTED, step=1,
                   explanation=f"Top element is {stack[top]}.", peeked=stack[top])
    return stack[top]
