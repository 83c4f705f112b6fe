"""
array_ops.py — Array Operations
================================
Insert, append, delete and linear search on a fixed-capacity array.

Insertion opens a gap at the end, shifts every element after `index` one
slot right (from the back, so nothing is overwritten), then writes the new
value into the gap.  Deletion is the mirror image: shift left over the
removed slot, then drop the now-duplicated last slot.

Each public function validates its arguments up front and only then hands
back the operation generator, so a bad index never reaches the projector.
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import MAX_ELEMENTS, check_index, coerce_number, coerce_values
from algorithms.step import (
    Operation, catalog, compare, enter_step, highlight, insert as insert_op,
    remove, set_flag, shift, write,
)
from structures.element import Flag
from structures.errors import ValidationError


# ---------------------------------------------------------------------------
# Code text + catalogs
# ---------------------------------------------------------------------------
INSERT_CODE = """\
def insert(array, index, value):
    # Make room at the end
    array.append(None)

    # Shift elements right, starting from the back
    for i in range(len(array) - 1, index, -1):
        array[i] = array[i - 1]

    # Place the new value in the gap
    array[index] = value

    return array"""

INSERT_STEPS = catalog([
    ((2, 3),        "Grow the array by one slot at the end"),
    ((5, 6, 7),     "Shift elements one slot to the right, starting from the back"),
    ((9, 10),       "Write the new value into the gap"),
    ((12,),         "Return the modified array"),
])

DELETE_CODE = """\
def delete(array, index):
    # Remember the value being removed
    removed = array[index]

    # Shift elements left to close the gap
    for i in range(index, len(array) - 1):
        array[i] = array[i + 1]

    # Drop the duplicated last slot
    array.pop()

    return removed"""

DELETE_STEPS = catalog([
    ((2, 3),        "Remember the value being removed"),
    ((5, 6, 7),     "Shift elements one slot to the left to close the gap"),
    ((9, 10),       "Drop the duplicated last slot"),
    ((12,),         "Return the removed value"),
])

SEARCH_CODE = """\
def search(array, target):
    # Check each element from left to right
    for i in range(len(array)):
        if array[i] == target:
            # Found it
            return i

    # Target is not in the array
    return -1"""

SEARCH_STEPS = catalog([
    ((2, 3),        "Visit each element from left to right"),
    ((4,),          "Compare the element with the target"),
    ((5, 6),        "Target found: return its index"),
    ((8, 9),        "Reached the end without a match: return -1"),
])


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def insert(values: Sequence[Any] = (), index: Any = 0, value: Any = None) -> Generator[Operation, None, List[Any]]:
    arr = coerce_values(values)
    if len(arr) >= MAX_ELEMENTS:
        raise ValidationError(f"Array is full! At most {MAX_ELEMENTS} elements can be visualised")
    number = coerce_number(value, "value")
    idx = check_index(index, 0, len(arr))
    return _insert(arr, idx, number)


def append(values: Sequence[Any] = (), value: Any = None) -> Generator[Operation, None, List[Any]]:
    """Insert at the end: the general insert with zero shifts."""
    return insert(values, len(coerce_values(values)), value)


def delete(values: Sequence[Any] = (), index: Any = 0) -> Generator[Operation, None, Any]:
    arr = coerce_values(values)
    if not arr:
        raise ValidationError("Array is empty! Nothing to delete")
    idx = check_index(index, 0, len(arr) - 1)
    return _delete(arr, idx)


def search(values: Sequence[Any] = (), target: Any = None) -> Generator[Operation, None, int]:
    arr = coerce_values(values)
    return _search(arr, coerce_number(target, "target"))


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------
def _insert(arr: List[Any], index: int, value: Any) -> Generator[Operation, None, List[Any]]:
    arr.append(None)
    last = len(arr) - 1
    yield insert_op(last, None, step=0,
                    explanation=f"Grow the array to {len(arr)} slots; index {last} is empty.")

    for i in range(last, index, -1):
        arr[i] = arr[i - 1]
        yield shift(i - 1, i, step=1,
                    explanation=f"Shift {arr[i]} from index {i - 1} to index {i}.")

    arr[index] = value
    yield write(index, value, flag=Flag.INSERTING, step=2,
                explanation=f"Inserted {value} at index {index}.")

    yield enter_step(3, f"The array now has {len(arr)} element(s).", marks=highlight((index,)))
    return list(arr)


def _delete(arr: List[Any], index: int) -> Generator[Operation, None, Any]:
    removed = arr[index]
    yield set_flag((index,), Flag.REMOVING, step=0,
                   explanation=f"Remove {removed} from index {index}.", removed=removed)

    for i in range(index, len(arr) - 1):
        arr[i] = arr[i + 1]
        yield shift(i + 1, i, step=1,
                    explanation=f"Shift {arr[i]} from index {i + 1} to index {i}.")

    arr.pop()
    yield remove(len(arr), step=2, explanation=f"Drop the last slot; {len(arr)} element(s) remain.")

    yield enter_step(3, f"Removed {removed} from index {index}.")
    return removed


def _search(arr: List[Any], target: Any) -> Generator[Operation, None, int]:
    for i, value in enumerate(arr):
        yield enter_step(0, f"i = {i}", marks=highlight((i,)), target=target)
        yield compare(i, value=target, step=1,
                      explanation=f"Is array[{i}] = {value} equal to {target}? {'Yes' if value == target else 'No'}.")
        if value == target:
            yield set_flag((i,), Flag.HIGHLIGHTED, step=2,
                           explanation=f"Found {target} at index {i}.", found=i)
            return i

    yield enter_step(3, f"{target} is not in the array.", found=-1, target=target)
    return -1
