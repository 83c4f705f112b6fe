"""
selection_sort.py — Selection Sort
===================================
One running minimum per pass.  When the minimum is already sitting at
position i the swap is skipped, but the swap step is still emitted so the
learner sees the decision being made.
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import coerce_values
from algorithms.step import (
    Operation, catalog, compare, enter_step, highlight, mark_terminal, set_flag, swap,
)
from structures.element import Flag


CODE = """\
def selection_sort(array):
    n = len(array)

    # Outer loop for each position
    for i in range(n - 1):
        min_index = i

        # Inner loop to find minimum element
        for j in range(i + 1, n):
            if array[j] < array[min_index]:
                min_index = j

        # Swap minimum element with current position
        if min_index != i:
            array[i], array[min_index] = array[min_index], array[i]

    return array"""

STEPS = catalog([
    ((2,),          "Get the length of the array"),
    ((4, 5),        "Start outer loop for each position"),
    ((6,),          "Initialize minimum index to current position"),
    ((8, 9),        "Start inner loop to find minimum element"),
    ((10, 11),      "Compare and update minimum index"),
    ((13, 14, 15),  "Swap minimum element with current position"),
    ((17,),         "Return the sorted array"),
])


def selection_sort(values: Sequence[Any] = ()) -> Generator[Operation, None, List[Any]]:
    return _selection_sort(coerce_values(values))


def _selection_sort(arr: List[Any]) -> Generator[Operation, None, List[Any]]:
    n = len(arr)
    yield enter_step(0, f"The array has {n} element(s).")

    for i in range(n - 1):
        yield enter_step(1, f"Position {i}: find the smallest value in indices {i}..{n - 1}.",
                         marks=highlight((i,)), pass_number=i + 1)
        min_index = i
        yield set_flag((i,), Flag.MINIMUM, step=2,
                       explanation=f"Assume array[{i}] = {arr[i]} is the minimum for now.")

        for j in range(i + 1, n):
            yield enter_step(3, f"j = {j}", marks=highlight((j,)) + highlight((min_index,), Flag.MINIMUM))
            smaller = arr[j] < arr[min_index]
            yield compare(j, min_index, step=4,
                          explanation=f"Is {arr[j]} < {arr[min_index]}? {'Yes' if smaller else 'No'}.",
                          marks=highlight((min_index,), Flag.MINIMUM))
            if smaller:
                min_index = j
                yield set_flag((j,), Flag.MINIMUM, step=4,
                               explanation=f"New minimum {arr[j]} at index {j}.")

        if min_index != i:
            arr[i], arr[min_index] = arr[min_index], arr[i]
            yield swap(i, min_index, step=5,
                       explanation=f"Swap the minimum {arr[i]} into position {i}.")
        else:
            yield enter_step(5, f"Minimum {arr[i]} is already at position {i} — no swap needed.",
                             marks=highlight((i,), Flag.MINIMUM))
        yield mark_terminal(0, i + 1, step=5,
                            explanation=f"Indices 0..{i} now hold the {i + 1} smallest values in order.")

    yield enter_step(6, "Return the sorted array.")
    return list(arr)
