"""
insertion_sort.py — Insertion Sort
===================================
The key is lifted out of slot i, every larger value in the sorted prefix
is shifted one slot right, then the key is written into the gap.
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import coerce_values
from algorithms.step import (
    Operation, catalog, compare, enter_step, highlight, mark_terminal, set_flag, shift, write,
)
from structures.element import Flag


CODE = """\
def insertion_sort(array):
    n = len(array)

    # Start from second element
    for i in range(1, n):
        key = array[i]
        j = i - 1

        # Shift larger elements to the right
        while j >= 0 and array[j] > key:
            array[j + 1] = array[j]
            j -= 1

        # Insert the key at correct position
        array[j + 1] = key

    return array"""

STEPS = catalog([
    ((2,),              "Get the length of the array"),
    ((4, 5),            "Start from second element (index 1)"),
    ((6, 7),            "Store current element as key and set position"),
    ((9, 10, 11, 12),   "Shift larger elements to the right"),
    ((14, 15),          "Insert key at correct position"),
    ((17,),             "Return the sorted array"),
])


def insertion_sort(values: Sequence[Any] = ()) -> Generator[Operation, None, List[Any]]:
    return _insertion_sort(coerce_values(values))


def _insertion_sort(arr: List[Any]) -> Generator[Operation, None, List[Any]]:
    n = len(arr)
    yield enter_step(0, f"The array has {n} element(s).")
    if n:
        yield mark_terminal(0, 1, step=0, explanation="A single element is a sorted prefix on its own.")

    for i in range(1, n):
        yield enter_step(1, f"i = {i}: insert array[{i}] into the sorted prefix 0..{i - 1}.",
                         marks=highlight((i,)))
        key = arr[i]
        j = i - 1
        yield set_flag((i,), Flag.KEY, step=2,
                       explanation=f"key = {key}, j = {j}.", key=key)

        while j >= 0:
            larger = arr[j] > key
            yield compare(j, value=key, step=3,
                          explanation=f"Is {arr[j]} > key {key}? {'Yes' if larger else 'No'}.")
            if not larger:
                break
            arr[j + 1] = arr[j]
            yield shift(j, j + 1, step=3,
                        explanation=f"Shift {arr[j]} from index {j} to index {j + 1}.")
            j -= 1

        arr[j + 1] = key
        yield write(j + 1, key, flag=Flag.KEY, step=4,
                    explanation=f"Place key {key} at index {j + 1}.")
        yield mark_terminal(0, i + 1, step=4,
                            explanation=f"Indices 0..{i} form a sorted prefix.", key=None)

    yield enter_step(5, "Return the sorted array.")
    return list(arr)
