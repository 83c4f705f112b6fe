"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Emits an operation at every meaningful event:
  1. Start of each pass / reset of the `swapped` flag
  2. Each adjacent comparison  a[j] > a[j+1]
  3. Each swap
  4. End of pass  →  the tail n-1-i .. n-1 is in its final place
  5. A pass with zero swaps  →  early exit, everything is sorted

Step indices match the STEPS catalog; code lines match CODE.
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import coerce_values
from algorithms.step import (
    Operation, catalog, compare, enter_step, highlight, mark_terminal, swap,
)


CODE = """\
def bubble_sort(array):
    n = len(array)

    # Outer loop for number of passes
    for i in range(n - 1):
        swapped = False

        # Inner loop for comparisons in current pass
        for j in range(n - i - 1):

            # Compare adjacent elements
            if array[j] > array[j + 1]:
                # Swap elements if they are in wrong order
                array[j], array[j + 1] = array[j + 1], array[j]
                swapped = True

        # If no swapping occurred, array is sorted
        if not swapped:
            break

    return array"""

STEPS = catalog([
    ((2,),          "Get the length of the array"),
    ((4, 5),        "Start outer loop for number of passes"),
    ((6,),          "Initialize swapped flag for this pass"),
    ((8, 9),        "Start inner loop for comparisons in current pass"),
    ((11, 12),      "Compare adjacent elements"),
    ((13, 14, 15),  "Swap elements if they are in wrong order"),
    ((17, 18, 19),  "Check if any swaps occurred in this pass"),
    ((21,),         "Return the sorted array"),
])


def bubble_sort(values: Sequence[Any] = ()) -> Generator[Operation, None, List[Any]]:
    """Validate eagerly, then hand back the operation generator."""
    return _bubble_sort(coerce_values(values))


def _bubble_sort(arr: List[Any]) -> Generator[Operation, None, List[Any]]:
    n = len(arr)
    yield enter_step(0, f"The array has {n} element(s).")

    for i in range(n - 1):
        yield enter_step(1, f"Pass {i + 1}: the largest unsorted value will bubble to index {n - 1 - i}.",
                         pass_number=i + 1)
        swapped = False
        yield enter_step(2, "No swaps seen yet in this pass (swapped = False).")

        for j in range(n - i - 1):
            yield enter_step(3, f"j = {j}: look at positions {j} and {j + 1}.", marks=highlight((j, j + 1)))
            yield compare(j, j + 1, step=4,
                          explanation=f"Is {arr[j]} > {arr[j + 1]}? "
                                      f"{'Yes' if arr[j] > arr[j + 1] else 'No'}.")
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                yield swap(j, j + 1, step=5,
                           explanation=f"Swap {arr[j + 1]} and {arr[j]} — the larger value moves right.")

        yield mark_terminal(n - 1 - i, n, step=6,
                            explanation=f"Pass {i + 1} done: index {n - 1 - i} onwards is in final position."
                                        + ("" if swapped else " No swaps happened — the array is sorted."))
        if not swapped:
            yield mark_terminal(0, n, step=6, explanation="Early exit: a pass without swaps means every element is in place.")
            break

    yield enter_step(7, "Return the sorted array.")
    return list(arr)
