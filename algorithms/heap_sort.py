"""
heap_sort.py — Heap Sort
=========================
Two phases:
  1. build-max-heap: sift-down every internal node from n//2 - 1 down to 0
  2. extract-max: swap the root with the current heap boundary, shrink the
     heap by one, sift the new root down

Sift-down is emitted comparison by comparison, so a pause lands between
any two of its sub-operations rather than only at phase boundaries.

Overlay exposes:
  • "phase"     – "building" | "sorting"
  • "heap_size" – current heap boundary
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import coerce_values
from algorithms.step import (
    Operation, catalog, compare, enter_step, highlight, mark_terminal, swap,
)
from structures.element import Flag
from structures.errors import InvariantViolation


CODE = """\
def heap_sort(array):
    n = len(array)

    # Build max heap from bottom up
    for i in range(n // 2 - 1, -1, -1):
        heapify(array, n, i)

    # Extract elements from heap one by one
    for end in range(n - 1, 0, -1):
        # Move current root (max) to end
        array[0], array[end] = array[end], array[0]
        # Restore heap property for reduced heap
        heapify(array, end, 0)

    return array


def heapify(array, n, root):
    largest = root
    left = 2 * root + 1
    right = 2 * root + 2

    if left < n and array[left] > array[largest]:
        largest = left

    if right < n and array[right] > array[largest]:
        largest = right

    # If largest is not root, swap and continue heapifying
    if largest != root:
        array[root], array[largest] = array[largest], array[root]
        heapify(array, n, largest)"""

STEPS = catalog([
    ((2,),               "Get the length of the array"),
    ((4, 5, 6),          "Build max heap from bottom up"),
    ((8, 9),             "Extract elements from heap one by one"),
    ((10, 11),           "Move current root (max) to end"),
    ((12, 13),           "Restore heap property for reduced heap"),
    ((15,),              "Return the sorted array"),
    ((18, 19, 20, 21),   "Initialize variables for heapify"),
    ((23, 24),           "Check if left child is larger than root"),
    ((26, 27),           "Check if right child is larger than current largest"),
    ((29, 30, 31, 32),   "If largest changed, swap and continue heapifying"),
])


def heap_sort(values: Sequence[Any] = ()) -> Generator[Operation, None, List[Any]]:
    return _heap_sort(coerce_values(values))


def _heap_sort(arr: List[Any]) -> Generator[Operation, None, List[Any]]:
    n = len(arr)
    yield enter_step(0, f"The array has {n} element(s).", phase="building", heap_size=n)

    yield enter_step(1, "Build a max heap: sift down every internal node, last one first.")
    for i in range(n // 2 - 1, -1, -1):
        yield from sift_down(arr, n, i)

    yield enter_step(2, "The array is a max heap; the root holds the maximum.", phase="sorting")
    for end in range(n - 1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]
        yield swap(0, end, step=3, heap_size=end,
                   explanation=f"Move the maximum {arr[end]} behind the heap boundary (index {end}).")
        yield mark_terminal(end, n, step=3, marks=highlight((end,), Flag.EXTRACTED),
                            explanation=f"Index {end} onwards is sorted; the heap shrinks to {end}.")
        yield enter_step(4, f"Restore the heap property for the first {end} element(s).")
        yield from sift_down(arr, end, 0)

    yield enter_step(5, "Return the sorted array.", heap_size=0)
    return list(arr)


def sift_down(arr: List[Any], size: int, root: int) -> Generator[Operation, None, None]:
    """
    Steppable heapify.  The textbook version recurses on `largest`; the
    recursion is a tail call, so it is unrolled into a loop here — every
    iteration is one "recursive" heapify call on screen.
    """
    if size < 0:
        raise InvariantViolation(f"negative heap boundary {size}")
    if size and not 0 <= root < size:
        raise InvariantViolation(f"heapify root {root} outside heap of size {size}")

    while True:
        largest = root
        left, right = 2 * root + 1, 2 * root + 2
        yield enter_step(6, f"heapify(root={root}, n={size}): left = {left}, right = {right}.",
                         marks=highlight((root,)))

        if left < size:
            bigger = arr[left] > arr[largest]
            yield compare(left, largest, step=7, marks=highlight((root,)),
                          explanation=f"Is left child {arr[left]} > {arr[largest]}? {'Yes' if bigger else 'No'}.")
            if bigger:
                largest = left

        if right < size:
            bigger = arr[right] > arr[largest]
            yield compare(right, largest, step=8, marks=highlight((root,)),
                          explanation=f"Is right child {arr[right]} > {arr[largest]}? {'Yes' if bigger else 'No'}.")
            if bigger:
                largest = right

        if largest == root:
            yield enter_step(9, f"{arr[root]} is not smaller than its children — heap property holds.",
                             marks=highlight((root,)))
            return

        arr[root], arr[largest] = arr[largest], arr[root]
        yield swap(root, largest, step=9,
                   explanation=f"Swap {arr[largest]} down to index {largest}; continue heapifying there.")
        root = largest
