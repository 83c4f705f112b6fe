"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort over index ranges [lo, hi).

  divide   → split at mid = lo + (hi - lo) // 2
  conquer  → recurse on [lo, mid) and [mid, hi)
  combine  → merge with `left[i] <= right[j]` (stable: ties go left)

The two drain loops ("remaining left", "remaining right") are always
announced, even when that side is already exhausted, so the learner sees
both checks happen.

Overlay exposes:
  • "range" – (lo, mid, hi) of the merge / split in progress
  • "depth" – recursion depth of the current call
  • "side"  – "left" | "right", the run the last written value came from
  • "merge" – {"left", "right", "i", "j"} buffers and cursors of the merge
              in progress (None outside a merge)
"""

from typing import Any, Generator, List, Sequence

from algorithms.inputs import coerce_values
from algorithms.step import (
    Operation, catalog, compare, enter_step, highlight, set_flag, write,
)
from structures.element import Flag


CODE = """\
def merge_sort(array):
    # Base case: arrays with 0 or 1 element are already sorted
    if len(array) <= 1:
        return array

    # Divide: split array into two halves
    middle = len(array) // 2
    left = array[:middle]
    right = array[middle:]

    # Conquer: recursively sort both halves
    sorted_left = merge_sort(left)
    sorted_right = merge_sort(right)

    # Combine: merge the sorted halves
    return merge(sorted_left, sorted_right)


def merge(left, right):
    result = []
    i = 0
    j = 0

    # Compare elements and merge in sorted order
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1

    # Add remaining elements from left array
    while i < len(left):
        result.append(left[i])
        i += 1

    # Add remaining elements from right array
    while j < len(right):
        result.append(right[j])
        j += 1

    return result"""

STEPS = catalog([
    ((2, 3, 4),                       "Check base case: arrays with 0 or 1 element are already sorted"),
    ((6, 7, 8, 9),                    "Divide: split array into two halves at middle point"),
    ((11, 12, 13),                    "Conquer: recursively sort both halves"),
    ((15, 16),                        "Combine: merge the sorted halves together"),
    ((19, 20, 21, 22),                "Initialize merge process with pointers and result array"),
    ((24, 25, 26, 27, 28, 29, 30, 31), "Compare elements and merge in sorted order"),
    ((33, 34, 35, 36),                "Add remaining elements from left array"),
    ((38, 39, 40, 41),                "Add remaining elements from right array"),
    ((43,),                           "Return merged result array"),
])


def merge_sort(values: Sequence[Any] = ()) -> Generator[Operation, None, List[Any]]:
    return _merge_sort_run(coerce_values(values))


def _merge_sort_run(arr: List[Any]) -> Generator[Operation, None, List[Any]]:
    yield from _sort(arr, 0, len(arr), depth=0)
    return list(arr)


def _sort(arr: List[Any], lo: int, hi: int, depth: int) -> Generator[Operation, None, None]:
    span = tuple(range(lo, hi))
    yield enter_step(0, f"merge_sort on indices {lo}..{hi - 1} ({hi - lo} element(s)).",
                     marks=highlight(span), range=(lo, hi, hi), depth=depth)
    if hi - lo <= 1:
        return

    mid = lo + (hi - lo) // 2
    yield set_flag(span, Flag.DIVIDING, step=1, range=(lo, mid, hi),
                   explanation=f"Split into [{lo}..{mid - 1}] and [{mid}..{hi - 1}].")
    yield enter_step(2, "Recursively sort the left half, then the right half.", marks=highlight(span))

    yield from _sort(arr, lo, mid, depth + 1)
    yield from _sort(arr, mid, hi, depth + 1)

    yield enter_step(3, f"Both halves of {lo}..{hi - 1} are sorted — merge them.",
                     marks=highlight(span), range=(lo, mid, hi), depth=depth)
    yield from merge(arr, lo, mid, hi)


def merge(arr: List[Any], lo: int, mid: int, hi: int) -> Generator[Operation, None, List[Any]]:
    """
    Merge the sorted runs arr[lo:mid] and arr[mid:hi] in place, one write per op.

    The left run is copied into a buffer first (overlay "merge"); writes
    land on slots the left run used to occupy, so only right[j] is still
    on screen at its own index (mid + j never falls behind the write cursor).
    """
    left, right = arr[lo:mid], arr[mid:hi]
    i = j = 0
    k = lo
    yield enter_step(4, f"left = {left}, right = {right}; i = j = 0.", range=(lo, mid, hi),
                     merge={"left": left, "right": right, "i": i, "j": j})

    while i < len(left) and j < len(right):
        take_left = left[i] <= right[j]
        yield compare(mid + j, value=(left[i], right[j]), step=5,
                      merge={"left": left, "right": right, "i": i, "j": j},
                      explanation=f"Is {left[i]} <= {right[j]}? "
                                  f"{'Yes — take from left' if take_left else 'No — take from right'}.")
        if take_left:
            arr[k] = left[i]
            yield write(k, left[i], flag=Flag.MERGING, step=5, side="left",
                        merge={"left": left, "right": right, "i": i + 1, "j": j},
                        explanation=f"result[{k - lo}] = {left[i]} (left[{i}]).")
            i += 1
        else:
            arr[k] = right[j]
            yield write(k, right[j], flag=Flag.MERGING, step=5, side="right",
                        merge={"left": left, "right": right, "i": i, "j": j + 1},
                        explanation=f"result[{k - lo}] = {right[j]} (right[{j}]).")
            j += 1
        k += 1

    yield enter_step(6, f"{len(left) - i} element(s) left over on the left side.")
    while i < len(left):
        arr[k] = left[i]
        yield write(k, left[i], flag=Flag.MERGING, step=6, side="left",
                    merge={"left": left, "right": right, "i": i + 1, "j": j},
                    explanation=f"Copy remaining left[{i}] = {left[i]}.")
        i += 1
        k += 1

    yield enter_step(7, f"{len(right) - j} element(s) left over on the right side.")
    while j < len(right):
        arr[k] = right[j]
        yield write(k, right[j], flag=Flag.MERGING, step=7, side="right",
                    merge={"left": left, "right": right, "i": i, "j": j + 1},
                    explanation=f"Copy remaining right[{j}] = {right[j]}.")
        j += 1
        k += 1

    yield enter_step(8, f"Indices {lo}..{hi - 1} now hold {arr[lo:hi]}.",
                     marks=highlight(range(lo, hi)), merge=None)
    return arr[lo:hi]
