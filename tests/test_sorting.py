"""
Tests for the sorting drivers.

Every sort is checked against sorted() on the same input, plus the
boundary inputs and the per-algorithm behaviour users can see.
"""

import unittest

from algorithms import SORT_SAMPLE
from algorithms.bubble_sort import bubble_sort
from algorithms.heap_sort import heap_sort, sift_down
from algorithms.insertion_sort import insertion_sort
from algorithms.merge_sort import merge, merge_sort
from algorithms.selection_sort import selection_sort
from algorithms.step import OpKind
from engine.projector import project
from structures.errors import ValidationError
from structures.state import VisualState
from tests.support import drain, final_state, of_kind


SORTS = {
    "bubble_sort":    bubble_sort,
    "selection_sort": selection_sort,
    "insertion_sort": insertion_sort,
    "heap_sort":      heap_sort,
    "merge_sort":     merge_sort,
}

BOUNDARY_INPUTS = [
    [],
    [7],
    [1, 2, 3, 4, 5],
    [5, 4, 3, 2, 1],
    [3, 1, 3, 1, 2],
    SORT_SAMPLE,
]


class TestAllSorts(unittest.TestCase):

    def test_result_matches_sorted(self):
        for name, factory in SORTS.items():
            for values in BOUNDARY_INPUTS:
                with self.subTest(algorithm=name, values=values):
                    _, result = drain(factory(values))
                    self.assertEqual(result, sorted(values))

    def test_projected_state_matches_result(self):
        for name, factory in SORTS.items():
            for values in BOUNDARY_INPUTS:
                with self.subTest(algorithm=name, values=values):
                    state, result = final_state(VisualState.from_values(values), factory(values))
                    self.assertEqual(list(state.values), result)

    def test_input_not_mutated(self):
        values = [3, 2, 1]
        drain(bubble_sort(values))
        self.assertEqual(values, [3, 2, 1])

    def test_rejects_bad_input(self):
        for name, factory in SORTS.items():
            with self.subTest(algorithm=name):
                with self.assertRaises(ValidationError):
                    factory([1, "x", 3])
                with self.assertRaises(ValidationError):
                    factory(list(range(17)))

    def test_numeric_strings_accepted(self):
        _, result = drain(insertion_sort(["3", "1", " 2 "]))
        self.assertEqual(result, [1, 2, 3])

    def test_step_indices_inside_catalog(self):
        from algorithms import get_algorithm
        for name, factory in SORTS.items():
            info = get_algorithm(name)
            ops, _ = drain(factory(SORT_SAMPLE))
            with self.subTest(algorithm=name):
                for op in ops:
                    if op.step is not None:
                        self.assertLess(op.step, len(info.steps))


class TestBubbleSort(unittest.TestCase):

    def test_early_exit_on_sorted_input(self):
        ops, _ = drain(bubble_sort([1, 2, 3, 4, 5]))
        self.assertEqual(of_kind(ops, OpKind.SWAP), [])
        passes = [op for op in ops if op.kind is OpKind.STEP and op.step == 1]
        self.assertEqual(len(passes), 1)

    def test_early_exit_marks_everything(self):
        state, _ = final_state(VisualState.from_values([1, 2, 3]), bubble_sort([1, 2, 3]))
        self.assertEqual(state.sorted_indices, (0, 1, 2))

    def test_first_pass_fixes_last_index(self):
        values = [3, 1, 2]
        ops, _ = drain(bubble_sort(values))
        first_terminal = of_kind(ops, OpKind.MARK_TERMINAL)[0]
        self.assertEqual(first_terminal.indices, (2, 3))

    def test_swap_count_equals_inversions(self):
        values = [5, 1, 4, 2, 8]
        ops, _ = drain(bubble_sort(values))
        inversions = sum(1 for i in range(len(values)) for j in range(i + 1, len(values))
                         if values[i] > values[j])
        self.assertEqual(len(of_kind(ops, OpKind.SWAP)), inversions)


class TestSelectionSort(unittest.TestCase):

    def test_at_most_n_minus_one_swaps(self):
        ops, _ = drain(selection_sort(SORT_SAMPLE))
        self.assertLessEqual(len(of_kind(ops, OpKind.SWAP)), len(SORT_SAMPLE) - 1)

    def test_prefix_grows_one_at_a_time(self):
        ops, _ = drain(selection_sort([4, 3, 2, 1]))
        ranges = [op.indices for op in of_kind(ops, OpKind.MARK_TERMINAL)]
        self.assertEqual(ranges, [(0, 1), (0, 2), (0, 3)])


class TestInsertionSort(unittest.TestCase):

    def test_sorted_input_only_compares(self):
        ops, _ = drain(insertion_sort([1, 2, 3, 4]))
        self.assertEqual(of_kind(ops, OpKind.SHIFT), [])
        self.assertEqual(len(of_kind(ops, OpKind.COMPARE)), 3)

    def test_reverse_input_shifts(self):
        ops, _ = drain(insertion_sort([4, 3, 2, 1]))
        self.assertEqual(len(of_kind(ops, OpKind.SHIFT)), 6)


class TestHeapSort(unittest.TestCase):

    def test_sample_input(self):
        _, result = drain(heap_sort([64, 34, 25, 12, 22, 11, 90]))
        self.assertEqual(result, [11, 12, 22, 25, 34, 64, 90])

    def test_deterministic(self):
        first, _ = drain(heap_sort(SORT_SAMPLE))
        second, _ = drain(heap_sort(SORT_SAMPLE))
        self.assertEqual(first, second)

    def test_sift_down_restores_heap(self):
        arr = [1, 9, 8, 7, 6]
        drain(sift_down(arr, len(arr), 0))
        for i in range(len(arr)):
            for child in (2 * i + 1, 2 * i + 2):
                if child < len(arr):
                    self.assertGreaterEqual(arr[i], arr[child])

    def test_extraction_marks_suffix(self):
        ops, _ = drain(heap_sort([3, 1, 2]))
        ranges = [op.indices for op in of_kind(ops, OpKind.MARK_TERMINAL)]
        self.assertEqual(ranges, [(2, 3), (1, 3)])


class TestMergeSort(unittest.TestCase):

    def test_merge_is_stable(self):
        arr = [2, 2, 2]
        ops, merged = drain(merge(arr, 0, 2, 3))
        sides = [op.overlay["side"] for op in of_kind(ops, OpKind.WRITE)]
        self.assertEqual(sides, ["left", "left", "right"])
        self.assertEqual(merged, [2, 2, 2])

    def test_merge_interleaves(self):
        arr = [1, 4, 2, 3]
        ops, merged = drain(merge(arr, 0, 2, 4))
        self.assertEqual(merged, [1, 2, 3, 4])
        self.assertEqual(arr, [1, 2, 3, 4])
        self.assertEqual(len(of_kind(ops, OpKind.WRITE)), 4)

    def test_compare_shows_the_values_compared(self):
        arr = [1, 5, 2, 3]
        state = VisualState.from_values(arr)
        compared = []
        for op in drain(merge(list(arr), 0, 2, 4))[0]:
            state = project(state, op)
            if op.kind is not OpKind.COMPARE:
                continue
            left_value, right_value = op.value
            buffer = state.overlay["merge"]
            (slot,) = op.indices
            self.assertEqual(state.elements[slot].value, right_value)
            self.assertEqual(buffer["right"][buffer["j"]], right_value)
            self.assertEqual(buffer["left"][buffer["i"]], left_value)
            compared.append(op.value)
        self.assertEqual(compared, [(1, 2), (5, 2), (5, 3)])
        self.assertIsNone(state.overlay["merge"])

    def test_single_element_is_base_case(self):
        ops, result = drain(merge_sort([9]))
        self.assertEqual(result, [9])
        self.assertEqual(of_kind(ops, OpKind.WRITE), [])


if __name__ == "__main__":
    unittest.main()
