"""
Tests for the frame-arena recursion interpreter and its programs.
"""

import unittest

from algorithms import recursion
from algorithms.step import OpKind
from engine.projector import project
from structures.errors import ValidationError
from structures.state import VisualState
from tests.support import drain, final_state, of_kind


class TestFactorial(unittest.TestCase):

    def test_result(self):
        _, result = drain(recursion.factorial(5))
        self.assertEqual(result, 120)

    def test_pushes_and_depth(self):
        state, _ = final_state(VisualState(), recursion.factorial(5))
        self.assertEqual(state.counters.calls, 6)
        self.assertEqual(state.counters.max_depth, 6)
        self.assertEqual(state.frames, ())

    def test_every_push_is_popped(self):
        ops, _ = drain(recursion.factorial(3))
        pushed = [op.frame_id for op in of_kind(ops, OpKind.PUSH_FRAME)]
        popped = [op.frame_id for op in of_kind(ops, OpKind.POP_FRAME)]
        self.assertEqual(sorted(pushed), sorted(popped))
        self.assertEqual(popped, list(reversed(pushed)))

    def test_return_value_set_before_pop(self):
        state = VisualState()
        ops, _ = drain(recursion.factorial(2))
        for op in ops:
            if op.kind is OpKind.POP_FRAME:
                self.assertTrue(state.top_frame.is_returning)
                self.assertIsNotNone(state.top_frame.return_value)
            state = project(state, op)

    def test_zero(self):
        _, result = drain(recursion.factorial(0))
        self.assertEqual(result, 1)

    def test_bounds(self):
        with self.assertRaises(ValidationError):
            recursion.factorial(11)
        with self.assertRaises(ValidationError):
            recursion.factorial(-1)
        with self.assertRaises(ValidationError):
            recursion.factorial("many")


class TestOtherPrograms(unittest.TestCase):

    def test_results(self):
        cases = [
            (recursion.sum_to(4), 10),
            (recursion.power(2, 5), 32),
            (recursion.power(-3, 3), -27),
            (recursion.tail_factorial(5), 120),
            (recursion.is_even(4), True),
            (recursion.is_even(7), False),
            (recursion.fibonacci(6), 8),
            (recursion.count_paths(3, 3), 6),
        ]
        for driver, expected in cases:
            with self.subTest(expected=expected):
                _, result = drain(driver)
                self.assertEqual(result, expected)

    def test_mutual_recursion_alternates(self):
        ops, _ = drain(recursion.is_even(3))
        names = [op.function_name for op in of_kind(ops, OpKind.PUSH_FRAME)]
        self.assertEqual(names, ["is_even", "is_odd", "is_even", "is_odd"])

    def test_print_reverse_output_order(self):
        state, result = final_state(VisualState(), recursion.print_reverse(4))
        self.assertIsNone(result)
        self.assertEqual(state.overlay["output"], (1, 2, 3, 4))

    def test_fibonacci_bound(self):
        with self.assertRaises(ValidationError):
            recursion.fibonacci(9)

    def test_fibonacci_call_count(self):
        state, _ = final_state(VisualState(), recursion.fibonacci(4))
        self.assertEqual(state.counters.calls, 9)

    def test_steps_inside_catalog(self):
        for key, program in recursion.PROGRAMS.items():
            with self.subTest(program=key):
                self.assertTrue(program.steps)
                for (name, phase), index in program._index.items():
                    self.assertLess(index, len(program.steps))


class TestHanoi(unittest.TestCase):

    def test_move_count(self):
        for disks in range(1, 6):
            with self.subTest(disks=disks):
                ops, result = drain(recursion.hanoi(disks))
                self.assertEqual(len(of_kind(ops, OpKind.MOVE_DISK)), 2 ** disks - 1)
                self.assertEqual(result, 2 ** disks - 1)

    def test_pegs_strictly_decreasing_throughout(self):
        state = VisualState.with_pegs(4)
        ops, _ = drain(recursion.hanoi(4))
        for op in ops:
            state = project(state, op)
            for peg in state.pegs:
                self.assertEqual(list(peg), sorted(peg, reverse=True))
                self.assertEqual(len(set(peg)), len(peg))

    def test_all_disks_end_on_target(self):
        state, _ = final_state(VisualState.with_pegs(3), recursion.hanoi(3))
        self.assertEqual(state.pegs, ((), (), (3, 2, 1)))
        self.assertEqual(state.counters.moves, 7)

    def test_disk_bounds(self):
        with self.assertRaises(ValidationError):
            recursion.hanoi(0)
        with self.assertRaises(ValidationError):
            recursion.hanoi(7)


if __name__ == "__main__":
    unittest.main()
