"""
Tests for the state projector.

Covers the per-operation effects, flag lifetime and the invariant checks
that abort a run.
"""

import unittest

from algorithms import step as ops
from engine.projector import finalize, project, replay
from structures.element import Flag
from structures.errors import InvariantViolation
from structures.state import VisualState


class TestElementOperations(unittest.TestCase):
    """Structural effects on the element sequence."""

    def setUp(self):
        self.state = VisualState.from_values([5, 3, 8])

    def test_compare_flags_and_counts(self):
        after = project(self.state, ops.compare(0, 1, step=4))
        self.assertTrue(after.elements[0].has(Flag.COMPARING))
        self.assertTrue(after.elements[1].has(Flag.COMPARING))
        self.assertFalse(after.elements[2].has(Flag.COMPARING))
        self.assertEqual(after.counters.comparisons, 1)
        self.assertEqual(after.step_index, 4)

    def test_transient_flags_cleared_on_next_op(self):
        after = project(self.state, ops.compare(0, 1))
        after = project(after, ops.enter_step(1))
        self.assertEqual(after.elements[0].flags, frozenset())

    def test_sorted_flag_survives(self):
        after = project(self.state, ops.mark_terminal(1, 3))
        after = project(after, ops.compare(0, 1))
        after = project(after, ops.enter_step(2))
        self.assertEqual(after.sorted_indices, (1, 2))

    def test_swap_moves_identities(self):
        after = project(self.state, ops.swap(0, 2))
        self.assertEqual(after.values, (8, 3, 5))
        self.assertEqual([e.id for e in after.elements], [2, 1, 0])
        self.assertEqual(after.counters.swaps, 1)

    def test_shift_copies_value(self):
        after = project(self.state, ops.shift(0, 1))
        self.assertEqual(after.values, (5, 5, 8))
        self.assertTrue(after.elements[1].has(Flag.SHIFTING))
        self.assertEqual(after.counters.shifts, 1)

    def test_insert_hands_out_fresh_id(self):
        after = project(self.state, ops.insert(1, 99))
        self.assertEqual(after.values, (5, 99, 3, 8))
        self.assertEqual(after.elements[1].id, 3)
        self.assertEqual(after.next_id, 4)

    def test_insert_at_end_allowed(self):
        after = project(self.state, ops.insert(3, 1))
        self.assertEqual(after.values, (5, 3, 8, 1))

    def test_remove(self):
        after = project(self.state, ops.remove(0))
        self.assertEqual(after.values, (3, 8))

    def test_marks_apply_after_structure(self):
        after = project(self.state, ops.enter_step(0, marks=ops.highlight((2,), Flag.KEY)))
        self.assertTrue(after.elements[2].has(Flag.KEY))

    def test_prior_state_untouched(self):
        before = self.state
        project(before, ops.write(0, 42))
        self.assertEqual(before.values, (5, 3, 8))

    def test_explanation_and_overlay(self):
        after = project(self.state, ops.enter_step(0, "hello", found=1))
        after = project(after, ops.enter_step(1, target=3))
        self.assertEqual(after.explanation, "hello")
        self.assertEqual(dict(after.overlay), {"found": 1, "target": 3})

    def test_finalize_marks_everything_sorted(self):
        done = finalize(project(self.state, ops.compare(0, 1)))
        self.assertEqual(done.sorted_indices, (0, 1, 2))
        self.assertFalse(done.elements[0].has(Flag.COMPARING))


class TestElementViolations(unittest.TestCase):

    def setUp(self):
        self.state = VisualState.from_values([1, 2])

    def test_index_out_of_range(self):
        for op in (ops.compare(2), ops.swap(0, 5), ops.write(-1, 3), ops.remove(2), ops.insert(3, 0)):
            with self.subTest(kind=op.kind):
                with self.assertRaises(InvariantViolation):
                    project(self.state, op)

    def test_bad_terminal_range(self):
        with self.assertRaises(InvariantViolation):
            project(self.state, ops.mark_terminal(1, 3))

    def test_bad_mark(self):
        with self.assertRaises(InvariantViolation):
            project(self.state, ops.enter_step(0, marks=((7, Flag.ACTIVE),)))


class TestFrameOperations(unittest.TestCase):
    """Call-stack bookkeeping."""

    def test_push_update_pop(self):
        state = replay(VisualState(), [
            ops.push_frame(0, "factorial", (2,)),
            ops.push_frame(1, "factorial", (1,)),
        ])
        self.assertEqual([f.id for f in state.frames], [0, 1])
        self.assertFalse(state.frames[0].is_active)
        self.assertTrue(state.frames[1].is_active)
        self.assertEqual(state.frames[1].depth, 1)
        self.assertEqual(state.counters.depth, 2)

        state = project(state, ops.update_frame(1, return_value=1, is_returning=True))
        self.assertEqual(state.top_frame.return_value, 1)

        state = project(state, ops.pop_frame(1))
        self.assertEqual(len(state.frames), 1)
        self.assertTrue(state.frames[0].is_active)
        self.assertEqual(state.counters.depth, 1)
        self.assertEqual(state.counters.max_depth, 2)
        self.assertEqual(state.counters.calls, 2)

    def test_pop_empty_stack(self):
        with self.assertRaises(InvariantViolation):
            project(VisualState(), ops.pop_frame(0))

    def test_pop_not_on_top(self):
        state = replay(VisualState(), [ops.push_frame(0, "f", ()), ops.push_frame(1, "f", ())])
        with self.assertRaises(InvariantViolation):
            project(state, ops.pop_frame(0))

    def test_duplicate_push(self):
        state = project(VisualState(), ops.push_frame(0, "f", ()))
        with self.assertRaises(InvariantViolation):
            project(state, ops.push_frame(0, "f", ()))

    def test_update_unknown_field(self):
        state = project(VisualState(), ops.push_frame(0, "f", ()))
        with self.assertRaises(InvariantViolation):
            project(state, ops.update_frame(0, depth=5))

    def test_update_missing_frame(self):
        with self.assertRaises(InvariantViolation):
            project(VisualState(), ops.update_frame(3, note="x"))


class TestMoveDisk(unittest.TestCase):

    def test_legal_move(self):
        state = project(VisualState.with_pegs(2), ops.move_disk(0, 1))
        self.assertEqual(state.pegs, ((2,), (1,), ()))
        self.assertEqual(state.counters.moves, 1)

    def test_larger_on_smaller_rejected(self):
        state = project(VisualState.with_pegs(2), ops.move_disk(0, 1))
        with self.assertRaises(InvariantViolation):
            project(state, ops.move_disk(0, 1))

    def test_empty_source_rejected(self):
        with self.assertRaises(InvariantViolation):
            project(VisualState.with_pegs(2), ops.move_disk(2, 0))

    def test_same_peg_rejected(self):
        with self.assertRaises(InvariantViolation):
            project(VisualState.with_pegs(1), ops.move_disk(0, 0))

    def test_no_pegs(self):
        with self.assertRaises(InvariantViolation):
            project(VisualState(), ops.move_disk(0, 1))


if __name__ == "__main__":
    unittest.main()
