"""
Tests for the array, stack, queue and linked-list operation drivers.
"""

import random
import unittest

from algorithms import array_ops, linked_list, queue_ops, stack_ops
from algorithms.step import OpKind
from structures.element import Flag
from structures.errors import ValidationError
from structures.state import VisualState
from tests.support import drain, final_state, of_kind


class TestArrayOperations(unittest.TestCase):

    def test_insert_shifts_right(self):
        values = [10, 20, 30, 40, 50]
        state, result = final_state(VisualState.from_values(values), array_ops.insert(values, 2, 25))
        self.assertEqual(result, [10, 20, 25, 30, 40, 50])
        self.assertEqual(list(state.values), result)

    def test_insert_shift_count(self):
        ops, _ = drain(array_ops.insert([1, 2, 3, 4], 1, 9))
        self.assertEqual(len(of_kind(ops, OpKind.SHIFT)), 3)

    def test_append_needs_no_shift(self):
        ops, result = drain(array_ops.append([1, 2], 3))
        self.assertEqual(result, [1, 2, 3])
        self.assertEqual(of_kind(ops, OpKind.SHIFT), [])

    def test_insert_into_empty(self):
        _, result = drain(array_ops.insert([], 0, 5))
        self.assertEqual(result, [5])

    def test_insert_validation(self):
        with self.assertRaisesRegex(ValidationError, "Index must be between 0 and 3"):
            array_ops.insert([1, 2, 3], 4, 1)
        with self.assertRaisesRegex(ValidationError, "valid number"):
            array_ops.insert([1, 2, 3], 1, "abc")
        with self.assertRaisesRegex(ValidationError, "Array is full"):
            array_ops.insert(list(range(16)), 0, 1)

    def test_delete(self):
        values = [10, 20, 30, 40]
        state, removed = final_state(VisualState.from_values(values), array_ops.delete(values, 1))
        self.assertEqual(removed, 20)
        self.assertEqual(list(state.values), [10, 30, 40])

    def test_delete_validation(self):
        with self.assertRaisesRegex(ValidationError, "Array is empty"):
            array_ops.delete([], 0)
        with self.assertRaisesRegex(ValidationError, "Index must be between 0 and 1"):
            array_ops.delete([1, 2], 2)

    def test_search(self):
        _, found = drain(array_ops.search([4, 8, 15], 15))
        self.assertEqual(found, 2)
        ops, missing = drain(array_ops.search([4, 8, 15], 16))
        self.assertEqual(missing, -1)
        self.assertEqual(len(of_kind(ops, OpKind.COMPARE)), 3)

    def test_random_sequence_matches_plain_list(self):
        rng = random.Random(7)
        reference = [1, 2, 3]
        state = VisualState.from_values(reference)
        inserts = deletes = 0
        for _ in range(40):
            if reference and (len(reference) >= 16 or rng.random() < 0.4):
                index = rng.randrange(len(reference))
                state, _ = final_state(state, array_ops.delete(list(state.values), index))
                del reference[index]
                deletes += 1
            else:
                index = rng.randint(0, len(reference))
                value = rng.randint(1, 99)
                state, _ = final_state(state, array_ops.insert(list(state.values), index, value))
                reference.insert(index, value)
                inserts += 1
            self.assertEqual(list(state.values), reference)
        self.assertEqual(len(state.elements), 3 + inserts - deletes)


class TestStack(unittest.TestCase):

    def test_push(self):
        state, result = final_state(VisualState.from_values([10, 20]), stack_ops.push([10, 20], 30))
        self.assertEqual(result, [10, 20, 30])
        self.assertEqual(state.values, (10, 20, 30))
        self.assertEqual(state.overlay["top"], 2)

    def test_pop_returns_top(self):
        state, value = final_state(VisualState.from_values([10, 20]), stack_ops.pop([10, 20]))
        self.assertEqual(value, 20)
        self.assertEqual(state.values, (10,))
        self.assertEqual(state.overlay["popped"], 20)

    def test_peek_leaves_stack(self):
        state, value = final_state(VisualState.from_values([1, 2]), stack_ops.peek([1, 2]))
        self.assertEqual(value, 2)
        self.assertEqual(state.values, (1, 2))
        self.assertTrue(state.elements[1].has(Flag.HIGHLIGHTED))

    def test_empty_and_full(self):
        with self.assertRaisesRegex(ValidationError, "Cannot pop from empty stack"):
            stack_ops.pop([])
        with self.assertRaisesRegex(ValidationError, "Nothing to peek"):
            stack_ops.peek([])
        with self.assertRaisesRegex(ValidationError, "Stack is full"):
            stack_ops.push(list(range(16)), 1)
        with self.assertRaisesRegex(ValidationError, "Please enter a value"):
            stack_ops.push([1], "")


class TestQueue(unittest.TestCase):

    def test_fifo_order(self):
        state = VisualState.from_values([5, 10])
        state, _ = final_state(state, queue_ops.enqueue(list(state.values), 15))
        state, first = final_state(state, queue_ops.dequeue(list(state.values)))
        self.assertEqual(first, 5)
        self.assertEqual(state.values, (10, 15))

    def test_peek_front(self):
        _, value = drain(queue_ops.peek([7, 8]))
        self.assertEqual(value, 7)

    def test_empty(self):
        with self.assertRaisesRegex(ValidationError, "Cannot dequeue from empty queue"):
            queue_ops.dequeue([])
        with self.assertRaisesRegex(ValidationError, "Queue is empty! Nothing to peek"):
            queue_ops.peek([])


class TestLinkedList(unittest.TestCase):

    def test_insert_at_head(self):
        state, result = final_state(VisualState.from_values([1, 2]), linked_list.insert_node([1, 2], 0, 0))
        self.assertEqual(result, [0, 1, 2])
        self.assertEqual(state.values, (0, 1, 2))

    def test_insert_in_middle_walks(self):
        ops, result = drain(linked_list.insert_node([10, 20, 30, 40], 25, 3))
        self.assertEqual(result, [10, 20, 30, 25, 40])
        walked = [op.overlay["current"] for op in ops if op.step == 3]
        self.assertEqual(walked, [1, 2])

    def test_insert_at_tail(self):
        _, result = drain(linked_list.insert_node([1], 2, 1))
        self.assertEqual(result, [1, 2])

    def test_delete(self):
        state, result = final_state(VisualState.from_values([10, 20, 30]), linked_list.delete_node([10, 20, 30], 1))
        self.assertEqual(result, [10, 30])
        self.assertEqual(state.values, (10, 30))

    def test_delete_head(self):
        _, result = drain(linked_list.delete_node([10, 20], 0))
        self.assertEqual(result, [20])

    def test_traverse(self):
        state, result = final_state(VisualState.from_values([3, 6, 9]), linked_list.traverse([3, 6, 9]))
        self.assertEqual(result, [3, 6, 9])
        self.assertEqual(state.overlay["visited"], (3, 6, 9))
        self.assertIsNone(state.overlay["current"])

    def test_validation(self):
        with self.assertRaisesRegex(ValidationError, "List is empty"):
            linked_list.delete_node([], 0)
        with self.assertRaisesRegex(ValidationError, "Index must be between 0 and 2"):
            linked_list.insert_node([1, 2], 5, 3)


if __name__ == "__main__":
    unittest.main()
