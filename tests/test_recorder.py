"""
Tests for the registry, the Recorder and Comparison Mode.
"""

import unittest

from algorithms import HANOI, RECURSION, REGISTRY, algorithms_by_tag, get_algorithm, list_algorithms
from engine import Recorder, compare
from structures.errors import ValidationError


class TestRegistry(unittest.TestCase):

    def test_lookup(self):
        self.assertEqual(get_algorithm("heap_sort").label, "Heap Sort")
        self.assertIsNone(get_algorithm("bogo_sort"))
        self.assertEqual(len(list_algorithms()), len(REGISTRY))

    def test_tags(self):
        keys = [a.key for a in algorithms_by_tag("sorting")]
        self.assertEqual(keys, ["bubble_sort", "selection_sort", "insertion_sort", "heap_sort", "merge_sort"])

    def test_resolve_drops_unknown_params(self):
        info = get_algorithm("stack_push")
        resolved = info.resolve({"value": 7, "colour": "red"})
        self.assertEqual(resolved, {"values": [10, 20, 30], "value": 7})

    def test_seed(self):
        self.assertEqual(get_algorithm("hanoi").seed({"disks": 3}).pegs, ((3, 2, 1), (), ()))
        self.assertEqual(get_algorithm("factorial").seed({"n": 5}).elements, ())
        self.assertEqual(get_algorithm("queue_peek").seed({"values": [1, 2]}).values, (1, 2))

    def test_every_visualizer_runs_with_defaults(self):
        for info in list_algorithms():
            with self.subTest(algorithm=info.key):
                rec = Recorder()
                rec.start(info.key)
                metrics = rec.run_to_completion()
                self.assertGreater(metrics.total_ops, 0)
                for op in rec.ops:
                    if op.step is not None:
                        self.assertLess(op.step, len(info.steps))
                if info.kind == HANOI:
                    self.assertEqual(metrics.moves, 7)
                if info.kind == RECURSION:
                    self.assertEqual(rec.states[-1].frames, ())

    def test_to_dict(self):
        card = get_algorithm("merge_sort").to_dict()
        self.assertEqual(card["kind"], "sort")
        self.assertIn("stable", card["tags"])


class TestRecorder(unittest.TestCase):

    def test_unknown_algorithm(self):
        with self.assertRaises(ValidationError):
            Recorder().start("nope")

    def test_run_before_start(self):
        with self.assertRaises(RuntimeError):
            Recorder().run_to_completion()

    def test_states_line_up_with_ops(self):
        rec = Recorder()
        rec.start("insertion_sort", values=[3, 1, 2])
        metrics = rec.run_to_completion()
        self.assertEqual(len(rec.states), len(rec.ops) + 1)
        self.assertEqual(rec.state_after(0).values, (3, 1, 2))
        self.assertEqual(metrics.result, [1, 2, 3])
        self.assertEqual(metrics.input_size, 3)
        self.assertEqual(rec.final.sorted_indices, (0, 1, 2))

    def test_bubble_sorted_input_metrics(self):
        rec = Recorder()
        rec.start("bubble_sort", values=[1, 2, 3, 4, 5])
        metrics = rec.run_to_completion()
        self.assertEqual(metrics.swaps, 0)
        self.assertEqual(metrics.comparisons, 4)

    def test_factorial_metrics(self):
        rec = Recorder()
        rec.start("factorial", n=5)
        metrics = rec.run_to_completion()
        self.assertEqual(metrics.calls, 6)
        self.assertEqual(metrics.max_depth, 6)
        self.assertEqual(metrics.result, 120)

    def test_export(self):
        rec = Recorder()
        rec.start("stack_peek")
        rec.run_to_completion()
        exported = rec.export()
        self.assertEqual(exported["algo_key"], "stack_peek")
        self.assertEqual(exported["metrics"]["result"], 30)
        self.assertEqual(len(exported["states"]), len(rec.states))


class TestCompare(unittest.TestCase):

    def run_sort(self, key, values):
        rec = Recorder()
        rec.start(key, values=values)
        rec.run_to_completion()
        return rec

    def test_winner(self):
        values = [5, 4, 3, 2, 1, 0]
        comp = compare(self.run_sort("bubble_sort", values), self.run_sort("selection_sort", values))
        self.assertEqual(comp.winner_swaps, "Selection Sort")
        self.assertEqual(comp.left.result, comp.right.result)

    def test_tie(self):
        values = [2, 1, 3]
        comp = compare(self.run_sort("heap_sort", values), self.run_sort("heap_sort", values))
        self.assertEqual(comp.winner_comparisons, "tie")
        self.assertEqual(comp.winner_ops, "tie")

    def test_to_dict(self):
        values = [2, 1]
        data = compare(self.run_sort("bubble_sort", values), self.run_sort("merge_sort", values)).to_dict()
        self.assertEqual(set(data), {"left", "right", "winner_comparisons", "winner_swaps", "winner_ops"})


if __name__ == "__main__":
    unittest.main()
