"""
Tests for the Flask routes, through app.test_client().
"""

import time
import unittest

from main import SESSIONS, app


class AppTestCase(unittest.TestCase):

    def setUp(self):
        app.config["TESTING"] = True
        self.client = app.test_client()

    def post(self, url, payload=None):
        return self.client.post(url, json=payload or {})


class TestPages(AppTestCase):

    def test_index(self):
        res = self.client.get("/")
        self.assertEqual(res.status_code, 200)
        body = res.get_data(as_text=True)
        self.assertIn("DSA Visualizer", body)
        self.assertIn("<svg", body)
        self.assertIn("Bubble Sort", body)

    def test_algorithms(self):
        data = self.client.get("/api/algorithms").get_json()
        keys = [a["key"] for a in data["algorithms"]]
        self.assertIn("hanoi", keys)
        self.assertIn("list_traverse", keys)


class TestLoadAndControl(AppTestCase):

    def test_default_state(self):
        data = self.client.get("/api/state").get_json()
        self.assertEqual(data["algo_key"], "bubble_sort")
        self.assertEqual(data["playback"]["state"], "idle")
        self.assertIn("<svg", data["svg"])

    def test_load(self):
        res = self.post("/api/load", {"algo_key": "stack_push", "params": {"values": [1, 2], "value": "3"}})
        self.assertEqual(res.status_code, 200)
        data = res.get_json()
        self.assertEqual([e["value"] for e in data["snapshot"]["elements"]], [1, 2])
        self.assertIn("algo_selector", data)

    def test_load_errors(self):
        res = self.post("/api/load", {"algo_key": "nope"})
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.get_json()["error"], "Unknown algorithm: nope")

        res = self.post("/api/load", {"algo_key": "stack_pop", "params": {"values": []}})
        self.assertEqual(res.status_code, 400)
        self.assertIn("Stack is empty", res.get_json()["error"])

        res = self.post("/api/load", {"algo_key": "stack_pop", "params": [1, 2]})
        self.assertEqual(res.status_code, 400)

    def test_load_rejects_non_list_values(self):
        for bad in (5, True, {"a": 1}):
            with self.subTest(values=bad):
                res = self.post("/api/load", {"algo_key": "bubble_sort", "params": {"values": bad}})
                self.assertEqual(res.status_code, 400)
                self.assertEqual(res.get_json()["error"], "Values must be a list of numbers")

    def test_unknown_action(self):
        res = self.post("/api/control/explode")
        self.assertEqual(res.status_code, 400)

    def test_step_and_reset(self):
        self.post("/api/load", {"algo_key": "bubble_sort", "params": {"values": [2, 1]}})
        data = self.post("/api/control/step").get_json()
        self.assertEqual(data["playback"]["applied"], 1)
        self.assertEqual(data["playback"]["state"], "paused")

        data = self.post("/api/control/reset").get_json()
        self.assertEqual(data["playback"]["applied"], 0)
        self.assertEqual(data["playback"]["state"], "idle")

    def test_run_to_completion(self):
        self.post("/api/load", {"algo_key": "factorial", "params": {"n": 3}})
        self.post("/api/config/speed", {"speed_ms": 0})
        self.post("/api/control/start")

        data = None
        for _ in range(100):
            data = self.client.get("/api/state").get_json()
            if data["playback"]["is_complete"]:
                break
            time.sleep(0.02)
        self.assertTrue(data["playback"]["is_complete"])
        self.assertEqual(data["result"], 6)
        self.assertTrue(any("complete" in m for m in data["messages"]))

    def test_start_then_pause(self):
        self.post("/api/load", {"algo_key": "bubble_sort"})
        self.post("/api/config/speed", {"speed_ms": 2000})
        data = self.post("/api/control/start").get_json()
        self.assertTrue(data["playback"]["is_running"])

        res = self.post("/api/config/speed", {"speed_ms": 100})
        self.assertEqual(res.status_code, 400)

        data = self.post("/api/control/pause").get_json()
        self.assertEqual(data["playback"]["state"], "paused")

    def test_randomize(self):
        self.post("/api/load", {"algo_key": "selection_sort"})
        data = self.post("/api/randomize", {"length": 5}).get_json()
        self.assertEqual(len(data["snapshot"]["elements"]), 5)

        res = self.post("/api/randomize", {"length": 0})
        self.assertEqual(res.status_code, 400)


class TestKeepAndClear(AppTestCase):

    def wait_complete(self):
        data = None
        for _ in range(100):
            data = self.client.get("/api/state").get_json()
            if data["playback"]["is_complete"]:
                return data
            time.sleep(0.02)
        self.fail(f"run did not complete: {data['playback']}")

    def test_push_then_pop_from_kept_stack(self):
        self.post("/api/load", {"algo_key": "stack_push", "params": {"values": [1, 2], "value": 3}})
        self.post("/api/config/speed", {"speed_ms": 0})
        self.post("/api/control/start")
        self.assertTrue(self.wait_complete()["playback"]["structure"])

        data = self.post("/api/control/commit").get_json()
        self.assertEqual(data["params"]["values"], [1, 2, 3])
        self.assertIn('data-param="values" value="1, 2, 3"', data["algo_selector"])

        self.post("/api/load", {"algo_key": "stack_pop", "params": {"values": data["params"]["values"]}})
        self.post("/api/control/start")
        self.assertEqual(self.wait_complete()["result"], 3)
        data = self.post("/api/control/commit").get_json()
        self.assertEqual([e["value"] for e in data["snapshot"]["elements"]], [1, 2])

    def test_commit_before_complete(self):
        self.post("/api/load", {"algo_key": "queue_enqueue"})
        res = self.post("/api/control/commit")
        self.assertEqual(res.status_code, 400)

    def test_clear(self):
        self.post("/api/load", {"algo_key": "list_traverse"})
        data = self.post("/api/control/clear").get_json()
        self.assertEqual(data["snapshot"]["elements"], [])
        self.assertIn("btn-clear", data["controls"])

    def test_sorts_have_no_structure_buttons(self):
        data = self.post("/api/load", {"algo_key": "heap_sort"}).get_json()
        self.assertFalse(data["playback"]["structure"])
        self.assertNotIn("btn-commit", data["controls"])
        self.assertEqual(self.post("/api/control/clear").status_code, 400)


class TestSessions(AppTestCase):

    def test_sessions_are_bounded(self):
        limit = app.config["MAX_SESSIONS"]
        self.addCleanup(app.config.__setitem__, "MAX_SESSIONS", limit)
        app.config["MAX_SESSIONS"] = 3

        app.test_client().get("/api/state")
        oldest = SESSIONS[next(iter(SESSIONS))]
        for _ in range(5):
            app.test_client().get("/api/state")
        self.assertLessEqual(len(SESSIONS), 3)
        self.assertNotIn(oldest, SESSIONS.values())
        self.assertTrue(oldest.controller.token.cancelled)

    def test_returning_client_keeps_its_session(self):
        self.post("/api/load", {"algo_key": "hanoi", "params": {"disks": 2}})
        for _ in range(3):
            app.test_client().get("/api/state")
        self.assertEqual(self.client.get("/api/state").get_json()["algo_key"], "hanoi")

    def test_index_shows_loaded_visualizer(self):
        self.post("/api/load", {"algo_key": "power", "params": {"base": 3, "exp": 2}})
        body = self.client.get("/").get_data(as_text=True)
        self.assertIn('value="power" data-kind="recursion" selected', body)
        self.assertIn('data-param="base" value="3"', body)


class TestSpeed(AppTestCase):

    def test_preset(self):
        data = self.post("/api/config/speed", {"preset": "fast"}).get_json()
        self.assertEqual(data["speed_ms"], 150)

    def test_invalid(self):
        self.assertEqual(self.post("/api/config/speed", {"speed_ms": 5000}).status_code, 400)
        self.assertEqual(self.post("/api/config/speed", {"preset": "ludicrous"}).status_code, 400)
        self.assertEqual(self.post("/api/config/speed", {}).status_code, 400)


class TestCompareRoute(AppTestCase):

    def test_compare(self):
        res = self.post("/api/compare", {"left": "bubble_sort", "right": "merge_sort", "values": [4, 3, 2, 1]})
        self.assertEqual(res.status_code, 200)
        data = res.get_json()
        self.assertEqual(data["comparison"]["left"]["result"], [1, 2, 3, 4])
        self.assertIn("Bubble Sort", data["html"])

    def test_compare_rejects_non_sorts(self):
        res = self.post("/api/compare", {"left": "stack_push", "right": "merge_sort"})
        self.assertEqual(res.status_code, 400)

    def test_compare_bad_values(self):
        res = self.post("/api/compare", {"values": ["a"]})
        self.assertEqual(res.status_code, 400)


if __name__ == "__main__":
    unittest.main()
