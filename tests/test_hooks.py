import unittest
from unittest import mock
from routing.config import MOVEMENT_FLAG
from routing.hooks import CANVAS_INIT, CANVAS_READY, CONTROL_TOKEN, ORACLE_READY, UPDATE_TOKEN, Hooks
from routing.models import Point, Token
from routing.module import SmartRouting
from routing.pathfinding.grid_oracle import GridRouteOracle


class NoMovement:
    async def move_entity_through(self, token, waypoints, options=None):
        pass


class TestHooks(unittest.TestCase):
    def test_handlers_run_in_order(self):
        hooks = Hooks()
        calls = []
        hooks.on("ping", lambda value: calls.append(("a", value)))
        hooks.on("ping", lambda value: calls.append(("b", value)))
        hooks.call("ping", 3)
        self.assertEqual(calls, [("a", 3), ("b", 3)])

    def test_off_removes_handler(self):
        hooks = Hooks()
        calls = []
        hook_id = hooks.on("ping", calls.append)
        hooks.off("ping", hook_id)
        hooks.call("ping", 1)
        self.assertEqual(calls, [])

    def test_failing_handler_does_not_stop_others(self):
        hooks = Hooks()
        calls = []

        def broken(value):
            raise ValueError("boom")

        hooks.on("ping", broken)
        hooks.on("ping", calls.append)
        with mock.patch("builtins.print") as mock_print:
            results = hooks.call("ping", 7)
        self.assertEqual(calls, [7])
        self.assertEqual(len(results), 1)
        self.assertIn("boom", mock_print.call_args[0][0])

    def test_unknown_event_is_noop(self):
        self.assertEqual(Hooks().call("nothing"), [])


class TestHooksManager(unittest.TestCase):
    def setUp(self):
        self.patcher = mock.patch("builtins.print")
        self.patcher.start()
        self.routing = SmartRouting(NoMovement(), oracle=GridRouteOracle(cols=10, rows=10)).initialize()
        self.hooks = self.routing.hooks
        self.token = Token("hero", "Hero", 25, 25)

    def tearDown(self):
        self.patcher.stop()

    def test_setup_registers_each_event_once(self):
        self.routing.hooks_manager.setup_hooks()
        events = [entry["event"] for entry in self.routing.hooks_manager.get_registered_hooks()]
        self.assertEqual(sorted(events), sorted([ORACLE_READY, CANVAS_READY, CANVAS_INIT, CONTROL_TOKEN, UPDATE_TOKEN]))

    def test_oracle_present_at_setup_is_ready(self):
        self.assertTrue(self.routing.oracle_client.is_ready())

    def test_oracle_ready_hook_attaches_oracle(self):
        routing = SmartRouting(NoMovement()).initialize()
        self.assertFalse(routing.oracle_client.is_ready())
        oracle = GridRouteOracle(cols=5, rows=5)
        routing.hooks.call(ORACLE_READY, oracle)
        self.assertTrue(routing.oracle_client.is_ready())
        self.assertIs(routing.oracle_client.oracle, oracle)

    def test_canvas_init_clears_sessions_and_animations(self):
        self.routing.coordinator.on_drag_start(self.token)
        self.routing.store.animating.add("ogre")
        generation = self.routing.store.generation

        self.hooks.call(CANVAS_INIT)
        self.assertIsNone(self.routing.coordinator.get_drag_state("hero"))
        self.assertEqual(self.routing.executor.get_animating_tokens(), set())
        self.assertEqual(self.routing.store.generation, generation + 1)

    def test_own_movement_updates_are_flagged(self):
        results = self.hooks.call(UPDATE_TOKEN, self.token, {"x": 75}, {MOVEMENT_FLAG: True})
        self.assertEqual(results, [True])

    def test_animating_token_updates_are_flagged(self):
        self.routing.store.animating.add("hero")
        self.assertEqual(self.hooks.call(UPDATE_TOKEN, self.token, {"x": 75}), [True])

    def test_external_updates_pass_through(self):
        self.routing.coordinator.on_drag_start(self.token)
        self.assertEqual(self.hooks.call(UPDATE_TOKEN, self.token, {"x": 75}), [False])
        self.assertTrue(self.routing.coordinator.is_token_being_dragged("hero"))

    def test_cleanup_unregisters(self):
        self.routing.hooks_manager.cleanup()
        self.assertEqual(self.routing.hooks_manager.get_registered_hooks(), [])
        self.routing.coordinator.on_drag_start(self.token)
        self.hooks.call(CANVAS_INIT)
        self.assertIsNotNone(self.routing.coordinator.get_drag_state("hero"))

    def test_shutdown_tears_down(self):
        self.routing.coordinator.on_drag_start(self.token)
        self.routing.shutdown()
        self.assertIsNone(self.routing.coordinator.get_drag_state("hero"))
        self.assertEqual(self.hooks.call(UPDATE_TOKEN, self.token, {"x": 75}), [])


class TestFeedbackSelection(unittest.TestCase):
    def test_host_grid_gets_highlight_sink(self):
        class Grid:
            def __init__(self):
                self.cells = None

            def set_path_highlight(self, cells):
                self.cells = cells

        class Host:
            grid = Grid()

        with mock.patch("builtins.print"):
            routing = SmartRouting(NoMovement(), oracle=GridRouteOracle(cols=10, rows=10), host=Host()).initialize()
        token = Token("hero", "Hero", 25, 25)
        routing.feedback.show_route(token, [Point(25, 25), Point(75, 75), Point(125, 75)])
        self.assertEqual(Host.grid.cells, [(0, 0), (1, 1), (2, 1)])
        routing.feedback.clear(token)
        self.assertEqual(Host.grid.cells, [])

    def test_host_without_grid_gets_null_sink(self):
        with mock.patch("builtins.print"):
            routing = SmartRouting(NoMovement(), host=object())
        routing.feedback.show_route(Token("hero"), [Point(0, 0), Point(1, 1)])
        routing.feedback.clear(Token("hero"))


if __name__ == '__main__':
    unittest.main()
