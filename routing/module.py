"""
Purpose: Build and wire the routing engine for one host.
Dependencies: routing/* (settings, coordinates, oracle, reconciler, planner, executor, coordinator, hooks, feedback, state).
Ext Hooks: Multiple oracles selected per scene.
Host: Pass a movement authority (async move_entity_through) and, optionally, the oracle and a host for feedback selection.
"""

from routing.config import MODULE_NAME
from routing.coordinates import CoordinateTransform
from routing.coordinator import DragCoordinator
from routing.executor import WaypointExecutor
from routing.feedback import select_feedback_sink
from routing.hooks import Hooks, HooksManager
from routing.oracle import RouteOracleClient
from routing.planner import RoutePlanner
from routing.reconciler import DestinationReconciler
from routing.settings import RoutingSettings
from routing.state import SessionStore


class SmartRouting:
    """
    Composition root: one instance per host table.

    Host wiring is three calls: coordinator.on_drag_start on pointer down,
    `await coordinator.on_drag_drop` on pointer up (skip the host's own move
    when it returns True), and hooks.call("canvasInit") on teardown.
    """

    def __init__(self, movement, oracle=None, settings=None, hooks=None, host=None, start_delay=None):
        self.settings = settings or RoutingSettings()
        self.hooks = hooks or Hooks()
        self.store = SessionStore()
        self.oracle_client = RouteOracleClient(self.settings, oracle)
        self.transform = CoordinateTransform(self.settings, self.oracle_client.coordinate_helper)
        self.feedback = select_feedback_sink(host, self.transform)
        self.reconciler = DestinationReconciler(self.oracle_client, self.settings)
        self.planner = RoutePlanner(self.settings, self.transform, self.oracle_client, self.reconciler, self.feedback)
        self.executor = WaypointExecutor(self.settings, movement, self.store)
        coordinator_kwargs = {} if start_delay is None else {"start_delay": start_delay}
        self.coordinator = DragCoordinator(self.settings, self.oracle_client, self.planner, self.executor,
                                           self.store, **coordinator_kwargs)
        self.hooks_manager = HooksManager(self.hooks, self.settings, self.oracle_client, self.coordinator, self.executor)

    def initialize(self):
        print(f"[{MODULE_NAME}] Initializing Smart Token Routing with drop-time pathfinding")
        self.hooks_manager.setup_hooks()
        if self.oracle_client.is_ready():
            self.settings.debug("Route oracle detected and ready")
        else:
            self.settings.warn("Route oracle not found - pathfinding disabled until routeOracleReady")
        return self

    def shutdown(self):
        self.coordinator.clear_all_drag_states()
        self.executor.clear_all_animations()
        self.hooks_manager.cleanup()
