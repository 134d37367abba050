"""
Purpose: Host event bus and the routing engine's subscriptions to it.
Dependencies: routing/config.py, itertools.
Ext Hooks: Combat movement tracking on updateToken.
Host: Hosts call hooks.call("canvasInit") on scene teardown, "routeOracleReady" when the oracle loads, etc.
"""

import itertools
from routing.config import MOVEMENT_FLAG, MODULE_NAME

ORACLE_READY = "routeOracleReady"
CANVAS_READY = "canvasReady"
CANVAS_INIT = "canvasInit"
CONTROL_TOKEN = "controlToken"
UPDATE_TOKEN = "updateToken"


class Hooks:
    """Named events with ordered handlers; a failing handler does not stop the others."""

    def __init__(self):
        self.handlers = {}  # event -> {id: fn}
        self._ids = itertools.count(1)

    def on(self, event, fn):
        hook_id = next(self._ids)
        self.handlers.setdefault(event, {})[hook_id] = fn
        return hook_id

    def off(self, event, hook_id):
        self.handlers.get(event, {}).pop(hook_id, None)

    def call(self, event, *args, **kwargs):
        results = []
        for hook_id, fn in list(self.handlers.get(event, {}).items()):
            try:
                results.append(fn(*args, **kwargs))
            except Exception as e:
                print(f"[{MODULE_NAME}] WARNING: Error in {event} hook {hook_id}: {e}")
        return results


class HooksManager:
    """Installs the engine's hook handlers once and removes them on cleanup."""

    def __init__(self, hooks, settings, oracle_client, coordinator, executor):
        self.hooks = hooks
        self.settings = settings
        self.oracle_client = oracle_client
        self.coordinator = coordinator
        self.executor = executor
        self.registered_hooks = []  # (event, id)
        self.installed = False

    def setup_hooks(self):
        if self.installed:
            return
        self._register(ORACLE_READY, self.on_oracle_ready)
        self._register(CANVAS_READY, self.on_canvas_ready)
        self._register(CANVAS_INIT, self.on_canvas_init)
        self._register(CONTROL_TOKEN, self.on_control_token)
        self._register(UPDATE_TOKEN, self.on_token_update)
        self.installed = True
        # The oracle may have loaded before us
        if self.oracle_client.oracle is not None:
            self.oracle_client.set_ready(True)

    def _register(self, event, fn):
        self.registered_hooks.append((event, self.hooks.on(event, fn)))

    def on_oracle_ready(self, oracle=None):
        if oracle is not None:
            self.oracle_client.attach(oracle)
        self.oracle_client.set_ready(self.oracle_client.oracle is not None)

    def on_canvas_ready(self, *args):
        self.settings.debug("Canvas ready - pathfinding available")

    def on_canvas_init(self, *args):
        """Scene teardown: forget every drag and animation."""
        self.coordinator.clear_all_drag_states()
        self.executor.clear_all_animations()
        self.settings.debug("Canvas cleanup completed")

    def on_control_token(self, token, controlled):
        if not self.settings.is_pathfinding_enabled() or not self.oracle_client.is_ready():
            return
        if controlled:
            self.settings.debug(f"Token {token.name} selected for pathfinding")

    def on_token_update(self, token, changes, options=None):
        """Returns True for updates caused by our own waypoint movement, which are ignored."""
        options = options or {}
        if options.get(MOVEMENT_FLAG) or self.executor.is_token_animating(token.id):
            return True
        if ("x" in changes or "y" in changes) and self.coordinator.is_token_being_dragged(token.id):
            self.settings.debug(f"{token.name} moved externally during a drag")
        return False

    def cleanup(self):
        for event, hook_id in self.registered_hooks:
            self.hooks.off(event, hook_id)
        self.registered_hooks.clear()
        self.installed = False
        self.settings.debug("All hooks cleaned up")

    def get_registered_hooks(self):
        return [{"event": event, "id": hook_id} for event, hook_id in self.registered_hooks]
