"""
Purpose: Client settings for routing (enable, auto-follow, max search distance, debug output).
Dependencies: routing/config.py.
Ext Hooks: Persist through a host settings panel; this module only holds current values.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Set
from routing.config import (
    MODULE_NAME,
    DEFAULT_ENABLE_PATHFINDING,
    DEFAULT_AUTO_FOLLOW_PATH,
    DEFAULT_MAX_PATH_DISTANCE,
    MAX_PATH_DISTANCE_RANGE,
    DEFAULT_DEBUG_MODE,
)

SETTING_NAMES = ("enable_pathfinding", "auto_follow_path", "max_path_distance", "debug_mode")


@dataclass
class RoutingSettings:
    """
    Current values of the routing settings.

    The engine reads these at decision points (drag start, drop, budget
    computation) rather than caching them, so changes apply to the next gesture.
    Listeners registered with add_listener are called with the new value
    whenever set() changes a setting.
    """

    enable_pathfinding: bool = DEFAULT_ENABLE_PATHFINDING
    auto_follow_path: bool = DEFAULT_AUTO_FOLLOW_PATH  # Follow the computed route instead of moving directly
    max_path_distance: int = DEFAULT_MAX_PATH_DISTANCE  # Upper bound for the oracle search budget
    debug_mode: bool = DEFAULT_DEBUG_MODE
    listeners: Dict[str, Set[Callable]] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.max_path_distance = self._validate("max_path_distance", self.max_path_distance)

    def get(self, name: str) -> Any:
        if name not in SETTING_NAMES:
            raise KeyError(f"Unknown setting: {name}")
        return getattr(self, name)

    def set(self, name: str, value: Any):
        """Set a setting by name and notify its listeners if the value changed."""
        if name not in SETTING_NAMES:
            raise KeyError(f"Unknown setting: {name}")
        value = self._validate(name, value)
        if getattr(self, name) == value:
            return
        setattr(self, name, value)
        if name == "enable_pathfinding":
            print(f"[{MODULE_NAME}] Pathfinding {'enabled' if value else 'disabled'}")
        self.notify_listeners(name, value)

    def _validate(self, name, value):
        if name != "max_path_distance":
            return bool(value)
        low, high, step = MAX_PATH_DISTANCE_RANGE
        value = int(value)
        if value < low or value > high:
            raise ValueError(f"max_path_distance must be between {low} and {high}, got {value}")
        # Snap to the slider step
        return low + round((value - low) / step) * step

    def add_listener(self, name: str, callback: Callable):
        self.listeners.setdefault(name, set()).add(callback)

    def remove_listener(self, name: str, callback: Callable):
        if name in self.listeners:
            self.listeners[name].discard(callback)

    def notify_listeners(self, name: str, value: Any):
        for callback in list(self.listeners.get(name, ())):
            try:
                callback(value)
            except Exception as e:
                self.warn(f"Error in setting listener for {name}: {e}")

    def is_pathfinding_enabled(self) -> bool:
        return self.enable_pathfinding

    def is_auto_follow_path_enabled(self) -> bool:
        return self.auto_follow_path

    def get_max_path_distance(self) -> int:
        return self.max_path_distance

    def is_debug_mode(self) -> bool:
        return self.debug_mode

    def debug(self, message: str):
        """Print a diagnostic line when debug mode is on."""
        if self.debug_mode:
            print(f"[{MODULE_NAME}] {message}")

    def warn(self, message: str):
        print(f"[{MODULE_NAME}] WARNING: {message}")
