"""
Purpose: Failure taxonomy for the routing engine.
Dependencies: None.
Ext Hooks: None.

NoRoute is not an exception: RouteOracleClient.query returns None for it.
"""


class RoutingError(Exception):
    """Base class for routing engine failures."""


class CoordinateUnavailable(RoutingError):
    """The coordinate helper is missing; fatal for the current gesture."""


class OracleUnavailable(RoutingError):
    """The routing oracle is missing or not ready."""


class MoveExecutionError(RoutingError):
    """The movement authority rejected or failed a waypoint sequence."""

    def __init__(self, token_id, message):
        super().__init__(f"Token {token_id}: {message}")
        self.token_id = token_id
