"""
Purpose: Route preview sinks (show the planned path while the token is dropped).
Dependencies: routing/models.py.
Ext Hooks: A sink per host renderer; pick one at startup with select_feedback_sink.
"""


class MovementFeedbackSink:
    """Receives planned routes for display. Implementations must not raise into the engine."""

    def show_route(self, token, points):
        raise NotImplementedError

    def clear(self, token):
        raise NotImplementedError


class NullFeedbackSink(MovementFeedbackSink):
    """Host without a preview surface."""

    def show_route(self, token, points):
        pass

    def clear(self, token):
        pass


class HighlightFeedbackSink(MovementFeedbackSink):
    """Writes the route cells into a grid's path highlight (see client/map/square_grid.py)."""

    def __init__(self, grid, transform):
        self.grid = grid
        self.transform = transform

    def show_route(self, token, points):
        token_data = self.transform.get_token_data(token)
        cells = [tuple(self.transform.to_route_space(p, token_data)) for p in points]
        self.grid.set_path_highlight(cells)

    def clear(self, token):
        self.grid.set_path_highlight([])


def select_feedback_sink(host, transform):
    """Choose the sink once for the host's lifetime."""
    grid = getattr(host, "grid", None)
    if grid is not None and hasattr(grid, "set_path_highlight"):
        return HighlightFeedbackSink(grid, transform)
    return NullFeedbackSink()
