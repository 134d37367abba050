"""
Purpose: A* pathfinding on a square grid with costs, obstacles and multi-cell footprints.
Dependencies: routing/pathfinding/grid_utils.py (get_neighbors, grid_distance, cells_covered), heapq.
Ext Hooks: Dynamic costs (e.g., other tokens as soft obstacles).
Oracle: Used by GridRouteOracle; the engine never calls it directly.
"""

import heapq
from routing.pathfinding.grid_utils import get_neighbors, grid_distance, cells_covered


def step_cost(cell, grid, width=1, height=1):
    """Cost of standing on `cell` with the footprint; None when any covered tile is missing or blocked."""
    cost = 0
    for pos in cells_covered(cell[0], cell[1], width, height):
        tile = grid.get(pos)
        if tile is None or tile.blocked:
            return None
        cost = max(cost, tile.cost)
    return cost


def a_star(start, goal, grid, max_distance=None, width=1, height=1):
    """A* pathfinding with cost and obstacle support. max_distance caps the path cost searched."""
    INF = float('inf')
    start, goal = tuple(start), tuple(goal)
    if step_cost(start, grid, width, height) is None or step_cost(goal, grid, width, height) is None:
        return []
    if start == goal:
        return [start]

    g_score = {start: 0}
    came_from = {}
    counter = 0  # FIFO tie-break keeps results deterministic
    open_set = [(grid_distance(*start, *goal), counter, start)]
    closed = set()

    while open_set:
        current = heapq.heappop(open_set)[2]
        if current in closed:
            continue
        if current == goal:
            return reconstruct_path(came_from, current)
        closed.add(current)

        for neighbor in get_neighbors(*current):
            cost = step_cost(neighbor, grid, width, height)
            if cost is None or neighbor in closed:
                continue
            if not _diagonal_clear(current, neighbor, grid, width, height):
                continue
            tentative_g_score = g_score[current] + cost
            if max_distance is not None and tentative_g_score > max_distance:
                continue
            if tentative_g_score < g_score.get(neighbor, INF):
                g_score[neighbor] = tentative_g_score
                came_from[neighbor] = current
                counter += 1
                heapq.heappush(open_set, (tentative_g_score + grid_distance(*neighbor, *goal), counter, neighbor))

    return []  # No path found


def _diagonal_clear(current, neighbor, grid, width, height):
    """No corner cutting: a diagonal step needs both orthogonal cells open."""
    dx, dy = neighbor[0] - current[0], neighbor[1] - current[1]
    if dx == 0 or dy == 0:
        return True
    return (step_cost((current[0] + dx, current[1]), grid, width, height) is not None
            and step_cost((current[0], current[1] + dy), grid, width, height) is not None)


def reconstruct_path(came_from, current):
    """Walk came_from back to the start; the start is included."""
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path
