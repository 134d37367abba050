"""
Purpose: Square-grid math (neighbors, distance, footprint cells, straight lines).
Dependencies: None.
Ext Hooks: Hex equivalents.
"""

# 8 directions; orthogonal first so ties prefer straight steps
DIRECTIONS = [(1, 0), (0, 1), (-1, 0), (0, -1), (1, 1), (-1, 1), (-1, -1), (1, -1)]


def get_neighbors(x, y):
    return [(x + dx, y + dy) for dx, dy in DIRECTIONS]


def grid_distance(x1, y1, x2, y2):
    # Diagonals cost the same as straight steps (Chebyshev)
    return max(abs(x1 - x2), abs(y1 - y2))


def cells_covered(x, y, width=1, height=1):
    """Cells occupied by a footprint anchored (top-left) at (x, y)."""
    return [(x + dx, y + dy) for dx in range(width) for dy in range(height)]


def line_cells(x0, y0, x1, y1):
    """Bresenham line from (x0, y0) to (x1, y1), both ends included."""
    cells = []
    dx, dy = abs(x1 - x0), -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        cells.append((x0, y0))
        if x0 == x1 and y0 == y1:
            return cells
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
