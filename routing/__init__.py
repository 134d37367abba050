"""
Drag-to-route coordination engine.

Turns a manual drag of a token into a routed move around obstacles: coordinate
transforms, the oracle client, destination reconciliation, the drag state
machine and the waypoint executor live here. The reference grid oracle lives in
routing.pathfinding.
"""
