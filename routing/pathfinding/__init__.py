"""
Reference route oracle for the routing engine.

A square-grid A* oracle with its coordinate helper and direct-step collision
test, and an HTTP client for the same oracle served by server/app.py. Any other
oracle only needs query_route, collides_direct and coordinate_helper.
"""
