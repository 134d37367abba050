"""
Purpose: HTTP endpoints for route queries and direct-step collision tests.
Dependencies: flask, routing/pathfinding/grid_oracle.py, routing/models.py.
Ext Hooks: Batch queries for several tokens.
Server Only: The oracle instance lives in app.config['ROUTE_ORACLE'].
"""
from flask import Blueprint, current_app, request, jsonify
from routing.models import Footprint

bp = Blueprint('oracle', __name__)


def _oracle():
    return current_app.config['ROUTE_ORACLE']


def _parse_point(value):
    """Cell on a grid table, pixel point on a gridless one; the oracle decides which."""
    x, y = value
    x, y = float(x), float(y)
    if x.is_integer() and y.is_integer():
        return int(x), int(y)
    return x, y


def _parse_request(data, required):
    """Validated (origin, destination, footprint) or None."""
    if not data or any(key not in data for key in required):
        return None
    try:
        origin = _parse_point(data['origin'])
        destination = _parse_point(data['destination'])
        width, height = data.get('footprint') or (1, 1)
        footprint = Footprint(int(width), int(height))
    except (TypeError, ValueError):
        return None
    return origin, destination, footprint


class _Piece:
    def __init__(self, footprint):
        self.footprint = footprint


@bp.route("/api/route", methods=["POST"])
def handle_route():
    data = request.get_json(silent=True)
    parsed = _parse_request(data, ('origin', 'destination'))
    if parsed is None:
        return jsonify({"error": "Invalid data"}), 400
    origin, destination, footprint = parsed

    budget = data.get('max_search_budget')
    if budget is not None and not isinstance(budget, (int, float)):
        return jsonify({"error": "Invalid max_search_budget"}), 400

    result = _oracle().query_route(origin, destination, entity=_Piece(footprint), max_search_budget=budget)
    return jsonify({"path": [list(p) for p in result["path"]]})


@bp.route("/api/collides", methods=["POST"])
def handle_collides():
    parsed = _parse_request(request.get_json(silent=True), ('origin', 'destination'))
    if parsed is None:
        return jsonify({"error": "Invalid data"}), 400
    origin, destination, footprint = parsed
    return jsonify({"collides": _oracle().collides_direct(origin, destination, footprint)})


@bp.route("/api/grid", methods=["GET"])
def handle_grid():
    return jsonify(_oracle().get_grid_state())
