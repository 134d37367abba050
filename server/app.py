"""
Purpose: Flask server exposing the reference route oracle.
Dependencies: flask, server/routes/oracle.py, routing/pathfinding/grid_oracle.py.
Ext Hooks: Load maps from scene files.
Server Only: Run with `python -m server.app`; clients use routing.pathfinding.http_oracle.HttpRouteOracle.
"""

from flask import Flask
from routing.pathfinding.grid_oracle import GridRouteOracle, generate_tiles
from server.routes.oracle import bp


def create_app(oracle=None):
    app = Flask(__name__)
    if oracle is None:
        oracle = GridRouteOracle(generate_tiles(20, 15, seed=7), cols=20, rows=15)
    app.config['ROUTE_ORACLE'] = oracle
    app.register_blueprint(bp)
    return app


if __name__ == "__main__":
    create_app().run(debug=True)
