"""
Purpose: Grid tiles with movement cost and obstacles for the reference oracle.
Dependencies: None.
Ext Hooks: More terrain types (e.g., water: swim cost, difficult terrain per system).
Host/Oracle: Host draws with color; oracle reads cost/blocked (JSON serializable for the server).
"""

TILE_TYPES = {
    'plain': {'cost': 1, 'blocked': False, 'color': (0, 100, 0)},  # Green
    'rough': {'cost': 2, 'blocked': False, 'color': (110, 90, 40)},  # Brown
    'wall': {'cost': float('inf'), 'blocked': True, 'color': (100, 100, 100)},  # Gray
}


class Tile:
    def __init__(self, tile_type='plain'):
        if tile_type not in TILE_TYPES:
            tile_type = 'plain'
        self.type = tile_type
        spec = TILE_TYPES[tile_type]
        self.cost = spec['cost']
        self.blocked = spec['blocked']
        self.color = spec['color']

    def to_dict(self):
        return {
            'type': self.type,
            'cost': self.cost if self.cost != float('inf') else None,
            'blocked': self.blocked
        }

    @classmethod
    def from_dict(cls, data):
        tile = cls(data.get('type', 'plain'))
        if 'blocked' in data:
            tile.blocked = bool(data['blocked'])
        if data.get('cost') is not None:
            tile.cost = data['cost']
        elif tile.blocked:
            tile.cost = float('inf')
        return tile
