from roomwright.errors import InvalidDefinition


class DefinitionTables:
    """Everything the declaration pass found, before any reference is resolved."""

    def __init__(self):
        self.title = None
        self.author = None
        self.description = None
        self.special_help = None
        self.locations = {}
        self.items = {}
        self.obstacles = {}
        # location id -> {Direction: target location id}
        self.connections = {}
        # obstacle id -> (location id, Direction)
        self.placements = {}
        # obstacle id -> [item id, ...] / [obstacle id, ...]
        self.item_refs = {}
        self.obstacle_refs = {}

    # --- Declaration helpers (called by the grammars) ---

    def declare_game(self, title, author, description):
        self.title = title
        self.author = author
        self.description = description

    def declare_location(self, location, line=None):
        if location.id in self.locations:
            raise InvalidDefinition(f"location '{location.id}' is declared twice", line)
        self.locations[location.id] = location
        self.connections[location.id] = {}

    def declare_item(self, location_id, item, line=None):
        if item.id in self.items:
            raise InvalidDefinition(f"item '{item.id}' is declared twice", line)
        self.items[item.id] = item
        self.locations[location_id].items.add(item)

    def declare_connection(self, location_id, direction, target_id):
        self.connections[location_id][direction] = target_id

    def declare_obstacle(self, location_id, obstacle, item_refs=(), obstacle_refs=(), line=None):
        if obstacle.id in self.obstacles:
            raise InvalidDefinition(f"obstacle '{obstacle.id}' is declared twice", line)
        self.obstacles[obstacle.id] = obstacle
        self.placements[obstacle.id] = (location_id, obstacle.direction)
        if item_refs:
            self.item_refs[obstacle.id] = list(item_refs)
        if obstacle_refs:
            self.obstacle_refs[obstacle.id] = list(obstacle_refs)

    def check_complete(self):
        if self.title is None:
            raise InvalidDefinition("the game header is missing")
        if not self.locations:
            raise InvalidDefinition("a game needs at least one location")
