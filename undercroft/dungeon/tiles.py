# Tile constants centralized for modular imports; the characters double as the ASCII rendering
FLOOR = "."
WALL = "#"
EXIT = "E"
STAIRS_UP = "^"
STAIRS_DOWN = "v"

TILES = (FLOOR, WALL, EXIT, STAIRS_UP, STAIRS_DOWN)

__all__ = ["FLOOR", "WALL", "EXIT", "STAIRS_UP", "STAIRS_DOWN", "TILES"]
