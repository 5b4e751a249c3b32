"""Compass directions used for movement and for carving doors."""

from enum import Enum


class Direction(Enum):
    """A cardinal direction. The value is the label shown to players."""

    NORTH = "N"
    SOUTH = "S"
    WEST = "W"
    EAST = "E"

    @property
    def dx(self) -> int:
        return _DISPLACEMENTS[self][0]

    @property
    def dy(self) -> int:
        return _DISPLACEMENTS[self][1]

    @property
    def inverse(self) -> "Direction":
        return _INVERSES[self]

    @classmethod
    def from_command(cls, word: str) -> "Direction | None":
        """Resolve a movement command like ``n`` or ``W`` to a direction."""
        return _COMMANDS.get(word.strip().lower())


# y grows southwards, so north is up the grid.
_DISPLACEMENTS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
    Direction.EAST: (1, 0),
}

_INVERSES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
    Direction.EAST: Direction.WEST,
}

_COMMANDS = {d.value.lower(): d for d in Direction}
