"""Data structures for the maze and everything placed in it.

Rooms are immutable values. To change one, read it from the Maze, build a
modified copy with ``dataclasses.replace`` and write it back with
``Maze.update_room``.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .direction import Direction


class ItemType(Enum):
    KEY = "key"
    CHEST = "chest"
    GRAIL = "grail"
    TORCHLIGHT = "torchlight"
    FOOD = "food"
    SWORD = "sword"

    @classmethod
    def from_name(cls, name: str) -> "ItemType | None":
        """Look up an item type by its command name, e.g. ``"food"``."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Item:
    """A carryable (or, for chests, fixed) thing. Equal items share a type."""

    type: ItemType

    @property
    def name(self) -> str:
        return self.type.value


@dataclass(frozen=True)
class Gold:
    amount: int


@dataclass(frozen=True)
class Monster:
    name: str


class Lighting(Enum):
    """How well a room can be seen."""

    NORMAL = "normal"
    DARK = "dark"
    LIT = "lit"  # a dark room where someone left a torch


@dataclass(frozen=True)
class Room:
    """A single maze cell."""

    x: int
    y: int
    is_active: bool = True
    doors: frozenset[Direction] = frozenset()
    items: tuple[Item, ...] = ()
    lighting: Lighting = Lighting.NORMAL
    monster: Monster | None = None
    gold: Gold | None = None

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_dark(self) -> bool:
        """True for dark rooms, whether or not a torch has lit them."""
        return self.lighting is not Lighting.NORMAL

    @property
    def is_unlit(self) -> bool:
        """True only for dark rooms nobody has lit yet."""
        return self.lighting is Lighting.DARK

    def has_item(self, item_type: ItemType) -> bool:
        return any(item.type is item_type for item in self.items)

    def find_item(self, item_type: ItemType) -> int | None:
        """Index of the first item of the given type, or None."""
        for index, item in enumerate(self.items):
            if item.type is item_type:
                return index
        return None


@dataclass
class Maze:
    """A fixed-size grid of rooms, stored as rows indexed ``[y][x]``."""

    width: int
    height: int
    rows: list[list[Room]] = field(default_factory=list)

    @classmethod
    def blank(cls, width: int, height: int, room_count: int | None = None) -> "Maze":
        """Build a door-less grid whose first ``room_count`` cells are active.

        Cells are activated in row-major order; the remainder are inactive
        filler that pads the grid out to a rectangle.
        """
        if room_count is None:
            room_count = width * height
        rows = [
            [
                Room(x=x, y=y, is_active=y * width + x < room_count)
                for x in range(width)
            ]
            for y in range(height)
        ]
        return cls(width=width, height=height, rows=rows)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def room(self, x: int, y: int) -> Room | None:
        """Return the room at (x, y), or None when outside the grid."""
        if not self.in_bounds(x, y):
            return None
        return self.rows[y][x]

    def update_room(self, room: Room) -> None:
        """Replace the room stored at the given room's own coordinate."""
        if not self.in_bounds(room.x, room.y):
            raise IndexError(f"room ({room.x}, {room.y}) is outside the maze")
        self.rows[room.y][room.x] = room

    def __iter__(self) -> Iterator[Room]:
        for row in self.rows:
            yield from row

    def active_rooms(self) -> list[Room]:
        return [room for room in self if room.is_active]

    @property
    def room_count(self) -> int:
        return len(self.active_rooms())
