"""Random maze generation.

The maze is carved with a randomized depth-first traversal from the start
room, which yields a spanning tree over every active room. Content is then
scattered over the tree:

  chest, key      one each, never in the start room, never together
  darkness        each non-critical room with ``darkness_chance``
  monsters        room_count // 2 draws, critical or occupied rooms skipped
  torchlight      one, in a non-critical room without a monster (if any)
  food            room_count // 2, any active room, repeats allowed
  sword           one, anywhere but the chest room
  gold            room_count // 2 draws of 5-30 coins, later draws overwrite

"Critical" rooms are the start, the chest room and the key room.
"""

import math
import random
from dataclasses import replace

from ..logging import get_logger
from .direction import Direction
from .world import Gold, Item, ItemType, Lighting, Maze, Monster, Room

logger = get_logger(__name__)

START = (0, 0)
MONSTER_NAMES = ("dragon", "goblin", "orc")
GOLD_RANGE = (5, 30)
DARKNESS_CHANCE = 0.2

# Start, chest and key must all be different rooms
MIN_ROOMS = 3


class MazeConfigurationError(ValueError):
    """The requested maze cannot be generated."""


def grid_shape(room_count: int) -> tuple[int, int]:
    """Return (width, height) of the smallest near-square grid for room_count."""
    width = math.isqrt(room_count)
    if width * width < room_count:
        width += 1
    height = -(-room_count // width)
    return width, height


class MazeGenerator:
    """Builds fully populated mazes."""

    def __init__(
        self,
        rng: random.Random | None = None,
        darkness_chance: float = DARKNESS_CHANCE,
    ):
        self.rng = rng or random.Random()
        self.darkness_chance = darkness_chance

    def generate_square(self, size: int) -> Maze:
        """Generate a size x size maze with every room active."""
        if size < 1:
            raise MazeConfigurationError(f"maze size must be positive, got {size}")
        return self.generate(size * size)

    def generate(self, room_count: int) -> Maze:
        """Generate a connected maze with exactly room_count active rooms."""
        if room_count < MIN_ROOMS:
            raise MazeConfigurationError(
                f"a maze needs at least {MIN_ROOMS} rooms (start, chest and key), "
                f"got {room_count}"
            )

        width, height = grid_shape(room_count)
        maze = Maze.blank(width, height, room_count)

        self._carve(maze)
        chest = self._place_chest(maze)
        key = self._place_key(maze, chest)
        critical = {START, chest, key}

        self._place_darkness(maze, critical)
        monsters = self._place_monsters(maze, critical, room_count // 2)
        torch = self._place_torch(maze, critical)
        for _ in range(room_count // 2):
            self._add_item(maze, self._random_active(maze), ItemType.FOOD)
        sword = self._place_sword(maze, chest)
        self._place_gold(maze, room_count // 2)

        logger.info(
            "maze_generated",
            rooms=room_count,
            width=width,
            height=height,
            chest=chest,
            key=key,
            sword=sword,
            torch=torch,
            monsters=monsters,
        )
        return maze

    def _carve(self, maze: Maze) -> None:
        """Open doors along a randomized depth-first spanning tree."""
        visited = {START}
        stack = [(START, iter(self._shuffled_directions()))]
        while stack:
            (x, y), directions = stack[-1]
            for direction in directions:
                nx, ny = x + direction.dx, y + direction.dy
                neighbour = maze.room(nx, ny)
                if neighbour is None or not neighbour.is_active:
                    continue
                if (nx, ny) in visited:
                    continue
                self._open_door(maze, (x, y), direction)
                visited.add((nx, ny))
                stack.append(((nx, ny), iter(self._shuffled_directions())))
                break
            else:
                stack.pop()

    def _shuffled_directions(self) -> list[Direction]:
        directions = list(Direction)
        self.rng.shuffle(directions)
        return directions

    def _open_door(self, maze: Maze, pos: tuple[int, int], direction: Direction) -> None:
        here = maze.room(*pos)
        there = maze.room(pos[0] + direction.dx, pos[1] + direction.dy)
        maze.update_room(replace(here, doors=here.doors | {direction}))
        maze.update_room(replace(there, doors=there.doors | {direction.inverse}))

    def _candidates(self, maze: Maze, exclude: set[tuple[int, int]]) -> list[Room]:
        return [room for room in maze.active_rooms() if room.position not in exclude]

    def _random_active(self, maze: Maze) -> tuple[int, int]:
        return self.rng.choice(maze.active_rooms()).position

    def _add_item(self, maze: Maze, pos: tuple[int, int], item_type: ItemType) -> None:
        room = maze.room(*pos)
        maze.update_room(replace(room, items=room.items + (Item(item_type),)))

    def _place_required(
        self, maze: Maze, item_type: ItemType, exclude: set[tuple[int, int]]
    ) -> tuple[int, int]:
        candidates = self._candidates(maze, exclude)
        if not candidates:
            raise MazeConfigurationError(f"no room left to place the {item_type.value}")
        pos = self.rng.choice(candidates).position
        self._add_item(maze, pos, item_type)
        return pos

    def _place_chest(self, maze: Maze) -> tuple[int, int]:
        return self._place_required(maze, ItemType.CHEST, {START})

    def _place_key(self, maze: Maze, chest: tuple[int, int]) -> tuple[int, int]:
        return self._place_required(maze, ItemType.KEY, {START, chest})

    def _place_darkness(self, maze: Maze, critical: set[tuple[int, int]]) -> None:
        for room in self._candidates(maze, critical):
            if self.rng.random() < self.darkness_chance:
                maze.update_room(replace(room, lighting=Lighting.DARK))

    def _place_monsters(
        self, maze: Maze, critical: set[tuple[int, int]], draws: int
    ) -> int:
        placed = 0
        for _ in range(draws):
            room = maze.room(*self._random_active(maze))
            if room.position in critical or room.monster is not None:
                continue
            monster = Monster(name=self.rng.choice(MONSTER_NAMES))
            maze.update_room(replace(room, monster=monster))
            placed += 1
        return placed

    def _place_torch(
        self, maze: Maze, critical: set[tuple[int, int]]
    ) -> tuple[int, int] | None:
        candidates = [
            room for room in self._candidates(maze, critical) if room.monster is None
        ]
        if not candidates:
            logger.debug("torch_skipped", reason="no_eligible_room")
            return None
        pos = self.rng.choice(candidates).position
        self._add_item(maze, pos, ItemType.TORCHLIGHT)
        return pos

    def _place_sword(self, maze: Maze, chest: tuple[int, int]) -> tuple[int, int]:
        return self._place_required(maze, ItemType.SWORD, {chest})

    def _place_gold(self, maze: Maze, draws: int) -> None:
        for _ in range(draws):
            room = maze.room(*self._random_active(maze))
            amount = self.rng.randint(*GOLD_RANGE)
            maze.update_room(replace(room, gold=Gold(amount)))
