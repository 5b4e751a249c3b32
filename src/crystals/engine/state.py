"""Mutable per-game state.

The Maze is generated once and owned by the state; the Player is owned by
the state too and is never referenced from the maze.
"""

from dataclasses import dataclass, field

from .world import Item, ItemType, Maze, Room

START_POSITION = (0, 0)

# Steps granted per active room at the start of a game
STEPS_PER_ROOM = 2


@dataclass
class Player:
    """The adventurer: position, carried items, food clock and purse."""

    x: int = 0
    y: int = 0
    steps_left: int = 0
    inventory: list[Item] = field(default_factory=list)
    coins: int = 0

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def has(self, item_type: ItemType) -> bool:
        return any(item.type is item_type for item in self.inventory)

    def find_item(self, item_type: ItemType) -> int | None:
        for index, item in enumerate(self.inventory):
            if item.type is item_type:
                return index
        return None


@dataclass
class GameState:
    """Everything that changes while a game is being played."""

    maze: Maze
    player: Player
    is_game_over: bool = False
    turns: int = 0
    # Position before the last successful move, for knockback
    previous_position: tuple[int, int] | None = None
    # Clock reading when the player walked in on a monster
    monster_encounter_start: float | None = None

    @property
    def current_room(self) -> Room:
        return self.maze.room(self.player.x, self.player.y)

    @property
    def is_blind(self) -> bool:
        """True when the player stands in an unlit dark room without a torch."""
        return self.current_room.is_unlit and not self.player.has(ItemType.TORCHLIGHT)


def new_game_state(maze: Maze) -> GameState:
    """Create a fresh game at the start room with two steps per room."""
    x, y = START_POSITION
    player = Player(x=x, y=y, steps_left=STEPS_PER_ROOM * maze.room_count)
    return GameState(maze=maze, player=player)
