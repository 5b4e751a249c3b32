"""Command dispatch and handler functions.

handle_command(state, raw_input, now) -> GameOutput is the main entry point.
It runs the turn protocol (pending monster attack, game over, hunger,
darkness) and then dispatches to a handler. Handlers mutate the state in
place, writing rooms back through Maze.update_room, and return the text to
show together with its severity.
"""

import random
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import StrEnum

from ..logging import get_logger
from .direction import Direction
from .state import GameState
from .world import Item, ItemType, Lighting

logger = get_logger(__name__)

# Seconds a player may linger next to a live monster before it strikes
MONSTER_ATTACK_DELAY = 5.0

# Share of remaining steps lost to a wound
WOUND_PERCENT = 10

# Steps restored by eating one food item
FOOD_STEPS = 5


class Severity(StrEnum):
    NORMAL = "normal"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
    SUCCESS = "success"


@dataclass(frozen=True)
class GameOutput:
    """Text for the player plus how alarming it is."""

    text: str
    severity: Severity = Severity.NORMAL


def _warning(text: str) -> GameOutput:
    return GameOutput(text, Severity.WARNING)


def _wound(state: GameState, percent: int = WOUND_PERCENT) -> None:
    """Take a percentage off the remaining steps, rounding down."""
    player = state.player
    player.steps_left = player.steps_left * (100 - percent) // 100


def _knock_back(state: GameState) -> bool:
    """Return the player to where they came from. True if they moved."""
    if state.previous_position is None:
        return False
    state.player.x, state.player.y = state.previous_position
    return True


def _end_game(state: GameState, outcome: str) -> None:
    state.is_game_over = True
    state.monster_encounter_start = None
    logger.info(
        "game_over",
        outcome=outcome,
        turns=state.turns,
        steps_left=state.player.steps_left,
        coins=state.player.coins,
    )


def _check_monster_attack(state: GameState, now: float) -> GameOutput | None:
    """Let a monster strike if the player has dawdled in its room too long."""
    start = state.monster_encounter_start
    if start is None or state.current_room.monster is None:
        return None
    if now - start <= MONSTER_ATTACK_DELAY:
        return None

    state.monster_encounter_start = None
    _wound(state)
    _knock_back(state)
    logger.info(
        "monster_attacked",
        waited=round(now - start, 2),
        steps_left=state.player.steps_left,
    )
    return GameOutput("The monster attacked you!", Severity.DANGER)


def describe_room(state: GameState) -> GameOutput:
    """Describe the player's room. Calling this never changes the state."""
    if state.is_blind:
        return GameOutput("Can't see anything in this dark place!", Severity.INFO)

    room = state.current_room
    doors = [d.value for d in Direction if d in room.doors]
    contents = [item.name for item in room.items]
    if room.gold is not None:
        contents.append(f"gold ({room.gold.amount} coins)")

    lines = [
        f"You are in the room [{room.x},{room.y}].",
        f"There are {len(doors)} doors: {', '.join(doors)}",
        f"Items in the room: {', '.join(contents)}",
        f"Steps left: {state.player.steps_left}",
    ]
    if room.monster is not None:
        lines.append(f"There is an evil {room.monster.name} in the room!")
        return GameOutput("\n".join(lines), Severity.DANGER)
    return GameOutput("\n".join(lines), Severity.NORMAL)


def get_exits(state: GameState) -> list[str]:
    """Door labels of the current room, or nothing when the player can't see."""
    if state.is_blind:
        return []
    return [d.value for d in Direction if d in state.current_room.doors]


def get_inventory(state: GameState) -> list[str]:
    """Names of carried items, in the order they were picked up."""
    return [item.name for item in state.player.inventory]


def _cmd_go(state: GameState, direction: Direction, now: float) -> GameOutput:
    """Handle movement commands."""
    if direction not in state.current_room.doors:
        return _warning("No door there.")

    state.previous_position = state.player.position
    state.player.x += direction.dx
    state.player.y += direction.dy

    monster = state.current_room.monster
    if monster is not None:
        state.monster_encounter_start = now
        logger.debug(
            "monster_encountered",
            monster=monster.name,
            position=state.player.position,
        )
    else:
        state.monster_encounter_start = None
    return describe_room(state)


def _get_gold(state: GameState) -> GameOutput:
    room = state.current_room
    if room.gold is None:
        return _warning("No gold here.")

    amount = room.gold.amount
    state.player.coins += amount
    state.maze.update_room(replace(room, gold=None))
    return GameOutput(f"You picked up {amount} gold coins.", Severity.SUCCESS)


def _cmd_get(state: GameState, noun: str | None = None) -> GameOutput:
    """Handle GET commands."""
    if noun is None:
        return _warning("Get what?")
    if noun == "gold":
        return _get_gold(state)

    room = state.current_room
    item_type = ItemType.from_name(noun)
    if item_type is None or item_type is ItemType.CHEST:
        return _warning("Cannot pick that.")
    index = room.find_item(item_type)
    if index is None:
        return _warning("Cannot pick that.")

    items = list(room.items)
    item = items.pop(index)
    state.maze.update_room(replace(room, items=tuple(items)))
    state.player.inventory.append(item)
    return GameOutput(f"Picked up {item.name}.", Severity.SUCCESS)


def _cmd_drop(state: GameState, noun: str | None = None) -> GameOutput:
    """Handle DROP commands. A torch dropped in a dark room lights it for good."""
    if noun is None:
        return _warning("Drop what?")

    item_type = ItemType.from_name(noun)
    index = state.player.find_item(item_type) if item_type else None
    if index is None:
        return _warning("You don't have that.")

    item = state.player.inventory.pop(index)
    room = state.current_room
    room = replace(room, items=room.items + (item,))
    if item.type is ItemType.TORCHLIGHT and room.lighting is Lighting.DARK:
        room = replace(room, lighting=Lighting.LIT)
        logger.debug("room_lit", position=room.position)
    state.maze.update_room(room)
    return GameOutput(f"Dropped {item.name}.", Severity.NORMAL)


def _cmd_eat(state: GameState, noun: str | None = None) -> GameOutput:
    """Handle EAT commands."""
    if noun is None:
        return _warning("Eat what?")

    item_type = ItemType.from_name(noun)
    index = state.player.find_item(item_type) if item_type else None
    if index is None or item_type is not ItemType.FOOD:
        return _warning("You can't eat that.")

    state.player.inventory.pop(index)
    state.player.steps_left += FOOD_STEPS
    return GameOutput("You ate some food. Steps increased!", Severity.SUCCESS)


def _cmd_open(state: GameState, noun: str | None = None) -> GameOutput:
    """Handle OPEN. Needs a key in hand and a chest in the room."""
    if not state.player.has(ItemType.KEY) or not state.current_room.has_item(
        ItemType.CHEST
    ):
        return _warning("You need a key.")

    state.player.inventory.append(Item(ItemType.GRAIL))
    _end_game(state, "won")
    return GameOutput(
        "You opened the chest and found the Holy Grail! You win!",
        Severity.SUCCESS,
    )


def _slay_monster(state: GameState) -> None:
    room = state.current_room
    logger.info("monster_killed", monster=room.monster.name, position=room.position)
    state.maze.update_room(replace(room, monster=None))
    state.monster_encounter_start = None


def _cmd_fight(state: GameState, noun: str | None = None) -> GameOutput:
    """Handle FIGHT. Three equally likely outcomes once armed and facing a monster."""
    if not state.player.has(ItemType.SWORD):
        return _warning("You have no weapon.")
    if state.current_room.monster is None:
        return _warning("There is nothing to fight here.")

    outcome = random.randrange(3)
    if outcome == 0:
        _wound(state)
        if not _knock_back(state):
            return GameOutput("The monster wounded you!", Severity.DANGER)
        state.monster_encounter_start = None
        return GameOutput(
            "The monster wounded you and threw you back!", Severity.DANGER
        )
    if outcome == 1:
        _wound(state)
        _slay_monster(state)
        return GameOutput("You killed the monster, but got hurt.", Severity.WARNING)
    _slay_monster(state)
    return GameOutput("You killed the monster without a scratch!", Severity.SUCCESS)


_VERB_DISPATCH: dict[str, Callable[..., GameOutput]] = {
    "get": _cmd_get,
    "drop": _cmd_drop,
    "eat": _cmd_eat,
    "open": _cmd_open,
    "fight": _cmd_fight,
}


def _dispatch_verb(
    state: GameState, verb: str, noun: str | None, now: float,
) -> GameOutput | None:
    """Dispatch verb as a movement word or an action verb."""
    direction = Direction.from_command(verb)
    if direction is not None:
        return _cmd_go(state, direction, now)

    handler = _VERB_DISPATCH.get(verb)
    if handler is not None:
        return handler(state, noun)
    return None


def handle_command(state: GameState, raw_input: str, now: float) -> GameOutput:
    """Process one command and return the response.

    ``now`` is the current monotonic clock reading; it is only compared with
    the start of a monster encounter, never scheduled.
    """
    attack = _check_monster_attack(state, now)
    if attack is not None:
        return attack

    if state.is_game_over:
        return GameOutput("Game over.", Severity.DANGER)

    state.turns += 1
    state.player.steps_left -= 1
    if state.player.steps_left <= 0:
        _end_game(state, "starved")
        return GameOutput("You died of hunger. Game over.", Severity.DANGER)

    words = raw_input.strip().lower().split()
    verb = words[0] if words else ""
    noun = words[1] if len(words) > 1 else None

    # Only a bare direction word works in the dark
    if state.is_blind and (noun is not None or Direction.from_command(verb) is None):
        return _warning("It is too dark to do that.")

    logger.debug("command_received", verb=verb, noun=noun, turn=state.turns)
    return _dispatch_verb(state, verb, noun, now) or _warning("Unknown command")
