"""Tests for directions, rooms and the maze grid."""

from dataclasses import FrozenInstanceError, replace

import pytest

from crystals.engine.direction import Direction
from crystals.engine.world import Gold, Item, ItemType, Lighting, Maze, Room


def test_directions_are_inverse_pairs():
    for direction in Direction:
        assert direction.inverse.inverse is direction
        assert direction.dx == -direction.inverse.dx
        assert direction.dy == -direction.inverse.dy


def test_direction_displacements():
    assert (Direction.NORTH.dx, Direction.NORTH.dy) == (0, -1)
    assert (Direction.SOUTH.dx, Direction.SOUTH.dy) == (0, 1)
    assert (Direction.EAST.dx, Direction.EAST.dy) == (1, 0)
    assert (Direction.WEST.dx, Direction.WEST.dy) == (-1, 0)


def test_direction_from_command():
    assert Direction.from_command("n") is Direction.NORTH
    assert Direction.from_command(" W ") is Direction.WEST
    assert Direction.from_command("north") is None
    assert Direction.from_command("") is None


def test_item_equality_is_by_type():
    assert Item(ItemType.FOOD) == Item(ItemType.FOOD)
    assert Item(ItemType.FOOD) != Item(ItemType.KEY)
    assert ItemType.from_name("Torchlight") is ItemType.TORCHLIGHT
    assert ItemType.from_name("crystal") is None


def test_room_is_immutable():
    room = Room(x=1, y=2)
    with pytest.raises(FrozenInstanceError):
        room.gold = Gold(5)


def test_room_lighting():
    assert not Room(x=0, y=0).is_dark
    dark = Room(x=0, y=0, lighting=Lighting.DARK)
    assert dark.is_dark and dark.is_unlit
    lit = replace(dark, lighting=Lighting.LIT)
    assert lit.is_dark and not lit.is_unlit


def test_room_find_item():
    room = Room(x=0, y=0, items=(Item(ItemType.FOOD), Item(ItemType.KEY)))
    assert room.find_item(ItemType.KEY) == 1
    assert room.find_item(ItemType.SWORD) is None
    assert room.has_item(ItemType.FOOD)


def test_lookup_out_of_bounds_returns_none():
    maze = Maze.blank(2, 2)
    assert maze.room(-1, 0) is None
    assert maze.room(0, 2) is None
    assert maze.room(2, 0) is None
    assert maze.room(1, 1).position == (1, 1)


def test_update_room_replaces_by_coordinate():
    maze = Maze.blank(2, 2)
    room = maze.room(1, 0)
    maze.update_room(replace(room, gold=Gold(12)))
    assert maze.room(1, 0).gold == Gold(12)
    assert room.gold is None  # the old value is untouched


def test_update_room_outside_grid():
    maze = Maze.blank(2, 2)
    with pytest.raises(IndexError):
        maze.update_room(Room(x=5, y=5))


def test_blank_activates_rooms_in_row_major_order():
    maze = Maze.blank(3, 3, room_count=7)
    active = [room.position for room in maze.active_rooms()]
    assert active == [(0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1), (0, 2)]
    assert maze.room_count == 7
    assert not maze.room(2, 2).is_active
