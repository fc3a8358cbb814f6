# -*- coding: utf-8 -*-
"""
This module provides the data model and the pure state transitions of the 2048 game.

It includes the tile and snapshot types, functions for sliding and merging tiles, spawning new
tiles, checking if the game is done, computing the next snapshot and listing legal directions.
"""

from .gameboard import (
    TILE_SPAWN_PROBS,
    WIN_VALUE,
    MoveResult,
    empty_cells,
    fill_cells,
    has_reached,
    is_done,
    merge_line,
    next_state,
    slide_and_merge,
    spawn_tile,
)
from .gamemove import can_move, illegal_directions, legal_directions
from .tiles import Direction, GameState, Tile, to_grid

__all__ = [
    "Direction",
    "GameState",
    "Tile",
    "MoveResult",
    "TILE_SPAWN_PROBS",
    "WIN_VALUE",
    "to_grid",
    "merge_line",
    "slide_and_merge",
    "empty_cells",
    "spawn_tile",
    "fill_cells",
    "has_reached",
    "is_done",
    "next_state",
    "can_move",
    "legal_directions",
    "illegal_directions",
]
