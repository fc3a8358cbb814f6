"""
Core functionality of the 2048 game: sliding and merging tiles, spawning new tiles and detecting
the end of a game.

Every function here is pure with respect to the snapshot it receives: a new tuple of tiles (and a
new tile-id counter value) is returned, nothing is edited in place.
"""

from __future__ import annotations

from dataclasses import replace
from typing import NamedTuple

from numpy import all as np_all
from numpy import any as np_any
from numpy.random import Generator

from swipe2048.core.tiles import Direction, GameState, Tile, to_grid

# ##>: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Value of the tile that wins the game.
WIN_VALUE = 2048


class MoveResult(NamedTuple):
    """
    Outcome of sliding the board in one direction, before any tile is spawned.

    Attributes
    ----------
    tiles : tuple[Tile, ...]
        The board after sliding and merging.
    score : int
        Sum of the merged values.
    next_id : int
        Tile-id counter after the ids consumed by merges.
    moved : bool
        Whether any tile changed position or merged.
    merges : int
        Number of merges performed.
    """

    tiles: tuple[Tile, ...]
    score: int
    next_id: int
    moved: bool
    merges: int


def line_slots(index: int, direction: Direction, size: int = 4) -> list[int]:
    """
    Cell positions of a line, ordered from the edge the tiles stack against.

    Parameters
    ----------
    index : int
        Row index for LEFT/RIGHT, column index for UP/DOWN.
    direction : Direction
        The swipe direction.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    list[int]
        The ``size`` flat positions of the line, target edge first.
    """
    offsets = range(size - 1, -1, -1) if direction.is_reversed else range(size)
    if direction.is_horizontal:
        return [index * size + offset for offset in offsets]
    return [offset * size + index for offset in offsets]


def group_lines(tiles: tuple[Tile, ...], direction: Direction, size: int = 4) -> list[list[Tile]]:
    """
    Split the board into lines parallel to the motion, each in scan order.

    Parameters
    ----------
    tiles : tuple[Tile, ...]
        The board.
    direction : Direction
        The swipe direction.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    list[list[Tile]]
        One list per row (LEFT/RIGHT) or column (UP/DOWN). Tiles nearest the target edge come first.
    """
    lines: list[list[Tile]] = [[] for _ in range(size)]
    for tile in tiles:
        row, col = divmod(tile.position, size)
        if direction.is_horizontal:
            lines[row].append(tile)
        else:
            lines[col].append(tile)

    for line in lines:
        line.sort(key=lambda tile: tile.position, reverse=direction.is_reversed)
    return lines


def merge_line(line: list[Tile], slots: list[int], next_id: int) -> MoveResult:
    """
    Stack one line against its target edge, merging equal neighbours.

    Parameters
    ----------
    line : list[Tile]
        Tiles of the line in scan order.
    slots : list[int]
        Positions of the line, target edge first.
    next_id : int
        Id given to the first tile created by a merge.

    Returns
    -------
    MoveResult
        The line after merging.

    Notes
    -----
    - A merge creates a new tile with a fresh id, the two source tiles are dropped.
    - Each tile merges at most once, and a merged tile is never merged again in the same call,
      so ``[2, 2, 2, 2]`` becomes ``[4, 4]`` and not ``[8]``.
    """
    result: list[Tile] = []
    score, merges, moved = 0, 0, False

    i = 0
    while i < len(line):
        current = line[i]
        slot = slots[len(result)]

        if i + 1 < len(line) and line[i + 1].value == current.value:
            merged = current.value * 2
            result.append(Tile(id=next_id, value=merged, position=slot))
            next_id += 1
            score += merged
            merges += 1
            moved = True
            i += 2
        else:
            if current.position != slot:
                moved = True
                current = replace(current, position=slot)
            result.append(current)
            i += 1

    return MoveResult(tiles=tuple(result), score=score, next_id=next_id, moved=moved, merges=merges)


def slide_and_merge(tiles: tuple[Tile, ...], direction: Direction, next_id: int, size: int = 4) -> MoveResult:
    """
    Slide the whole board in one direction, merge tiles and compute the score.

    Parameters
    ----------
    tiles : tuple[Tile, ...]
        The board.
    direction : Direction
        The swipe direction.
    next_id : int
        Current tile-id counter.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    MoveResult
        The board after the move, without any spawned tile.
    """
    result: list[Tile] = []
    score, merges, moved = 0, 0, False

    for index, line in enumerate(group_lines(tiles, direction, size)):
        outcome = merge_line(line, line_slots(index, direction, size), next_id)
        result.extend(outcome.tiles)
        next_id = outcome.next_id
        score += outcome.score
        merges += outcome.merges
        moved = moved or outcome.moved

    return MoveResult(tiles=tuple(result), score=score, next_id=next_id, moved=moved, merges=merges)


def empty_cells(tiles: tuple[Tile, ...], size: int = 4) -> list[int]:
    """Return the positions not covered by any tile, in ascending order."""
    occupied = {tile.position for tile in tiles}
    return [position for position in range(size * size) if position not in occupied]


def spawn_tile(
    tiles: tuple[Tile, ...],
    next_id: int,
    rng: Generator,
    size: int = 4,
    probs: dict[int, float] | None = None,
) -> tuple[tuple[Tile, ...], int]:
    """
    Add one tile (2 or 4) on a random empty cell.

    Parameters
    ----------
    tiles : tuple[Tile, ...]
        The board.
    next_id : int
        Id given to the new tile.
    rng : Generator
        Source of randomness.
    size : int, optional
        Side length of the board (default is 4).
    probs : dict[int, float], optional
        Probability of each spawned value (default is ``TILE_SPAWN_PROBS``).

    Returns
    -------
    tiles : tuple[Tile, ...]
        The board with the new tile appended, or unchanged if it was full.
    next_id : int
        The tile-id counter after the spawn.

    Notes
    -----
    The cell is chosen uniformly among empty cells.
    """
    available = empty_cells(tiles, size)
    if not available:
        return tiles, next_id

    probs = probs or TILE_SPAWN_PROBS
    position = available[int(rng.integers(len(available)))]
    value = int(rng.choice(list(probs), p=list(probs.values())))

    return tiles + (Tile(id=next_id, value=value, position=position),), next_id + 1


def fill_cells(
    tiles: tuple[Tile, ...],
    number_tile: int,
    next_id: int,
    rng: Generator,
    size: int = 4,
    probs: dict[int, float] | None = None,
) -> tuple[tuple[Tile, ...], int]:
    """
    Add several tiles, one after the other, with the spawn rule.

    If there are fewer empty cells than requested, it fills all available cells.
    """
    for _ in range(number_tile):
        tiles, next_id = spawn_tile(tiles, next_id, rng, size=size, probs=probs)
    return tiles, next_id


def is_done(tiles: tuple[Tile, ...], size: int = 4) -> bool:
    """
    Check if the game has ended by determining if any moves are possible.

    Parameters
    ----------
    tiles : tuple[Tile, ...]
        The board.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no vertically or horizontally adjacent
    cells have the same value. Neighbours are compared on the 2D grid, so cells on the edge of a
    row are never compared with the next row.
    """
    if len(tiles) < size * size:
        return False

    state = to_grid(tiles, size)
    return bool(
        np_all(state != 0) and not np_any(state[:-1] == state[1:]) and not np_any(state[:, :-1] == state[:, 1:])
    )


def has_reached(tiles: tuple[Tile, ...], value: int = WIN_VALUE) -> bool:
    """Return True if any tile is at least ``value``."""
    return any(tile.value >= value for tile in tiles)


def next_state(
    state: GameState,
    direction: Direction,
    next_id: int,
    rng: Generator,
    size: int = 4,
    win_value: int = WIN_VALUE,
    probs: dict[int, float] | None = None,
) -> tuple[GameState, int]:
    """
    Compute the snapshot following a swipe.

    Parameters
    ----------
    state : GameState
        The current snapshot.
    direction : Direction
        The swipe direction.
    next_id : int
        Current tile-id counter.
    rng : Generator
        Source of randomness for the spawned tile.
    size : int, optional
        Side length of the board (default is 4).
    win_value : int, optional
        Tile value that wins the game (default is 2048).
    probs : dict[int, float], optional
        Probability of each spawned value.

    Returns
    -------
    new_state : GameState
        The new snapshot, or ``state`` itself if the move was not effective.
    next_id : int
        The tile-id counter after the move.

    Notes
    -----
    - If the action results in no change, the same snapshot is returned and no tile is added.
    - A won game stays won; the win banner flag is raised on the move that first wins and is
      otherwise carried over.
    """
    if state.game_over:
        return state, next_id

    outcome = slide_and_merge(state.tiles, direction, next_id, size)
    if not outcome.moved:
        return state, next_id

    # ##: Fill randomly one cell.
    tiles, next_id = spawn_tile(outcome.tiles, outcome.next_id, rng, size=size, probs=probs)

    score = state.score + outcome.score
    newly_won = not state.has_won and has_reached(tiles, win_value)
    new_state = GameState(
        tiles=tiles,
        score=score,
        best_score=max(state.best_score, score),
        game_over=is_done(tiles, size),
        has_won=state.has_won or newly_won,
        show_win_overlay=True if newly_won else state.show_win_overlay,
    )
    return new_state, next_id
