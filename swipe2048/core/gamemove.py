"""
Game move utilities, providing functions for determining legal and illegal directions.
"""

from swipe2048.core.gameboard import slide_and_merge
from swipe2048.core.tiles import Direction, Tile

# ##>: Order in which directions are reported.
DIRECTION_ORDER = (Direction.LEFT, Direction.UP, Direction.RIGHT, Direction.DOWN)


def can_move(tiles: tuple[Tile, ...], direction: Direction, size: int = 4) -> bool:
    """
    Check if a swipe changes the board.

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
    bool
        True if a tile would slide or merge, False otherwise.

    Notes
    -----
    The answer comes from the same slide used by a real move, so a legal direction is always an
    effective one.
    """
    return slide_and_merge(tiles, direction, next_id=0, size=size).moved


def legal_directions(tiles: tuple[Tile, ...], size: int = 4) -> list[Direction]:
    """
    Determine the directions in which a swipe changes the board.

    Parameters
    ----------
    tiles : tuple[Tile, ...]
        The board.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    list[Direction]
        Effective directions, in (left, up, right, down) order.
    """
    return [direction for direction in DIRECTION_ORDER if can_move(tiles, direction, size)]


def illegal_directions(tiles: tuple[Tile, ...], size: int = 4) -> list[Direction]:
    """Determine the directions in which a swipe leaves the board unchanged."""
    return [direction for direction in DIRECTION_ORDER if not can_move(tiles, direction, size)]
