"""
Data model of the 2048 game: tiles, game snapshots and swipe directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from numpy import int64, ndarray, zeros


class Direction(str, Enum):
    """Swipe direction."""

    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @classmethod
    def parse(cls, text: str) -> Direction:
        """
        Convert a user supplied name or key into a direction.

        Parameters
        ----------
        text : str
            A direction name (any case), an arrow key name or one of ``w``, ``a``, ``s``, ``d``.

        Returns
        -------
        Direction
            The matching direction.

        Raises
        ------
        ValueError
            If the text does not name a direction.
        """
        key = text.strip().lower()
        key = _KEY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f'Unknown direction: {text!r}') from None

    @property
    def is_horizontal(self) -> bool:
        """True for LEFT and RIGHT."""
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_reversed(self) -> bool:
        """True when tiles stack toward the far end of a line (RIGHT and DOWN)."""
        return self in (Direction.RIGHT, Direction.DOWN)


_KEY_ALIASES = {
    'w': 'up',
    'a': 'left',
    's': 'down',
    'd': 'right',
    'arrowup': 'up',
    'arrowdown': 'down',
    'arrowleft': 'left',
    'arrowright': 'right',
}


@dataclass(frozen=True)
class Tile:
    """
    A numbered piece occupying one cell.

    Attributes
    ----------
    id : int
        Identity of the tile, never reused within a game.
    value : int
        Power of two, at least 2.
    position : int
        Flat cell index, ``row * grid_size + column``.
    """

    id: int
    value: int
    position: int


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a game.

    Attributes
    ----------
    tiles : tuple[Tile, ...]
        Tiles on the board, each on its own cell.
    score : int
        Sum of every merged value in the current game.
    best_score : int
        Highest score ever reached, across games and sessions.
    game_over : bool
        Whether the board is full with no merge left.
    has_won : bool
        Whether the winning tile was reached at some point in this game.
    show_win_overlay : bool
        Whether the win banner should be displayed while ``has_won`` holds.
    """

    tiles: tuple[Tile, ...]
    score: int
    best_score: int
    game_over: bool
    has_won: bool
    show_win_overlay: bool = True

    @property
    def max_tile(self) -> int:
        """Highest tile value on the board, 0 for an empty board."""
        return max((tile.value for tile in self.tiles), default=0)

    def grid(self, size: int = 4) -> ndarray:
        """
        Return the board values as a 2D array.

        Parameters
        ----------
        size : int, optional
            Side length of the board (default is 4).

        Returns
        -------
        ndarray
            Array of shape ``(size, size)`` holding tile values, 0 for empty cells.
        """
        return to_grid(self.tiles, size)


def to_grid(tiles: tuple[Tile, ...], size: int = 4) -> ndarray:
    """
    Lay tiles out on a 2D array of values.

    Parameters
    ----------
    tiles : tuple[Tile, ...]
        Tiles to place.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    ndarray
        Array of shape ``(size, size)`` with 0 on empty cells.
    """
    grid = zeros((size, size), dtype=int64)
    for tile in tiles:
        grid[divmod(tile.position, size)] = tile.value
    return grid
