"""
Conversion between game snapshots and the records written to disk.

Records use the camelCase keys of the save format. Reading a record validates it completely, so a
snapshot coming out of ``state_from_record`` is always safe to play on.
"""

from __future__ import annotations

from typing import Any

from swipe2048.core.tiles import GameState, Tile

# ##>: Version written in every game record.
RECORD_VERSION = 1


def state_to_record(state: GameState) -> dict[str, Any]:
    """
    Convert a snapshot into a JSON compatible record.

    Parameters
    ----------
    state : GameState
        The snapshot to convert.

    Returns
    -------
    dict[str, Any]
        The game record.
    """
    return {
        'version': RECORD_VERSION,
        'score': state.score,
        'bestScore': state.best_score,
        'gameOver': state.game_over,
        'hasWon': state.has_won,
        'showWinOverlay': state.show_win_overlay,
        'tiles': [{'id': tile.id, 'value': tile.value, 'position': tile.position} for tile in state.tiles],
    }


def best_score_record(best_score: int) -> dict[str, int]:
    """Build the record of the best-score slot."""
    return {'bestScore': best_score}


def _int(record: dict[str, Any], key: str) -> int:
    value = record[key]
    # ##: bool is a subclass of int, reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'{key!r} must be an integer, got {value!r}')
    return value


def _bool(record: dict[str, Any], key: str) -> bool:
    value = record[key]
    if not isinstance(value, bool):
        raise TypeError(f'{key!r} must be a boolean, got {value!r}')
    return value


def _is_power_of_two(value: int) -> bool:
    return value >= 2 and value & (value - 1) == 0


def tile_from_record(record: dict[str, Any], total_cells: int = 16) -> Tile:
    """
    Convert and validate one tile record.

    Raises
    ------
    ValueError
        If the id is negative, the value is not a power of two of at least 2, or the position is
        off the board.
    """
    if not isinstance(record, dict):
        raise TypeError(f'Tile record must be an object, got {record!r}')

    tile = Tile(id=_int(record, 'id'), value=_int(record, 'value'), position=_int(record, 'position'))
    if tile.id < 0:
        raise ValueError(f'Negative tile id: {tile.id}')
    if not _is_power_of_two(tile.value):
        raise ValueError(f'Invalid tile value: {tile.value}')
    if not 0 <= tile.position < total_cells:
        raise ValueError(f'Tile position out of board: {tile.position}')
    return tile


def state_from_record(record: dict[str, Any], fallback_best_score: int = 0, total_cells: int = 16) -> GameState:
    """
    Convert and validate a game record.

    Parameters
    ----------
    record : dict[str, Any]
        The parsed game record.
    fallback_best_score : int, optional
        Best score used when the record does not embed one (default is 0).
    total_cells : int, optional
        Number of cells on the board (default is 16).

    Returns
    -------
    GameState
        The validated snapshot.

    Raises
    ------
    KeyError
        If a required field is missing.
    TypeError
        If a field has the wrong type.
    ValueError
        If the record describes an impossible board, or was written by a newer format version.

    Notes
    -----
    - ``bestScore`` is optional and falls back to ``fallback_best_score``.
    - ``showWinOverlay`` is optional and defaults to True.
    - ``version`` is optional and defaults to the current version.
    """
    if not isinstance(record, dict):
        raise TypeError(f'Game record must be an object, got {type(record).__name__}')

    version = _int(record, 'version') if 'version' in record else RECORD_VERSION
    if version > RECORD_VERSION:
        raise ValueError(f'Unsupported record version: {version}')

    score = _int(record, 'score')
    if score < 0:
        raise ValueError(f'Negative score: {score}')

    best_score = _int(record, 'bestScore') if 'bestScore' in record else fallback_best_score
    if best_score < 0:
        raise ValueError(f'Negative best score: {best_score}')

    raw_tiles = record['tiles']
    if not isinstance(raw_tiles, list):
        raise TypeError(f"'tiles' must be a list, got {type(raw_tiles).__name__}")
    if len(raw_tiles) > total_cells:
        raise ValueError(f'Too many tiles: {len(raw_tiles)}')

    tiles = tuple(tile_from_record(raw, total_cells) for raw in raw_tiles)
    if len({tile.position for tile in tiles}) != len(tiles):
        raise ValueError('Two tiles share a position')
    if len({tile.id for tile in tiles}) != len(tiles):
        raise ValueError('Two tiles share an id')

    return GameState(
        tiles=tiles,
        score=score,
        best_score=best_score,
        game_over=_bool(record, 'gameOver'),
        has_won=_bool(record, 'hasWon'),
        show_win_overlay=_bool(record, 'showWinOverlay') if 'showWinOverlay' in record else True,
    )


def best_score_from_record(record: dict[str, Any]) -> int:
    """
    Read the best-score slot record.

    Raises
    ------
    ValueError
        If the best score is negative.
    """
    if not isinstance(record, dict):
        raise TypeError(f'Best score record must be an object, got {type(record).__name__}')

    best_score = _int(record, 'bestScore')
    if best_score < 0:
        raise ValueError(f'Negative best score: {best_score}')
    return best_score
