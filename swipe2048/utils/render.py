# -*- coding: utf-8 -*-
"""
Text rendering of game snapshots, for terminals and log messages.
"""

from swipe2048.core.tiles import GameState


def format_board(state: GameState, size: int = 4) -> str:
    """
    Format the board and scores of a snapshot.

    Parameters
    ----------
    state : GameState
        The snapshot to format.
    size : int, optional
        Side length of the board (default is 4).

    Returns
    -------
    str
        One line for the scores followed by one line per row, empty cells shown as ``.``.
    """
    grid = state.grid(size)
    width = max(len(str(state.max_tile)), 1)

    lines = [f'Score: {state.score}  Best: {state.best_score}']
    for row in grid.tolist():
        lines.append(' '.join(str(value).rjust(width) if value else '.'.rjust(width) for value in row))

    if state.game_over:
        lines.append('Game over!')
    elif state.has_won and state.show_win_overlay:
        lines.append('You win!')
    return '\n'.join(lines)
