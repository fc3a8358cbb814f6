# -*- coding: utf-8 -*-
"""
Play 2048 Game
"""
import logging
from typing import Optional

from swipe2048 import Direction, GameConfig, GameEngine, GameState
from swipe2048.utils import format_board


def redraw(state: GameState, size: int):
    """
    Redraw the game board.

    Parameters
    ----------
    state: GameState
        Snapshot to draw

    size: int
        Side length of the board
    """
    print()
    print(format_board(state, size))


def key_handler(engine: GameEngine, key: str) -> Optional[bool]:
    """
    Handle the keyboard.

    Parameters
    ----------
    engine: GameEngine
        The game engine

    key: str
        Line typed by the player

    Returns
    -------
    Optional[bool]
        False when the player quits
    """
    key = key.strip().lower()

    if key in ("q", "quit", "escape"):
        engine.save_game()
        return False

    if key in ("n", "new"):
        engine.new_game()
        return None

    if key in ("c", "continue"):
        engine.continue_game()
        return None

    try:
        direction = Direction.parse(key)
    except ValueError:
        print("keys: w/a/s/d to move, n new game, c continue, q quit")
        return None

    if direction not in engine.legal_directions():
        print(f"cannot move {direction.value}")
        return None

    engine.move(direction)
    return None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = GameConfig.from_env()
    env = GameEngine(config=config)
    env.subscribe(lambda state: redraw(state, config.grid_size))
    redraw(env.state, config.grid_size)

    # Blocking input loop
    try:
        while key_handler(env, input("> ")) is not False:
            pass
    except (EOFError, KeyboardInterrupt):
        env.save_game()
