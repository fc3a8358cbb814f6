# -*- coding: utf-8 -*-
"""
Evaluate the engine by playing random games.
"""
from collections import Counter
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Dict, Optional

from numpy.random import default_rng
from tqdm import trange

from swipe2048 import GameConfig, GameEngine, GameRepository


def evaluate(length: int = 10, seed: Optional[int] = None, data_dir: Optional[Path] = None) -> Dict[int, int]:
    """
    Play games with a uniformly random direction policy.

    Parameters
    ----------
    length : int, optional
        The number of games to play (default is 10).
    seed : int, optional
        Seed shared by the tile spawner and the policy.
    data_dir : Path, optional
        Storage directory of the games (default is a temporary directory).

    Returns
    -------
    Dict[int, int]
        How many games ended with each maximum tile.
    """
    rng = default_rng(seed)
    score = []

    with TemporaryDirectory() as scratch:
        config = GameConfig(data_dir=data_dir or Path(scratch))
        engine = GameEngine(repository=GameRepository.from_config(config), config=config, rng=rng)

        with trange(length) as period:
            for num in period:
                state = engine.new_game()

                # ##: Play a game.
                while not state.game_over:
                    legal = engine.legal_directions()
                    state = engine.move(legal[int(rng.integers(len(legal)))])

                    # ##: Log.
                    period.set_description(f"Evaluation: {num + 1}")
                    period.set_postfix(score=state.score, max=state.max_tile)

                # ##: Save max cells.
                score.append(state.max_tile)

    # ##: Final log.
    frequency = Counter(score)
    return dict(frequency)


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    result = evaluate(length=args.games, seed=args.seed)
    print(f"Random policy over {args.games} games, max tiles: {dict(sorted(result.items()))}")
