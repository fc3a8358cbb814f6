# -*- coding: utf-8 -*-
"""
Configuration of the game engine and of its storage.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# ##>: Environment variable overriding the storage directory.
DATA_DIR_ENV = 'SWIPE2048_DATA_DIR'


@dataclass
class GameConfig:
    """
    Configuration for a game session.

    Rules and storage locations are grouped in sections.
    """

    # ##>: Board rules.
    grid_size: int = 4  # 4x4 board
    win_value: int = 2048  # Tile that wins the game
    start_tiles: int = 2  # Tiles placed by a new game
    tile_spawn_probs: dict[int, float] = field(default_factory=lambda: {2: 0.9, 4: 0.1})

    # ##>: Storage.
    data_dir: Path = field(default_factory=lambda: Path.home() / '.swipe2048')
    state_file: str = 'game_state.json'
    best_score_file: str = 'best_score.json'

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.grid_size * self.grid_size

    @classmethod
    def from_env(cls, **overrides) -> GameConfig:
        """
        Build a configuration, taking the storage directory from the environment when set.

        Parameters
        ----------
        **overrides
            Field values taking precedence over both defaults and the environment.

        Returns
        -------
        GameConfig
            The configuration.
        """
        data_dir = os.environ.get(DATA_DIR_ENV)
        if data_dir and 'data_dir' not in overrides:
            overrides['data_dir'] = Path(data_dir).expanduser()
        return cls(**overrides)
