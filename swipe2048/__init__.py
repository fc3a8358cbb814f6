# -*- coding: utf-8 -*-
"""
Python implementation of the 2048 game engine with persistent snapshots.
"""

from .config import GameConfig
from .core import Direction, GameState, Tile
from .engine import GameEngine
from .storage import GameRepository

__all__ = ["GameConfig", "Direction", "GameState", "Tile", "GameEngine", "GameRepository"]
