# -*- coding: utf-8 -*-
"""
Game engine of the 2048 game.

This module provides the `GameEngine` class, which owns the current snapshot, persists it and notifies
the user interface of every change.
"""

from .game import GameEngine

__all__ = ["GameEngine"]
