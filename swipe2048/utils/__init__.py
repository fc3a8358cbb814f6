# -*- coding: utf-8 -*-
"""
Presentation helpers for game snapshots.
"""

from .render import format_board

__all__ = ["format_board"]
