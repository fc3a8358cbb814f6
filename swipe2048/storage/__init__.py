# -*- coding: utf-8 -*-
"""
Persistence of game snapshots: record conversion and the file based repository.
"""

from .repository import GameRepository
from .serde import RECORD_VERSION, state_from_record, state_to_record

__all__ = ["GameRepository", "RECORD_VERSION", "state_from_record", "state_to_record"]
