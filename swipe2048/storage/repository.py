"""
File based persistence of game snapshots.

Two slots live in the storage directory: the game slot holding the last snapshot, and the
best-score slot which survives the deletion of the game slot.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from swipe2048.config import GameConfig
from swipe2048.core.tiles import GameState
from swipe2048.storage.serde import best_score_from_record, best_score_record, state_from_record, state_to_record

# ##>: Module logger.
logger = logging.getLogger(__name__)

# ##>: Errors meaning the content of a slot cannot be used.
_RECORD_ERRORS = (json.JSONDecodeError, UnicodeDecodeError, RecursionError, KeyError, TypeError, ValueError)


class GameRepository:
    """
    Store game snapshots as JSON files.

    No method raises on I/O or parse errors: failures are logged, saves report False and loads
    report an absent game.
    """

    def __init__(
        self,
        directory: Path | str,
        state_file: str = 'game_state.json',
        best_score_file: str = 'best_score.json',
        total_cells: int = 16,
    ):
        """
        Initialize the repository.

        Parameters
        ----------
        directory : Path | str
            Directory holding both slots. Created on first save.
        state_file : str, optional
            File name of the game slot (default is ``game_state.json``).
        best_score_file : str, optional
            File name of the best-score slot (default is ``best_score.json``).
        total_cells : int, optional
            Number of cells on the board, used to validate loaded tiles (default is 16).
        """
        self.directory = Path(directory)
        self.state_path = self.directory / state_file
        self.best_score_path = self.directory / best_score_file
        self._total_cells = total_cells

    @classmethod
    def from_config(cls, config: GameConfig) -> GameRepository:
        """Create the repository described by a configuration."""
        return cls(
            config.data_dir,
            state_file=config.state_file,
            best_score_file=config.best_score_file,
            total_cells=config.total_cells,
        )

    def _write(self, path: Path, record: dict[str, Any]) -> None:
        # ##: Write next to the target then swap, so a slot is never left half written.
        self.directory.mkdir(parents=True, exist_ok=True)
        temporary = path.with_name(path.name + '.tmp')
        try:
            temporary.write_text(json.dumps(record), encoding='utf-8')
            os.replace(temporary, path)
        except OSError:
            temporary.unlink(missing_ok=True)
            raise

    def _read(self, path: Path) -> Any:
        return json.loads(path.read_text(encoding='utf-8'))

    def save(self, state: GameState) -> bool:
        """
        Write a snapshot to the game slot and its best score to the best-score slot.

        Parameters
        ----------
        state : GameState
            The snapshot to persist.

        Returns
        -------
        bool
            True if both slots were written, False otherwise.
        """
        try:
            self._write(self.state_path, state_to_record(state))
        except OSError:
            logger.exception('Failed to save game to %s', self.state_path)
            return False
        return self.save_best_score(state.best_score)

    def save_best_score(self, best_score: int) -> bool:
        """Write the best-score slot, returning False on failure."""
        try:
            self._write(self.best_score_path, best_score_record(best_score))
        except OSError:
            logger.exception('Failed to save best score to %s', self.best_score_path)
            return False
        return True

    def load_best_score(self) -> int:
        """
        Read the best-score slot.

        Returns
        -------
        int
            The stored best score, 0 if the slot is absent or corrupt.
        """
        if not self.best_score_path.exists():
            return 0

        try:
            return best_score_from_record(self._read(self.best_score_path))
        except OSError:
            logger.exception('Failed to read best score from %s', self.best_score_path)
        except _RECORD_ERRORS as error:
            logger.warning('Ignoring corrupt best score in %s: %s', self.best_score_path, error)
        return 0

    def load(self) -> GameState | None:
        """
        Read the game slot.

        Returns
        -------
        GameState | None
            The saved snapshot, None if the slot is absent, unreadable or invalid.

        Notes
        -----
        A record without ``bestScore`` takes the value of the best-score slot.
        """
        if not self.state_path.exists():
            return None

        try:
            record = self._read(self.state_path)
            fallback = 0
            if not isinstance(record, dict) or 'bestScore' not in record:
                fallback = self.load_best_score()
            state = state_from_record(record, fallback_best_score=fallback, total_cells=self._total_cells)
        except OSError:
            logger.exception('Failed to read game from %s', self.state_path)
            return None
        except _RECORD_ERRORS as error:
            logger.warning('Ignoring corrupt game in %s: %s', self.state_path, error)
            return None

        logger.debug('Loaded game from %s (%d tiles, score %d)', self.state_path, len(state.tiles), state.score)
        return state

    def delete_game(self) -> None:
        """Remove the game slot. The best-score slot is kept."""
        try:
            self.state_path.unlink(missing_ok=True)
        except OSError:
            logger.exception('Failed to delete game at %s', self.state_path)
