"""2048 game engine driving snapshots, persistence and listeners for a user interface."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from numpy.random import Generator, default_rng

from swipe2048.config import GameConfig
from swipe2048.core.gameboard import fill_cells, is_done, next_state
from swipe2048.core.gamemove import legal_directions
from swipe2048.core.tiles import Direction, GameState
from swipe2048.storage.repository import GameRepository
from swipe2048.utils.render import format_board

# ##>: Module logger.
logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class GameEngine:
    """
    2048 game engine.

    The engine owns the current snapshot. Every effective change replaces it with a new snapshot,
    writes it to the repository and hands it to the subscribed listeners.
    """

    def __init__(
        self,
        repository: GameRepository | None = None,
        config: GameConfig | None = None,
        rng: Generator | None = None,
        seed: int | None = None,
    ):
        """
        Initialize the engine and restore the saved game, or start a new one.

        Parameters
        ----------
        repository : GameRepository, optional
            Storage of the snapshots (default is built from ``config``).
        config : GameConfig, optional
            Rules and storage settings (default is ``GameConfig.from_env()``).
        rng : Generator, optional
            Source of randomness for spawned tiles.
        seed : int, optional
            Seed of the generator created when ``rng`` is not given.
        """
        self.config = config or GameConfig.from_env()
        self.repository = repository or GameRepository.from_config(self.config)
        self.rng = rng if rng is not None else default_rng(seed)

        self._listeners: list[Listener] = []
        self._next_tile_id = 0
        self._best_score = self.repository.load_best_score()
        self._state: GameState | None = None

        self._load()

    @property
    def state(self) -> GameState:
        """The current snapshot."""
        return self._state

    @property
    def next_tile_id(self) -> int:
        """Id the next created tile will get."""
        return self._next_tile_id

    @property
    def best_score(self) -> int:
        """Best score known to this engine."""
        return self._best_score

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callable invoked with every new snapshot.

        Parameters
        ----------
        listener : Callable[[GameState], None]
            The callable to register.

        Returns
        -------
        Callable[[], None]
            A function removing the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception('Listener %r failed', listener)

    def _commit(self, state: GameState) -> GameState:
        self._state = state
        self._best_score = max(self._best_score, state.best_score)
        self.repository.save(state)
        self._notify()
        return state

    def _load(self) -> None:
        saved = self.repository.load()
        if saved is None or not saved.tiles:
            logger.info('No saved game, starting a new one')
            self.new_game()
            return

        # ##: Ids keep growing from the highest one on the board.
        self._next_tile_id = max((tile.id for tile in saved.tiles), default=-1) + 1
        self._best_score = max(self._best_score, saved.best_score)

        # ##: The stored end of game flag is recomputed from the board.
        game_over = is_done(saved.tiles, self.config.grid_size)
        if game_over != saved.game_over:
            logger.warning('Saved game over flag %s does not match the board, using %s', saved.game_over, game_over)
        self._state = replace(saved, best_score=self._best_score, game_over=game_over)
        logger.info('Restored game with score %d (best %d)', saved.score, self._best_score)

    def new_game(self) -> GameState:
        """
        Start a new game with two random tiles.

        Returns
        -------
        GameState
            The new snapshot.

        Notes
        -----
        - The tile-id counter restarts at 0.
        - The best score is carried over.
        """
        self._next_tile_id = 0
        tiles, self._next_tile_id = fill_cells(
            (),
            number_tile=self.config.start_tiles,
            next_id=self._next_tile_id,
            rng=self.rng,
            size=self.config.grid_size,
            probs=self.config.tile_spawn_probs,
        )
        logger.info('New game')
        return self._commit(
            GameState(tiles=tiles, score=0, best_score=self._best_score, game_over=False, has_won=False)
        )

    def move(self, direction: Direction | str) -> GameState:
        """
        Apply a swipe to the current snapshot.

        Parameters
        ----------
        direction : Direction | str
            The swipe direction, or a name accepted by ``Direction.parse``.

        Returns
        -------
        GameState
            The new snapshot, or the current one unchanged if no tile could move or merge.

        Notes
        -----
        An ineffective move neither spawns a tile, writes to storage nor notifies listeners.
        """
        if not isinstance(direction, Direction):
            direction = Direction.parse(direction)

        current = self._state
        state, next_id = next_state(
            current,
            direction,
            self._next_tile_id,
            self.rng,
            size=self.config.grid_size,
            win_value=self.config.win_value,
            probs=self.config.tile_spawn_probs,
        )
        if state is current:
            logger.debug('Move %s had no effect', direction.value)
            return current

        self._next_tile_id = next_id
        logger.debug(
            'Move %s: score %d -> %d, game over %s', direction.value, current.score, state.score, state.game_over
        )
        if state.has_won and not current.has_won:
            logger.info('Reached %d with score %d', self.config.win_value, state.score)
        return self._commit(state)

    def continue_game(self) -> GameState:
        """
        Hide the win banner and keep playing.

        Returns
        -------
        GameState
            The snapshot with ``show_win_overlay`` cleared; tiles and score are untouched.
        """
        if not self._state.show_win_overlay:
            return self._state
        return self._commit(replace(self._state, show_win_overlay=False))

    def save_game(self) -> bool:
        """Write the current snapshot to storage."""
        return self.repository.save(self._state)

    def legal_directions(self) -> list[Direction]:
        """Directions in which a swipe would change the board."""
        if self._state.game_over:
            return []
        return legal_directions(self._state.tiles, self.config.grid_size)

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        print(format_board(self._state, self.config.grid_size))
