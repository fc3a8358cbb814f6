"""
Tests for the persistence of game snapshots.

Tests cover record conversion, save/load round trips, fallbacks for missing optional fields and
the handling of corrupt or unreadable slots.
"""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase, main
from unittest.mock import patch

from swipe2048.core.tiles import GameState, Tile
from swipe2048.storage.repository import GameRepository
from swipe2048.storage.serde import RECORD_VERSION, state_from_record, state_to_record

# ##>: Valid JSON nested deeper than the decoder recursion limit.
DEEPLY_NESTED = '[' * 100000 + ']' * 100000


def sample_state(**changes) -> GameState:
    """Snapshot with a few tiles and every flag set to a non default value."""
    fields = {
        'tiles': (Tile(0, 2, 0), Tile(3, 4, 5), Tile(7, 2048, 15)),
        'score': 2100,
        'best_score': 5000,
        'game_over': False,
        'has_won': True,
        'show_win_overlay': False,
    }
    fields.update(changes)
    return GameState(**fields)


class TestSerde(TestCase):
    """Test conversion between snapshots and records."""

    def test_record_layout(self):
        """Records use the camelCase keys of the save format."""
        record = state_to_record(sample_state())

        self.assertEqual(record['version'], RECORD_VERSION)
        self.assertEqual(record['bestScore'], 5000)
        self.assertEqual(record['showWinOverlay'], False)
        self.assertEqual(record['tiles'][1], {'id': 3, 'value': 4, 'position': 5})

    def test_record_round_trip(self):
        """A record converts back to an equal snapshot."""
        state = sample_state()
        self.assertEqual(state_from_record(state_to_record(state)), state)

    def test_optional_fields(self):
        """Missing optional fields take their defaults."""
        record = state_to_record(sample_state())
        del record['bestScore'], record['showWinOverlay'], record['version']

        state = state_from_record(record, fallback_best_score=42)
        self.assertEqual(state.best_score, 42)
        self.assertTrue(state.show_win_overlay)

    def test_invalid_records(self):
        """Impossible boards and wrong types are rejected."""
        base = state_to_record(sample_state())
        broken = [
            {key: value for key, value in base.items() if key != 'score'},
            {**base, 'score': -1},
            {**base, 'score': True},
            {**base, 'hasWon': 1},
            {**base, 'tiles': {}},
            {**base, 'tiles': [{'id': 0, 'value': 3, 'position': 0}]},
            {**base, 'tiles': [{'id': 0, 'value': 1, 'position': 0}]},
            {**base, 'tiles': [{'id': 0, 'value': 2, 'position': 16}]},
            {**base, 'tiles': [{'id': -1, 'value': 2, 'position': 0}]},
            {**base, 'tiles': [{'id': 0, 'value': 2, 'position': 0}, {'id': 1, 'value': 2, 'position': 0}]},
            {**base, 'tiles': [{'id': 0, 'value': 2, 'position': 0}, {'id': 0, 'value': 2, 'position': 1}]},
            {**base, 'tiles': [{'id': 0, 'value': 2}]},
            {**base, 'version': RECORD_VERSION + 1},
            [],
        ]
        for record in broken:
            with self.subTest(record=record):
                with self.assertRaises((KeyError, TypeError, ValueError)):
                    state_from_record(record)


class TestGameRepository(TestCase):
    """Test the file based repository."""

    def setUp(self):
        """Create a repository in a fresh temporary directory."""
        self._directory = TemporaryDirectory()
        self.directory = Path(self._directory.name)
        self.repository = GameRepository(self.directory)

    def tearDown(self):
        self._directory.cleanup()

    def test_load_absent(self):
        """Nothing saved means no game and a zero best score."""
        self.assertIsNone(self.repository.load())
        self.assertEqual(self.repository.load_best_score(), 0)

    def test_save_load_round_trip(self):
        """A saved snapshot loads back equal in every field."""
        state = sample_state()

        self.assertTrue(self.repository.save(state))
        self.assertEqual(self.repository.load(), state)
        self.assertEqual(self.repository.load_best_score(), 5000)

    def test_save_overwrites(self):
        """Each save replaces the previous content."""
        self.repository.save(sample_state(score=10))
        self.repository.save(sample_state(score=20))

        self.assertEqual(self.repository.load().score, 20)
        self.assertFalse(list(self.directory.glob('*.tmp')))

    def test_best_score_fallback(self):
        """A record without bestScore takes the best-score slot."""
        record = state_to_record(sample_state())
        del record['bestScore']
        self.repository.save_best_score(777)
        self.repository.state_path.write_text(json.dumps(record))

        self.assertEqual(self.repository.load().best_score, 777)

    def test_best_score_fallback_absent(self):
        """Without either best score the loaded one is 0."""
        record = state_to_record(sample_state())
        del record['bestScore']
        self.repository.state_path.write_text(json.dumps(record))

        self.assertEqual(self.repository.load().best_score, 0)

    def test_show_win_overlay_default(self):
        """A record without showWinOverlay loads with the banner enabled."""
        record = state_to_record(sample_state())
        del record['showWinOverlay']
        self.repository.state_path.write_text(json.dumps(record))

        self.assertTrue(self.repository.load().show_win_overlay)

    def test_corrupt_game(self):
        """Unparsable or incomplete records load as absent."""
        for content in ('{not json', '', 'null', json.dumps({'score': 1}), '\xff', DEEPLY_NESTED):
            with self.subTest(content=content):
                self.repository.state_path.write_text(content, encoding='latin-1')
                self.assertIsNone(self.repository.load())

    def test_corrupt_best_score(self):
        """A corrupt best-score slot reads as 0."""
        for content in ('garbage', json.dumps({'best': 3}), json.dumps({'bestScore': 'high'}), DEEPLY_NESTED):
            with self.subTest(content=content):
                self.repository.best_score_path.write_text(content)
                self.assertEqual(self.repository.load_best_score(), 0)

    def test_delete_game_keeps_best_score(self):
        """Deleting the game leaves the best score in place."""
        self.repository.save(sample_state())
        self.repository.delete_game()

        self.assertIsNone(self.repository.load())
        self.assertEqual(self.repository.load_best_score(), 5000)

        # ##>: Deleting twice is harmless.
        self.repository.delete_game()

    def test_save_failure(self):
        """An unwritable location makes the save report failure."""
        blocker = self.directory / 'blocker'
        blocker.write_text('not a directory')
        repository = GameRepository(blocker / 'nested')

        with self.assertLogs('swipe2048.storage.repository', level='ERROR'):
            self.assertFalse(repository.save(sample_state()))
        self.assertIsNone(repository.load())

    def test_failed_swap_leaves_no_temporary(self):
        """A failed write keeps the previous slot and removes the temporary file."""
        self.repository.save(sample_state(score=10))

        with patch('swipe2048.storage.repository.os.replace', side_effect=OSError('disk full')):
            with self.assertLogs('swipe2048.storage.repository', level='ERROR'):
                self.assertFalse(self.repository.save(sample_state(score=20)))

        self.assertFalse(list(self.directory.glob('*.tmp')))
        self.assertEqual(self.repository.load().score, 10)

    def test_save_creates_directory(self):
        """The storage directory is created on first save."""
        repository = GameRepository(self.directory / 'a' / 'b')
        self.assertTrue(repository.save(sample_state()))
        self.assertTrue(repository.state_path.exists())
        self.assertTrue(repository.best_score_path.exists())


if __name__ == '__main__':
    main()
