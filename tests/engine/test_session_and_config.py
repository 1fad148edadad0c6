import unittest

from ludo_pnp.config import Config, validate_game_settings
from ludo_pnp.engine import TurnEngine
from ludo_pnp.exceptions import ConfigurationError
from ludo_pnp.session import GameSession
from ludo_pnp.token import Token
from ludo_pnp.types import GamePhase, TokenState


class TestStartGame(unittest.TestCase):
    def setUp(self):
        self.engine = TurnEngine()

    def test_fresh_session_not_started(self):
        session = GameSession()
        self.assertEqual(session.phase, GamePhase.NOT_STARTED)
        self.assertFalse(session.is_started())

    def test_four_by_four_starts_in_base(self):
        session = self.engine.start_game(4, 4)
        all_tokens = [t for row in session.tokens for t in row]
        self.assertEqual(len(all_tokens), 16)
        for token in all_tokens:
            self.assertEqual(token.state, TokenState.BASE)
            token.check_invariant()
        self.assertIsNone(session.pending_die)
        self.assertEqual(session.active_player, 0)
        self.assertEqual(session.six_streak, 0)
        self.assertIsNone(session.winner)
        self.assertEqual(session.phase, GamePhase.IN_PROGRESS)

    def test_restart_resets_same_session(self):
        session = self.engine.start_game(2, 2)
        session.token(0, 0).place_on_track(12)
        session.active_player = 1
        session.winner = 1
        again = self.engine.start_game(3, 1, session)
        self.assertIs(again, session)
        self.assertEqual(session.player_count, 3)
        self.assertEqual(len(session.tokens_of(2)), 1)
        self.assertTrue(session.token(0, 0).is_in_base())
        self.assertIsNone(session.winner)
        self.assertEqual(session.active_player, 0)

    def test_out_of_range_settings_rejected(self):
        for players, tokens in [(1, 4), (7, 4), (2, 0), (2, 5)]:
            with self.assertRaises(ConfigurationError):
                self.engine.start_game(players, tokens)
            with self.assertRaises(ValueError):
                validate_game_settings(players, tokens)

    def test_rejected_settings_leave_session_untouched(self):
        session = self.engine.start_game(2, 2)
        session.token(0, 0).place_on_track(12)
        with self.assertRaises(ConfigurationError):
            self.engine.start_game(9, 2, session)
        self.assertEqual(session.player_count, 2)
        self.assertEqual(session.token(0, 0).track_index, 12)

    def test_six_players_supported(self):
        session = self.engine.start_game(6, 1)
        self.assertEqual(len(session.tokens), 6)

    def test_to_dict_snapshot(self):
        session = self.engine.start_game(2, 1)
        snap = session.to_dict()
        self.assertEqual(snap["phase"], "in_progress")
        self.assertEqual(snap["active_player"], 0)
        self.assertIsNone(snap["pending_die"])
        self.assertEqual(snap["tokens"][1][0]["state"], "base")


class TestTokenInvariant(unittest.TestCase):
    def test_transitions_keep_one_index(self):
        token = Token(player=0, token_index=0)
        token.place_on_track(5)
        token.check_invariant()
        self.assertIsNone(token.home_index)
        token.place_on_home_row(2)
        token.check_invariant()
        self.assertIsNone(token.track_index)
        token.finish()
        token.check_invariant()
        self.assertIsNone(token.home_index)
        token.send_to_base()
        token.check_invariant()

    def test_corrupt_token_detected(self):
        token = Token(player=0, token_index=0, state=TokenState.ON_TRACK)
        with self.assertRaises(ValueError):
            token.check_invariant()
        token = Token(player=0, token_index=0, track_index=3)
        with self.assertRaises(ValueError):
            token.check_invariant()


class TestConfig(unittest.TestCase):
    def test_bad_defaults_rejected(self):
        with self.assertRaises(ConfigurationError):
            Config(NUM_PLAYERS=7)
        with self.assertRaises(ConfigurationError):
            Config(TOKENS_PER_PLAYER=0)
        with self.assertRaises(ConfigurationError):
            Config(ENTRY_SQUARES=[0, 1])
        with self.assertRaises(ConfigurationError):
            Config(TRANSITION_SQUARES=[0, 13, 26, 39, 45, 60])

    def test_rule_constants(self):
        cfg = Config()
        self.assertEqual(cfg.TRACK_LENGTH, 52)
        self.assertEqual(cfg.HOME_ROW_LENGTH, 6)
        self.assertEqual(cfg.MAX_SIX_STREAK, 3)


if __name__ == "__main__":
    unittest.main()
