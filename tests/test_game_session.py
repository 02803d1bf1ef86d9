"""
Tests for the game session state machine: typing, submitting, the reveal
guard, keyboard accumulation and the won/lost transitions.
"""

import unittest

from wordle2.config.game_settings import MAX_GUESSES
from wordle2.models.errors import IncompleteGuess, NotInDictionary, SessionTerminal
from wordle2.models.game import GameStatus, LetterStatus
from wordle2.services.game_session import GameSession, new_session

DICTIONARY = frozenset([
    "crane", "cigar", "react", "apple", "about", "other", "zesty", "gamer", "rebus",
])
MISSES = ["cigar", "react", "apple", "about", "other", "zesty"]


def type_word(session, word):
    for letter in word:
        session.append_letter(letter)


def play(session, word):
    """Type and submit a word, then let the reveal finish."""
    type_word(session, word)
    turn = session.submit()
    session.finish_reveal()
    return turn


class TestTyping(unittest.TestCase):

    def setUp(self):
        self.session = new_session("crane", DICTIONARY)

    def test_new_session_starts_empty(self):
        self.assertEqual(self.session.buffer, "")
        self.assertEqual(self.session.attempt_index, 0)
        self.assertEqual(self.session.history, [])
        self.assertEqual(self.session.keyboard, {})
        self.assertIs(self.session.status, GameStatus.IN_PROGRESS)
        self.assertFalse(self.session.revealing)

    def test_append_lowercases(self):
        turn = self.session.append_letter("C")
        self.assertTrue(turn.accepted)
        self.assertEqual(turn.buffer, "c")

    def test_append_beyond_word_length_is_noop(self):
        type_word(self.session, "crane")
        turn = self.session.append_letter("s")
        self.assertFalse(turn.accepted)
        self.assertEqual(self.session.buffer, "crane")

    def test_non_letters_ignored(self):
        for key in ["1", "", "ab", "é", " ", "Shift"]:
            with self.subTest(key=key):
                self.assertFalse(self.session.append_letter(key).accepted)
        self.assertEqual(self.session.buffer, "")

    def test_delete_removes_last_letter(self):
        type_word(self.session, "cra")
        turn = self.session.delete_letter()
        self.assertTrue(turn.accepted)
        self.assertEqual(turn.buffer, "cr")

    def test_delete_on_empty_is_noop(self):
        turn = self.session.delete_letter()
        self.assertFalse(turn.accepted)
        self.assertEqual(self.session.buffer, "")

    def test_solution_must_be_word_length(self):
        with self.assertRaises(ValueError):
            GameSession("cranes", DICTIONARY)


class TestSubmit(unittest.TestCase):

    def setUp(self):
        self.session = new_session("crane", DICTIONARY)

    def test_incomplete_guess_rejected(self):
        type_word(self.session, "cra")
        with self.assertRaises(IncompleteGuess):
            self.session.submit()
        self.assertEqual(self.session.buffer, "cra")
        self.assertEqual(self.session.history, [])

    def test_empty_guess_rejected(self):
        with self.assertRaises(IncompleteGuess):
            self.session.submit()

    def test_unknown_word_rejected(self):
        type_word(self.session, "xxxxx")
        with self.assertRaises(NotInDictionary):
            self.session.submit()
        self.assertEqual(self.session.buffer, "xxxxx")
        self.assertEqual(self.session.attempt_index, 0)
        self.assertFalse(self.session.revealing)

    def test_error_messages_are_user_facing(self):
        type_word(self.session, "xxxxx")
        with self.assertRaises(NotInDictionary) as ctx:
            self.session.submit()
        self.assertEqual(ctx.exception.message, "Not in word list")
        self.assertEqual(ctx.exception.error_code, "not_in_dictionary")

    def test_missed_guess_advances(self):
        type_word(self.session, "cigar")
        turn = self.session.submit()

        self.assertTrue(turn.accepted)
        self.assertEqual(turn.result, [
            LetterStatus.CORRECT, LetterStatus.ABSENT, LetterStatus.ABSENT,
            LetterStatus.PRESENT, LetterStatus.PRESENT
        ])
        self.assertEqual(turn.attempt_index, 1)
        self.assertEqual(turn.buffer, "")
        self.assertIs(turn.status, GameStatus.IN_PROGRESS)
        self.assertIsNone(turn.solution)
        self.assertEqual(len(turn.reveal), 5)
        self.assertEqual(self.session.history[0].guess, "cigar")

    def test_keyboard_is_monotonic_across_guesses(self):
        play(self.session, "cigar")
        self.assertIs(self.session.keyboard['c'], LetterStatus.CORRECT)
        self.assertIs(self.session.keyboard['a'], LetterStatus.PRESENT)

        # 'c' is only present in "react" but stays correct; 'a' is now exact
        play(self.session, "react")
        self.assertIs(self.session.keyboard['c'], LetterStatus.CORRECT)
        self.assertIs(self.session.keyboard['a'], LetterStatus.CORRECT)
        self.assertIs(self.session.keyboard['i'], LetterStatus.ABSENT)
        self.assertIs(self.session.keyboard['e'], LetterStatus.PRESENT)
        self.assertIs(self.session.keyboard['t'], LetterStatus.ABSENT)

    def test_turn_keyboard_is_a_copy(self):
        turn = play(self.session, "cigar")
        turn.keyboard['z'] = LetterStatus.CORRECT
        self.assertNotIn('z', self.session.keyboard)


class TestRevealGuard(unittest.TestCase):

    def setUp(self):
        self.session = new_session("crane", DICTIONARY)
        type_word(self.session, "cigar")
        self.turn = self.session.submit()

    def test_revealing_after_submit(self):
        self.assertTrue(self.session.revealing)

    def test_input_ignored_while_revealing(self):
        self.assertFalse(self.session.append_letter("a").accepted)
        self.assertFalse(self.session.delete_letter().accepted)
        self.assertFalse(self.session.submit().accepted)
        self.assertEqual(self.session.buffer, "")
        self.assertEqual(self.session.attempt_index, 1)
        self.assertEqual(len(self.session.history), 1)

    def test_finish_reveal_reopens_input(self):
        self.assertTrue(self.session.finish_reveal().accepted)
        self.assertFalse(self.session.revealing)
        self.assertTrue(self.session.append_letter("a").accepted)

    def test_finish_reveal_twice(self):
        self.session.finish_reveal()
        self.assertFalse(self.session.finish_reveal().accepted)

    def test_reveal_uses_session_timing(self):
        session = new_session("crane", DICTIONARY, reveal_base_delay_ms=0, reveal_step_ms=10)
        type_word(session, "cigar")
        turn = session.submit()
        self.assertEqual([step.delay_ms for step in turn.reveal], [0, 10, 20, 30, 40])


class TestGameOver(unittest.TestCase):

    def setUp(self):
        self.session = new_session("crane", DICTIONARY)

    def test_win(self):
        turn = play(self.session, "crane")
        self.assertIs(turn.status, GameStatus.WON)
        self.assertEqual(turn.result, [LetterStatus.CORRECT] * 5)
        self.assertEqual(turn.attempt_index, 0)
        self.assertEqual(self.session.buffer, "crane")
        self.assertIsNone(turn.solution)
        self.assertEqual(self.session.revealed_solution(), "crane")

    def test_loss_after_max_guesses(self):
        for word in MISSES[:-1]:
            self.assertIs(play(self.session, word).status, GameStatus.IN_PROGRESS)

        turn = play(self.session, MISSES[-1])
        self.assertIs(turn.status, GameStatus.LOST)
        self.assertEqual(turn.attempt_index, MAX_GUESSES)
        self.assertEqual(turn.solution, "crane")

    def test_win_on_last_guess(self):
        for word in MISSES[:-1]:
            play(self.session, word)
        turn = play(self.session, "crane")
        self.assertIs(turn.status, GameStatus.WON)

    def test_no_input_after_loss(self):
        for word in MISSES:
            play(self.session, word)
        with self.assertRaises(SessionTerminal):
            self.session.append_letter("a")
        with self.assertRaises(SessionTerminal):
            self.session.delete_letter()
        with self.assertRaises(SessionTerminal):
            self.session.submit()
        self.assertEqual(len(self.session.history), MAX_GUESSES)

    def test_no_input_after_win(self):
        play(self.session, "crane")
        with self.assertRaises(SessionTerminal):
            self.session.submit()

    def test_terminal_checked_before_reveal_guard(self):
        type_word(self.session, "crane")
        self.session.submit()
        self.assertTrue(self.session.revealing)
        with self.assertRaises(SessionTerminal):
            self.session.append_letter("a")

    def test_solution_hidden_while_playing(self):
        play(self.session, "cigar")
        self.assertIsNone(self.session.revealed_solution())


class TestHandleKey(unittest.TestCase):

    def setUp(self):
        self.session = new_session("crane", DICTIONARY)

    def test_letters_append(self):
        self.session.handle_key("c")
        self.session.handle_key("R")
        self.assertEqual(self.session.buffer, "cr")

    def test_backspace_deletes(self):
        self.session.handle_key("c")
        self.session.handle_key("Backspace")
        self.assertEqual(self.session.buffer, "")

    def test_enter_submits(self):
        for key in "cigar":
            self.session.handle_key(key)
        turn = self.session.handle_key("Enter")
        self.assertEqual(turn.attempt_index, 1)

    def test_enter_with_short_guess(self):
        self.session.handle_key("c")
        with self.assertRaises(IncompleteGuess):
            self.session.handle_key("Enter")

    def test_other_keys_ignored(self):
        for key in ["Shift", "Tab", "ArrowLeft"]:
            self.assertFalse(self.session.handle_key(key).accepted)


if __name__ == "__main__":
    unittest.main()
