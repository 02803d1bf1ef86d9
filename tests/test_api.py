"""
Tests for the HTTP endpoints and WebSocket events, using the Flask and
Flask-SocketIO test clients.
"""

import unittest

from wordle2 import create_app
from wordle2.config import TestingConfig
from wordle2.services.dictionary import Dictionary
from wordle2.services.game_service import initialize_game_service

WORDS = ["crane", "cigar", "react", "apple", "about", "other", "zesty"]


def setup_service():
    return initialize_game_service(
        Dictionary(WORDS, source="test"),
        rand=lambda: 0.0,
        reveal_base_delay_ms=TestingConfig.REVEAL_BASE_DELAY_MS,
        reveal_step_ms=TestingConfig.REVEAL_STEP_MS
    )


class TestHttpApi(unittest.TestCase):

    def setUp(self):
        self.service = setup_service()
        self.app, self.socketio = create_app(TestingConfig)
        self.client = self.app.test_client()
        response = self.client.post('/api/new_game', json={})
        self.game_id = response.get_json()['game_id']

    def type_word(self, word):
        for letter in word:
            self.client.post(f'/api/game/{self.game_id}/letter', json={'letter': letter})

    def guess(self, word):
        self.type_word(word)
        response = self.client.post(f'/api/game/{self.game_id}/guess')
        self.client.post(f'/api/game/{self.game_id}/reveal_complete')
        return response

    def test_new_game(self):
        response = self.client.post('/api/new_game', json={'daily': True})
        data = response.get_json()
        self.assertEqual(response.status_code, 200)
        self.assertTrue(data['success'])
        self.assertEqual(data['state']['mode'], 'daily')
        self.assertIsNone(data['state']['answer'])

    def test_new_game_rejects_bad_daily_flag(self):
        response = self.client.post('/api/new_game', json={'daily': 'yes'})
        self.assertEqual(response.status_code, 400)

    def test_get_state(self):
        response = self.client.get(f'/api/game/{self.game_id}/state')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['state']['status'], 'in_progress')

    def test_unknown_game(self):
        response = self.client.get('/api/game/missing/state')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['error_code'], 'game_not_found')

        response = self.client.post('/api/game/missing/guess')
        self.assertEqual(response.status_code, 404)

    def test_letter_and_delete(self):
        response = self.client.post(f'/api/game/{self.game_id}/letter', json={'letter': 'C'})
        self.assertEqual(response.get_json()['turn']['buffer'], 'c')

        response = self.client.post(f'/api/game/{self.game_id}/delete')
        data = response.get_json()
        self.assertTrue(data['turn']['accepted'])
        self.assertEqual(data['state']['buffer'], '')

    def test_letter_required(self):
        response = self.client.post(f'/api/game/{self.game_id}/letter', json={})
        self.assertEqual(response.status_code, 400)

    def test_incomplete_guess(self):
        self.type_word("cra")
        response = self.client.post(f'/api/game/{self.game_id}/guess')
        data = response.get_json()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(data['error_code'], 'incomplete_guess')
        self.assertEqual(data['error'], 'Not enough letters')

    def test_not_in_dictionary(self):
        self.type_word("xxxxx")
        response = self.client.post(f'/api/game/{self.game_id}/guess')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['error_code'], 'not_in_dictionary')

    def test_guess_returns_result_and_reveal(self):
        self.type_word("cigar")
        response = self.client.post(f'/api/game/{self.game_id}/guess')
        data = response.get_json()
        self.assertEqual(data['turn']['result'], ['correct', 'absent', 'absent', 'present', 'present'])
        self.assertEqual([step['letter'] for step in data['turn']['reveal']], list("cigar"))
        self.assertTrue(data['state']['revealing'])

        # Typing is ignored until the reveal completes
        response = self.client.post(f'/api/game/{self.game_id}/letter', json={'letter': 'a'})
        self.assertFalse(response.get_json()['turn']['accepted'])

        response = self.client.post(f'/api/game/{self.game_id}/reveal_complete')
        self.assertFalse(response.get_json()['state']['revealing'])

    def test_win(self):
        data = self.guess("crane").get_json()
        self.assertEqual(data['turn']['status'], 'won')
        self.assertEqual(data['state']['answer'], 'crane')

    def test_loss_then_terminal(self):
        for word in ["cigar", "react", "apple", "about", "other"]:
            self.guess(word)
        data = self.guess("zesty").get_json()
        self.assertEqual(data['turn']['status'], 'lost')
        self.assertEqual(data['turn']['solution'], 'crane')

        response = self.client.post(f'/api/game/{self.game_id}/letter', json={'letter': 'a'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['error_code'], 'session_terminal')

    def test_delete_game(self):
        response = self.client.delete(f'/api/game/{self.game_id}')
        self.assertTrue(response.get_json()['success'])
        response = self.client.delete(f'/api/game/{self.game_id}')
        self.assertEqual(response.status_code, 404)

    def test_health(self):
        data = self.client.get('/api/health').get_json()
        self.assertEqual(data['status'], 'healthy')
        self.assertEqual(data['active_games'], 1)
        self.assertEqual(data['dictionary']['source'], 'test')
        self.assertEqual(data['word_statistics']['total_words'], len(WORDS))


class TestWebSocket(unittest.TestCase):

    def setUp(self):
        self.service = setup_service()
        self.app, self.socketio = create_app(TestingConfig)
        self.client = self.socketio.test_client(self.app)
        self.client.emit('new_game', {'daily': False})
        received = self.client.get_received()
        self.game_id = [event for event in received if event['name'] == 'game_state'][0]['args'][0]['game_id']

    def tearDown(self):
        self.client.disconnect()

    def press(self, *keys):
        for key in keys:
            self.client.emit('key', {'game_id': self.game_id, 'key': key})
        return self.client.get_received()

    def test_letters_update_state(self):
        received = self.press('c', 'r')
        states = [event['args'][0] for event in received if event['name'] == 'game_state']
        self.assertEqual(states[-1]['state']['buffer'], 'cr')

    def test_enter_drives_reveal(self):
        received = self.press(*"cigar", 'Enter')
        names = [event['name'] for event in received]
        tiles = [event['args'][0] for event in received if event['name'] == 'tile_revealed']

        self.assertEqual([tile['letter'] for tile in tiles], list("cigar"))
        self.assertEqual([tile['status'] for tile in tiles], ['correct', 'absent', 'absent', 'present', 'present'])
        self.assertTrue(all(tile['row'] == 0 for tile in tiles))
        self.assertIn('reveal_complete', names)
        self.assertLess(names.index('tile_revealed'), names.index('reveal_complete'))
        self.assertNotIn('game_over', names)
        self.assertFalse(self.service.get_game_state(self.game_id).revealing)

    def test_win_emits_game_over(self):
        received = self.press(*"crane", 'Enter')
        game_over = [event['args'][0] for event in received if event['name'] == 'game_over']
        self.assertEqual(game_over[0]['status'], 'won')
        self.assertEqual(game_over[0]['answer'], 'crane')

    def test_game_error_emitted(self):
        received = self.press('c', 'Enter')
        errors = [event['args'][0] for event in received if event['name'] == 'error']
        self.assertEqual(errors[0]['error_code'], 'incomplete_guess')

    def test_new_game_rejects_non_boolean_daily(self):
        self.client.emit('new_game', {'daily': 'false'})
        received = self.client.get_received()
        errors = [event['args'][0] for event in received if event['name'] == 'error']
        self.assertEqual(errors[0]['error_code'], 'invalid_request')
        self.assertNotIn('game_state', [event['name'] for event in received])
        self.assertEqual(self.service.active_games(), 1)

    def test_missing_game(self):
        self.client.emit('join_game', {'game_id': 'missing'})
        errors = [event for event in self.client.get_received() if event['name'] == 'error']
        self.assertEqual(len(errors), 1)


if __name__ == "__main__":
    unittest.main()
