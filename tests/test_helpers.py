"""
Tests for room codes, name validation and other helpers.
"""

import random

from lobby import LobbyCreator
from utils.constants import ROOM_CODE_ALPHABET, REJECTION_MESSAGES
from utils.helpers import (
    generate_room_code, normalize_room_code, validate_display_name,
    names_match, shuffle_players, reject, rejection_payload
)


def test_room_code_uses_alphabet():
    rng = random.Random(5)
    for _ in range(200):
        code = generate_room_code(rng)
        assert len(code) == 4
        assert all(ch in ROOM_CODE_ALPHABET for ch in code)
        assert 'I' not in code and 'O' not in code


def test_room_code_is_deterministic_for_seed():
    assert generate_room_code(random.Random(9)) == generate_room_code(random.Random(9))


def test_normalize_room_code():
    assert normalize_room_code('  abcd ') == 'ABCD'
    assert normalize_room_code(None) == ''


def test_validate_display_name():
    assert validate_display_name('Ann') == (True, None)
    assert validate_display_name("Mary-Jo O'Neil")[0]
    assert not validate_display_name('')[0]
    assert not validate_display_name('   ')[0]
    assert not validate_display_name('x' * 21)[0]
    assert validate_display_name('x' * 20)[0]
    assert not validate_display_name('<script>')[0]


def test_names_match_ignores_case_and_padding():
    assert names_match('Ann', ' aNN ')
    assert not names_match('Ann', 'Anna')


def test_shuffle_players_returns_copy():
    players = list(range(10))
    shuffled = shuffle_players(players, random.Random(3))
    assert sorted(shuffled) == players
    assert players == list(range(10))


def test_reject_and_payload():
    assert reject('self_vote') == (False, 'self_vote', None)

    payload = rejection_payload('self_vote')
    assert payload == {
        'success': False,
        'code': 'self_vote',
        'error': REJECTION_MESSAGES['self_vote']
    }
    assert rejection_payload('mystery')['error'] == 'mystery'


def test_lobby_creator_avoids_taken_codes():
    taken = set()
    creator = LobbyCreator(rng=random.Random(11))
    for _ in range(30):
        code = creator.generate_room_code(lambda c: c in taken)
        assert code not in taken
        taken.add(code)


def test_lobby_creator_gives_up():
    creator = LobbyCreator(max_attempts=5, rng=random.Random(1))
    assert creator.generate_room_code(lambda c: True) is None


def test_validate_room_code():
    creator = LobbyCreator()
    assert creator.validate_room_code(' abcd') == (True, 'ABCD')
    assert not creator.validate_room_code('ABC')[0]
    assert not creator.validate_room_code('AB1O')[0]
