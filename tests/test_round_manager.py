"""
Tests for round setup, word pairs and the clue circle.
"""

import random

import pytest

from game import GamePhase, RoundManager, WordPairProvider, get_imposter_count
from game.word_provider import get_difficulty
from tests.conftest import add_players


@pytest.mark.parametrize("alive,expected", [
    (1, 1), (2, 1), (3, 1), (4, 1), (5, 1), (6, 1),
    (7, 2), (10, 2), (15, 2),
    (16, 3), (25, 3),
    (26, 4), (40, 4),
])
def test_imposter_count(alive, expected):
    assert get_imposter_count(alive) == expected


@pytest.mark.parametrize("round_number,tier", [
    (1, 'easy'), (3, 'easy'), (4, 'medium'), (6, 'medium'),
    (7, 'hard'), (9, 'hard'), (10, 'evil'), (25, 'evil'),
])
def test_difficulty_tiers(round_number, tier):
    assert get_difficulty(round_number) == tier


def test_five_players_get_one_imposter(five_player_session, round_manager):
    session = five_player_session
    setup = round_manager.start_round(session)

    imposters = [p for p in session.get_all_players() if p.is_imposter]
    majority = [p for p in session.get_all_players() if not p.is_imposter]

    assert setup.imposter_count == 1
    assert setup.alive_count == 5
    assert setup.round == 1
    assert setup.difficulty == 'easy'
    assert not setup.is_final_round
    assert len(imposters) == 1
    assert imposters[0].word == session.word_pair.imposter_word
    assert all(p.word == session.word_pair.main_word for p in majority)
    assert session.word_pair.main_word != session.word_pair.imposter_word

    ids = [p.id for p in session.get_all_players()]
    assert sorted(session.clue_order) == sorted(ids)
    assert len(set(session.clue_order)) == 5
    assert session.phase == GamePhase.WORD_REVEAL


def test_seven_players_get_two_imposters(session, round_manager):
    add_players(session, 7)
    setup = round_manager.start_round(session)

    assert setup.imposter_count == 2
    assert sum(p.is_imposter for p in session.get_all_players()) == 2


def test_decisive_round(session, round_manager):
    players = add_players(session, 5)
    players[0].eliminate()
    players[1].eliminate()

    setup = round_manager.start_round(session)

    assert setup.is_final_round
    assert setup.imposter_count == 1
    assert players[0].word is None
    assert not players[0].is_imposter
    assert session.clue_order and players[0].id not in session.clue_order


def test_start_round_clears_previous_round(five_player_session, round_manager):
    session = five_player_session
    round_manager.start_round(session)
    voter, target = session.get_all_players()[:2]
    session.votes[voter.id] = target.id
    voter.has_voted = True
    session.clue_index = 3

    setup = round_manager.start_round(session)

    assert setup.round == 2
    assert session.votes == {}
    assert session.clue_index == 0
    assert not voter.has_voted
    assert len(session.used_pairs) == 2
    assert session.used_pairs[0] != session.used_pairs[1]


def test_word_provider_avoids_used_pairs():
    pairs = {'easy': [('A', 'B'), ('C', 'D')]}
    provider = WordPairProvider(pairs=pairs, rng=random.Random(2))

    for _ in range(20):
        pair = provider.get_word_pair(1, used_pairs=['A/B'])
        assert pair.pair_key == 'C/D'
        assert {pair.main_word, pair.imposter_word} == {'C', 'D'}


def test_word_provider_reuses_exhausted_tier():
    pairs = {'easy': [('A', 'B')]}
    provider = WordPairProvider(pairs=pairs, rng=random.Random(2))

    pair = provider.get_word_pair(2, used_pairs=['A/B'])

    assert pair.pair_key == 'A/B'
    assert pair.difficulty == 'easy'


def test_word_provider_swaps_words_sometimes():
    pairs = {'easy': [('A', 'B')]}
    provider = WordPairProvider(pairs=pairs, rng=random.Random(0))

    mains = {provider.get_word_pair(1).main_word for _ in range(50)}
    assert mains == {'A', 'B'}


def test_clue_circle_walks_order(five_player_session, round_manager):
    session = five_player_session
    round_manager.start_round(session)

    clue_data = round_manager.start_clue_circle(session)
    assert session.phase == GamePhase.CLUE_CIRCLE
    assert clue_data['current_index'] == 0
    assert [p['id'] for p in clue_data['order']] == session.clue_order

    for expected_index in range(1, 5):
        step = round_manager.advance_clue(session)
        assert step['done'] is False
        assert step['current_index'] == expected_index
        assert step['player']['id'] == session.clue_order[expected_index]

    assert round_manager.advance_clue(session)['done'] is True
    # The cursor never runs past the end
    assert round_manager.advance_clue(session) == {'done': True, 'current_index': 5}
    assert session.clue_index == 5


def test_roles_are_random_across_seeds(session):
    add_players(session, 6)
    imposters = set()
    for seed in range(20):
        manager = RoundManager(rng=random.Random(seed))
        manager.start_round(session)
        imposters.update(p.id for p in session.get_all_players() if p.is_imposter)
        session.round_number = 0
    assert len(imposters) > 1
