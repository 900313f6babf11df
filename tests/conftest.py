"""
Pytest fixtures for Find The Imposter tests.
"""

import random

import pytest

from game import GameManager, GameSession, GamePhase, RoundManager, VoteManager
from lobby import PlayerManager


@pytest.fixture
def rng():
    """Seeded random source so rounds and tie-breaks are reproducible."""
    return random.Random(1234)


@pytest.fixture
def session():
    """A fresh room in the lobby."""
    return GameSession(code='TEST')


@pytest.fixture
def player_manager():
    return PlayerManager()


@pytest.fixture
def round_manager(rng):
    return RoundManager(rng=rng)


@pytest.fixture
def vote_manager(rng):
    return VoteManager(rng=rng)


@pytest.fixture
def game_manager(rng):
    return GameManager(rng=rng)


def add_players(session, count, player_manager=None):
    """Join `count` players named Player1..PlayerN and return them in join order."""
    manager = player_manager or PlayerManager()
    players = []
    for i in range(1, count + 1):
        success, message, data = manager.join(session, f"Player{i}", f"sid-{i}")
        assert success, message
        players.append(data['player'])
    return players


def play_to_voting(game_manager, session):
    """Drive a room from LOBBY or ELIMINATION to an open vote."""
    for command in (game_manager.start_round, game_manager.start_clue_circle,
                    game_manager.start_discussion, game_manager.start_voting):
        success, message, _ = command(session)
        assert success, message
    assert session.phase == GamePhase.VOTING


@pytest.fixture
def five_player_session(session):
    add_players(session, 5)
    return session
