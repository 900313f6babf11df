"""
Game Module for Find The Imposter.

Contains all game-specific logic and components.
Game operations happen within rooms but are separate from room management.
"""

from .models import (
    GamePhase, GameSession, GameSettings, WordPair, EliminationRecord,
    TallyEntry, TallyResult, RoundSetup, GameResult
)
from .word_provider import WordPairProvider
from .round_manager import RoundManager, get_imposter_count
from .vote_manager import VoteManager
from .win_evaluator import determine_winner
from .manager import GameManager
from .views import host_view, moderator_view, player_view

__all__ = [
    # Data models
    'GamePhase',
    'GameSession',
    'GameSettings',
    'WordPair',
    'EliminationRecord',
    'TallyEntry',
    'TallyResult',
    'RoundSetup',
    'GameResult',

    # Managers
    'GameManager',
    'RoundManager',
    'VoteManager',
    'WordPairProvider',

    # Functions
    'get_imposter_count',
    'determine_winner',
    'host_view',
    'moderator_view',
    'player_view'
]
