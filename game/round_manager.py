"""
Round management for Find The Imposter.

This module handles round setup (secret roles and words), the clue circle
turn order, and how many imposters a round gets.
"""

import logging
import random
from typing import Optional, Dict, Any

from .models import GameSession, GamePhase, RoundSetup
from .word_provider import WordPairProvider
from utils.constants import IMPOSTER_STEPS, DECISIVE_ROUND_MAX_ALIVE
from utils.helpers import shuffle_players

logger = logging.getLogger(__name__)


def get_imposter_count(alive_count: int) -> int:
    """
    Number of imposters (and of eliminations) for a round.

    1 for up to 6 alive, 2 for 7-15, 3 for 16-25, 4 for 26+.
    A decisive round (3 or fewer alive) always has exactly 1.
    """
    if alive_count <= DECISIVE_ROUND_MAX_ALIVE:
        return 1
    for min_alive, imposters in IMPOSTER_STEPS:
        if alive_count >= min_alive:
            return imposters
    return 1


class RoundManager:
    """Sets up rounds and walks the clue circle."""

    def __init__(self, word_provider: Optional[WordPairProvider] = None,
                 rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.word_provider = word_provider or WordPairProvider(rng=self.rng)

    def start_round(self, session: GameSession) -> RoundSetup:
        """
        Start the next round: deal secret words and shuffle the clue order.

        Args:
            session: The room starting a round

        Returns:
            RoundSetup describing the round
        """
        session.round_number += 1
        session.votes.clear()
        session.eliminated_this_round = []
        session.last_tally = None
        session.clear_tie_break()
        session.clue_index = 0

        alive_players = session.get_alive_players()
        alive_count = len(alive_players)
        imposter_count = get_imposter_count(alive_count)
        is_final_round = alive_count <= DECISIVE_ROUND_MAX_ALIVE

        word_pair = self.word_provider.get_word_pair(session.round_number, session.used_pairs)
        session.word_pair = word_pair
        session.used_pairs.append(word_pair.pair_key)

        # Eliminated players keep their old word only in the history
        for player in session.get_all_players():
            player.clear_round_state()

        session.imposter_count = imposter_count
        shuffled = shuffle_players(alive_players, self.rng)
        for player in shuffled[:imposter_count]:
            player.is_imposter = True
            player.word = word_pair.imposter_word
        for player in shuffled[imposter_count:]:
            player.word = word_pair.main_word

        # Second, independent shuffle so speaking order says nothing about roles
        session.clue_order = [p.id for p in shuffle_players(alive_players, self.rng)]
        session.phase = GamePhase.WORD_REVEAL

        logger.info(f"Room {session.code} started round {session.round_number}: "
                    f"{alive_count} alive, {imposter_count} imposter(s), {word_pair.difficulty}")

        return RoundSetup(
            round=session.round_number,
            alive_count=alive_count,
            imposter_count=imposter_count,
            difficulty=word_pair.difficulty,
            is_final_round=is_final_round
        )

    def start_clue_circle(self, session: GameSession) -> Dict[str, Any]:
        """
        Open the clue circle at the first speaker.

        Returns:
            The speaking order and the current index (0)
        """
        session.phase = GamePhase.CLUE_CIRCLE
        session.clue_index = 0

        order = []
        for player_id in session.clue_order:
            player = session.get_player(player_id)
            if player:
                order.append(player.to_summary())

        return {'order': order, 'current_index': 0}

    def advance_clue(self, session: GameSession) -> Dict[str, Any]:
        """
        Move to the next speaker.

        Returns:
            {'done': True} once everyone has spoken, otherwise the new index
            and the player whose turn it is
        """
        if session.clue_index < len(session.clue_order):
            session.clue_index += 1

        if session.clue_index >= len(session.clue_order):
            return {'done': True, 'current_index': session.clue_index}

        player = session.get_player(session.clue_order[session.clue_index])
        return {
            'done': False,
            'current_index': session.clue_index,
            'player': player.to_summary() if player else None
        }
