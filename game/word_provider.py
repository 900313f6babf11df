"""
Word pair provider for Find The Imposter.

Supplies a word pair for each round. Difficulty climbs with the round
number, and pairs already used in a room are avoided until the tier
runs dry.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .models import WordPair
from utils.constants import WORD_PAIRS, DIFFICULTY_TIERS, FINAL_DIFFICULTY

logger = logging.getLogger(__name__)


def get_difficulty(round_number: int) -> str:
    """
    Difficulty tier for a round.

    Rounds 1-3: easy, 4-6: medium, 7-9: hard, 10+: evil
    """
    for last_round, tier in DIFFICULTY_TIERS:
        if round_number <= last_round:
            return tier
    return FINAL_DIFFICULTY


def make_pair_key(main_word: str, imposter_word: str) -> str:
    return f"{main_word}/{imposter_word}"


class WordPairProvider:
    """Picks word pairs from a tiered data set."""

    def __init__(self, pairs: Optional[Dict[str, List[Tuple[str, str]]]] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            pairs: Tier name -> list of (main word, imposter word)
            rng: Optional random source
        """
        self.pairs = pairs or WORD_PAIRS
        self.rng = rng or random.Random()

    def get_word_pair(self, round_number: int, used_pairs: Sequence[str] = ()) -> WordPair:
        """
        Get a random word pair for the given round.

        Args:
            round_number: The round about to start (1-based)
            used_pairs: Pair keys already played in this room

        Returns:
            A WordPair; which word goes to the imposter is decided by a coin flip
        """
        difficulty = get_difficulty(round_number)
        tier = self.pairs[difficulty]
        available = [p for p in tier if make_pair_key(*p) not in used_pairs]

        if not available:
            logger.info(f"All {difficulty} word pairs used, reusing the tier")
            available = tier

        main_word, imposter_word = self.rng.choice(available)
        pair_key = make_pair_key(main_word, imposter_word)

        if self.rng.random() > 0.5:
            main_word, imposter_word = imposter_word, main_word

        return WordPair(
            main_word=main_word,
            imposter_word=imposter_word,
            difficulty=difficulty,
            pair_key=pair_key
        )
