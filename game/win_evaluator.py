"""
Win condition evaluation for Find The Imposter.
"""

import logging

from .models import GameSession, GamePhase, GameResult
from utils.constants import WINNER_TYPES, WIN_MESSAGES

logger = logging.getLogger(__name__)


def determine_winner(session: GameSession) -> GameResult:
    """
    Decide the game once two or fewer players are left.

    Only the last player eliminated this round counts: if they were an
    imposter the majority wins, otherwise the imposter does.

    Args:
        session: The room whose game is ending

    Returns:
        GameResult, also stored on the session
    """
    last_out = session.eliminated_this_round[-1] if session.eliminated_this_round else None
    survivors = [p.to_summary() for p in session.get_alive_players()]

    if last_out is not None and last_out.was_imposter:
        winner = WINNER_TYPES['MAJORITY']
        imposter = {'id': last_out.id, 'name': last_out.name}
    else:
        winner = WINNER_TYPES['IMPOSTER']
        surviving_imposter = next((p for p in session.get_alive_players() if p.is_imposter), None)
        imposter = surviving_imposter.to_summary() if surviving_imposter else None

    result = GameResult(
        winner=winner,
        message=WIN_MESSAGES[winner],
        survivors=survivors,
        imposter=imposter
    )
    session.game_result = result
    session.phase = GamePhase.GAME_OVER

    logger.info(f"Game over in room {session.code}: {winner} wins")
    return result
