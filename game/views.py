"""
State projections for the three kinds of client.

- host view: the shared screen, safe for everyone to see
- moderator view: everything, including roles and words
- player view: what one player may know about the room

Views are plain dictionaries ready for JSON and must be built while the
room's lock is held.
"""

from typing import Dict, Any, Optional

from .models import GameSession


def _round_summary(session: GameSession) -> Dict[str, Any]:
    alive_count = session.alive_count
    return {
        'code': session.code,
        'phase': session.phase.value,
        'round': session.round_number,
        'settings': session.settings.to_dict(),
        'alive_count': alive_count,
        'total_count': session.total_count,
    }


def host_view(session: GameSession) -> Dict[str, Any]:
    """
    Public projection for the host display.

    Contains no roles and no words; only the difficulty of the current pair.
    """
    view = _round_summary(session)
    view.update({
        'players': [p.to_dict() for p in session.get_all_players()],
        'imposter_count': session.imposter_count,
        'voted_count': len(session.votes),
        'clue_order': [
            session.get_player(pid).to_summary() for pid in session.clue_order if session.get_player(pid)
        ],
        'clue_index': session.clue_index,
        'difficulty': session.word_pair.difficulty if session.word_pair else None,
        'last_tally': session.last_tally.to_dict() if session.last_tally else None,
        'tie_break_candidates': [e.to_dict() for e in session.tie_break_candidates],
        'tie_break_slots': session.tie_break_slots,
        'tie_break_result': [e.to_dict() for e in session.tie_break_result],
        'elimination_history': [r.to_dict() for r in session.elimination_history],
        'game_result': session.game_result.to_dict() if session.game_result else None,
    })
    return view


def moderator_view(session: GameSession) -> Dict[str, Any]:
    """Host view plus every player's role and word and the full word pair."""
    view = host_view(session)
    view['players'] = [p.to_dict(include_secret=True) for p in session.get_all_players()]
    view['word_pair'] = session.word_pair.to_dict() if session.word_pair else None
    if session.last_tally:
        view['last_tally'] = session.last_tally.to_dict(include_secret=True)
    view['eliminated_this_round'] = [e.to_dict(include_secret=True) for e in session.eliminated_this_round]
    return view


def player_view(session: GameSession, player_id: str) -> Optional[Dict[str, Any]]:
    """
    What one player is allowed to see.

    Their own word is included, their role never is.
    Returns None for an unknown player.
    """
    player = session.get_player(player_id)
    if not player:
        return None

    view = _round_summary(session)
    view.update({
        'me': {
            'id': player.id,
            'name': player.name,
            'is_alive': player.is_alive,
            'has_voted': player.has_voted,
            'word': player.word,
        },
        'alive_players': [p.to_summary() for p in session.get_alive_players()],
    })
    return view
