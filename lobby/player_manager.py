"""
Player management for rooms.

Handles joining, reconnection, disconnection and moderator kicks.
Players are never removed from a room; elimination only changes status.
"""

import logging
import uuid
from typing import Optional, List, Tuple, Dict, Any, TYPE_CHECKING

from .models import PlayerData
from utils.constants import REJECTIONS, MAX_PLAYERS_PER_ROOM
from utils.helpers import validate_display_name, reject

if TYPE_CHECKING:
    from game.models import GameSession

logger = logging.getLogger(__name__)


def generate_player_id() -> str:
    """Opaque id handed to a player once and reused on reconnect."""
    return f"player_{uuid.uuid4().hex[:12]}"


class PlayerManager:
    """Manages the roster of a single game session."""

    def __init__(self, max_players: int = MAX_PLAYERS_PER_ROOM):
        self.max_players = max_players

    def join(self, session: 'GameSession', name: str, connection_id: str,
             player_id: Optional[str] = None) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Add a player to a room, or reconnect a returning one.

        Once the game has started only reconnections are accepted, matched
        by the previously issued player id or else by the name of a
        disconnected player.

        Args:
            session: The room to join
            name: Requested display name
            connection_id: Transport connection of the joining client
            player_id: Id issued on an earlier join, if the client kept it

        Returns:
            tuple: (success, message, {'player': PlayerData, 'reconnected': bool})
        """
        from game.models import GamePhase

        if player_id:
            success, message, player = self.reconnect(session, player_id, connection_id)
            if success:
                return True, message, {'player': player, 'reconnected': True}

        is_valid, error_msg = validate_display_name(name)
        if not is_valid:
            logger.debug(f"Rejected name {name!r} in room {session.code}: {error_msg}")
            return reject(REJECTIONS['INVALID_NAME'])

        existing = session.get_player_by_name(name)
        if existing and existing.is_connected:
            return reject(REJECTIONS['NAME_TAKEN'])

        if existing:
            self._attach(existing, connection_id)
            logger.info(f"Player {existing.name} reconnected by name to room {session.code}")
            return True, f"Welcome back, {existing.name}", {'player': existing, 'reconnected': True}

        if session.phase != GamePhase.LOBBY:
            return reject(REJECTIONS['GAME_IN_PROGRESS'])

        if session.total_count >= self.max_players:
            return reject(REJECTIONS['ROOM_FULL'])

        player = PlayerData(
            id=generate_player_id(),
            name=name.strip(),
            connection_id=connection_id
        )
        session.players[player.id] = player

        logger.info(f"Player {player.name} joined room {session.code} ({session.total_count} players)")
        return True, "Player added successfully", {'player': player, 'reconnected': False}

    def reconnect(self, session: 'GameSession', player_id: str,
                  connection_id: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Reattach a known player to a new connection.

        Returns:
            tuple: (success, message, player_data)
        """
        player = session.get_player(player_id)
        if not player:
            return reject(REJECTIONS['PLAYER_NOT_FOUND'])

        self._attach(player, connection_id)
        logger.info(f"Player {player.name} reconnected to room {session.code}")
        return True, f"Player {player.name} reconnected", player

    def disconnect(self, session: 'GameSession',
                   connection_id: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Mark a player as disconnected without eliminating them.

        Returns:
            tuple: (success, message, player_data)
        """
        player = session.get_player_by_connection(connection_id)
        if not player:
            return reject(REJECTIONS['PLAYER_NOT_FOUND'])

        player.is_connected = False

        logger.info(f"Player {player.name} disconnected from room {session.code}")
        return True, f"Player {player.name} disconnected", player

    def kick(self, session: 'GameSession', player_id: str) -> Tuple[bool, str, Optional[PlayerData]]:
        """
        Force-eliminate a rule breaker, whatever the phase.

        The kick is recorded in the elimination history and every trace of
        the player in the in-progress vote is dropped.

        Returns:
            tuple: (success, message, player_data)
        """
        from game.models import EliminationRecord

        player = session.get_player(player_id)
        if not player:
            return reject(REJECTIONS['PLAYER_NOT_FOUND'])

        if not player.is_alive:
            return reject(REJECTIONS['PLAYER_NOT_ALIVE'])

        player.eliminate()
        session.elimination_history.append(EliminationRecord(
            round=session.round_number,
            id=player.id,
            name=player.name,
            was_imposter=player.is_imposter,
            word=player.word,
            kicked=True
        ))
        self._purge_from_round(session, player.id)

        logger.info(f"Player {player.name} kicked from room {session.code}")
        return True, f"Player {player.name} kicked", player

    def get_all_players(self, session: 'GameSession') -> List[PlayerData]:
        return session.get_all_players()

    def get_alive_players(self, session: 'GameSession') -> List[PlayerData]:
        return session.get_alive_players()

    def get_alive_count(self, session: 'GameSession') -> int:
        return session.alive_count

    def get_total_count(self, session: 'GameSession') -> int:
        return session.total_count

    def _attach(self, player: PlayerData, connection_id: str) -> None:
        player.connection_id = connection_id
        player.is_connected = True

    def _purge_from_round(self, session: 'GameSession', player_id: str) -> None:
        """Drop a removed player from the ledger, tie-break and pending eliminations."""
        if player_id in session.votes:
            del session.votes[player_id]

        # Votes aimed at the kicked player are void; those voters may vote again
        for voter_id, target_id in list(session.votes.items()):
            if target_id == player_id:
                del session.votes[voter_id]
                voter = session.get_player(voter_id)
                if voter:
                    voter.has_voted = False

        session.tie_break_candidates = [c for c in session.tie_break_candidates if c.id != player_id]
        if not session.tie_break_candidates:
            session.tie_break_slots = 0
        session.eliminated_this_round = [e for e in session.eliminated_this_round if e.id != player_id]
