"""
Game Manager - Coordinator for game operations.

Provides a unified interface for game commands by coordinating between
PlayerManager, RoundManager and VoteManager, and owns the phase machine:
every command checks that the room is in a phase that allows it.

Commands take the GameSession as their first argument so they can be run
through ``LobbyManager.execute`` under the room's lock. They never emit
anything; they return (success, message, data) and the handlers decide
who hears about it.
"""

import logging
import random
from typing import Optional, Dict, Any, Tuple

from .models import GameSession, GamePhase, GameSettings, EliminationRecord
from .round_manager import RoundManager
from .vote_manager import VoteManager
from .win_evaluator import determine_winner
from lobby.player_manager import PlayerManager
from utils.constants import REJECTIONS, MIN_PLAYERS, GAME_OVER_MAX_ALIVE
from utils.helpers import reject

logger = logging.getLogger(__name__)

CommandResult = Tuple[bool, str, Optional[Dict[str, Any]]]


class GameManager:
    """Coordinates all game operations within a room."""

    def __init__(self, round_manager: Optional[RoundManager] = None,
                 vote_manager: Optional[VoteManager] = None,
                 player_manager: Optional[PlayerManager] = None,
                 rng: Optional[random.Random] = None,
                 lock_settings_during_round: bool = False):
        """
        Args:
            round_manager: Round setup and clue circle
            vote_manager: Voting mechanics
            player_manager: Roster operations
            rng: Random source shared by the default managers
            lock_settings_during_round: Only allow settings changes in LOBBY and GAME_OVER
        """
        self.rng = rng or random.Random()
        self.round_manager = round_manager or RoundManager(rng=self.rng)
        self.vote_manager = vote_manager or VoteManager(rng=self.rng)
        self.player_manager = player_manager or PlayerManager()
        self.lock_settings_during_round = lock_settings_during_round

    def _check_phase(self, session: GameSession, command: str, *allowed: GamePhase):
        """Return a wrong_phase rejection if the room is not in an allowed phase."""
        if session.phase in allowed:
            return None
        logger.warning(f"Rejected {command} in room {session.code}: phase is {session.phase.value}")
        return reject(REJECTIONS['WRONG_PHASE'])

    # Roster

    def join(self, session: GameSession, name: str, connection_id: str,
             player_id: Optional[str] = None) -> CommandResult:
        return self.player_manager.join(session, name, connection_id, player_id)

    def reconnect(self, session: GameSession, player_id: str, connection_id: str):
        return self.player_manager.reconnect(session, player_id, connection_id)

    def disconnect(self, session: GameSession, connection_id: str):
        return self.player_manager.disconnect(session, connection_id)

    def kick_player(self, session: GameSession, player_id: str):
        """Force-eliminate a player in any phase."""
        return self.player_manager.kick(session, player_id)

    def update_settings(self, session: GameSession, updates: Dict[str, Any]) -> CommandResult:
        """
        Change phase durations.

        Unknown keys are ignored. If any recognized value is invalid nothing
        changes.
        """
        if self.lock_settings_during_round and session.is_active:
            return reject(REJECTIONS['SETTINGS_LOCKED'])

        parsed = GameSettings.parse_updates(updates)
        if parsed is None:
            logger.debug(f"Invalid settings update for room {session.code}: {updates}")
            return reject(REJECTIONS['INVALID_SETTING'])

        session.settings.apply(parsed)
        logger.info(f"Room {session.code} settings updated: {parsed}")
        return True, "Settings updated", session.settings.to_dict()

    # Round flow

    def start_round(self, session: GameSession) -> CommandResult:
        """
        Deal a new round.

        Returns:
            tuple: (success, message, round_setup_dict)
        """
        rejection = self._check_phase(session, 'start_round', GamePhase.LOBBY, GamePhase.ELIMINATION)
        if rejection:
            return rejection

        if session.alive_count < MIN_PLAYERS:
            return reject(REJECTIONS['NOT_ENOUGH_PLAYERS'])

        setup = self.round_manager.start_round(session)
        return True, f"Round {setup.round} started", setup.to_dict()

    def start_clue_circle(self, session: GameSession) -> CommandResult:
        rejection = self._check_phase(session, 'start_clue_circle', GamePhase.WORD_REVEAL)
        if rejection:
            return rejection

        clue_data = self.round_manager.start_clue_circle(session)
        logger.info(f"Room {session.code} clue circle started")
        return True, "Clue circle started", clue_data

    def advance_clue(self, session: GameSession) -> CommandResult:
        rejection = self._check_phase(session, 'advance_clue', GamePhase.CLUE_CIRCLE)
        if rejection:
            return rejection

        return True, "Next clue player", self.round_manager.advance_clue(session)

    def start_discussion(self, session: GameSession) -> CommandResult:
        rejection = self._check_phase(session, 'start_discussion', GamePhase.CLUE_CIRCLE)
        if rejection:
            return rejection

        session.phase = GamePhase.DISCUSSION
        logger.info(f"Room {session.code} discussion started")
        return True, "Discussion started", {'duration': session.settings.discussion_time}

    def start_voting(self, session: GameSession) -> CommandResult:
        """Open the vote with an empty ledger."""
        rejection = self._check_phase(session, 'start_voting', GamePhase.DISCUSSION)
        if rejection:
            return rejection

        session.votes.clear()
        for player in session.get_all_players():
            player.has_voted = False
        session.phase = GamePhase.VOTING

        logger.info(f"Room {session.code} voting opened")
        return True, "Voting started", {
            'duration': session.settings.voting_time,
            'alive_players': [p.to_summary() for p in session.get_alive_players()]
        }

    def cast_vote(self, session: GameSession, voter_id: str, target_id: str) -> CommandResult:
        rejection = self._check_phase(session, 'cast_vote', GamePhase.VOTING)
        if rejection:
            return rejection

        return self.vote_manager.cast_vote(session, voter_id, target_id)

    def close_voting(self, session: GameSession) -> CommandResult:
        """
        Tally the vote.

        Returns:
            tuple: (success, message, tally_dict)
        """
        rejection = self._check_phase(session, 'close_voting', GamePhase.VOTING)
        if rejection:
            return rejection

        result = self.vote_manager.tally_votes(session)
        return True, "Voting closed", result.to_dict()

    def resolve_tie_break(self, session: GameSession) -> CommandResult:
        rejection = self._check_phase(session, 'resolve_tie_break', GamePhase.RESULTS)
        if rejection:
            return rejection

        success, message, data = self.vote_manager.resolve_tie_break(session)
        if not success:
            return success, message, data

        return True, message, {
            'candidates': [e.to_dict() for e in data['candidates']],
            'eliminated': [e.to_dict() for e in data['eliminated']]
        }

    def execute_eliminations(self, session: GameSession) -> CommandResult:
        """
        Eliminate this round's confirmed players and check for game over.

        Returns:
            tuple: (success, message, {'eliminated', 'remaining_players',
            'game_over', 'main_word', 'imposter_word'})
        """
        rejection = self._check_phase(session, 'execute_eliminations',
                                      GamePhase.RESULTS, GamePhase.TIE_BREAK)
        if rejection:
            return rejection

        if session.phase == GamePhase.RESULTS and session.tie_break_pending:
            return reject(REJECTIONS['TIE_BREAK_PENDING'])

        eliminated = []
        for entry in session.eliminated_this_round:
            player = session.get_player(entry.id)
            if not player or not player.is_alive:
                continue

            player.eliminate()
            record = EliminationRecord(
                round=session.round_number,
                id=player.id,
                name=player.name,
                was_imposter=player.is_imposter,
                word=player.word
            )
            session.elimination_history.append(record)
            eliminated.append(record.to_dict())

        remaining = session.alive_count
        game_result = None
        if remaining <= GAME_OVER_MAX_ALIVE:
            game_result = determine_winner(session).to_dict()
        else:
            session.phase = GamePhase.ELIMINATION

        word_pair = session.word_pair
        logger.info(f"Room {session.code} eliminated {[e['name'] for e in eliminated]}, "
                    f"{remaining} remaining")

        return True, "Eliminations executed", {
            'eliminated': eliminated,
            'remaining_players': remaining,
            'game_over': game_result,
            'main_word': word_pair.main_word if word_pair else None,
            'imposter_word': word_pair.imposter_word if word_pair else None
        }

    def reset(self, session: GameSession) -> CommandResult:
        """
        Send the room back to the lobby with the same players and code.

        Everyone is alive again; roles, words, votes and history are gone.
        Nothing changes if the room is already in the lobby.
        """
        if session.phase == GamePhase.LOBBY:
            return True, "Game is already in the lobby", {'restarted': False}

        session.phase = GamePhase.LOBBY
        session.round_number = 0
        session.imposter_count = 0
        session.word_pair = None
        session.votes.clear()
        session.used_pairs = []
        session.elimination_history = []
        session.clue_order = []
        session.clue_index = 0
        session.clear_tie_break()
        session.eliminated_this_round = []
        session.last_tally = None
        session.game_result = None

        for player in session.get_all_players():
            player.is_alive = True
            player.clear_round_state()

        logger.info(f"Room {session.code} reset to lobby")
        return True, "Game reset", {'restarted': True}
