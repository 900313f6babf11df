"""
Vote Manager for Find The Imposter.

Handles vote validation, counting, and tie resolution.
Contains no phase sequencing - purely voting mechanics.
"""

import itertools
import logging
import random
from typing import Dict, List, Optional, Tuple, Any

from .models import GameSession, GamePhase, TallyEntry, TallyResult
from .round_manager import get_imposter_count
from utils.constants import REJECTIONS
from utils.helpers import reject

logger = logging.getLogger(__name__)


class VoteManager:
    """
    Collects one vote per alive player and resolves who leaves the game.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        logger.debug("Vote manager initialized")

    def cast_vote(self, session: GameSession, voter_id: str,
                  target_id: str) -> Tuple[bool, str, Optional[Dict[str, int]]]:
        """
        Record a vote. A vote can't be changed once cast.

        Args:
            session: The room that is voting
            voter_id: Player casting the vote
            target_id: Player being voted for

        Returns:
            Tuple of (success, message_or_reason, {'voted_count', 'total_alive'})
        """
        voter = session.get_player(voter_id)
        target = session.get_player(target_id)

        if not voter or not target:
            return reject(REJECTIONS['PLAYER_NOT_FOUND'])
        if not voter.is_alive:
            return reject(REJECTIONS['VOTER_NOT_ALIVE'])
        if not target.is_alive:
            return reject(REJECTIONS['TARGET_NOT_ALIVE'])
        if voter_id == target_id:
            return reject(REJECTIONS['SELF_VOTE'])
        if voter.has_voted or voter_id in session.votes:
            return reject(REJECTIONS['ALREADY_VOTED'])

        session.votes[voter_id] = target_id
        voter.has_voted = True

        vote_result = {
            'voted_count': len(session.votes),
            'total_alive': session.alive_count
        }

        logger.info(f"Vote cast in room {session.code}: {voter.name} -> {target.name} "
                    f"({vote_result['voted_count']}/{vote_result['total_alive']})")
        return True, "Vote cast successfully", vote_result

    def get_elimination_count(self, session: GameSession) -> int:
        """How many players leave the game this round."""
        return get_imposter_count(session.alive_count)

    def count_votes(self, session: GameSession) -> List[TallyEntry]:
        """
        Votes received by every alive player, most votes first.

        Players with equal votes stay in join order.
        """
        alive_players = session.get_alive_players()
        vote_counts = {p.id: 0 for p in alive_players}
        for target_id in session.votes.values():
            if target_id in vote_counts:
                vote_counts[target_id] += 1

        entries = [
            TallyEntry(id=p.id, name=p.name, votes=vote_counts[p.id], was_imposter=p.is_imposter)
            for p in alive_players
        ]
        return sorted(entries, key=lambda e: e.votes, reverse=True)

    def tally_votes(self, session: GameSession) -> TallyResult:
        """
        Close the vote and decide who is eliminated.

        Equal-vote groups are taken from the top while they fit in the
        remaining elimination slots. The first group that does not fit
        becomes the tie-break candidate set and nobody from it (or below
        it) is eliminated yet.

        Args:
            session: The room closing its vote

        Returns:
            TallyResult with the full tally, confirmed eliminations and
            any pending tie-break
        """
        slots_left = self.get_elimination_count(session)
        ranked = self.count_votes(session)

        to_eliminate: List[TallyEntry] = []
        candidates: List[TallyEntry] = []

        for _, group in itertools.groupby(ranked, key=lambda e: e.votes):
            if slots_left == 0:
                break
            group = list(group)
            if len(group) <= slots_left:
                to_eliminate.extend(group)
                slots_left -= len(group)
            else:
                candidates = group
                break

        session.eliminated_this_round = list(to_eliminate)
        session.tie_break_candidates = candidates
        session.tie_break_slots = slots_left if candidates else 0
        session.tie_break_result = []

        result = TallyResult(
            vote_tally=ranked,
            to_eliminate=to_eliminate,
            tie_break_candidates=candidates,
            tie_break_slots=session.tie_break_slots
        )
        session.last_tally = result
        session.phase = GamePhase.RESULTS

        if result.needs_tie_break:
            logger.info(f"Room {session.code} vote tied: {len(candidates)} candidates "
                        f"for {session.tie_break_slots} slot(s)")
        else:
            logger.info(f"Room {session.code} vote closed: {[e.name for e in to_eliminate]} eliminated")
        return result

    def resolve_tie_break(self, session: GameSession) -> Tuple[bool, str, Optional[Dict[str, Any]]]:
        """
        Break a tie by drawing the open slots uniformly at random.

        Returns:
            Tuple of (success, message_or_reason, {'candidates', 'eliminated'})
        """
        if not session.tie_break_pending:
            return reject(REJECTIONS['NO_TIE_BREAK_PENDING'])

        candidates = list(session.tie_break_candidates)
        already_out = {e.id for e in session.eliminated_this_round}
        pool = [c for c in candidates if c.id not in already_out]

        picked = self.rng.sample(pool, min(session.tie_break_slots, len(pool)))

        session.eliminated_this_round.extend(picked)
        session.tie_break_result = picked
        session.phase = GamePhase.TIE_BREAK

        logger.info(f"Room {session.code} tie-break picked {[e.name for e in picked]}")
        return True, "Tie-break resolved", {'candidates': candidates, 'eliminated': picked}
