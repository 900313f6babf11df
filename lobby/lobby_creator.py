"""
Lobby Creator for Find The Imposter.

Handles room code allocation and validation.
Contains no game logic or player management - purely room creation.
"""

import random
import logging
from typing import Optional, Tuple, Callable

from utils.constants import ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH, MAX_CODE_ATTEMPTS
from utils.helpers import generate_room_code, normalize_room_code

logger = logging.getLogger(__name__)


class LobbyCreator:
    """
    Handles room code generation.

    Codes are only unique against the rooms the caller says are taken;
    the generator itself is a pure function of the random source.
    """

    def __init__(self, max_attempts: int = MAX_CODE_ATTEMPTS,
                 rng: Optional[random.Random] = None):
        """
        Initialize lobby creator.

        Args:
            max_attempts: How many random codes to try before giving up
            rng: Optional random source for reproducible codes
        """
        self.max_attempts = max_attempts
        self.rng = rng
        logger.debug("Lobby creator initialized")

    def generate_room_code(self, is_taken: Callable[[str], bool]) -> Optional[str]:
        """
        Generate a room code that is not in use.

        Args:
            is_taken: Callback telling whether a code belongs to a live room

        Returns:
            A free room code, or None if every attempt collided
        """
        for attempt in range(self.max_attempts):
            code = generate_room_code(self.rng)
            if not is_taken(code):
                logger.debug(f"Generated room code: {code} (attempt {attempt + 1})")
                return code

        logger.warning(f"Could not find a free room code after {self.max_attempts} attempts")
        return None

    def validate_room_code(self, code: Optional[str]) -> Tuple[bool, str]:
        """
        Validate a room code typed by a player.

        Args:
            code: Raw code from the client

        Returns:
            Tuple of (is_valid, normalized_code_or_error)
        """
        normalized = normalize_room_code(code)

        if len(normalized) != ROOM_CODE_LENGTH:
            return False, f"Room codes are {ROOM_CODE_LENGTH} letters"

        if any(ch not in ROOM_CODE_ALPHABET for ch in normalized):
            return False, "Room code contains invalid characters"

        return True, normalized
