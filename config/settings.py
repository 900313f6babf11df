import os
from dotenv import load_dotenv
from utils.constants import DEFAULT_SETTINGS, MAX_PLAYERS_PER_ROOM as _MAX_PLAYERS

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Server Configuration
PORT = int(os.getenv('PORT', 3000))
DEBUG = _env_bool('DEBUG', os.environ.get('RENDER', '') != 'true')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
SOCKETIO_ASYNC_MODE = os.getenv('SOCKETIO_ASYNC_MODE', 'eventlet')

# Default phase durations (seconds) for new rooms
DEFAULT_WORD_REVEAL_TIME = int(os.getenv('DEFAULT_WORD_REVEAL_TIME', DEFAULT_SETTINGS['word_reveal_time']))
DEFAULT_CLUE_TIME_PER_PLAYER = int(os.getenv('DEFAULT_CLUE_TIME_PER_PLAYER', DEFAULT_SETTINGS['clue_time_per_player']))
DEFAULT_DISCUSSION_TIME = int(os.getenv('DEFAULT_DISCUSSION_TIME', DEFAULT_SETTINGS['discussion_time']))
DEFAULT_VOTING_TIME = int(os.getenv('DEFAULT_VOTING_TIME', DEFAULT_SETTINGS['voting_time']))

# Room rules
LOCK_SETTINGS_DURING_ROUND = _env_bool('LOCK_SETTINGS_DURING_ROUND', False)
MAX_PLAYERS_PER_ROOM = int(os.getenv('MAX_PLAYERS_PER_ROOM', _MAX_PLAYERS))

# Render Configuration
IS_RENDER = os.environ.get("RENDER", "") == "true"


def default_game_settings() -> dict:
    """Phase durations every new room starts with."""
    return {
        'word_reveal_time': DEFAULT_WORD_REVEAL_TIME,
        'clue_time_per_player': DEFAULT_CLUE_TIME_PER_PLAYER,
        'discussion_time': DEFAULT_DISCUSSION_TIME,
        'voting_time': DEFAULT_VOTING_TIME,
    }
