"""
Find The Imposter - A Social Deduction Party Game Backend

Flask-SocketIO server for a moderator-run party game. Players join a room
by code, one or more of them secretly get a different word, and the room
votes people out until the imposters are caught or survive.

App.py is purely server setup and handler registration.
"""

import logging
import random
from typing import Optional

from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from config import settings
from lobby import ConnectionManager, LobbyCreator, PlayerManager
from lobby.manager import LobbyManager
from game import GameManager
from handlers import register_socket_handlers, register_api_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(rng: Optional[random.Random] = None, async_mode: Optional[str] = None):
    """
    Application factory that creates and configures the Flask app.

    Args:
        rng: Optional random source for room codes, roles and tie-breaks
        async_mode: Socket.IO async mode, defaults to SOCKETIO_ASYNC_MODE

    Returns:
        tuple: (app, socketio)
    """

    # Flask configuration
    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY

    cors_origins = settings.CORS_ORIGINS.split(',')
    CORS(app, origins=cors_origins)

    # ProxyFix for deployment behind reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # SocketIO configuration
    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=async_mode or settings.SOCKETIO_ASYNC_MODE,
        ping_timeout=60,
        ping_interval=25
    )

    logger.info("Initializing game managers...")

    connection_manager = ConnectionManager()
    lobby_manager = LobbyManager(
        lobby_creator=LobbyCreator(rng=rng),
        default_settings=settings.default_game_settings()
    )
    game_manager = GameManager(
        player_manager=PlayerManager(max_players=settings.MAX_PLAYERS_PER_ROOM),
        rng=rng,
        lock_settings_during_round=settings.LOCK_SETTINGS_DURING_ROUND
    )

    # Register handlers (pure routing layer)
    logger.info("Registering handlers...")
    register_socket_handlers(socketio, lobby_manager, game_manager, connection_manager)
    register_api_handlers(app, lobby_manager, game_manager)

    logger.info("Application initialization complete")
    return app, socketio


def main():
    """Main entry point for development server."""
    if settings.SOCKETIO_ASYNC_MODE == 'eventlet':
        # Patch before the managers create their locks
        import eventlet
        eventlet.monkey_patch()

    app, socketio = create_app()

    logger.info(f"Starting Find The Imposter game server on port {settings.PORT}")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"CORS origins: {settings.CORS_ORIGINS}")

    socketio.run(app, debug=settings.DEBUG, port=settings.PORT, host='0.0.0.0')


if __name__ == '__main__':
    main()
