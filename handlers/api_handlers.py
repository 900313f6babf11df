"""
API Route Handlers for Find The Imposter.

Pure routing layer that delegates to the room registry.
Contains no game logic - only request/response handling.
"""

import logging
from flask import jsonify

from game.views import host_view
from utils.helpers import rejection_payload
from utils.constants import REJECTIONS

logger = logging.getLogger(__name__)


def register_api_handlers(app, lobby_manager, game_manager):
    """
    Register all API route handlers.

    Args:
        app: Flask application instance
        lobby_manager: Room registry
        game_manager: Game command coordinator
    """

    @app.route('/api/health')
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'message': 'Find The Imposter game server is running',
            'active_rooms': len(lobby_manager.get_active_lobbies()),
            'settings_locked_during_round': game_manager.lock_settings_during_round
        })

    @app.route('/api/rooms')
    def get_active_rooms():
        """List live rooms."""
        try:
            return jsonify({'rooms': lobby_manager.get_active_lobbies()})

        except Exception as e:
            logger.error(f"Error getting active rooms: {e}")
            return jsonify({'error': 'Failed to get rooms'}), 500

    @app.route('/api/rooms/<code>')
    def get_room(code):
        """Public state of one room, as the host display sees it."""
        try:
            with lobby_manager.locked_session(code) as session:
                if session is None:
                    return jsonify(rejection_payload(REJECTIONS['SESSION_NOT_FOUND'])), 404
                return jsonify(host_view(session))

        except Exception as e:
            logger.error(f"Error getting room {code}: {e}")
            return jsonify({'error': 'Failed to get room'}), 500

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        return jsonify({'error': 'Internal server error'}), 500

    logger.info("API handlers registered successfully")
