"""
Socket.IO Event Handlers for Find The Imposter.

Pure routing layer that delegates to the game and lobby managers.
Contains no game rules - only event routing, room fan-out and response
formatting.

Every socket joins Socket.IO rooms named after its role:
``game:<code>`` for everyone, plus ``moderator:<code>``, ``host:<code>``
or ``player:<code>``. Individual players are reached through their own
connection id. Event handlers return their acknowledgement payload.
"""

import logging
from flask import request
from flask_socketio import emit, join_room

from game.views import host_view, moderator_view, player_view
from utils.constants import REJECTIONS
from utils.helpers import rejection_payload

logger = logging.getLogger(__name__)


def game_room(code):
    return f"game:{code}"


def role_room(role, code):
    return f"{role}:{code}"


def register_socket_handlers(socketio, lobby_manager, game_manager, connection_manager):
    """
    Register all Socket.IO event handlers.

    Args:
        socketio: SocketIO instance
        lobby_manager: Room registry
        game_manager: Game command coordinator
        connection_manager: Socket to room/player bookkeeping
    """

    def fail(reason):
        """Tell the requesting client a command was rejected."""
        payload = rejection_payload(reason)
        emit('error-msg', {'code': reason, 'message': payload['error']})
        return payload

    def crash(event, error):
        logger.error(f"Error handling {event}: {error}")
        emit('error-msg', {'code': 'server_error', 'message': f'Failed to handle {event}'})
        return {'success': False, 'code': 'server_error', 'error': f'Failed to handle {event}'}

    def emit_host_update(session):
        socketio.emit('game-state', host_view(session), to=role_room('host', session.code))

    def emit_moderator_update(session):
        socketio.emit('game-state', moderator_view(session), to=role_room('moderator', session.code))

    def emit_all_players_update(session):
        for player in session.get_all_players():
            if player.is_connected and player.connection_id:
                socketio.emit('player-state', player_view(session, player.id), to=player.connection_id)

    def broadcast_state(session, players=True):
        """Push fresh projections. Must be called with the room locked."""
        emit_host_update(session)
        emit_moderator_update(session)
        if players:
            emit_all_players_update(session)

    def room_code_of(data):
        return (data or {}).get('gameId') or (data or {}).get('code')

    @socketio.on('connect')
    def handle_connect():
        """Handle client connection."""
        logger.info(f"Client connected: {request.sid}")
        emit('connected', {'message': 'Connected to server successfully'})

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Mark the player offline; they stay in the game. Rooms nobody is attached to are removed."""
        logger.info(f"Client disconnected: {request.sid}")

        try:
            client = connection_manager.unregister(request.sid)
            if not client:
                return

            with lobby_manager.locked_session(client.room_code) as session:
                if session is None:
                    return

                if client.role == 'player':
                    success, message, player = game_manager.disconnect(session, request.sid)
                    if success:
                        socketio.emit('player-disconnected', {'name': player.name},
                                      to=role_room('host', session.code))
                        broadcast_state(session, players=False)

                if not connection_manager.get_room_connections(session.code):
                    lobby_manager.remove_lobby(session.code)
                    connection_manager.forget_room(session.code)
                    logger.info(f"Room {session.code} abandoned, removed")

        except Exception as e:
            logger.error(f"Error handling disconnect: {e}")

    # ---------- Moderator events ----------

    @socketio.on('create-game')
    def handle_create_game(data=None):
        """Create a room; the caller becomes its moderator."""
        try:
            success, message, session = lobby_manager.create_lobby()
            if not success:
                return fail(message)

            join_room(game_room(session.code))
            join_room(role_room('moderator', session.code))
            connection_manager.register(request.sid, session.code, 'moderator')

            with session.lock:
                broadcast_state(session, players=False)

            logger.info(f"Moderator {request.sid} created room {session.code}")
            return {'success': True, 'gameId': session.code}

        except Exception as e:
            return crash('create-game', e)

    @socketio.on('join-moderator')
    def handle_join_moderator(data=None):
        """Reattach a moderator console to an existing room."""
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                join_room(game_room(session.code))
                join_room(role_room('moderator', session.code))
                connection_manager.register(request.sid, session.code, 'moderator')

                emit('game-state', moderator_view(session))
                return {'success': True, 'gameId': session.code}

        except Exception as e:
            return crash('join-moderator', e)

    @socketio.on('update-settings')
    def handle_update_settings(data=None):
        try:
            data = data or {}
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, settings = game_manager.update_settings(session, data.get('settings') or {})
                if not success:
                    return fail(message)

                broadcast_state(session)
                return {'success': True, 'settings': settings}

        except Exception as e:
            return crash('update-settings', e)

    @socketio.on('start-round')
    def handle_start_round(data=None):
        """Deal the round and show each player their word."""
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, setup = game_manager.start_round(session)
                if not success:
                    return fail(message)

                duration = session.settings.word_reveal_time
                for player in session.get_alive_players():
                    if player.connection_id:
                        socketio.emit('word-reveal', {
                            'word': player.word,
                            'duration': duration,
                            'round': session.round_number
                        }, to=player.connection_id)

                phase_data = dict(setup, phase=session.phase.value, duration=duration)
                socketio.emit('phase-change', phase_data, to=role_room('host', session.code))

                # Player screens are driven by word-reveal here
                broadcast_state(session, players=False)
                return {'success': True, **setup}

        except Exception as e:
            return crash('start-round', e)

    @socketio.on('start-clue-circle')
    def handle_start_clue_circle(data=None):
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, clue_data = game_manager.start_clue_circle(session)
                if not success:
                    return fail(message)

                socketio.emit('phase-change', {
                    'phase': session.phase.value,
                    'order': clue_data['order'],
                    'current_index': clue_data['current_index'],
                    'clue_time': session.settings.clue_time_per_player
                }, to=role_room('host', session.code))

                broadcast_state(session)
                return {'success': True, **clue_data}

        except Exception as e:
            return crash('start-clue-circle', e)

    @socketio.on('next-clue-player')
    def handle_next_clue_player(data=None):
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.advance_clue(session)
                if not success:
                    return fail(message)

                socketio.emit('clue-next', {
                    'done': result['done'],
                    'current_index': result['current_index'],
                    'player': result.get('player'),
                    'clue_time': session.settings.clue_time_per_player
                }, to=role_room('host', session.code))

                broadcast_state(session, players=False)
                return {'success': True, **result}

        except Exception as e:
            return crash('next-clue-player', e)

    @socketio.on('start-discussion')
    def handle_start_discussion(data=None):
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.start_discussion(session)
                if not success:
                    return fail(message)

                socketio.emit('phase-change', {'phase': session.phase.value, **result},
                              to=role_room('host', session.code))

                broadcast_state(session)
                return {'success': True}

        except Exception as e:
            return crash('start-discussion', e)

    @socketio.on('start-voting')
    def handle_start_voting(data=None):
        """Open the vote and send every alive player their ballot."""
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.start_voting(session)
                if not success:
                    return fail(message)

                socketio.emit('phase-change', {'phase': session.phase.value, 'duration': result['duration']},
                              to=role_room('host', session.code))

                for player in session.get_alive_players():
                    if player.connection_id:
                        socketio.emit('voting-open', {
                            'alive_players': [p for p in result['alive_players'] if p['id'] != player.id],
                            'duration': result['duration']
                        }, to=player.connection_id)

                broadcast_state(session, players=False)
                return {'success': True}

        except Exception as e:
            return crash('start-voting', e)

    @socketio.on('close-voting')
    def handle_close_voting(data=None):
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, tally = game_manager.close_voting(session)
                if not success:
                    return fail(message)

                socketio.emit('phase-change', {'phase': session.phase.value, **tally},
                              to=role_room('host', session.code))

                broadcast_state(session)
                return {'success': True, **tally}

        except Exception as e:
            return crash('close-voting', e)

    @socketio.on('resolve-tiebreak')
    def handle_resolve_tiebreak(data=None):
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.resolve_tie_break(session)
                if not success:
                    return fail(message)

                socketio.emit('phase-change', {'phase': session.phase.value, **result},
                              to=role_room('host', session.code))

                broadcast_state(session, players=False)
                return {'success': True, **result}

        except Exception as e:
            return crash('resolve-tiebreak', e)

    @socketio.on('execute-eliminations')
    def handle_execute_eliminations(data=None):
        """Remove this round's eliminated players and announce a winner if there is one."""
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.execute_eliminations(session)
                if not success:
                    return fail(message)

                host = role_room('host', session.code)
                socketio.emit('phase-change', {'phase': session.phase.value, **result}, to=host)

                for record in result['eliminated']:
                    player = session.get_player(record['id'])
                    if player and player.connection_id:
                        socketio.emit('you-eliminated', {
                            'was_imposter': record['was_imposter'],
                            'word': record['word']
                        }, to=player.connection_id)

                if result['game_over']:
                    socketio.emit('game-over', result['game_over'], to=host)

                broadcast_state(session)
                return {'success': True, **result}

        except Exception as e:
            return crash('execute-eliminations', e)

    @socketio.on('restart-game')
    def handle_restart_game(data=None):
        """Same room, same players, fresh game."""
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.reset(session)
                if not result['restarted']:
                    return {'success': True, 'restarted': False}

                socketio.emit('game-restart', {}, to=role_room('host', session.code))
                socketio.emit('game-restart', {}, to=role_room('player', session.code))

                broadcast_state(session)
                logger.info(f"Room {session.code} restarted")
                return {'success': True, 'restarted': True}

        except Exception as e:
            return crash('restart-game', e)

    @socketio.on('kick-player')
    def handle_kick_player(data=None):
        try:
            data = data or {}
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, player = game_manager.kick_player(session, data.get('playerId'))
                if not success:
                    return fail(message)

                if player.connection_id:
                    socketio.emit('you-eliminated', {
                        'kicked': True,
                        'was_imposter': player.is_imposter,
                        'word': player.word
                    }, to=player.connection_id)
                socketio.emit('player-kicked', {'name': player.name}, to=role_room('host', session.code))

                broadcast_state(session)
                return {'success': True, 'playerId': player.id}

        except Exception as e:
            return crash('kick-player', e)

    # ---------- Host events ----------

    @socketio.on('join-host')
    def handle_join_host(data=None):
        """Attach a shared display to a room."""
        try:
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                join_room(game_room(session.code))
                join_room(role_room('host', session.code))
                connection_manager.register(request.sid, session.code, 'host')

                emit('game-state', host_view(session))
                return {'success': True, 'gameId': session.code}

        except Exception as e:
            return crash('join-host', e)

    # ---------- Player events ----------

    @socketio.on('join-game')
    def handle_join_game(data=None):
        """Join a room as a player, or come back after losing the connection."""
        try:
            data = data or {}
            with lobby_manager.locked_session(room_code_of(data)) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, joined = game_manager.join(
                    session,
                    data.get('playerName'),
                    request.sid,
                    data.get('playerId')
                )
                if not success:
                    return fail(message)

                player = joined['player']
                join_room(game_room(session.code))
                join_room(role_room('player', session.code))
                connection_manager.register(request.sid, session.code, 'player', player.id)

                if not joined['reconnected']:
                    socketio.emit('player-joined', {
                        'name': player.name,
                        'total_players': session.total_count
                    }, to=role_room('host', session.code))

                broadcast_state(session, players=not joined['reconnected'])

                return {
                    'success': True,
                    'playerId': player.id,
                    'gameId': session.code,
                    'playerState': player_view(session, player.id),
                    'reconnected': joined['reconnected']
                }

        except Exception as e:
            return crash('join-game', e)

    @socketio.on('cast-vote')
    def handle_cast_vote(data=None):
        """Record a vote for the player behind this connection."""
        try:
            data = data or {}
            client = connection_manager.get(request.sid)
            if not client or client.role != 'player':
                return fail(REJECTIONS['PLAYER_NOT_FOUND'])

            with lobby_manager.locked_session(client.room_code) as session:
                if session is None:
                    return fail(REJECTIONS['SESSION_NOT_FOUND'])

                success, message, result = game_manager.cast_vote(session, client.player_id, data.get('targetId'))
                if not success:
                    return fail(message)

                socketio.emit('vote-update', result, to=role_room('host', session.code))
                emit_moderator_update(session)
                return {'success': True, **result}

        except Exception as e:
            return crash('cast-vote', e)

    logger.info("Socket handlers registered successfully")
