"""
Session Controller

Handles all game-session HTTP endpoints.
"""

from flask import Blueprint, request, jsonify, current_app

from ..models.game import GameStatus
from ..utils.decorators import with_session
from ..utils.errors import InvalidGuessError, ValidationError
from ..utils.game_logger import game_logger
from ..utils.helpers import get_user_id, serialize_state

session_bp = Blueprint('session', __name__)


def _state_response(session, action, **extra):
    response_data = {
        'success': True,
        'state': serialize_state(session, include_storage=True),
        **extra
    }
    game_logger.log_server_response(
        request, action, True, response_data,
        game_state=session.game_state.value, current_row=session.current_row
    )
    return jsonify(response_data)


def _error_response(action, error, status_code, session=None):
    error_response = {
        'success': False,
        'error': error
    }
    if session is not None:
        error_response['state'] = serialize_state(session, include_storage=True)
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), status_code


def _log_outcome(session, previous_state):
    """Log wins and losses reached by the last operation."""
    if session.game_state is previous_state:
        return
    if session.game_state is GameStatus.WIN:
        game_logger.log_game_event(
            session.user_id, 'game_won', request.remote_addr,
            rounds_used=session.current_row
        )
    elif session.game_state is GameStatus.LOSE:
        game_logger.log_game_event(
            session.user_id, 'game_lost', request.remote_addr,
            rounds_used=session.current_row
        )


@session_bp.route('/session', methods=['POST'])
def init_session():
    """Create or restore the caller's session, optionally from a storage snapshot."""
    try:
        game_service = getattr(current_app, 'game_service', None)
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        snapshot = data.get('storage')
        if snapshot is not None and not isinstance(snapshot, dict):
            return _error_response('init_session', 'Storage snapshot must be an object', 400)

        game_logger.log_user_action(request, 'init_session', restored=snapshot is not None)

        session = game_service.get_session(get_user_id(request), snapshot)
        with session.lock:
            return _state_response(session, 'init_session')

    except Exception as e:
        game_logger.log_error(request, e, 'init_session')
        return _error_response('init_session', str(e), 500)


@session_bp.route('/session/state', methods=['GET'])
@with_session
def get_state(session):
    """Get current session state."""
    try:
        game_logger.log_user_action(request, 'get_state')
        return _state_response(session, 'get_state')

    except Exception as e:
        game_logger.log_error(request, e, 'get_state')
        return _error_response('get_state', str(e), 500)


@session_bp.route('/session/letter', methods=['POST'])
@with_session
def enter_letter(session):
    """Type a letter into the active cell (auto-submits a full row)."""
    try:
        data = request.get_json(silent=True) or {}
        letter = data.get('letter')
        if not isinstance(letter, str) or not letter:
            return _error_response('enter_letter', 'Letter is required', 400, session)

        game_logger.log_user_action(request, 'enter_letter', letter=letter)

        previous_state = session.game_state
        accepted = session.enter_letter(letter)
        _log_outcome(session, previous_state)

        return _state_response(session, 'enter_letter', accepted=accepted)

    except Exception as e:
        game_logger.log_error(request, e, 'enter_letter')
        return _error_response('enter_letter', str(e), 500)


@session_bp.route('/session/delete', methods=['POST'])
@with_session
def delete_letter(session):
    """Backspace inside the active row."""
    try:
        game_logger.log_user_action(request, 'delete_letter')
        accepted = session.delete_letter()
        return _state_response(session, 'delete_letter', accepted=accepted)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_letter')
        return _error_response('delete_letter', str(e), 500)


@session_bp.route('/session/submit', methods=['POST'])
@with_session
def submit_guess(session):
    """Submit the active row for scoring."""
    try:
        game_logger.log_user_action(request, 'submit_guess', row=session.current_row)

        previous_state = session.game_state
        try:
            verdicts = session.submit_guess()
        except InvalidGuessError as e:
            game_logger.log_server_response(
                request, 'submit_guess', False, {'success': False, 'error': str(e)},
                validation_error=str(e)
            )
            return jsonify({
                'success': False,
                'error': str(e),
                'notice': e.notice.to_dict(),
                'state': serialize_state(session, include_storage=True)
            }), 400

        if verdicts is None:
            return _error_response('submit_guess', 'Game is not in progress', 400, session)

        _log_outcome(session, previous_state)
        return _state_response(session, 'submit_guess', result=[status.value for status in verdicts])

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess')
        return _error_response('submit_guess', str(e), 500)


@session_bp.route('/session/cursor', methods=['POST'])
@with_session
def move_cursor(session):
    """Move the cursor by direction, or place it on a column."""
    try:
        data = request.get_json(silent=True) or {}
        game_logger.log_user_action(request, 'move_cursor', **{
            key: data.get(key) for key in ('direction', 'column') if key in data
        })

        try:
            if 'column' in data:
                accepted = session.set_cursor(data['column'])
            elif 'direction' in data:
                accepted = session.move_cursor(data['direction'])
            else:
                return _error_response('move_cursor', 'Direction or column is required', 400, session)
        except ValidationError as e:
            return _error_response('move_cursor', str(e), 400, session)

        return _state_response(session, 'move_cursor', accepted=accepted)

    except Exception as e:
        game_logger.log_error(request, e, 'move_cursor')
        return _error_response('move_cursor', str(e), 500)


@session_bp.route('/session/reset', methods=['POST'])
@with_session
def reset_session(session):
    """Start over with a new target word."""
    try:
        data = request.get_json(silent=True) or {}
        new_player = bool(data.get('new_player', False))

        game_logger.log_user_action(request, 'reset_session', new_player=new_player)
        session.reset_session(new_player)
        game_logger.log_game_event(session.user_id, 'session_reset', request.remote_addr, new_player=new_player)

        return _state_response(session, 'reset_session')

    except Exception as e:
        game_logger.log_error(request, e, 'reset_session')
        return _error_response('reset_session', str(e), 500)


@session_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = getattr(current_app, 'game_service', None)
        word_service = getattr(current_app, 'word_service', None)

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_sessions': game_service.active_sessions_count() if game_service else 0,
            'accepted_words': len(game_service.dictionary) if game_service else 0,
            'word_service_available': word_service is not None,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
