"""
Request Decorators

Contains decorators resolving the player's game session for HTTP endpoints.
"""

from functools import wraps
from flask import request, jsonify, current_app

from .helpers import USER_ID_HEADER, get_user_id


def with_session(f):
    """
    Decorator resolving the caller's game session.

    The session is passed as the ``session`` keyword argument and the view
    runs while holding the session lock, so one player's requests never
    interleave mid-mutation. Only ``POST /session`` mints player ids;
    requests without one are rejected.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        game_service = getattr(current_app, 'game_service', None)
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        user_id = get_user_id(request)
        if not user_id:
            return jsonify({
                'success': False,
                'error': f'User id is required ({USER_ID_HEADER} header)'
            }), 400

        session = game_service.get_session(user_id)
        with session.lock:
            kwargs['session'] = session
            return f(*args, **kwargs)

    return decorated_function


def require_word_service(f):
    """Decorator passing the application's word service as ``word_service``."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        word_service = getattr(current_app, 'word_service', None)
        if not word_service:
            return jsonify({
                'success': False,
                'error': 'Word service unavailable'
            }), 500

        kwargs['word_service'] = word_service
        return f(*args, **kwargs)

    return decorated_function
