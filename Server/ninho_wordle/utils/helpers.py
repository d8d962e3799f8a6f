"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from dataclasses import asdict

from flask import request

USER_ID_HEADER = 'X-User-Id'


def get_user_id(request_obj=None) -> Optional[str]:
    """Player id from the X-User-Id header, the JSON body or the query string."""
    if request_obj is None:
        request_obj = request

    user_id = request_obj.headers.get(USER_ID_HEADER)
    if not user_id:
        data = request_obj.get_json(silent=True) if hasattr(request_obj, 'get_json') else None
        if isinstance(data, dict):
            user_id = data.get('user_id')
    if not user_id and hasattr(request_obj, 'args'):
        user_id = request_obj.args.get('user_id')

    if not user_id:
        return None
    return str(user_id).strip() or None


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'user_id': get_user_id(request_obj) if hasattr(request_obj, 'headers') else None
    }


def serialize_state(session, include_storage: bool = False) -> Dict:
    """JSON-ready view of a game session."""
    return asdict(session.to_state(include_storage=include_storage))
