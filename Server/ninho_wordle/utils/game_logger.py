"""
Game Logger Module

Structured JSON logging of player requests, responses, game outcomes and
failures. One file per day under LOG_DIR; warnings and errors are echoed
to the console.
"""

import json
import logging
import os
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .helpers import get_user_identity

FILE_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'

# Summary kept from a serialized session state; never the answer itself
_STATE_FIELDS = ('game_state', 'current_row', 'current_column', 'max_attempts')


class GameLogger:
    """
    Centralized logging system for the game server.

    Every entry is a JSON object with timestamp, event type, action, the
    player (ip and id) and free-form details. Session states are reduced to
    a summary and client storage snapshots are dropped, so neither the
    target word nor saved grids reach the log file.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        resolved = logging.getLevelName(str(level).upper())
        self.level = resolved if isinstance(resolved, int) else logging.INFO

        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger('ninho_wordle')
        logger.setLevel(self.level)
        logger.handlers.clear()

        handlers = (
            (logging.FileHandler(self._log_file(), encoding='utf-8'), self.level,
             logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')),
            (logging.StreamHandler(), logging.WARNING, logging.Formatter(CONSOLE_FORMAT)),
        )
        for handler, level, formatter in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def _write(self,
               level: int,
               event_type: str,
               action: str,
               user: Dict[str, Optional[str]],
               details: Dict[str, Any]) -> None:
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_user_action(self, request, action: str, **kwargs):
        """
        Log an incoming player request.

        Args:
            request: Flask request object
            action: Endpoint action (e.g. 'init_session', 'enter_letter', 'definition')
            **kwargs: Request details worth keeping
        """
        details = {'endpoint': request.endpoint, 'method': request.method, 'url': request.url}
        details.update(kwargs)
        self._write(logging.INFO, 'USER_ACTION', action, get_user_identity(request), details)

    def log_server_response(self, request, action: str, success: bool, response_data: Dict[str, Any], **kwargs):
        """Log the JSON answer of an endpoint; failures are logged as errors."""
        details = {
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data)
        }
        details.update(kwargs)

        if success:
            self._write(logging.INFO, 'SERVER_RESPONSE_SUCCESS', action, get_user_identity(request), details)
        else:
            self._write(logging.ERROR, 'SERVER_RESPONSE_ERROR', action, get_user_identity(request), details)

    def log_game_event(self, user_id: Optional[str], event: str, user_ip: str, **kwargs):
        """Log a game outcome ('game_won', 'game_lost', 'session_reset')."""
        self._write(logging.INFO, 'GAME_EVENT', event, {'user_ip': user_ip, 'user_id': user_id}, dict(kwargs))

    def log_error(self, request, error: Exception, action: str):
        """Log an exception raised while serving a request."""
        details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }
        self._write(logging.ERROR, 'ERROR', action, get_user_identity(request), details)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = {key: value for key, value in data.items() if key != 'storage'}
        state = sanitized.get('state')
        if isinstance(state, dict):
            summary = {field: state.get(field) for field in _STATE_FIELDS}
            summary['answer_revealed'] = state.get('answer') is not None
            sanitized['state'] = summary

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Entry counts per event type in today's log file."""
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        counts = Counter()
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    parts = line.rstrip('\n').split(' | ', 2)
                    if len(parts) < 3:
                        continue
                    try:
                        counts[json.loads(parts[2]).get('event_type', 'OTHER')] += 1
                    except (ValueError, AttributeError):
                        counts['OTHER'] += 1
            size = log_file.stat().st_size
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': round(size / (1024 * 1024), 2),
            'total_entries': sum(counts.values()),
            'by_event_type': dict(counts)
        }


# Global logger instance
game_logger = GameLogger(os.getenv('LOG_DIR', 'logs'), os.getenv('LOG_LEVEL', 'INFO'))
