"""
Word Controller

Handles the endpoints backed by external word services: vocabulary check,
definitions and themed word generation.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify

from ..utils.decorators import require_word_service
from ..utils.errors import ExternalServiceError, ValidationError
from ..utils.game_logger import game_logger

word_bp = Blueprint('word', __name__)


def _upstream_error(action, error: ExternalServiceError, **extra):
    game_logger.log_error(request, error, action)
    error_response = {
        'success': False,
        'error': error.user_message,
        'retryable': error.retryable,
        **extra
    }
    game_logger.log_server_response(
        request, action, False, error_response,
        upstream_status=error.status_code, rate_limited=error.rate_limited
    )
    return jsonify(error_response), error.status_code


@word_bp.route('/check-word', methods=['GET'])
@require_word_service
def check_word(word_service):
    """Check a word against the online vocabulary."""
    word = (request.args.get('word') or '').strip()
    try:
        game_logger.log_user_action(request, 'check_word', word=word)
        if not word:
            raise ValidationError('Palavra não fornecida')

        valid = word_service.checker.check(word)

        response_data = {
            'success': True,
            'valid': valid,
            'word': word
        }
        game_logger.log_server_response(request, 'check_word', True, response_data)
        return jsonify(response_data)

    except ValidationError as e:
        error_response = {'success': False, 'valid': False, 'error': str(e)}
        game_logger.log_server_response(request, 'check_word', False, error_response)
        return jsonify(error_response), 400
    except ExternalServiceError as e:
        return _upstream_error('check_word', e, valid=False)
    except Exception as e:
        game_logger.log_error(request, e, 'check_word')
        return jsonify({'success': False, 'valid': False, 'error': 'Erro ao verificar palavra'}), 500


@word_bp.route('/definition', methods=['GET'])
@require_word_service
def get_definition(word_service):
    """Short definition, examples and synonyms for a 5-letter word."""
    word = (request.args.get('word') or '').strip()
    try:
        game_logger.log_user_action(request, 'definition', word=word)

        definition = word_service.definitions.get_definition(word)

        response_data = {
            'success': True,
            **asdict(definition)
        }
        game_logger.log_server_response(request, 'definition', True, response_data)

        response = jsonify(response_data)
        response.headers['Cache-Control'] = 'public, max-age=3600'
        return response

    except ValidationError as e:
        error_response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, 'definition', False, error_response)
        return jsonify(error_response), 400
    except ExternalServiceError as e:
        return _upstream_error('definition', e)
    except Exception as e:
        game_logger.log_error(request, e, 'definition')
        return jsonify({'success': False, 'error': 'Erro ao obter definição'}), 500


@word_bp.route('/generate-word', methods=['POST'])
@require_word_service
def generate_word(word_service):
    """Pick a 5-letter word related to a theme."""
    data = request.get_json(silent=True) or {}
    theme = data.get('theme')
    try:
        game_logger.log_user_action(request, 'generate_word', theme=theme)

        theme_word = word_service.themes.generate(theme)

        response_data = {
            'success': True,
            **asdict(theme_word)
        }
        game_logger.log_server_response(request, 'generate_word', True, response_data)
        return jsonify(response_data)

    except ValidationError as e:
        error_response = {'success': False, 'error': str(e)}
        game_logger.log_server_response(request, 'generate_word', False, error_response)
        return jsonify(error_response), 400
    except ExternalServiceError as e:
        return _upstream_error('generate_word', e)
    except Exception as e:
        game_logger.log_error(request, e, 'generate_word')
        return jsonify({'success': False, 'error': 'Erro ao gerar palavra'}), 500
