"""
Palavra do Dia Game Server Application Package

This package contains a Flask implementation of a daily Brazilian Portuguese
word-guessing game: the scoring engine, the persisted game session and thin
wrappers around external word services.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config, game_service=None, word_service=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        game_service: Session registry to attach (built from config when omitted)
        word_service: External word services to attach (built from config when omitted)

    Returns:
        Flask application instance with all services attached
    """
    from .services.game_service import GameService
    from .services.word_service import WordService

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # App-scoped services: sessions and caches live as long as the app
    app.game_service = game_service or GameService(max_attempts=config_class.MAX_ATTEMPTS)
    app.word_service = word_service or WordService.from_config(config_class)

    # Register blueprints
    from .controllers.session_controller import session_bp
    from .controllers.word_controller import word_bp

    app.register_blueprint(session_bp, url_prefix='/api')
    app.register_blueprint(word_bp, url_prefix='/api')

    return app
