"""
Palavra do Dia Game Server - Main Entry Point

This is the main entry point for the game server.
It validates the word lists, creates the Flask application and starts it.
"""

import os

from ninho_wordle import create_app
from ninho_wordle.config import config, validate_word_list_integrity, get_word_statistics
from ninho_wordle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config[os.getenv('FLASK_ENV', 'default')]

    try:
        print("Validating word lists...")
        validate_word_list_integrity()
        stats = get_word_statistics()
        print(f"✓ {stats['total_words']} solutions, {stats['accepted_guesses']} accepted guesses")

        print("Creating Flask application...")
        app = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Game Server Starting")

        print(f"\nStarting Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"AI word services configured: {bool(config_class.OPENROUTER_API_KEY)}")
        print("=" * 50)

        app.run(host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG, threaded=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Game Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
