"""
Wordle2 Game Server - Main Entry Point

Loads the dictionary, initializes the game service and starts the
Flask-SocketIO application.
"""

import os
from wordle2 import create_app
from wordle2.config import config
from wordle2.services.dictionary import load_dictionary
from wordle2.services.game_service import initialize_game_service
from wordle2.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config.get(os.getenv('FLASK_ENV', 'default'), config['default'])
    try:
        print("Initializing services...")

        dictionary = load_dictionary(
            [config_class.DICTIONARY_PATH],
            attempts=config_class.DICTIONARY_RETRY_ATTEMPTS,
            retry_delay=config_class.DICTIONARY_RETRY_DELAY
        )
        if dictionary.is_fallback:
            print(f"✗ Dictionary missing, using built-in list ({len(dictionary)} words)")
        else:
            print(f"✓ Dictionary loaded: {len(dictionary)} words from {dictionary.source}")
        print(f"  Word statistics: {dictionary.statistics()}")

        initialize_game_service(
            dictionary,
            reveal_base_delay_ms=config_class.REVEAL_BASE_DELAY_MS,
            reveal_step_ms=config_class.REVEAL_STEP_MS
        )
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info(f"Wordle2 Server Starting - {dictionary!r}")

        print(f"\nStarting Wordle2 Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle2 Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
