"""
Palabra Game Server - Main Entry Point

Loads the word list, creates the Flask application and starts serving the
daily word and guess check endpoints.
"""

import sys

from palabra import create_app
from palabra.config import get_config, validate_word_list_integrity
from palabra.errors import WordListError
from palabra.services.word_service import initialize_word_service
from palabra.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    app_config = get_config()

    try:
        print("Initializing services...")

        # An empty or malformed word list is fatal: never serve a day without candidates
        word_service = initialize_word_service(app_config.WORD_LIST_PATH)
        validate_word_list_integrity(word_service.word_list)
        print(f"✓ Word service initialized with {len(word_service.word_list)} words")

        print("Creating Flask application...")
        app = create_app(app_config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Palabra Server Starting - scoring policy %s", app_config.SCORING_POLICY)

        print(f"\nStarting Palabra Game Server on {app_config.HOST}:{app_config.PORT}")
        print(f"Debug mode: {app_config.DEBUG}")
        print("=" * 50)

        app.run(host=app_config.HOST, port=app_config.PORT, debug=app_config.DEBUG)

    except WordListError as e:
        print(f"Word list configuration error: {e}", file=sys.stderr)
        game_logger.logger.error(f"Word list configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Palabra Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
