"""
Palabra Game Server Application Package

A daily word-guessing game: the server serves a deterministic word of the
day and answers dictionary checks; the game state machine, persistence and
the terminal client live alongside it.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config
from .models.game import ScoringPolicy


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized

    Raises:
        WordListError: If no word service is initialized and the configured
            word list cannot be loaded
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Reject an unknown policy at startup rather than on first request
    ScoringPolicy(app.config['SCORING_POLICY'])

    # Initialize extensions
    CORS(app)

    from .services.word_service import get_word_service, initialize_word_service
    if get_word_service() is None:
        initialize_word_service(app.config.get('WORD_LIST_PATH'))

    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')

    return app
