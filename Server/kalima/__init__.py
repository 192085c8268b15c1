"""
Kalima Game Server Application Package

Daily Arabic word-guessing puzzle: word selection, guess evaluation, word
validation and per-player persisted sessions and statistics, served over
a JSON HTTP API.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config, storage=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        storage: Storage backend; built from the configuration when omitted

    Returns:
        Flask application instance with all services initialized
    """
    from .services import initialize_services
    from .storage import create_storage

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.ensure_ascii = False

    # Initialize extensions
    CORS(app)

    # Initialize services against one storage backend
    if storage is None:
        storage = create_storage(config_class)
    initialize_services(storage)
    app.extensions['kalima_storage'] = storage

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.profile_controller import profile_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(profile_bp, url_prefix='/api/profile')

    return app
