"""
Wordle Game Service Application Package

Game session engine for a Wordle-style game: session lifecycle, guess
evaluation, expiry, and best-effort reporting of completed games to the
profile service.
"""

from flask import Flask, jsonify
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Services are initialized separately (see main.py) and looked up through
    their module-level accessors.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    CORS(app)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.admin_controller import admin_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')

    @app.errorhandler(500)
    def internal_error(error):
        # Never leak exception text to the player
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    return app
