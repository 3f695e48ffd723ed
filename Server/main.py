"""
Wordle Game Service - Main Entry Point

Initializes the word source, the game session engine, the completed-game
notifier and the session cleanup worker, then starts the Flask application.
"""

import os

from wordle_engine import create_app
from wordle_engine.config import config
from wordle_engine.exceptions import WordSourceExhaustedError
from wordle_engine.services.auth_service import initialize_auth_service
from wordle_engine.services.cleanup_service import CleanupWorker
from wordle_engine.services.game_service import initialize_game_service
from wordle_engine.services.notification_service import initialize_notifier
from wordle_engine.services.word_service import initialize_word_service
from wordle_engine.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config[os.getenv('APP_ENV', 'default')]
    notifier = None
    cleanup_worker = None

    try:
        print("Initializing services...")

        # Without words the engine cannot serve a single game
        try:
            word_service = initialize_word_service(config_class)
        except WordSourceExhaustedError as e:
            game_logger.logger.critical(f"Word service initialization failed: {e}")
            raise
        print(f"✓ Word service initialized from {word_service.source} with {word_service.get_word_count()} words")

        if initialize_auth_service(config_class.JWT_SECRET):
            print("✓ Authentication service initialized successfully")
        else:
            print("✗ JWT secret not configured - all players are guests")

        notifier = initialize_notifier(config_class)
        notifier.start()
        print(f"✓ Game record notifier started - reporting to {notifier.endpoint}")

        game_service = initialize_game_service(word_service, notifier, config_class)
        print("✓ Game service initialized successfully")

        cleanup_worker = CleanupWorker(
            game_service,
            interval_seconds=config_class.CLEANUP_INTERVAL_SECONDS,
            max_age_seconds=config_class.SESSION_MAX_AGE_SECONDS
        )
        cleanup_worker.start()
        print(f"✓ Session cleanup worker started - checking every {config_class.CLEANUP_INTERVAL_SECONDS} seconds")

        print("Creating Flask application...")
        app = create_app(config_class)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Wordle Game Service starting")

        print(f"\nStarting Wordle Game Service on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        app.run(host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG, use_reloader=False)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Game Service shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        if cleanup_worker:
            cleanup_worker.stop(timeout=5)
        if notifier:
            notifier.close()


if __name__ == '__main__':
    main()
