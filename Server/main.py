"""
Kalima Game Server - Main Entry Point

This is the main entry point for the Kalima game server.
It initializes all services and starts the Flask application.
"""

from kalima import create_app
from kalima.config import Config, DAILY_WORDS, WORD_LIST, validate_word_list_integrity
from kalima.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Validating word lists...")
        validate_word_list_integrity(DAILY_WORDS)
        validate_word_list_integrity(WORD_LIST)
        print("✓ Word lists validated")

        print("Creating Flask application...")
        app = create_app(Config)
        print(f"✓ Flask application created with {Config.STORAGE_BACKEND} storage")

        game_logger.logger.info(
            f"Kalima Server Starting - {len(DAILY_WORDS)} daily words, {len(WORD_LIST)} listed words"
        )
        game_logger.log_game_event(None, 'server_started', storage=Config.STORAGE_BACKEND)

        print(f"\nStarting Kalima Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Kalima Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
