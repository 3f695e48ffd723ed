"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 3002))

    # Authentication Settings
    JWT_SECRET = os.getenv('JWT_SECRET')

    # Profile Service Settings (completed game recording)
    PROFILE_SERVICE_URL = os.getenv('PROFILE_SERVICE_URL', 'http://localhost:3004')
    NOTIFICATION_TIMEOUT_SECONDS = float(os.getenv('NOTIFICATION_TIMEOUT_SECONDS', 5))
    NOTIFICATION_QUEUE_SIZE = int(os.getenv('NOTIFICATION_QUEUE_SIZE', 1000))

    # Session Settings
    SESSION_MAX_AGE_SECONDS = int(os.getenv('SESSION_MAX_AGE_SECONDS', 60 * 60))
    CLEANUP_INTERVAL_SECONDS = int(os.getenv('CLEANUP_INTERVAL_SECONDS', 60 * 60))

    # Word Source Settings
    WORD_LIST_URL = os.getenv(
        'WORD_LIST_URL',
        'https://raw.githubusercontent.com/tabatkins/wordle-list/main/words'
    )
    WORD_FETCH_TIMEOUT_SECONDS = float(os.getenv('WORD_FETCH_TIMEOUT_SECONDS', 15))
    WORD_CACHE_PATH = os.getenv('WORD_CACHE_PATH', './cache')
    WORD_CACHE_MAX_AGE_DAYS = int(os.getenv('WORD_CACHE_MAX_AGE_DAYS', 7))

    # Game Settings
    ALLOW_TARGET_OVERRIDE = os.getenv('ALLOW_TARGET_OVERRIDE', 'False').lower() == 'true'

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    ALLOW_TARGET_OVERRIDE = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    ALLOW_TARGET_OVERRIDE = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    JWT_SECRET = 'test-jwt-secret-for-the-wordle-game-service'
    ALLOW_TARGET_OVERRIDE = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
