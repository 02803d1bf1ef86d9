"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

from . import game_settings

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Dictionary Settings
    DICTIONARY_PATH = os.getenv('DICTIONARY_PATH', os.path.join(_PACKAGE_DIR, 'data', 'allowed_words.json'))
    DICTIONARY_RETRY_ATTEMPTS = int(os.getenv('DICTIONARY_RETRY_ATTEMPTS', 3))
    DICTIONARY_RETRY_DELAY = float(os.getenv('DICTIONARY_RETRY_DELAY', 0.5))

    # Game Settings
    DAILY_MODE_DEFAULT = os.getenv('DAILY_MODE_DEFAULT', 'False').lower() == 'true'
    REVEAL_BASE_DELAY_MS = int(os.getenv('REVEAL_BASE_DELAY_MS', game_settings.REVEAL_BASE_DELAY_MS))
    REVEAL_STEP_MS = int(os.getenv('REVEAL_STEP_MS', game_settings.REVEAL_STEP_MS))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    DICTIONARY_RETRY_DELAY = 0.0
    REVEAL_BASE_DELAY_MS = 0
    REVEAL_STEP_MS = 0


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
