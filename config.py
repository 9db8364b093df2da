"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    JSON_SORT_KEYS = False

    # Key-value store
    # STORE_BACKEND: 'memory' (volatile), 'sql' (SQLAlchemy table) or 'redis'
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'sql').lower()
    STORE_DATABASE_URL = os.getenv('STORE_DATABASE_URL', 'sqlite:///bakery.db')
    STORE_SQL_ECHO = os.getenv('STORE_SQL_ECHO', 'false').lower() == 'true'
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
    STORE_KEY_PREFIX = os.getenv('STORE_KEY_PREFIX', 'lv')
    STORE_LOCK_TIMEOUT = int(os.getenv('STORE_LOCK_TIMEOUT', '10'))  # seconds

    # Startup behaviour (the demo wipes its data on every load)
    RESET_STORE_ON_START = os.getenv('RESET_STORE_ON_START', 'false').lower() == 'true'
    SEED_ON_START = os.getenv('SEED_ON_START', 'true').lower() == 'true'

    # Business
    BUSINESS_NAME = os.getenv('BUSINESS_NAME', 'Padaria LV')
    RECEIPT_PREFIX = os.getenv('RECEIPT_PREFIX', 'LV')
    EXPIRING_SOON_DAYS = int(os.getenv('EXPIRING_SOON_DAYS', '3'))
