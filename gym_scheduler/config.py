import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration class with all settings as static attributes."""

    # Core configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-me'
    DEBUG = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    VERSION = '1.0.0'

    # Session cookie settings
    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database configuration
    base_db_uri = os.environ.get('DATABASE_URL')

    # Fallback to SQLite if no DATABASE_URL is provided
    if not base_db_uri:
        base_db_uri = 'sqlite:///gym_scheduler.db'

    # Heroku-style URLs still use the deprecated scheme
    if base_db_uri.startswith('postgres://'):
        base_db_uri = base_db_uri.replace('postgres://', 'postgresql://', 1)

    SQLALCHEMY_DATABASE_URI = base_db_uri

    # Disable track modifications for performance
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Pool options only make sense for server databases
    if base_db_uri.startswith('sqlite'):
        SQLALCHEMY_ENGINE_OPTIONS = {}
    else:
        SQLALCHEMY_ENGINE_OPTIONS = {
            "pool_recycle": 3600,  # Recycle connections after 1 hour
            "pool_pre_ping": True,  # Check connection health before use
            "pool_size": 10,
            "max_overflow": 20,
        }

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(os.getcwd(), 'logs')
    LOG_TO_FILE = True

    # Scheduling settings
    DEFAULT_SESSION_CAPACITY = int(os.environ.get('DEFAULT_SESSION_CAPACITY', 20))
    DEFAULT_CLASS_DURATION = 60  # minutes


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SESSION_COOKIE_SECURE = False
    SQLALCHEMY_ECHO = os.environ.get('SQL_DEBUG', 'false').lower() == 'true'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

    SECRET_KEY = os.environ.get('SECRET_KEY')
    SQLALCHEMY_DATABASE_URI = Config.SQLALCHEMY_DATABASE_URI if os.environ.get('DATABASE_URL') else None

    @classmethod
    def validate(cls):
        """Fail fast when required production settings are missing."""
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ValueError("DATABASE_URL environment variable must be set in production")


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    WTF_CSRF_ENABLED = False
    SESSION_COOKIE_SECURE = False
    LOG_TO_FILE = False

    # Override for testing
    DEFAULT_SESSION_CAPACITY = 10


# Configuration dictionary
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}
