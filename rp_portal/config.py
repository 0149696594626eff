"""
Configuration settings for the RP Portal backend
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask application configuration"""

    APP_ENV = os.environ.get('APP_ENV', 'development')
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Database configuration (hosted Postgres in production)
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'rp_portal.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_TABLES = _env_flag('AUTO_CREATE_TABLES', True)

    # Admin session cookie
    ADMIN_SESSION_COOKIE = 'admin_session'
    ADMIN_SESSION_MAX_AGE = 60 * 60 * 24
    ADMIN_SESSION_COOKIE_SECURE = APP_ENV == 'production'

    # Admin credentials
    PASSWORD_HASH_SCHEME = os.environ.get('PASSWORD_HASH_SCHEME', 'sha256')
    ADMIN_MIN_PASSWORD_LENGTH = 6
    PROTECTED_ADMIN_USERNAME = 'admin'
    ADMIN_BOOTSTRAP_USERNAME = os.environ.get('ADMIN_BOOTSTRAP_USERNAME') or 'admin'
    ADMIN_BOOTSTRAP_PASSWORD = os.environ.get('ADMIN_BOOTSTRAP_PASSWORD')

    # Discord notifications (optional)
    DISCORD_WEBHOOK_URL = os.environ.get('DISCORD_WEBHOOK_URL')
    DISCORD_TIMEOUT = 5

    # Public API
    NEWS_PAGE_LIMIT = 50
    LEADERBOARD_PAGE_LIMIT = 100


class ProductionConfig(Config):
    """Production configuration"""
    APP_ENV = 'production'
    ADMIN_SESSION_COOKIE_SECURE = True


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    AUTO_CREATE_TABLES = True
    ADMIN_BOOTSTRAP_PASSWORD = None
    DISCORD_WEBHOOK_URL = None
    LOG_LEVEL = 'WARNING'


def config_for(env=None):
    """Pick the config class for an APP_ENV value (default: the environment's)."""
    env = env or os.environ.get('APP_ENV', 'development')
    return ProductionConfig if env == 'production' else Config
