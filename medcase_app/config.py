# File: medcase_app/config.py

import os

from dotenv import load_dotenv

load_dotenv()

# config.py lives in <root>/medcase_app/, the project root is one level up.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "medcase.db")


class Config:
    """Flask configuration for the MedCase app."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Development fallback, production must set SECRET_KEY.
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'connect_args': {'timeout': 30},
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')
    LOG_DIR = os.environ.get('LOG_DIR')
    LOG_JSON = os.environ.get('LOG_JSON', '').lower() in ('1', 'true', 'yes')

    # Comma-separated module names to leave unmounted, e.g. "cases".
    DISABLED_MODULES = [name.strip() for name in os.environ.get('DISABLED_MODULES', '').split(',') if name.strip()]

    @classmethod
    def init_app(cls, app):
        """Create the folders the configured paths rely on."""
        uri = app.config.get('SQLALCHEMY_DATABASE_URI') or ''
        if uri == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
