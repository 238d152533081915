import os
from datetime import timedelta


def database_url_from_env():
    """
    Resolve the database URI from the environment

    Returns:
        str: DATABASE_URL, or a URL built from the PG* variables, or None
    """
    url = os.environ.get('DATABASE_URL')
    if not url:
        parts = [os.environ.get(name) for name in
                 ('PGUSER', 'PGPASSWORD', 'PGHOST', 'PGPORT', 'PGDATABASE')]
        if all(parts):
            url = "postgresql://{}:{}@{}:{}/{}".format(*parts)
    if url and url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Database Settings (no fallback: a missing URI stops create_app)
    SQLALCHEMY_DATABASE_URI = database_url_from_env()
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Content Settings
    CONTENT_DIR = os.environ.get(
        'CONTENT_DIR',
        os.path.join(os.path.dirname(os.path.abspath(__file__)), 'content'))
    SITE_URL = os.environ.get('SITE_URL', 'https://www.devxsubh.com')
    SITE_OWNER = os.environ.get('SITE_OWNER', 'Subham Mahapatra')

    # Owner Notification Settings
    OWNER_EMAIL = os.environ.get('OWNER_EMAIL', 'subhammahapatra004@gmail.com')

    # Outbound Mail Settings
    SMTP_HOST = os.environ.get('SMTP_HOST')
    SMTP_PORT = os.environ.get('SMTP_PORT', '587')
    SMTP_SECURE = os.environ.get('SMTP_SECURE', 'false').lower() == 'true'
    SMTP_USER = os.environ.get('SMTP_USER')
    SMTP_PASSWORD = os.environ.get('SMTP_PASSWORD')
    SMTP_FROM = os.environ.get('SMTP_FROM')
    SMTP_FROM_NAME = os.environ.get('SMTP_FROM_NAME', 'Subham Mahapatra')
    MAIL_TIMEOUT = int(os.environ.get('MAIL_TIMEOUT', '15'))

    # Generative AI Settings
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY')
    GEMINI_MODEL = os.environ.get('GEMINI_MODEL', 'gemini-2.0-flash')
    GEMINI_API_URL = os.environ.get(
        'GEMINI_API_URL',
        'https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent')
    CHAT_TIMEOUT = int(os.environ.get('CHAT_TIMEOUT', '20'))

    # Rate Limiting
    RATE_LIMIT_MAX_REQUESTS = int(os.environ.get('RATE_LIMIT_MAX_REQUESTS', '10'))
    RATE_LIMIT_WINDOW = int(os.environ.get('RATE_LIMIT_WINDOW', '60'))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # SQLite's StaticPool rejects pool_size
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SMTP_HOST = 'smtp.test.local'
    SMTP_PORT = '587'
    SMTP_USER = 'mailer@test.local'
    SMTP_PASSWORD = 'secret'
    SMTP_FROM = 'mailer@test.local'
    OWNER_EMAIL = 'owner@test.local'
    GEMINI_API_KEY = 'test-key'
    RATE_LIMIT_MAX_REQUESTS = 1000


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config(config_name=None):
    """Get configuration by name, or based on FLASK_ENV"""
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
