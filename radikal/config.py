"""Configuration classes, selected by name in create_app()."""
import os


def _database_url(default=None):
    url = os.getenv('DATABASE_URL', default)
    # Render/Heroku style URLs are not accepted by SQLAlchemy 1.4+
    if url and url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _flag(name: str, default: str = 'true') -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = _database_url('sqlite:///radikal.db')
    DATABASE_CONFIGURED = bool(SQLALCHEMY_DATABASE_URI)

    # DeepL
    DEEPL_API_KEY = os.getenv('DEEPL_API_KEY', '')
    DEEPL_API_URL = os.getenv('DEEPL_API_URL', 'https://api.deepl.com/v2/translate')
    DEEPL_TIMEOUT = float(os.getenv('DEEPL_TIMEOUT', 10))

    TRANSLATION_CACHE_ENABLED = _flag('TRANSLATION_CACHE_ENABLED')

    # Language posts are authored in
    ORIGIN_LANG = os.getenv('ORIGIN_LANG', 'ro').lower()

    # Rate limits (flask-limiter syntax)
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    SEARCH_RATE_LIMIT = os.getenv('SEARCH_RATE_LIMIT', '30 per minute')
    TRANSLATE_RATE_LIMIT = os.getenv('TRANSLATE_RATE_LIMIT', '100 per minute')

    SITE_URL = os.getenv('SITE_URL', 'https://radikal-blog.vercel.app')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    pass


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    DATABASE_CONFIGURED = True
    DEEPL_API_KEY = 'test-deepl-key'
    DEEPL_API_URL = 'https://api.deepl.test/v2/translate'
    TRANSLATION_CACHE_ENABLED = True
    RATELIMIT_ENABLED = False
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    # No silent SQLite fallback in production
    SQLALCHEMY_DATABASE_URI = _database_url() or 'sqlite://'
    DATABASE_CONFIGURED = bool(_database_url())


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def get_config(config_name):
    return config_by_name.get(config_name or 'development', DevelopmentConfig)
