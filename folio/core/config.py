import os
from dotenv import load_dotenv

load_dotenv(override=True)

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Config:
    """
    Base configuration for the Folio portfolio site.
    Every value can be overridden through app.config or the environment.
    """
    # Admin gate
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'YourSecurePassword123')
    DEFAULT_ADMIN_PASSWORD = 'YourSecurePassword123'

    # Storage backend: 'local' (JSON files) or 'remote' (database + bucket)
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'local').strip().lower()

    DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    SITE_FOLDER = os.getenv('SITE_FOLDER', os.path.join(_PACKAGE_DIR, 'modules', 'site', 'static'))

    MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', str(10 * 1024 * 1024)))

    # Remote database
    DATABASE_URL = os.getenv('DATABASE_URL')

    # Object storage (DigitalOcean Spaces / S3 compatible)
    DO_SPACES_REGION = os.getenv('DO_SPACES_REGION')
    DO_SPACES_NAME = os.getenv('DO_SPACES_NAME')
    DO_SPACES_KEY = os.getenv('DO_SPACES_KEY')
    DO_SPACES_SECRET = os.getenv('DO_SPACES_SECRET')
    SPACES_FOLDER = os.getenv('SPACES_FOLDER', 'portfolio')

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # JSON file per collection (local mode and remote read fallback)
    COLLECTION_FILES = {
        'messages': 'messages.json',
        'projects': 'projects.json',
        'videos': 'videos.json',
        'hero_photos': 'hero-photos.json',
        'resume': 'resume.json',
    }

    port = int(os.getenv('PORT', '3000'))


def get_setting(app, key, default=None):
    """Resolve a setting: app.config -> Config -> default."""
    val = app.config.get(key)
    if val is not None:
        return val
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return default


def get_database_uri(app):
    """SQLAlchemy URI for remote mode, defaulting to a SQLite file in DATA_DIR."""
    uri = app.config.get('SQLALCHEMY_DATABASE_URI') or get_setting(app, 'DATABASE_URL')
    if uri:
        # Heroku-style URLs still use the legacy scheme
        if uri.startswith('postgres://'):
            uri = 'postgresql://' + uri[len('postgres://'):]
        return uri
    data_dir = get_setting(app, 'DATA_DIR')
    return 'sqlite:///' + os.path.join(data_dir, 'folio.db')
