"""
Folio - Portfolio Site with Admin Console
=========================================

A Flask application serving a personal portfolio (projects, videos, hero
photos, resume, contact messages) with a password-gated admin API.

Usage:
    from flask import Flask
    from folio import Folio

    app = Flask(__name__)
    Folio(app)

or simply:

    from folio import create_app
    app = create_app()
"""

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .core.config import Config, get_database_uri, get_setting
from .core.errors import BackendFailure, FolioError
from .core.logging_service import LoggingService
from .core.storage import create_storage

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'messages': True,
    'projects': True,
    'videos': True,
    'hero_photos': True,
    'resume': True,
    'site': True,
}


def _module_table():
    """(name, blueprint, service class) for every feature module."""
    from .modules.messages import messages_bp, MessageService
    from .modules.projects import projects_bp, ProjectService
    from .modules.videos import videos_bp, VideoService
    from .modules.hero_photos import hero_photos_bp, HeroPhotoService
    from .modules.resume import resume_bp, ResumeService
    from .modules.site import site_bp

    return [
        ('messages', messages_bp, MessageService),
        ('projects', projects_bp, ProjectService),
        ('videos', videos_bp, VideoService),
        ('hero_photos', hero_photos_bp, HeroPhotoService),
        ('resume', resume_bp, ResumeService),
        # Catch-all SPA fallback, must stay last
        ('site', site_bp, None),
    ]


class Folio:
    """
    Flask extension wiring configuration, the storage backend, the resource
    services and the feature blueprints onto an app.
    """

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered = []
        self.storage = None
        self.services = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_data_dir(app)

        db = self._setup_database(app)
        self.storage = create_storage(app, db=db)
        logger.info(f"Folio storage backend: {self.storage.name}")

        self._register_modules(app)
        self._register_error_handlers(app)

        origins = get_setting(app, 'CORS_ORIGINS', '*')
        if isinstance(origins, str) and origins != '*':
            origins = [o.strip() for o in origins.split(',') if o.strip()]
        CORS(app, resources={r"/api/*": {"origins": origins}})

        if get_setting(app, 'ADMIN_PASSWORD') == Config.DEFAULT_ADMIN_PASSWORD:
            logger.warning("ADMIN_PASSWORD is using the built-in default; set it in the environment")

        app.extensions['folio'] = self

    # ----- setup -----

    def _apply_config(self, app):
        """Copy uppercase config keys onto app.config and fill in defaults."""
        for key, value in self._config.items():
            if key.isupper():
                app.config[key] = value

        for key in ('ADMIN_PASSWORD', 'STORAGE_BACKEND', 'DATA_DIR', 'UPLOAD_FOLDER',
                    'SITE_FOLDER', 'MAX_UPLOAD_SIZE', 'SPACES_FOLDER', 'CORS_ORIGINS'):
            app.config.setdefault(key, getattr(Config, key))

        # Small slack over the per-file cap for the other multipart fields
        app.config.setdefault('MAX_CONTENT_LENGTH', app.config['MAX_UPLOAD_SIZE'] + 1024 * 1024)

    def _setup_data_dir(self, app):
        for key in ('DATA_DIR', 'UPLOAD_FOLDER'):
            path = app.config.get(key)
            if path:
                os.makedirs(path, exist_ok=True)

    def _setup_database(self, app):
        """Initialise Flask-SQLAlchemy when the remote backend is selected."""
        if (get_setting(app, 'STORAGE_BACKEND', 'local') or 'local').strip().lower() != 'remote':
            return None

        from .core.database import db

        app.config.setdefault('SQLALCHEMY_DATABASE_URI', get_database_uri(app))
        db.init_app(app)
        with app.app_context():
            db.create_all()
        return db

    def _features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def _register_modules(self, app):
        features = self._features()
        for name, blueprint, service_cls in _module_table():
            if not features.get(name, False):
                continue
            if service_cls is not None:
                self.services[name] = service_cls(self.storage)
            app.register_blueprint(blueprint)
            self._registered.append(name)

    def _register_error_handlers(self, app):
        @app.errorhandler(FolioError)
        def handle_folio_error(error):
            if isinstance(error, BackendFailure):
                LoggingService.error('storage', f"Backend failure: {error}")
            return jsonify({'success': False, 'message': error.message}), error.status_code

        @app.errorhandler(RequestEntityTooLarge)
        def handle_too_large(error):
            return jsonify({'success': False, 'message': 'File too large'}), 413

        @app.errorhandler(Exception)
        def handle_unexpected(error):
            if isinstance(error, HTTPException):
                return error
            LoggingService.log_error_with_traceback('app', error)
            return jsonify({'success': False, 'message': str(error)}), 500

    # ----- accessors -----

    def service(self, name):
        return self.services[name]

    def get_registered_modules(self):
        return list(self._registered)


def create_app(config=None):
    """Application factory."""
    app = Flask(__name__, static_folder=None)
    Folio(app, config)
    return app


__all__ = ['Folio', 'create_app', '__version__']
