"""
FolioCMS - A Flask Portfolio Content API
========================================

A small content backend for a personal portfolio site:
- Project records stored in a single JSON file, backed up on every write
- Filtering, search, sorting and pagination over projects
- Project image uploads
- Admin session login guarding every change

Usage:
    from flask import Flask
    from foliocms import FolioCMS

    app = Flask(__name__)
    FolioCMS(app)
"""

__version__ = '1.0.0'
__author__ = 'FolioCMS Contributors'

import os

from flask_cors import CORS

from .core.config import Config
from .core.logging_service import logger
from .core.project_store import ProjectStore

DEFAULT_FEATURES = {
    'projects': True,
    'auth': True,
    'ops': True,
}

# Config keys copied from Config into app.config when the app leaves them unset
CONFIG_KEYS = (
    'SECRET_KEY', 'DATA_DIR', 'PROJECTS_FILE', 'BACKUP_DIR', 'IMAGES_DIR', 'PLACEHOLDER_IMAGE',
    'PERSIST_PROJECT_IDS', 'ALLOWED_FILE_TYPES', 'MAX_FILE_SIZE', 'ADMIN_USERNAME',
    'ADMIN_PASSWORD', 'CORS_ORIGINS',
)


class FolioCMS:
    """Flask extension wiring the store and the API blueprints into an app.

    Args:
        app: Flask application (optional, see ``init_app``).
        config: Optional dict; ``features`` maps module names to booleans.
    """

    def __init__(self, app=None, config=None):
        self._config = {'features': dict(DEFAULT_FEATURES)}
        if config:
            self._config['features'].update(config.get('features', {}))
        self._registered = []
        self.store = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_defaults(app)
        self._setup_storage_dirs(app)

        self.store = ProjectStore(
            app.config['PROJECTS_FILE'],
            app.config['BACKUP_DIR'],
            persist_ids=bool(app.config['PERSIST_PROJECT_IDS'])
        )
        self.store.ensure_document()

        CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}}, supports_credentials=True)
        self._register_modules(app)

        app.extensions['foliocms'] = self
        logger.info('system', f"FolioCMS initialised with modules: {', '.join(self._registered)}")

    def _apply_defaults(self, app):
        for key in CONFIG_KEYS:
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        # Let uploads slightly over the limit reach the handler for a clean error
        if app.config.get('MAX_CONTENT_LENGTH') is None:
            app.config['MAX_CONTENT_LENGTH'] = int(app.config['MAX_FILE_SIZE']) + 1024 * 1024

    def _setup_storage_dirs(self, app):
        """Create the document, backup and image directories"""
        for path in (os.path.dirname(os.path.abspath(app.config['PROJECTS_FILE'])),
                     app.config['BACKUP_DIR'],
                     app.config['IMAGES_DIR']):
            os.makedirs(path, exist_ok=True)

    def _register_modules(self, app):
        features = self._config['features']

        if features.get('auth'):
            from .modules.auth import auth_bp
            app.register_blueprint(auth_bp)
            self._registered.append('auth')

        if features.get('projects'):
            from .modules.projects import projects_bp
            app.register_blueprint(projects_bp)
            self._registered.append('projects')

        if features.get('ops'):
            from .modules.ops import ops_bp
            app.register_blueprint(ops_bp)
            self._registered.append('ops')

    def get_registered_modules(self):
        return list(self._registered)


__all__ = ['FolioCMS', 'ProjectStore', '__version__']
