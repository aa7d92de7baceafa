import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Base configuration for FolioCMS.
    Deployments override paths and credentials via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Everything the store touches lives under DATA_DIR unless overridden
    DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))

    PROJECTS_FILE = os.getenv('PROJECTS_FILE', os.path.join(DATA_DIR, 'projects', 'projects.json'))
    BACKUP_DIR = os.getenv('BACKUP_DIR', os.path.join(DATA_DIR, 'backups'))
    IMAGES_DIR = os.getenv('IMAGES_DIR', os.path.join(DATA_DIR, 'assets', 'images', 'projects'))
    PLACEHOLDER_IMAGE = os.getenv('PLACEHOLDER_IMAGE')

    # Write ids into projects.json (False keeps the legacy id-less layout)
    PERSIST_PROJECT_IDS = _env_flag('PERSIST_PROJECT_IDS', True)

    # Upload settings
    ALLOWED_FILE_TYPES = os.getenv(
        'ALLOWED_FILE_TYPES',
        'image/jpeg,image/jpg,image/png,image/gif,image/webp'
    ).split(',')
    MAX_FILE_SIZE = int(os.getenv('MAX_FILE_SIZE', str(5 * 1024 * 1024)))

    # Admin credentials (password may be "sha256:<hexdigest>")
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin123')

    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Port for local server
    port = int(os.getenv('PORT', '3000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
