"""
Storage Utility
===============

Project images on the local filesystem. A project's ``image`` field holds a
logical name (no extension); the file is found by trying the supported
extensions in a fixed order.
"""

import os
import re
import secrets
import time

from werkzeug.utils import secure_filename

from .config import get_config_value
from .errors import NotFound, ValidationFailed
from .logging_service import logger

# Resolution order used everywhere a logical name is mapped to a file
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.webp')

MIME_EXTENSIONS = {
    'image/png': '.png',
    'image/jpeg': '.jpg',
    'image/jpg': '.jpg',
    'image/gif': '.gif',
    'image/webp': '.webp',
}


def get_images_dir():
    return get_config_value('IMAGES_DIR')


def _split_name(filename):
    stem, ext = os.path.splitext(filename)
    return stem, ext.lower()


def _is_safe_name(name):
    return bool(name) and '/' not in name and '\\' not in name and name not in ('.', '..')


def sanitize_project_name(project_name):
    """Lowercase alphanumerics of a project name, at most 20 characters."""
    name = re.sub(r'[^a-z0-9\s]', '', project_name.lower())
    name = re.sub(r'\s+', '', name)
    return name[:20]


def sanitize_original_name(filename):
    """Original upload name made safe, without its extension."""
    stem, _ = _split_name(secure_filename(os.path.basename(filename or '')))
    return stem


def _unique_suffix():
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}"


def save_upload(file_bytes, original_filename, mimetype, project_name=None, images_dir=None):
    """Store an uploaded image and return its metadata.

    Args:
        file_bytes: Raw bytes of the upload.
        original_filename: Name the client sent.
        mimetype: Declared MIME type; must be in ALLOWED_FILE_TYPES.
        project_name: Optional free-text name the logical name is derived from.
        images_dir: Target directory (defaults to IMAGES_DIR).

    Returns:
        Dict with ``filename`` (logical name, no extension), ``storedName``,
        ``originalName``, ``size``, ``mimetype`` and ``path``.
    """
    allowed = get_config_value('ALLOWED_FILE_TYPES', [])
    if isinstance(allowed, str):
        allowed = allowed.split(',')
    allowed = [t.strip() for t in allowed if t.strip()]
    if mimetype not in allowed:
        raise ValidationFailed([f"Invalid file type. Allowed types: {', '.join(allowed)}"], 'Upload error')

    max_size = int(get_config_value('MAX_FILE_SIZE', 5 * 1024 * 1024))
    if len(file_bytes) > max_size:
        raise ValidationFailed(
            [f"File size exceeds the maximum allowed limit of {round(max_size / 1024 / 1024)}MB"],
            'File too large'
        )
    if not file_bytes:
        raise ValidationFailed(['Uploaded file is empty'], 'Upload error')

    _, ext = _split_name(original_filename or '')
    if ext not in IMAGE_EXTENSIONS:
        ext = MIME_EXTENSIONS.get(mimetype, '.png')

    base = sanitize_project_name(project_name) if project_name else sanitize_original_name(original_filename or '')
    base = base or 'project'
    logical_name = f"{base}_{_unique_suffix()}"
    stored_name = f"{logical_name}{ext}"

    upload_dir = images_dir or get_images_dir()
    os.makedirs(upload_dir, exist_ok=True)
    filepath = os.path.join(upload_dir, stored_name)
    with open(filepath, 'xb') as f:
        f.write(file_bytes)

    logger.info('storage', f"Image uploaded: {stored_name}", {'original': original_filename, 'size': len(file_bytes)})
    return {
        'filename': logical_name,
        'storedName': stored_name,
        'originalName': original_filename,
        'size': len(file_bytes),
        'mimetype': mimetype,
        'path': filepath,
    }


def list_images(images_dir=None):
    """List image files as {filename, fullName, extension} dicts, sorted by name."""
    folder = images_dir or get_images_dir()
    if not os.path.isdir(folder):
        return []

    images = []
    for name in sorted(os.listdir(folder)):
        stem, ext = _split_name(name)
        if ext in IMAGE_EXTENSIONS and os.path.isfile(os.path.join(folder, name)):
            images.append({
                'filename': stem,
                'fullName': name,
                'extension': ext,
            })
    return images


def resolve_image(logical_name, images_dir=None):
    """Absolute path of the file for ``logical_name``, or None."""
    if not _is_safe_name(logical_name):
        return None
    folder = images_dir or get_images_dir()
    for ext in IMAGE_EXTENSIONS:
        candidate = os.path.join(folder, f"{logical_name}{ext}")
        if os.path.isfile(candidate):
            return os.path.abspath(candidate)
    return None


def image_or_placeholder(logical_name, images_dir=None):
    """Resolved image path, falling back to PLACEHOLDER_IMAGE (may be None)."""
    path = resolve_image(logical_name, images_dir)
    if path:
        return path
    placeholder = get_config_value('PLACEHOLDER_IMAGE')
    if placeholder and os.path.isfile(placeholder):
        return os.path.abspath(placeholder)
    return None


def delete_image(logical_name, images_dir=None):
    """Delete the first image whose name without extension is ``logical_name``.

    Returns the deleted file name. Raises NotFound if nothing matches.
    """
    if not _is_safe_name(logical_name):
        raise NotFound('Image not found')

    for image in list_images(images_dir):
        if image['filename'] == logical_name:
            folder = images_dir or get_images_dir()
            try:
                os.unlink(os.path.join(folder, image['fullName']))
            except FileNotFoundError:
                raise NotFound('Image not found')
            logger.info('storage', f"Image deleted: {image['fullName']}")
            return image['fullName']

    raise NotFound('Image not found')
