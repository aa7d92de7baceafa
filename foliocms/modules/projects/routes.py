"""
Projects API Routes
===================

JSON envelope on every response: ``{success, data, message}`` on success,
``{success: false, error, message}`` on failure. Reads are public; anything
that changes projects.json or the image folder needs an admin session.
"""

import os

from flask import current_app, jsonify, request, send_file
from werkzeug.exceptions import HTTPException

from . import projects_bp
from .validation import validate_project_payload, parse_list_args
from ..auth.utils import admin_required
from ...core import storage
from ...core.config import get_config_value
from ...core.errors import ProjectStoreError, NotFound, ValidationFailed
from ...core.logging_service import logger
from ...core.project_store import ProjectStore
from ...core.queries import ProjectView

# ===== Helpers =====

def get_project_store():
    """Store bound to the current app (built from config if the extension is absent)"""
    ext = current_app.extensions.get('foliocms')
    if ext is not None and ext.store is not None:
        return ext.store
    return ProjectStore(
        get_config_value('PROJECTS_FILE'),
        get_config_value('BACKUP_DIR'),
        persist_ids=bool(get_config_value('PERSIST_PROJECT_IDS', True))
    )


def _validation_response(errors):
    messages = [e['message'] for e in errors]
    return jsonify({
        'success': False,
        'error': 'Validation failed',
        'message': ', '.join(messages),
        'details': errors
    }), 400


# ===== Error handlers =====

@projects_bp.errorhandler(ProjectStoreError)
def handle_store_error(error):
    """Map store failures to 404 / 400 / 500"""
    body = {
        'success': False,
        'error': type(error).__name__,
        'message': error.message
    }
    if isinstance(error, ValidationFailed):
        body['details'] = [{'field': None, 'message': m} for m in error.errors]

    status = error.status_code
    logger.log_api_call('projects', request.path, request.method, status, {'error': error.message})
    return jsonify(body), status


@projects_bp.errorhandler(Exception)
def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return jsonify({
            'success': False,
            'error': error.name,
            'message': error.description
        }), error.code

    logger.log_error_with_traceback('projects', error, {'path': request.path, 'method': request.method})
    return jsonify({
        'success': False,
        'error': 'Internal server error',
        'message': 'An unexpected error occurred'
    }), 500


# ===== Read routes =====

@projects_bp.route('', methods=['GET'])
@projects_bp.route('/', methods=['GET'])
def list_projects():
    """List projects with optional category, search, sort and pagination"""
    params, errors = parse_list_args(request.args)
    if errors:
        return _validation_response(errors)

    view = ProjectView(get_project_store().load_all())
    view = view.filter(category=params['category'], term=params['search']).sort(params['sort'])

    if params['limit']:
        page = view.page(params['limit'], params['offset'])
        return jsonify({
            'success': True,
            'data': page.items,
            'pagination': {
                'total': page.total,
                'limit': page.limit,
                'offset': page.offset,
                'hasMore': page.has_more
            }
        })

    page = view.page(None, params['offset'])
    return jsonify({
        'success': True,
        'data': page.items,
        'total': page.total
    })


@projects_bp.route('/categories', methods=['GET'])
def list_categories():
    """Distinct categories, sorted"""
    return jsonify({
        'success': True,
        'data': get_project_store().categories()
    })


@projects_bp.route('/<identifier>', methods=['GET'])
def get_project(identifier):
    """Single project by id or zero-based position"""
    project = get_project_store().get_one(identifier)
    return jsonify({'success': True, 'data': project})


# ===== Write routes =====

@projects_bp.route('', methods=['POST'])
@projects_bp.route('/', methods=['POST'])
@admin_required
def create_project():
    """Create new project"""
    project_data, errors = validate_project_payload(request.get_json(silent=True))
    if errors:
        return _validation_response(errors)

    new_project = get_project_store().create(project_data)
    logger.log_api_call('projects', request.path, 'POST', 201, {'id': new_project['id']})
    return jsonify({
        'success': True,
        'message': 'Project created successfully',
        'data': new_project
    }), 201


@projects_bp.route('/<identifier>', methods=['PUT'])
@admin_required
def update_project(identifier):
    """Replace every field of a project"""
    project_data, errors = validate_project_payload(request.get_json(silent=True))
    if errors:
        return _validation_response(errors)

    updated_project = get_project_store().update(identifier, project_data)
    return jsonify({
        'success': True,
        'message': 'Project updated successfully',
        'data': updated_project
    })


@projects_bp.route('/<identifier>', methods=['DELETE'])
@admin_required
def delete_project(identifier):
    """Delete project"""
    deleted_project = get_project_store().delete(identifier)
    return jsonify({
        'success': True,
        'message': 'Project deleted successfully',
        'data': deleted_project
    })


# ===== Image routes =====

@projects_bp.route('/upload', methods=['POST'])
@admin_required
def upload_image():
    """Upload a project image; returns its logical name"""
    if 'image' not in request.files:
        return jsonify({
            'success': False,
            'error': 'No file uploaded',
            'message': 'Please select an image file to upload'
        }), 400

    file = request.files['image']
    if file.filename == '':
        return jsonify({
            'success': False,
            'error': 'No file uploaded',
            'message': 'No file selected'
        }), 400

    result = storage.save_upload(
        file.read(),
        file.filename,
        file.mimetype,
        project_name=(request.form.get('projectName') or '').strip() or None
    )

    return jsonify({
        'success': True,
        'message': 'Image uploaded successfully',
        'data': result
    })


@projects_bp.route('/images/list', methods=['GET'])
def list_images():
    """List stored project images"""
    images = storage.list_images()
    body = {
        'success': True,
        'data': images,
        'total': len(images)
    }
    if not os.path.isdir(storage.get_images_dir()):
        body['message'] = 'Images directory not found'
    return jsonify(body)


@projects_bp.route('/images/<filename>', methods=['GET'])
def get_image(filename):
    """Serve an image by logical name, or the placeholder"""
    path = storage.image_or_placeholder(filename)
    if not path:
        raise NotFound('Image not found')
    return send_file(path)


@projects_bp.route('/images/<filename>', methods=['DELETE'])
@admin_required
def delete_image(filename):
    """Delete an image by logical name"""
    deleted_file = storage.delete_image(filename)
    return jsonify({
        'success': True,
        'message': 'Image deleted successfully',
        'data': {
            'filename': filename,
            'deletedFile': deleted_file
        }
    })
