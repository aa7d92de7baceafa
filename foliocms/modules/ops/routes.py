"""
Ops Routes
==========

GET /api/health - liveness check for uptime monitors (no auth)
GET /api/stats  - project counts per category
"""

import os
from datetime import datetime, timezone

from flask import jsonify

from . import ops_bp
from ..projects.routes import get_project_store
from ...core.errors import ProjectStoreError
from ...core.logging_service import logger
from ...core.queries import category_counts


def _last_updated(path):
    try:
        mtime = os.path.getmtime(path)
    except OSError:
        return None
    return datetime.fromtimestamp(mtime, timezone.utc).isoformat()


@ops_bp.route('/health', methods=['GET'])
def health():
    """Health check"""
    from foliocms import __version__
    return jsonify({
        'status': 'OK',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'version': __version__
    })


@ops_bp.route('/stats', methods=['GET'])
def stats():
    """Project statistics"""
    store = get_project_store()
    try:
        projects = store.load_all()
    except ProjectStoreError as e:
        logger.error('ops', f"Error getting stats: {e.message}")
        return jsonify({
            'success': False,
            'error': 'Failed to get statistics',
            'message': e.message
        }), e.status_code

    counts = category_counts(projects)
    categories = sorted(counts)
    return jsonify({
        'success': True,
        'data': {
            'totalProjects': len(projects),
            'totalCategories': len(categories),
            'categories': categories,
            'categoryStats': counts,
            'lastUpdated': _last_updated(store.projects_path)
        }
    })
