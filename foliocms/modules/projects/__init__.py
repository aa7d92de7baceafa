"""
Projects API Module
===================

REST API for the portfolio's project records, backed by projects.json.

Provides:
- Listing with category/search filters, sorting and pagination
- Project creation, replacement and deletion (admin only)
- Image upload, listing, serving and deletion
- Category listing
"""

from flask import Blueprint

projects_bp = Blueprint(
    'projects_api',
    __name__,
    url_prefix='/api/projects'
)

from . import routes

__all__ = ['projects_bp']
