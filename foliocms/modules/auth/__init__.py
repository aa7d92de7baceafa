"""
FolioCMS Auth Module

Admin authentication for the content API:
- Single configured admin credential pair
- Flask signed-session login/logout
- Token verification and profile endpoints
- ``admin_required`` guard for mutating routes
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    url_prefix='/api/auth'
)

from . import routes
from .utils import admin_required, check_credentials

__all__ = ['auth_bp', 'admin_required', 'check_credentials']
