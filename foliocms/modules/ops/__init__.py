"""
Ops Module
==========

Public health check and collection statistics.

Usage:
    from foliocms.modules.ops import ops_bp

    app.register_blueprint(ops_bp)  # Registers /api/health and /api/stats
"""

from flask import Blueprint

ops_bp = Blueprint(
    'ops',
    __name__,
    url_prefix='/api'
)

from . import routes

__all__ = ['ops_bp']
