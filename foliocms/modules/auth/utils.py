import hashlib
import hmac
from functools import wraps

from flask import jsonify, session

from ...core.config import get_config_value


def hash_password(password):
    """Simple password hashing"""
    return hashlib.sha256(password.encode()).hexdigest()


def _same(a, b):
    """Constant-time comparison; works for any unicode text"""
    return hmac.compare_digest(str(a).encode('utf-8'), str(b).encode('utf-8'))


def check_credentials(username, password):
    """Compare against ADMIN_USERNAME / ADMIN_PASSWORD.

    ADMIN_PASSWORD may be plain text or ``sha256:<hexdigest>``.
    """
    admin_username = get_config_value('ADMIN_USERNAME', 'admin')
    admin_password = get_config_value('ADMIN_PASSWORD', '')

    if not _same(username, admin_username):
        return False

    if admin_password.startswith('sha256:'):
        return _same(hash_password(password), admin_password[len('sha256:'):])
    return _same(password, admin_password)


def admin_required(f):
    """Decorator to require an admin session for API routes"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return jsonify({
                'success': False,
                'error': 'Access denied',
                'message': 'Authentication required'
            }), 401
        return f(*args, **kwargs)
    return decorated_function
