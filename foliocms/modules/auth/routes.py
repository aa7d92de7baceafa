"""
Admin Auth Routes
=================

POST /api/auth/login    - exchange the admin credentials for a session
POST /api/auth/verify   - check the current session
POST /api/auth/logout   - drop the session
GET  /api/auth/profile  - current admin details
"""

from datetime import datetime, timezone

from flask import request, session, jsonify

from . import auth_bp
from .utils import admin_required, check_credentials
from ...core.logging_service import logger


def _validate_login(data):
    errors = []
    username = data.get('username')
    password = data.get('password')

    if not isinstance(username, str) or not username:
        errors.append('Username is required')
    elif not 3 <= len(username) <= 50:
        errors.append('Username must be between 3 and 50 characters')

    if not isinstance(password, str) or not password:
        errors.append('Password is required')
    elif len(password) < 6:
        errors.append('Password must be at least 6 characters long')

    return errors


@auth_bp.route('/login', methods=['POST'])
def login():
    """Admin login"""
    data = request.get_json(silent=True) or request.form.to_dict()

    errors = _validate_login(data)
    if errors:
        return jsonify({
            'success': False,
            'error': 'Validation failed',
            'message': ', '.join(errors),
            'details': errors
        }), 400

    username = data['username']
    if not check_credentials(username, data['password']):
        logger.log_security_event('Failed admin login', {'username': username})
        return jsonify({
            'success': False,
            'error': 'Authentication failed',
            'message': 'Invalid credentials'
        }), 401

    session.clear()
    session['admin_id'] = username
    session['admin_role'] = 'admin'
    session['login_time'] = datetime.now(timezone.utc).isoformat()
    session.permanent = True

    logger.log_user_action('auth', 'login', user_id=username)
    return jsonify({
        'success': True,
        'message': 'Login successful',
        'data': {
            'user': {
                'username': username,
                'role': 'admin'
            }
        }
    })


@auth_bp.route('/verify', methods=['POST'])
@admin_required
def verify():
    """Confirm the session is still valid"""
    return jsonify({
        'success': True,
        'message': 'Token is valid',
        'data': {
            'user': {
                'username': session['admin_id'],
                'role': session.get('admin_role', 'admin')
            },
            'isAuthenticated': True
        }
    })


@auth_bp.route('/logout', methods=['POST'])
@admin_required
def logout():
    """Admin logout"""
    username = session.get('admin_id')
    session.clear()
    logger.log_user_action('auth', 'logout', user_id=username)
    return jsonify({'success': True, 'message': 'Logout successful'})


@auth_bp.route('/profile', methods=['GET'])
@admin_required
def profile():
    """Current admin profile"""
    return jsonify({
        'success': True,
        'data': {
            'user': {
                'username': session['admin_id'],
                'role': session.get('admin_role', 'admin'),
                'loginTime': session.get('login_time')
            }
        }
    })
