"""
Auth Routes

Admin login state machine: Anonymous -> Authorized | Rejected. Logout always
returns to Anonymous.
"""

from flask import jsonify
from flask_login import current_user

from rp_portal.auth import auth_bp
from rp_portal.auth.session import authenticate, set_session_cookie, clear_session_cookie
from rp_portal.errors import ValidationError
from rp_portal.schemas import AdminLogin, parse_body


@auth_bp.route('/login', methods=['POST'])
def admin_login():
    """Check credentials and issue the admin session cookie."""
    payload = parse_body(AdminLogin)

    if not payload.username.strip() or not payload.password:
        raise ValidationError('Username and password are required')

    # Usernames match exactly, padding included
    admin = authenticate(payload.username, payload.password)

    response = jsonify({
        'success': True,
        'admin': {'username': admin.username, 'id': admin.id},
    })
    return set_session_cookie(response, admin)


@auth_bp.route('/logout', methods=['POST'])
def admin_logout():
    """Drop the admin session cookie. Succeeds whether or not one existed."""
    return clear_session_cookie(jsonify({'success': True}))


@auth_bp.route('/verify', methods=['GET'])
def admin_verify():
    """Report whether the caller holds a valid admin session."""
    if not current_user.is_authenticated:
        return jsonify({'authenticated': False}), 401
    return jsonify({
        'authenticated': True,
        'admin': {'username': current_user.username},
    })
