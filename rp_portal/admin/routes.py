"""
Admin Routes

Admin accounts, dashboard stats, players, activations and server status.
"""

import logging
from datetime import datetime

from flask import current_app, jsonify, request
from flask_login import current_user
from sqlalchemy import or_

from rp_portal.admin import admin_bp
from rp_portal.admin.decorators import admin_required
from rp_portal.auth.credentials import hash_password
from rp_portal.errors import NotFoundError, ValidationError
from rp_portal.extensions import db
from rp_portal.models import AdminUser, User, StoreItem, ServerStatus
from rp_portal.schemas import (
    AdminCreate,
    AdminStatusUpdate,
    AdminPasswordUpdate,
    UserUpdate,
    ActivationDecision,
    ServerStatusUpdate,
    parse_body,
)
from rp_portal.services import pending_activations, approve_activation, reject_activation

logger = logging.getLogger(__name__)


def _check_password_length(password):
    minimum = current_app.config.get('ADMIN_MIN_PASSWORD_LENGTH', 6)
    if not password or len(password) < minimum:
        raise ValidationError(f'Password must be at least {minimum} characters long')


def _get_admin_or_404(admin_id):
    target = db.session.get(AdminUser, admin_id)
    if target is None:
        raise NotFoundError('Admin not found')
    return target


def _is_protected(target):
    return target.username == current_app.config.get('PROTECTED_ADMIN_USERNAME', 'admin')


# -----------------------------------------------------------------------------
# Admin accounts
# -----------------------------------------------------------------------------

@admin_bp.route('/admins', methods=['GET'])
@admin_required
def list_admins():
    admins = AdminUser.query.order_by(AdminUser.created_at.desc()).all()
    return jsonify([a.to_dict() for a in admins])


@admin_bp.route('/admins', methods=['POST'])
@admin_required
def create_admin():
    """Create an admin account with a hashed password."""
    payload = parse_body(AdminCreate)
    username = payload.username.strip()
    if not username:
        raise ValidationError('Username and password are required')
    _check_password_length(payload.password)

    if AdminUser.query.filter_by(username=username).first() is not None:
        raise ValidationError('Username already exists')

    admin = AdminUser(
        username=username,
        password=hash_password(payload.password),
        email=payload.email or None,
    )
    db.session.add(admin)
    db.session.commit()
    logger.info('Admin %s created by %s', username, current_user.username)
    return jsonify({'success': True, 'admin': admin.to_dict()})


@admin_bp.route('/admins', methods=['PATCH'])
@admin_required
def set_admin_active():
    """Activate or deactivate an admin account."""
    payload = parse_body(AdminStatusUpdate)
    target = _get_admin_or_404(payload.admin_id)

    if not payload.active:
        if _is_protected(target):
            raise ValidationError(f'Cannot deactivate the "{target.username}" account')
        if target.id == current_user.id:
            raise ValidationError('You cannot deactivate your own account')

    target.active = payload.active
    db.session.commit()
    logger.info('Admin %s set active=%s by %s', target.username, payload.active, current_user.username)
    return jsonify({'success': True})


@admin_bp.route('/admins', methods=['DELETE'])
@admin_required
def delete_admin():
    admin_id = request.args.get('id')
    if not admin_id:
        raise ValidationError('Missing admin ID')

    target = _get_admin_or_404(admin_id)
    if _is_protected(target):
        raise ValidationError(f'Cannot delete the "{target.username}" account')
    if target.id == current_user.id:
        raise ValidationError('You cannot delete your own account')

    db.session.delete(target)
    db.session.commit()
    logger.info('Admin %s deleted by %s', target.username, current_user.username)
    return jsonify({'success': True})


@admin_bp.route('/admins/password', methods=['PATCH'])
@admin_required
def change_admin_password():
    payload = parse_body(AdminPasswordUpdate)
    _check_password_length(payload.new_password)

    target = _get_admin_or_404(payload.admin_id)
    target.password = hash_password(payload.new_password)
    db.session.commit()
    logger.info('Password for admin %s changed by %s', target.username, current_user.username)
    return jsonify({'success': True})


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

@admin_bp.route('/stats', methods=['GET'])
@admin_required
def admin_stats():
    """Counters shown on the dashboard overview."""
    return jsonify({
        'totalUsers': User.query.count(),
        'activeUsers': User.query.filter_by(activated=True).count(),
        'pendingActivations': User.query.filter(
            User.activated.is_(False), User.rejected_at.is_(None)).count(),
        'storeItems': StoreItem.query.count(),
        'availableItems': StoreItem.query.filter_by(available=True).count(),
    })


# -----------------------------------------------------------------------------
# Players and activations
# -----------------------------------------------------------------------------

@admin_bp.route('/users', methods=['GET'])
@admin_required
def list_users():
    query = User.query.order_by(User.created_at.desc())

    search = request.args.get('search', '').strip()
    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(User.display_name.ilike(pattern),
                                 User.in_game_name.ilike(pattern)))

    return jsonify([u.to_dict() for u in query.all()])


@admin_bp.route('/users', methods=['PATCH'])
@admin_required
def update_user():
    payload = parse_body(UserUpdate)
    user = db.session.get(User, payload.user_id)
    if user is None:
        raise NotFoundError('User not found')

    if payload.activated is not None:
        user.activated = payload.activated
        if payload.activated and user.activated_at is None:
            user.activated_at = datetime.utcnow()
    db.session.commit()
    return jsonify({'success': True})


@admin_bp.route('/activations', methods=['GET'])
@admin_required
def list_activations():
    return jsonify([u.to_dict() for u in pending_activations()])


@admin_bp.route('/activations/approve', methods=['POST'])
@admin_required
def approve_user_activation():
    payload = parse_body(ActivationDecision)
    approve_activation(payload.user_id, current_user)
    return jsonify({'success': True, 'message': 'User activated successfully'})


@admin_bp.route('/activations/reject', methods=['POST'])
@admin_required
def reject_user_activation():
    payload = parse_body(ActivationDecision)
    reject_activation(payload.user_id, current_user, reason=payload.reason)
    return jsonify({'success': True, 'message': 'User activation rejected'})


# -----------------------------------------------------------------------------
# Server status
# -----------------------------------------------------------------------------

def _latest_status():
    return ServerStatus.query.order_by(ServerStatus.updated_at.desc(),
                                       ServerStatus.id.desc()).first()


@admin_bp.route('/server', methods=['GET'])
@admin_required
def get_server_status():
    status = _latest_status()
    return jsonify(status.to_dict() if status else ServerStatus.default_dict())


@admin_bp.route('/server', methods=['PATCH'])
@admin_required
def update_server_status():
    """Upsert the single server status row."""
    payload = parse_body(ServerStatusUpdate)

    status = _latest_status()
    if status is None:
        status = ServerStatus()
        db.session.add(status)

    status.online = payload.online
    status.current_players = payload.current_players
    status.max_players = payload.max_players
    status.ping = payload.ping
    status.uptime_seconds = payload.uptime_seconds or 0
    status.updated_at = datetime.utcnow()
    db.session.commit()
    return jsonify({'success': True})
