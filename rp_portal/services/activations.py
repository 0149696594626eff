"""
Player Activation Service

New players fill in a profile and wait for staff approval before they can use
the site.
"""

import logging
from datetime import datetime

from rp_portal.errors import NotFoundError, ValidationError
from rp_portal.extensions import db
from rp_portal.models import User
from rp_portal.services.discord import notify_activation

logger = logging.getLogger(__name__)


def pending_activations():
    """Players with a complete profile that nobody has approved or rejected."""
    return (User.query
            .filter(User.activated.is_(False))
            .filter(User.rejected_at.is_(None))
            .filter(User.display_name.isnot(None))
            .filter(User.in_game_name.isnot(None))
            .filter(User.bio.isnot(None))
            .order_by(User.created_at.asc())
            .all())


def _get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('User profile not found')
    return user


def approve_activation(user_id, admin):
    user = _get_user(user_id)
    if user.activated:
        raise ValidationError('User is already activated')

    user.activated = True
    user.activated_at = datetime.utcnow()
    user.rejected_at = None
    user.rejection_reason = None
    db.session.commit()
    logger.info('User %s activated by %s', user.id, admin.username)

    notify_activation(user, approved=True)
    return user


def reject_activation(user_id, admin, reason=None):
    user = _get_user(user_id)
    if user.activated:
        raise ValidationError('User is already activated')

    user.rejected_at = datetime.utcnow()
    user.rejection_reason = reason
    db.session.commit()
    logger.info('User %s activation rejected by %s', user.id, admin.username)

    notify_activation(user, approved=False, reason=reason)
    return user
