"""
Admin session resolution and authorization.

The caller's cookies are passed in explicitly so the checks can run without a
live request. Any failure while resolving an administrator from a session
counts as "no administrator" (fail closed).
"""

import logging
from datetime import datetime
from typing import Mapping, Optional

from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError

from rp_portal.auth.credentials import verify_password
from rp_portal.errors import AuthorizationError
from rp_portal.extensions import db
from rp_portal.models import AdminUser

logger = logging.getLogger(__name__)

DEFAULT_COOKIE_NAME = 'admin_session'
INVALID_CREDENTIALS = 'Invalid username or password'


def _cookie_name():
    if not has_app_context():
        return DEFAULT_COOKIE_NAME
    return current_app.config.get('ADMIN_SESSION_COOKIE', DEFAULT_COOKIE_NAME)


def resolve_session(cookies: Mapping[str, str], cookie_name: Optional[str] = None) -> Optional[str]:
    """Return the admin id carried by the session cookie, or None."""
    value = cookies.get(cookie_name or _cookie_name())
    if not value:
        return None
    value = value.strip()
    return value or None


def verify_admin(identity: Optional[str]) -> Optional[AdminUser]:
    """Return the active administrator for `identity`, or None.

    Runs a single read-only lookup filtered on id and the active flag.
    """
    if not identity:
        return None
    try:
        return AdminUser.query.filter_by(id=identity, active=True).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning('Admin lookup failed, treating as no session: %s', e)
        return None


def authenticate(username: str, password: str) -> AdminUser:
    """Check admin credentials and record the login.

    Raises AuthorizationError with the same message whether the username is
    unknown, the account is inactive or the password is wrong.
    """
    try:
        admin = AdminUser.query.filter_by(username=username, active=True).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error('Admin login lookup failed: %s', e)
        raise AuthorizationError(INVALID_CREDENTIALS) from e

    if admin is None or not verify_password(admin.password, password):
        logger.info('Rejected admin login for %r', username)
        raise AuthorizationError(INVALID_CREDENTIALS)

    # Last write wins for concurrent logins; a failed stamp does not block login
    try:
        admin.last_login = datetime.utcnow()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning('Could not record last login for %s: %s', admin.username, e)

    logger.info('Admin %s logged in', admin.username)
    return admin


def set_session_cookie(response, admin: AdminUser):
    config = current_app.config
    response.set_cookie(
        _cookie_name(),
        admin.id,
        max_age=config.get('ADMIN_SESSION_MAX_AGE', 60 * 60 * 24),
        path='/',
        secure=config.get('ADMIN_SESSION_COOKIE_SECURE', False),
        httponly=True,
        samesite='Lax',
    )
    return response


def clear_session_cookie(response):
    response.delete_cookie(_cookie_name(), path='/')
    return response
