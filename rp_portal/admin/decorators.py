"""
Admin Decorator

Every admin route runs this check before anything else, so a caller without
a valid admin session never reaches body parsing or a database write.
"""

from functools import wraps

from flask_login import current_user

from rp_portal.errors import AuthorizationError


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    `current_user` is resolved from the `admin_session` cookie by the login
    manager's request loader; an anonymous caller gets 401.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthorizationError()
        return f(*args, **kwargs)
    return wrapper
