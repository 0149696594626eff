"""
Auth Blueprint

Admin login, logout and session check. The session is the `admin_session`
cookie holding the administrator's id.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from rp_portal.auth import routes  # noqa: E402, F401
