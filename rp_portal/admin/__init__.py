"""
Admin Blueprint

JSON API behind the admin dashboard. Every route is guarded by
`admin_required`.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from rp_portal.admin import routes, content, payments  # noqa: E402, F401
