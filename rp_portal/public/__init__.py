"""
Public Blueprint

Read-only API for the marketing site. No session required.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from rp_portal.public import routes  # noqa: E402, F401
