"""
Error types and JSON error handlers.

Every failure a handler can report is a `PortalError` carrying the HTTP status
and a message that is safe to show the caller. Backend failures are logged
with their real cause but rendered with a generic message.
"""

import logging

from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from rp_portal.extensions import db

logger = logging.getLogger(__name__)

GENERIC_ERROR = 'Internal server error'


class PortalError(Exception):
    status_code = 500
    message = GENERIC_ERROR

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(PortalError):
    """Missing or malformed input."""
    status_code = 400
    message = 'Invalid request'


class AuthorizationError(PortalError):
    """No session, not an administrator, inactive account or bad credentials."""
    status_code = 401
    message = 'Unauthorized'


class NotFoundError(PortalError):
    status_code = 404
    message = 'Not found'


class BackendError(PortalError):
    """The database failed. `cause` is logged, never shown to the caller."""
    status_code = 500

    def __init__(self, message=None, cause=None):
        super().__init__(message)
        self.cause = cause


def register_error_handlers(app):
    """Render every error raised under the API as `{"error": message}`."""

    @app.errorhandler(PortalError)
    def handle_portal_error(error):
        if isinstance(error, BackendError):
            logger.error('Backend error on %s %s: %s', request.method, request.path,
                         error.cause or error)
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        return handle_portal_error(BackendError(cause=error))

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api/'):
            return error
        return jsonify({'error': error.description}), error.code
