"""
RP Portal - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask

from rp_portal.config import Config
from rp_portal.errors import register_error_handlers
from rp_portal.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    _configure_login_manager()

    # Register blueprints
    from rp_portal.auth import auth_bp
    from rp_portal.admin import admin_bp
    from rp_portal.public import public_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth/admin')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(public_bp, url_prefix='/api')

    register_error_handlers(app)

    if app.config.get('AUTO_CREATE_TABLES'):
        with app.app_context():
            if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') \
                    and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
                os.makedirs(app.instance_path, exist_ok=True)
            db.create_all()
            _ensure_bootstrap_admin(app)

    return app


def _configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )
    logging.getLogger('rp_portal').setLevel(level)


def _configure_login_manager():
    """Resolve the current administrator from the admin session cookie."""
    from rp_portal.auth.session import resolve_session, verify_admin

    @login_manager.request_loader
    def load_admin_from_request(request):
        return verify_admin(resolve_session(request.cookies))


def _ensure_bootstrap_admin(app):
    """Seed one admin account when the table is empty and a password is configured."""
    from rp_portal.auth.credentials import hash_password
    from rp_portal.models import AdminUser

    password = app.config.get('ADMIN_BOOTSTRAP_PASSWORD')
    if not password or AdminUser.query.first() is not None:
        return

    username = app.config.get('ADMIN_BOOTSTRAP_USERNAME') or 'admin'
    db.session.add(AdminUser(username=username, password=hash_password(password)))
    db.session.commit()
    logger.info('Created bootstrap admin account %s', username)
