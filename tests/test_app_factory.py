import logging

from flask import Blueprint

from rp_portal import create_app
from rp_portal.auth.credentials import verify_password
from rp_portal.config import Config, ProductionConfig, TestConfig, config_for
from rp_portal.errors import BackendError
from rp_portal.extensions import db
from rp_portal.models import AdminUser, StoreItem


class BootstrapConfig(TestConfig):
    ADMIN_BOOTSTRAP_USERNAME = 'owner'
    ADMIN_BOOTSTRAP_PASSWORD = 'first-login-pass'


def test_bootstrap_admin_created_on_empty_table():
    app = create_app(BootstrapConfig)
    with app.app_context():
        admins = AdminUser.query.all()
        assert [a.username for a in admins] == ['owner']
        assert verify_password(admins[0].password, 'first-login-pass')
        db.session.remove()
        db.drop_all()


def test_no_bootstrap_admin_without_password(app):
    assert AdminUser.query.count() == 0


def test_config_for_app_env(monkeypatch):
    assert config_for('production') is ProductionConfig
    assert config_for('development') is Config

    monkeypatch.setenv('APP_ENV', 'production')
    assert config_for() is ProductionConfig
    monkeypatch.delenv('APP_ENV')
    assert config_for() is Config


def test_database_errors_render_generic_message(client, caplog):
    StoreItem.__table__.drop(db.engine)

    with caplog.at_level(logging.ERROR, logger='rp_portal.errors'):
        r = client.get('/api/store')
    assert r.status_code == 500
    assert r.get_json() == {'error': 'Internal server error'}
    assert 'no such table' in caplog.text


def test_backend_error_hides_its_cause():
    app = create_app(TestConfig)
    broken = Blueprint('broken', __name__)

    @broken.route('/api/broken')
    def raise_backend_error():
        raise BackendError(cause=RuntimeError('replica lag: 42s'))

    app.register_blueprint(broken)
    with app.app_context():
        r = app.test_client().get('/api/broken')
        assert r.status_code == 500
        assert r.get_json() == {'error': 'Internal server error'}
        db.drop_all()


def test_method_not_allowed_is_json(client):
    r = client.delete('/api/news')
    assert r.status_code == 405
    assert 'error' in r.get_json()
