import contextvars
import hashlib

import pytest
from flask.testing import FlaskClient

from rp_portal import create_app
from rp_portal.config import TestConfig
from rp_portal.extensions import db
from rp_portal.models import AdminUser


def sha256_hex(value):
    return hashlib.sha256(value.encode('utf-8')).hexdigest()


class IsolatedClient(FlaskClient):
    """Test client whose requests push their own app context, as in production.

    The test body keeps the fixture's app context; each request runs outside
    it, so `g` and the request's database session start fresh. Afterwards the
    test's session is expired so assertions see what the request committed.
    """

    def open(self, *args, **kwargs):
        response = contextvars.Context().run(super().open, *args, **kwargs)
        db.session.expire_all()
        return response


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    app.test_client_class = IsolatedClient
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_admin(app):
    def _make_admin(username='admin', password='admin123', active=True, email=None):
        admin = AdminUser(username=username, password=sha256_hex(password),
                          active=active, email=email)
        db.session.add(admin)
        db.session.commit()
        return admin
    return _make_admin


@pytest.fixture()
def admin(make_admin):
    return make_admin()


@pytest.fixture()
def admin_client(client, admin):
    client.set_cookie('admin_session', admin.id)
    return client
