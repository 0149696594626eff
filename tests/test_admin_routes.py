from datetime import datetime

import pytest

from rp_portal.auth.credentials import verify_password
from rp_portal.extensions import db
from rp_portal.models import AdminUser, User, StoreItem, ServerStatus


@pytest.fixture()
def notifications(monkeypatch):
    sent = []

    def fake_notify(user, approved, reason=None):
        sent.append((user.id, approved, reason))
        return True

    monkeypatch.setattr('rp_portal.services.activations.notify_activation', fake_notify)
    return sent


def _player(**overrides):
    values = dict(discord_username='player', display_name='Player', in_game_name='John Doe',
                  bio='Roleplayer since 2019')
    values.update(overrides)
    user = User(**values)
    db.session.add(user)
    db.session.commit()
    return user


# -----------------------------------------------------------------------------
# Admin accounts
# -----------------------------------------------------------------------------

def test_list_admins_hides_password(admin_client, admin):
    r = admin_client.get('/api/admin/admins')
    assert r.status_code == 200
    data = r.get_json()
    assert [a['username'] for a in data] == ['admin']
    assert 'password' not in data[0]


def test_create_admin_stores_digest(admin_client):
    r = admin_client.post('/api/admin/admins',
                          json={'username': 'moderator', 'password': 'modpass1', 'email': 'mod@example.com'})
    assert r.status_code == 200
    assert r.get_json()['success'] is True

    created = AdminUser.query.filter_by(username='moderator').first()
    assert created is not None
    assert created.password != 'modpass1'
    assert verify_password(created.password, 'modpass1')
    assert created.active is True


def test_created_admin_can_log_in(admin_client, client):
    admin_client.post('/api/admin/admins', json={'username': 'moderator', 'password': 'modpass1'})
    admin_client.post('/api/auth/admin/logout')

    r = client.post('/api/auth/admin/login', json={'username': 'moderator', 'password': 'modpass1'})
    assert r.status_code == 200


def test_create_admin_validation(admin_client):
    r = admin_client.post('/api/admin/admins', json={'username': 'short', 'password': '12345'})
    assert r.status_code == 400
    assert r.get_json() == {'error': 'Password must be at least 6 characters long'}

    r = admin_client.post('/api/admin/admins', json={'username': 'admin', 'password': 'another1'})
    assert r.status_code == 400
    assert r.get_json() == {'error': 'Username already exists'}

    r = admin_client.post('/api/admin/admins', json={'password': 'another1'})
    assert r.status_code == 400


def test_deactivate_and_reactivate_admin(admin_client, make_admin):
    other = make_admin(username='moderator', password='modpass1')

    r = admin_client.patch('/api/admin/admins', json={'adminId': other.id, 'active': False})
    assert r.status_code == 200
    assert db.session.get(AdminUser, other.id).active is False

    r = admin_client.patch('/api/admin/admins', json={'adminId': other.id, 'active': True})
    assert r.status_code == 200
    assert db.session.get(AdminUser, other.id).active is True


def test_cannot_deactivate_protected_admin(client, admin, make_admin):
    other = make_admin(username='moderator', password='modpass1')
    client.set_cookie('admin_session', other.id)

    r = client.patch('/api/admin/admins', json={'adminId': admin.id, 'active': False})
    assert r.status_code == 400
    assert r.get_json() == {'error': 'Cannot deactivate the "admin" account'}
    assert db.session.get(AdminUser, admin.id).active is True


def test_cannot_deactivate_self(client, make_admin):
    me = make_admin(username='moderator', password='modpass1')
    client.set_cookie('admin_session', me.id)

    r = client.patch('/api/admin/admins', json={'adminId': me.id, 'active': False})
    assert r.status_code == 400
    assert r.get_json() == {'error': 'You cannot deactivate your own account'}


def test_set_active_requires_boolean(admin_client, admin):
    r = admin_client.patch('/api/admin/admins', json={'adminId': admin.id, 'active': 'no'})
    assert r.status_code == 400


def test_set_active_unknown_admin(admin_client):
    r = admin_client.patch('/api/admin/admins', json={'adminId': 'missing', 'active': True})
    assert r.status_code == 404
    assert r.get_json() == {'error': 'Admin not found'}


def test_delete_admin_rules(admin_client, admin, make_admin):
    other = make_admin(username='moderator', password='modpass1')

    r = admin_client.delete('/api/admin/admins')
    assert r.status_code == 400
    assert r.get_json() == {'error': 'Missing admin ID'}

    r = admin_client.delete(f'/api/admin/admins?id={admin.id}')
    assert r.status_code == 400

    r = admin_client.delete('/api/admin/admins?id=missing')
    assert r.status_code == 404

    r = admin_client.delete(f'/api/admin/admins?id={other.id}')
    assert r.status_code == 200
    assert db.session.get(AdminUser, other.id) is None


def test_cannot_delete_self(client, make_admin):
    me = make_admin(username='moderator', password='modpass1')
    client.set_cookie('admin_session', me.id)

    r = client.delete(f'/api/admin/admins?id={me.id}')
    assert r.status_code == 400
    assert r.get_json() == {'error': 'You cannot delete your own account'}


def test_change_password(admin_client, client, make_admin):
    other = make_admin(username='moderator', password='modpass1')

    r = admin_client.patch('/api/admin/admins/password', json={'adminId': other.id, 'newPassword': 'abc'})
    assert r.status_code == 400

    r = admin_client.patch('/api/admin/admins/password',
                           json={'adminId': other.id, 'newPassword': 'brand-new-pass'})
    assert r.status_code == 200

    stored = db.session.get(AdminUser, other.id).password
    assert verify_password(stored, 'brand-new-pass')
    assert not verify_password(stored, 'modpass1')


def test_change_password_unknown_admin(admin_client):
    r = admin_client.patch('/api/admin/admins/password', json={'adminId': 'missing', 'newPassword': 'longenough'})
    assert r.status_code == 404


# -----------------------------------------------------------------------------
# Stats and players
# -----------------------------------------------------------------------------

def test_stats_counts(admin_client):
    _player(discord_username='a', activated=True)
    _player(discord_username='b')
    _player(discord_username='c', rejected_at=datetime.utcnow())
    db.session.add_all([
        StoreItem(category='vip', name='Gold VIP', price='9.99', available=True),
        StoreItem(category='vip', name='Old VIP', price='4.99', available=False),
    ])
    db.session.commit()

    r = admin_client.get('/api/admin/stats')
    assert r.status_code == 200
    assert r.get_json() == {
        'totalUsers': 3,
        'activeUsers': 1,
        'pendingActivations': 1,
        'storeItems': 2,
        'availableItems': 1,
    }


def test_list_users_search(admin_client):
    _player(display_name='Tony Montana', in_game_name='Tony')
    _player(display_name='Walter', in_game_name='Heisenberg')

    r = admin_client.get('/api/admin/users?search=heisen')
    assert r.status_code == 200
    assert [u['display_name'] for u in r.get_json()] == ['Walter']

    r = admin_client.get('/api/admin/users')
    assert len(r.get_json()) == 2


def test_update_user_activation_flag(admin_client):
    user = _player()
    r = admin_client.patch('/api/admin/users', json={'userId': user.id, 'activated': True})
    assert r.status_code == 200
    refreshed = db.session.get(User, user.id)
    assert refreshed.activated is True
    assert refreshed.activated_at is not None


def test_update_unknown_user(admin_client):
    r = admin_client.patch('/api/admin/users', json={'userId': 'missing', 'activated': True})
    assert r.status_code == 404


# -----------------------------------------------------------------------------
# Activations
# -----------------------------------------------------------------------------

def test_pending_activations_only_complete_profiles(admin_client):
    pending = _player(display_name='Ready')
    _player(display_name='NoBio', bio=None)
    _player(display_name='Done', activated=True)
    _player(display_name='Rejected', rejected_at=datetime.utcnow())

    r = admin_client.get('/api/admin/activations')
    assert r.status_code == 200
    assert [u['id'] for u in r.get_json()] == [pending.id]


def test_approve_activation(admin_client, notifications):
    user = _player(rejected_at=datetime.utcnow(), rejection_reason='incomplete')

    r = admin_client.post('/api/admin/activations/approve', json={'userId': user.id})
    assert r.status_code == 200
    assert r.get_json()['success'] is True

    refreshed = db.session.get(User, user.id)
    assert refreshed.activated is True
    assert refreshed.rejected_at is None
    assert refreshed.rejection_reason is None
    assert notifications == [(user.id, True, None)]

    r = admin_client.post('/api/admin/activations/approve', json={'userId': user.id})
    assert r.status_code == 400
    assert r.get_json() == {'error': 'User is already activated'}


def test_reject_activation(admin_client, notifications):
    user = _player()
    r = admin_client.post('/api/admin/activations/reject', json={'userId': user.id, 'reason': 'Too young'})
    assert r.status_code == 200

    refreshed = db.session.get(User, user.id)
    assert refreshed.activated is False
    assert refreshed.rejected_at is not None
    assert refreshed.rejection_reason == 'Too young'
    assert notifications == [(user.id, False, 'Too young')]


def test_activation_unknown_user(admin_client, notifications):
    r = admin_client.post('/api/admin/activations/approve', json={'userId': 'missing'})
    assert r.status_code == 404
    assert r.get_json() == {'error': 'User profile not found'}
    assert notifications == []


# -----------------------------------------------------------------------------
# Server status
# -----------------------------------------------------------------------------

def test_server_status_default_when_empty(admin_client):
    r = admin_client.get('/api/admin/server')
    assert r.status_code == 200
    data = r.get_json()
    assert data['online'] is True
    assert data['max_players'] == 200
    assert data['current_players'] == 0


def test_server_status_upsert(admin_client):
    payload = {'online': True, 'current_players': 64, 'max_players': 128, 'ping': 22}
    assert admin_client.patch('/api/admin/server', json=payload).status_code == 200
    assert admin_client.patch('/api/admin/server', json=dict(payload, current_players=70)).status_code == 200

    assert ServerStatus.query.count() == 1
    data = admin_client.get('/api/admin/server').get_json()
    assert data['current_players'] == 70
    assert data['max_players'] == 128
    assert data['uptime_seconds'] == 0


@pytest.mark.parametrize('payload', [
    {'current_players': -1, 'max_players': 200, 'ping': 0},
    {'current_players': 0, 'max_players': 0, 'ping': 0},
    {'current_players': 0, 'max_players': 200, 'ping': -5},
])
def test_server_status_rejects_invalid_values(admin_client, payload):
    r = admin_client.patch('/api/admin/server', json=payload)
    assert r.status_code == 400
    assert ServerStatus.query.count() == 0
