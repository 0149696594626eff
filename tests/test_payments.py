from datetime import datetime

import pytest

from rp_portal.extensions import db
from rp_portal.models import PaymentRequest, User


@pytest.fixture()
def receipts(monkeypatch):
    sent = []

    def fake_notify(payment, discord_id=None):
        sent.append((payment.id, discord_id))
        return True

    monkeypatch.setattr('rp_portal.services.payments.notify_payment_approved', fake_notify)
    return sent


@pytest.fixture()
def player(app):
    user = User(discord_id='123456789', discord_username='tony', display_name='Tony')
    db.session.add(user)
    db.session.commit()
    return user


def _payment(user, **overrides):
    values = dict(user_id=user.id, item_id=1, item_name='Gold VIP', amount_usd=9.99,
                  amount_egp=500, payment_method='wallet', wallet_number='01000000000')
    values.update(overrides)
    payment = PaymentRequest(**values)
    db.session.add(payment)
    db.session.commit()
    return payment


def test_list_payment_requests_newest_first_with_user(admin_client, player):
    older = _payment(player, created_at=datetime(2024, 1, 1))
    newer = _payment(player, item_name='Sports car', created_at=datetime(2024, 2, 1))

    r = admin_client.get('/api/admin/payment-requests')
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert [p['id'] for p in body['requests']] == [newer.id, older.id]

    first = body['requests'][0]
    assert first['type'] == 'manual'
    assert first['display_amount'] == 500
    assert first['display_currency'] == 'EGP'
    assert first['users'] == {
        'id': player.id,
        'discord_username': 'tony',
        'display_name': 'Tony',
        'discord_id': '123456789',
    }


def test_approve_payment_request(admin_client, admin, player, receipts):
    payment = _payment(player)

    r = admin_client.post('/api/admin/payment-requests',
                          json={'action': 'approve', 'paymentRequestId': payment.id})
    assert r.status_code == 200
    assert r.get_json() == {'success': True, 'message': 'Payment request approved successfully'}

    stored = db.session.get(PaymentRequest, payment.id)
    assert stored.status == 'approved'
    assert stored.approved_by == admin.id
    assert stored.approved_at is not None
    assert receipts == [(payment.id, '123456789')]


def test_reject_payment_request(admin_client, admin, player, receipts):
    payment = _payment(player)

    r = admin_client.post('/api/admin/payment-requests',
                          json={'action': 'reject', 'paymentRequestId': payment.id, 'reason': 'No transfer found'})
    assert r.status_code == 200
    assert r.get_json()['message'] == 'Payment request rejected successfully'

    stored = db.session.get(PaymentRequest, payment.id)
    assert stored.status == 'rejected'
    assert stored.rejected_by == admin.id
    assert stored.rejection_reason == 'No transfer found'
    assert receipts == []


def test_payment_request_decided_once(admin_client, player, receipts):
    payment = _payment(player)
    admin_client.post('/api/admin/payment-requests', json={'action': 'approve', 'paymentRequestId': payment.id})

    r = admin_client.post('/api/admin/payment-requests', json={'action': 'reject', 'paymentRequestId': payment.id})
    assert r.status_code == 400
    assert r.get_json() == {'error': 'Payment request already approved'}
    assert db.session.get(PaymentRequest, payment.id).status == 'approved'
    assert len(receipts) == 1


def test_payment_decision_validation(admin_client, player, receipts):
    payment = _payment(player)

    r = admin_client.post('/api/admin/payment-requests', json={'action': 'refund', 'paymentRequestId': payment.id})
    assert r.status_code == 400

    r = admin_client.post('/api/admin/payment-requests', json={'action': 'approve'})
    assert r.status_code == 400

    r = admin_client.post('/api/admin/payment-requests', json={'action': 'approve', 'paymentRequestId': 999})
    assert r.status_code == 404
    assert r.get_json() == {'error': 'Payment request not found'}

    assert db.session.get(PaymentRequest, payment.id).status == 'pending'
    assert receipts == []


def test_payment_decision_requires_admin(client, player, receipts):
    payment = _payment(player)
    r = client.post('/api/admin/payment-requests', json={'action': 'approve', 'paymentRequestId': payment.id})
    assert r.status_code == 401
    assert db.session.get(PaymentRequest, payment.id).status == 'pending'
