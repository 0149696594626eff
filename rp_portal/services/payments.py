"""
Payment Request Service

Admin review of manual wallet / InstaPay payment requests. A request can be
decided once: only pending requests may be approved or rejected.
"""

import logging
from datetime import datetime

from rp_portal.errors import NotFoundError, ValidationError
from rp_portal.extensions import db
from rp_portal.models import PaymentRequest
from rp_portal.models.store import PAYMENT_APPROVED, PAYMENT_REJECTED
from rp_portal.services.discord import notify_payment_approved

logger = logging.getLogger(__name__)


def list_payment_requests():
    """All payment requests, newest first, with the requesting player attached."""
    requests_ = PaymentRequest.query.order_by(PaymentRequest.created_at.desc()).all()
    result = []
    for req in requests_:
        data = req.to_dict()
        user = req.user
        data['users'] = None if user is None else {
            'id': user.id,
            'discord_username': user.discord_username,
            'display_name': user.display_name,
            'discord_id': user.discord_id,
        }
        result.append(data)
    return result


def _get_pending(payment_request_id):
    payment = db.session.get(PaymentRequest, payment_request_id)
    if payment is None:
        raise NotFoundError('Payment request not found')
    if not payment.is_pending:
        raise ValidationError(f'Payment request already {payment.status}')
    return payment


def approve_payment_request(payment_request_id, admin):
    payment = _get_pending(payment_request_id)
    payment.status = PAYMENT_APPROVED
    payment.approved_by = admin.id
    payment.approved_at = datetime.utcnow()
    db.session.commit()
    logger.info('Payment request %s approved by %s', payment.id, admin.username)

    discord_id = payment.user.discord_id if payment.user is not None else None
    notify_payment_approved(payment, discord_id=discord_id)
    return payment


def reject_payment_request(payment_request_id, admin, reason=None):
    payment = _get_pending(payment_request_id)
    payment.status = PAYMENT_REJECTED
    payment.rejected_by = admin.id
    payment.rejected_at = datetime.utcnow()
    payment.rejection_reason = reason
    db.session.commit()
    logger.info('Payment request %s rejected by %s', payment.id, admin.username)
    return payment
