"""
Admin Payment Routes

Review queue for manual wallet / InstaPay payments.
"""

from flask import jsonify
from flask_login import current_user

from rp_portal.admin import admin_bp
from rp_portal.admin.decorators import admin_required
from rp_portal.schemas import PaymentDecision, parse_body
from rp_portal.services import list_payment_requests, approve_payment_request, reject_payment_request

DECIDED = {'approve': 'approved', 'reject': 'rejected'}


@admin_bp.route('/payment-requests', methods=['GET'])
@admin_required
def payment_requests():
    return jsonify({'success': True, 'requests': list_payment_requests()})


@admin_bp.route('/payment-requests', methods=['POST'])
@admin_required
def decide_payment_request():
    """Approve or reject a pending payment request."""
    payload = parse_body(PaymentDecision)

    if payload.action == 'approve':
        approve_payment_request(payload.payment_request_id, current_user)
    else:
        reject_payment_request(payload.payment_request_id, current_user, reason=payload.reason)

    return jsonify({
        'success': True,
        'message': f'Payment request {DECIDED[payload.action]} successfully',
    })
