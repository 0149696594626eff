"""
Services Package

Exports all services for easy importing.
"""

from rp_portal.services.activations import pending_activations, approve_activation, reject_activation
from rp_portal.services.payments import (
    list_payment_requests,
    approve_payment_request,
    reject_payment_request,
)

__all__ = [
    'pending_activations',
    'approve_activation',
    'reject_activation',
    'list_payment_requests',
    'approve_payment_request',
    'reject_payment_request',
]
