"""
Discord Notification Service

Posts embeds to the staff Discord webhook. Notifications are best effort:
a missing webhook URL or a failed delivery is logged and reported as False,
never raised to the request handler.
"""

import logging
from datetime import datetime

import requests
from flask import current_app

logger = logging.getLogger(__name__)

COLOR_SUCCESS = 0x22C55E
COLOR_DANGER = 0xEF4444


def send_webhook(content=None, embeds=None):
    """Send a message to the configured webhook. Returns True on delivery."""
    url = current_app.config.get('DISCORD_WEBHOOK_URL')
    if not url:
        logger.debug('Discord webhook not configured, skipping notification')
        return False

    payload = {'content': content, 'embeds': embeds or []}
    timeout = current_app.config.get('DISCORD_TIMEOUT', 5)

    try:
        resp = requests.post(url, json=payload, timeout=timeout)
        if resp.status_code >= 400:
            logger.warning('Discord webhook error %s: %s', resp.status_code, resp.text[:200])
            return False
        return True
    except requests.exceptions.Timeout:
        logger.warning('Discord webhook timed out')
        return False
    except requests.exceptions.RequestException as e:
        logger.warning('Discord webhook failed: %s', e)
        return False


def _embed(title, description, color, fields):
    return {
        'title': title,
        'description': description,
        'color': color,
        'fields': fields,
        'timestamp': datetime.utcnow().isoformat(),
        'footer': {'text': 'RP Portal'},
    }


def _mention(discord_id):
    return f'<@{discord_id}>' if discord_id else None


def notify_payment_approved(payment, discord_id=None):
    """Post a purchase receipt for an approved payment request."""
    method = 'Vodafone Cash' if payment.payment_method == 'wallet' else 'InstaPay'
    embed = _embed(
        'Payment Approved',
        'Your purchase has been confirmed.',
        COLOR_SUCCESS,
        [
            {'name': 'Item', 'value': payment.item_name or f'Item #{payment.item_id}', 'inline': True},
            {'name': 'Price', 'value': f'${payment.amount_usd:.2f}', 'inline': True},
            {'name': 'Method', 'value': method, 'inline': True},
            {'name': 'Transaction', 'value': str(payment.id), 'inline': False},
        ],
    )
    return send_webhook(content=_mention(discord_id), embeds=[embed])


def notify_activation(user, approved, reason=None):
    """Post the outcome of a player's activation request."""
    if approved:
        embed = _embed(
            'Activation Approved',
            f'Welcome to the city, {user.display_name or user.discord_username}!',
            COLOR_SUCCESS,
            [{'name': 'Character', 'value': user.in_game_name or '-', 'inline': True}],
        )
    else:
        embed = _embed(
            'Activation Rejected',
            'Your activation request was not approved.',
            COLOR_DANGER,
            [{'name': 'Reason', 'value': reason or 'No reason given', 'inline': False}],
        )
    return send_webhook(content=_mention(user.discord_id), embeds=[embed])
