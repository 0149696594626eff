"""
Models Package

Exports all models for easy importing.
"""

from rp_portal.models.admin import AdminUser
from rp_portal.models.user import User
from rp_portal.models.content import RuleCategory, Rule, Event, NewsArticle
from rp_portal.models.store import StoreItem, PaymentRequest, ServerStatus
from rp_portal.models.leaderboard import LeaderboardEntry

__all__ = [
    'AdminUser',
    'User',
    'RuleCategory',
    'Rule',
    'Event',
    'NewsArticle',
    'StoreItem',
    'PaymentRequest',
    'ServerStatus',
    'LeaderboardEntry',
]
