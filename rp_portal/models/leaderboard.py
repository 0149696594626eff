"""
Leaderboard Model
"""

from datetime import datetime

from rp_portal.extensions import db
from rp_portal.models.base import isoformat


class LeaderboardEntry(db.Model):
    """A player's rank in one leaderboard category (playtime, money, ...)"""
    __tablename__ = 'leaderboard'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    category = db.Column(db.String(50), nullable=False, default='playtime', index=True)
    rank = db.Column(db.Integer, nullable=False)
    score = db.Column(db.BigInteger, default=0, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User', lazy='joined')

    def to_dict(self):
        user = self.user
        return {
            'id': self.id,
            'user_id': self.user_id,
            'category': self.category,
            'rank': self.rank,
            'score': self.score,
            'updated_at': isoformat(self.updated_at),
            'user': None if user is None else {
                'discord_id': user.discord_id,
                'discord_username': user.discord_username,
                'discord_avatar': user.discord_avatar,
            },
            'profile': None if user is None else {
                'display_name': user.display_name,
                'level': user.level,
            },
        }

    def __repr__(self):
        return f'<LeaderboardEntry {self.category} #{self.rank}>'
