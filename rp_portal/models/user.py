"""
Player Model
"""

from datetime import datetime

from rp_portal.extensions import db
from rp_portal.models.base import new_id, isoformat


class User(db.Model):
    """Player account created by the Discord sign-in flow"""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    discord_id = db.Column(db.String(32), index=True)
    discord_username = db.Column(db.String(100))
    discord_avatar = db.Column(db.String(255))
    display_name = db.Column(db.String(100))
    in_game_name = db.Column(db.String(100))
    bio = db.Column(db.Text)
    role = db.Column(db.String(20), default='user', nullable=False)

    # Activation workflow
    activated = db.Column(db.Boolean, default=False, nullable=False)
    activated_at = db.Column(db.DateTime)
    rejected_at = db.Column(db.DateTime)
    rejection_reason = db.Column(db.Text)

    level = db.Column(db.Integer, default=1)
    playtime_hours = db.Column(db.Float, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    @property
    def has_profile(self):
        return bool(self.display_name and self.in_game_name)

    def to_dict(self):
        return {
            'id': self.id,
            'discord_id': self.discord_id,
            'discord_username': self.discord_username,
            'discord_avatar': self.discord_avatar,
            'display_name': self.display_name,
            'in_game_name': self.in_game_name,
            'bio': self.bio,
            'activated': self.activated,
            'activated_at': isoformat(self.activated_at),
            'rejected_at': isoformat(self.rejected_at),
            'rejection_reason': self.rejection_reason,
            'level': self.level,
            'playtime_hours': self.playtime_hours,
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<User {self.discord_username or self.id}>'
