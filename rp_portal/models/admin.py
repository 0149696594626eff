"""
Admin User Model
"""

from datetime import datetime

from flask_login import UserMixin

from rp_portal.extensions import db
from rp_portal.models.base import new_id, isoformat


class AdminUser(UserMixin, db.Model):
    """Administrator account, separate from player accounts"""
    __tablename__ = 'admin_users'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    # Credential digest, format depends on the hashing scheme
    password = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(120))
    active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login = db.Column(db.DateTime)

    @property
    def is_active(self):
        return bool(self.active)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'active': self.active,
            'created_at': isoformat(self.created_at),
            'last_login': isoformat(self.last_login),
        }

    def __repr__(self):
        return f'<AdminUser {self.username}>'
