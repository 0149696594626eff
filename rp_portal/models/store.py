"""
Store Models

Store items, manual payment requests and the game server status row.
"""

from datetime import datetime

from rp_portal.extensions import db
from rp_portal.models.base import isoformat

PAYMENT_PENDING = 'pending'
PAYMENT_APPROVED = 'approved'
PAYMENT_REJECTED = 'rejected'


class StoreItem(db.Model):
    """Purchasable item (VIP, vehicles, in-game money)"""
    __tablename__ = 'store_items'

    id = db.Column(db.Integer, primary_key=True)
    category = db.Column(db.String(50), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.String(50), nullable=False)
    # `metadata` is reserved on declarative models
    item_metadata = db.Column('metadata', db.Text)
    image_url = db.Column(db.String(500))
    available = db.Column(db.Boolean, default=True, nullable=False)
    popular = db.Column(db.Boolean, default=False, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'category': self.category,
            'name': self.name,
            'description': self.description,
            'price': self.price,
            'metadata': self.item_metadata,
            'image_url': self.image_url,
            'available': self.available,
            'popular': self.popular,
        }

    def __repr__(self):
        return f'<StoreItem {self.name}>'


class PaymentRequest(db.Model):
    """Manual wallet / InstaPay purchase awaiting admin review"""
    __tablename__ = 'payment_requests'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    user_email = db.Column(db.String(120))
    item_id = db.Column(db.Integer, db.ForeignKey('store_items.id'))
    item_name = db.Column(db.String(200))
    amount_usd = db.Column(db.Float, nullable=False)
    amount_egp = db.Column(db.Integer)
    payment_method = db.Column(db.String(30), nullable=False)
    wallet_number = db.Column(db.String(30))
    payment_proof_url = db.Column(db.String(500))
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), default=PAYMENT_PENDING, nullable=False, index=True)

    approved_by = db.Column(db.String(36))
    approved_at = db.Column(db.DateTime)
    rejected_by = db.Column(db.String(36))
    rejected_at = db.Column(db.DateTime)
    rejection_reason = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    user = db.relationship('User', lazy='joined')

    @property
    def is_pending(self):
        return self.status == PAYMENT_PENDING

    def to_dict(self):
        return {
            'id': self.id,
            'type': 'manual',
            'user_id': self.user_id,
            'user_email': self.user_email,
            'item_id': self.item_id,
            'item_name': self.item_name,
            'amount_usd': self.amount_usd,
            'amount_egp': self.amount_egp,
            'payment_method': self.payment_method,
            'wallet_number': self.wallet_number,
            'payment_proof_url': self.payment_proof_url,
            'notes': self.notes,
            'status': self.status,
            'approved_by': self.approved_by,
            'approved_at': isoformat(self.approved_at),
            'rejected_by': self.rejected_by,
            'rejected_at': isoformat(self.rejected_at),
            'rejection_reason': self.rejection_reason,
            'created_at': isoformat(self.created_at),
            'display_amount': self.amount_egp,
            'display_currency': 'EGP',
        }

    def __repr__(self):
        return f'<PaymentRequest {self.id} {self.status}>'


class ServerStatus(db.Model):
    """Latest known state of the game server"""
    __tablename__ = 'server_status'

    id = db.Column(db.Integer, primary_key=True)
    online = db.Column(db.Boolean, default=True, nullable=False)
    current_players = db.Column(db.Integer, default=0, nullable=False)
    max_players = db.Column(db.Integer, default=200, nullable=False)
    ping = db.Column(db.Integer, default=0, nullable=False)
    uptime_seconds = db.Column(db.Integer, default=0, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    @staticmethod
    def default_dict():
        return {
            'id': 0,
            'online': True,
            'current_players': 0,
            'max_players': 200,
            'ping': 0,
            'uptime_seconds': 0,
            'updated_at': datetime.utcnow().isoformat(),
        }

    def to_dict(self):
        return {
            'id': self.id,
            'online': self.online,
            'current_players': self.current_players,
            'max_players': self.max_players,
            'ping': self.ping,
            'uptime_seconds': self.uptime_seconds,
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<ServerStatus {self.current_players}/{self.max_players}>'
