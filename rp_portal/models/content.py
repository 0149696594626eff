"""
Content Models

Rules, rule categories, events and news articles.
"""

from datetime import datetime

from rp_portal.extensions import db
from rp_portal.models.base import isoformat


class RuleCategory(db.Model):
    """Group of server rules shown as one tab"""
    __tablename__ = 'rule_categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(100), unique=True, nullable=False)
    icon = db.Column(db.String(50))
    color = db.Column(db.String(30))
    description = db.Column(db.Text)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    rules = db.relationship('Rule', backref='category', lazy=True,
                            cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'icon': self.icon,
            'color': self.color,
            'description': self.description,
            'display_order': self.display_order,
            'visible': self.visible,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<RuleCategory {self.slug}>'


class Rule(db.Model):
    """A single server rule"""
    __tablename__ = 'rules'

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('rule_categories.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self, with_category=False):
        data = {
            'id': self.id,
            'category_id': self.category_id,
            'title': self.title,
            'description': self.description,
            'display_order': self.display_order,
            'visible': self.visible,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }
        if with_category and self.category is not None:
            data['rule_categories'] = {
                'name': self.category.name,
                'slug': self.category.slug,
                'icon': self.category.icon,
                'color': self.category.color,
            }
        return data

    def __repr__(self):
        return f'<Rule {self.title}>'


class Event(db.Model):
    """Community event"""
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    location = db.Column(db.String(200))
    event_date = db.Column(db.DateTime, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'image_url': self.image_url,
            'location': self.location,
            'event_date': isoformat(self.event_date),
            'created_at': isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<Event {self.title}>'


class NewsArticle(db.Model):
    """News post"""
    __tablename__ = 'news_articles'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.String(500))
    image_url = db.Column(db.String(500))
    author = db.Column(db.String(100))
    published_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'excerpt': self.excerpt,
            'image_url': self.image_url,
            'author': self.author,
            'published_at': isoformat(self.published_at),
        }

    def __repr__(self):
        return f'<NewsArticle {self.title}>'
