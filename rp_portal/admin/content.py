"""
Admin Content Routes

Rules, rule categories, events, store items and news.
"""

from datetime import datetime

from flask import jsonify, request

from rp_portal.admin import admin_bp
from rp_portal.admin.decorators import admin_required
from rp_portal.errors import NotFoundError, ValidationError
from rp_portal.extensions import db
from rp_portal.models import RuleCategory, Rule, Event, StoreItem, NewsArticle
from rp_portal.schemas import (
    RuleCategoryCreate,
    RuleCategoryUpdate,
    RuleCreate,
    RuleUpdate,
    EventCreate,
    EventUpdate,
    StoreItemCreate,
    StoreItemUpdate,
    NewsArticleCreate,
    parse_body,
)


def _get_or_404(model, object_id, label):
    obj = db.session.get(model, object_id)
    if obj is None:
        raise NotFoundError(f'{label} not found')
    return obj


def _id_arg(label):
    object_id = request.args.get('id', type=int)
    if object_id is None:
        raise ValidationError(f'{label} ID is required')
    return object_id


def _apply(obj, changes):
    for field, value in changes.items():
        setattr(obj, field, value)


# -----------------------------------------------------------------------------
# Rule categories
# -----------------------------------------------------------------------------

@admin_bp.route('/rules/categories', methods=['GET'])
@admin_required
def list_rule_categories():
    categories = RuleCategory.query.order_by(RuleCategory.display_order.asc()).all()
    return jsonify([c.to_dict() for c in categories])


@admin_bp.route('/rules/categories', methods=['POST'])
@admin_required
def create_rule_category():
    payload = parse_body(RuleCategoryCreate)
    if RuleCategory.query.filter_by(slug=payload.slug).first() is not None:
        raise ValidationError('A category with this slug already exists')

    category = RuleCategory(**payload.model_dump())
    db.session.add(category)
    db.session.commit()
    return jsonify(category.to_dict())


@admin_bp.route('/rules/categories/<int:category_id>', methods=['PATCH'])
@admin_required
def update_rule_category(category_id):
    category = _get_or_404(RuleCategory, category_id, 'Category')
    changes = parse_body(RuleCategoryUpdate).changes()
    slug = changes.get('slug')
    if slug and slug != category.slug and RuleCategory.query.filter_by(slug=slug).first() is not None:
        raise ValidationError('A category with this slug already exists')

    _apply(category, changes)
    category.updated_at = datetime.utcnow()
    db.session.commit()
    return jsonify(category.to_dict())


@admin_bp.route('/rules/categories/<int:category_id>', methods=['DELETE'])
@admin_required
def delete_rule_category(category_id):
    """Delete a category together with its rules."""
    category = _get_or_404(RuleCategory, category_id, 'Category')
    db.session.delete(category)
    db.session.commit()
    return jsonify({'success': True})


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------

@admin_bp.route('/rules', methods=['GET'])
@admin_required
def list_rules():
    query = Rule.query.order_by(Rule.display_order.asc())

    category_id = request.args.get('categoryId', type=int)
    if category_id is not None:
        query = query.filter_by(category_id=category_id)

    return jsonify([r.to_dict(with_category=True) for r in query.all()])


@admin_bp.route('/rules', methods=['POST'])
@admin_required
def create_rule():
    payload = parse_body(RuleCreate)
    _get_or_404(RuleCategory, payload.category_id, 'Category')

    rule = Rule(**payload.model_dump())
    db.session.add(rule)
    db.session.commit()
    return jsonify(rule.to_dict())


@admin_bp.route('/rules/<int:rule_id>', methods=['PATCH'])
@admin_required
def update_rule(rule_id):
    rule = _get_or_404(Rule, rule_id, 'Rule')
    changes = parse_body(RuleUpdate).changes()
    if 'category_id' in changes:
        _get_or_404(RuleCategory, changes['category_id'], 'Category')

    _apply(rule, changes)
    rule.updated_at = datetime.utcnow()
    db.session.commit()
    return jsonify(rule.to_dict())


@admin_bp.route('/rules/<int:rule_id>', methods=['DELETE'])
@admin_required
def delete_rule(rule_id):
    rule = _get_or_404(Rule, rule_id, 'Rule')
    db.session.delete(rule)
    db.session.commit()
    return jsonify({'success': True})


# -----------------------------------------------------------------------------
# Events
# -----------------------------------------------------------------------------

@admin_bp.route('/events', methods=['GET'])
@admin_required
def list_events():
    events = Event.query.order_by(Event.event_date.desc()).all()
    return jsonify([e.to_dict() for e in events])


@admin_bp.route('/events', methods=['POST'])
@admin_required
def create_event():
    payload = parse_body(EventCreate)
    event = Event(**payload.model_dump())
    db.session.add(event)
    db.session.commit()
    return jsonify({'success': True, 'event': event.to_dict()})


@admin_bp.route('/events', methods=['PATCH'])
@admin_required
def update_event():
    changes = parse_body(EventUpdate).changes()
    event = _get_or_404(Event, changes.pop('id'), 'Event')

    _apply(event, changes)
    db.session.commit()
    return jsonify({'success': True})


@admin_bp.route('/events', methods=['DELETE'])
@admin_required
def delete_event():
    event = _get_or_404(Event, _id_arg('Event'), 'Event')
    db.session.delete(event)
    db.session.commit()
    return jsonify({'success': True})


# -----------------------------------------------------------------------------
# Store items
# -----------------------------------------------------------------------------

@admin_bp.route('/store', methods=['GET'])
@admin_required
def list_store_items():
    items = StoreItem.query.order_by(StoreItem.id.asc()).all()
    return jsonify([i.to_dict() for i in items])


@admin_bp.route('/store', methods=['POST'])
@admin_required
def create_store_item():
    payload = parse_body(StoreItemCreate)
    price = str(payload.price).strip()
    if not price:
        raise ValidationError('Missing required fields: name, price')

    item = StoreItem(**payload.model_dump(exclude={'price'}), price=price)
    db.session.add(item)
    db.session.commit()
    return jsonify({'success': True, 'item': item.to_dict()})


@admin_bp.route('/store', methods=['PATCH'])
@admin_required
def update_store_item():
    changes = parse_body(StoreItemUpdate).changes()
    item_id = changes.pop('id')
    if not changes:
        raise ValidationError('No update fields provided')
    if 'price' in changes:
        changes['price'] = str(changes['price']).strip()

    item = _get_or_404(StoreItem, item_id, 'Item')
    _apply(item, changes)
    db.session.commit()
    return jsonify({'success': True})


@admin_bp.route('/store', methods=['DELETE'])
@admin_required
def delete_store_item():
    item = _get_or_404(StoreItem, _id_arg('Item'), 'Item')
    db.session.delete(item)
    db.session.commit()
    return jsonify({'success': True})


# -----------------------------------------------------------------------------
# News
# -----------------------------------------------------------------------------

@admin_bp.route('/news', methods=['GET'])
@admin_required
def list_news():
    articles = NewsArticle.query.order_by(NewsArticle.published_at.desc()).all()
    return jsonify([a.to_dict() for a in articles])


@admin_bp.route('/news', methods=['POST'])
@admin_required
def create_news():
    payload = parse_body(NewsArticleCreate)
    article = NewsArticle(**payload.changes())
    db.session.add(article)
    db.session.commit()
    return jsonify(article.to_dict())


@admin_bp.route('/news', methods=['DELETE'])
@admin_required
def delete_news():
    article = _get_or_404(NewsArticle, _id_arg('Article'), 'Article')
    db.session.delete(article)
    db.session.commit()
    return jsonify({'success': True})
