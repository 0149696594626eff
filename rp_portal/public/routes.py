"""
Public Routes
"""

from datetime import datetime

from flask import current_app, jsonify, request

from rp_portal.models import (
    RuleCategory,
    Rule,
    Event,
    StoreItem,
    NewsArticle,
    ServerStatus,
    LeaderboardEntry,
)
from rp_portal.public import public_bp


@public_bp.route('/rules', methods=['GET'])
def rules():
    """Visible rules, optionally for one category."""
    query = Rule.query.filter_by(visible=True).order_by(Rule.display_order.asc())

    category_id = request.args.get('categoryId', type=int)
    if category_id is not None:
        query = query.filter_by(category_id=category_id)

    return jsonify([r.to_dict() for r in query.all()])


@public_bp.route('/rules/categories', methods=['GET'])
def rule_categories():
    categories = (RuleCategory.query
                  .filter_by(visible=True)
                  .order_by(RuleCategory.display_order.asc())
                  .all())
    return jsonify([c.to_dict() for c in categories])


@public_bp.route('/events', methods=['GET'])
def upcoming_events():
    """Events that have not started yet, soonest first."""
    events = (Event.query
              .filter(Event.event_date >= datetime.utcnow())
              .order_by(Event.event_date.asc())
              .all())
    return jsonify([e.to_dict() for e in events])


@public_bp.route('/store', methods=['GET'])
def store_items():
    query = StoreItem.query.filter_by(available=True).order_by(StoreItem.id.asc())

    category = request.args.get('category')
    if category:
        query = query.filter_by(category=category)

    return jsonify([i.to_dict() for i in query.all()])


def _limit_arg(cap_key, default=10):
    """`?limit=` clamped to 1..config[cap_key]."""
    cap = current_app.config.get(cap_key, 50)
    limit = request.args.get('limit', default, type=int)
    return max(1, min(limit, cap))


@public_bp.route('/news', methods=['GET'])
def news():
    articles = (NewsArticle.query
                .order_by(NewsArticle.published_at.desc())
                .limit(_limit_arg('NEWS_PAGE_LIMIT'))
                .all())
    return jsonify([a.to_dict() for a in articles])


@public_bp.route('/leaderboard', methods=['GET'])
def leaderboard():
    """Top players in one category, best rank first."""
    category = request.args.get('category') or 'playtime'
    entries = (LeaderboardEntry.query
               .filter_by(category=category)
               .order_by(LeaderboardEntry.rank.asc())
               .limit(_limit_arg('LEADERBOARD_PAGE_LIMIT'))
               .all())
    return jsonify([e.to_dict() for e in entries])


@public_bp.route('/server-status', methods=['GET'])
def server_status():
    """Latest server status, or the default row when none was recorded."""
    status = ServerStatus.query.order_by(ServerStatus.updated_at.desc(),
                                         ServerStatus.id.desc()).first()
    return jsonify(status.to_dict() if status else ServerStatus.default_dict())
