"""Publish responses and the orderings shared by publish listings."""

from enum import Enum
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.pagination import DESC
from models import Bookmark, Comment, DisLike, DontRecommend, Like, Publish, Tip


class PublishOrderBy(str, Enum):
    latest = "latest"
    popular = "popular"


def likes_count_expr():
    """Correlated likes count, usable in ORDER BY and cursor lookups."""
    return (
        select(func.count())
        .select_from(Like)
        .where(Like.publish_id == Publish.id)
        .correlate(Publish)
        .scalar_subquery()
    )


def publish_order(order_by: PublishOrderBy = PublishOrderBy.latest) -> list:
    if order_by == PublishOrderBy.popular:
        return [(Publish.views, DESC), (likes_count_expr(), DESC), (Publish.created_at, DESC)]
    return [(Publish.created_at, DESC)]


def excluded_creators(db: Session, requestor_id: Optional[str]) -> List[str]:
    """Creator ids the requestor asked not to be recommended."""
    if not requestor_id:
        return []
    rows = db.query(DontRecommend.target_id).filter(DontRecommend.requestor_id == requestor_id).all()
    return [row[0] for row in rows]


def _count(db: Session, model, publish_id: str) -> int:
    return db.query(func.count()).select_from(model).filter(model.publish_id == publish_id).scalar() or 0


def _exists(db: Session, model, *, profile_id: str, publish_id: str) -> bool:
    return (
        db.query(model)
        .filter(model.profile_id == profile_id, model.publish_id == publish_id)
        .first()
        is not None
    )


def publish_node(db: Session, publish, *, requestor_id: Optional[str] = None) -> dict:
    node = {column.key: getattr(publish, column.key) for column in Publish.__table__.columns}
    node.update(
        creator=publish.creator,
        playback=publish.playback,
        blog=publish.blog,
        likes_count=_count(db, Like, publish.id),
        dislikes_count=_count(db, DisLike, publish.id),
        tips_count=_count(db, Tip, publish.id),
        comments_count=_count(db, Comment, publish.id),
        liked=None,
        disliked=None,
        bookmarked=None,
    )
    if requestor_id:
        node["liked"] = _exists(db, Like, profile_id=requestor_id, publish_id=publish.id)
        node["disliked"] = _exists(db, DisLike, profile_id=requestor_id, publish_id=publish.id)
        node["bookmarked"] = _exists(db, Bookmark, profile_id=requestor_id, publish_id=publish.id)
    return node
