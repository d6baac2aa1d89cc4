"""Publish repository layer."""

from typing import Iterable, List, Optional

from sqlalchemy import and_, insert, or_
from sqlalchemy.orm import Session

from core.db import insert_if_absent

SEARCH_FIELDS = ("tags", "title", "description")


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def get_profile_by_id(db: Session, *, profile_id: str):
    from models import Profile

    return db.query(Profile).filter(Profile.id == profile_id).first()


def create_publish(db: Session, **fields):
    from models import Publish

    publish = Publish(**fields)
    db.add(publish)
    db.flush()
    return publish


def get_blog(db: Session, *, publish_id: str):
    from models import Blog

    return db.query(Blog).filter(Blog.publish_id == publish_id).first()


def create_blog(db: Session, **fields):
    from models import Blog

    blog = Blog(**fields)
    db.add(blog)
    db.flush()
    return blog


def delete_publish(db: Session, *, publish_id: str) -> int:
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).delete(synchronize_session=False)


def insert_like_if_absent(db: Session, *, profile_id: str, publish_id: str) -> bool:
    from models import Like

    return insert_if_absent(db, insert(Like).values(profile_id=profile_id, publish_id=publish_id))


def delete_like(db: Session, *, profile_id: str, publish_id: str) -> int:
    from models import Like

    return (
        db.query(Like)
        .filter(Like.profile_id == profile_id, Like.publish_id == publish_id)
        .delete(synchronize_session=False)
    )


def insert_dislike_if_absent(db: Session, *, profile_id: str, publish_id: str) -> bool:
    from models import DisLike

    return insert_if_absent(db, insert(DisLike).values(profile_id=profile_id, publish_id=publish_id))


def delete_dislike(db: Session, *, profile_id: str, publish_id: str) -> int:
    from models import DisLike

    return (
        db.query(DisLike)
        .filter(DisLike.profile_id == profile_id, DisLike.publish_id == publish_id)
        .delete(synchronize_session=False)
    )


def create_tip(db: Session, **fields):
    from models import Tip

    tip = Tip(**fields)
    db.add(tip)
    db.flush()
    return tip


# ---------------------------------------------------------------------------
# Listing queries. Each returns an unordered Query; ordering belongs to the
# paginator.
# ---------------------------------------------------------------------------


def publishes_query(db: Session, *clauses):
    from models import Publish

    return db.query(Publish).filter(*clauses)


def category_clause(category):
    from models import Publish

    return or_(Publish.primary_category == category, Publish.secondary_category == category)


def categories_clause(categories: Iterable):
    from models import Publish

    categories = list(categories)
    return or_(Publish.primary_category.in_(categories), Publish.secondary_category.in_(categories))


def any_tag_clause(tags: List[str]):
    """Matches publishes sharing at least one of ``tags``."""
    from models import Publish

    return or_(*[Publish.tags.ilike(f"%{tag}%") for tag in tags])


def all_words_clause(column, words: List[str]):
    return and_(*[column.ilike(f"%{word}%") for word in words])


def query_string_clause(words: List[str]):
    """Every word must appear in at least one of the searchable fields."""
    from models import Publish

    return or_(*[all_words_clause(getattr(Publish, name), words) for name in SEARCH_FIELDS])


def tag_clause(words: List[str]):
    from models import Publish

    return all_words_clause(Publish.tags, words)


def split_tags(tags: Optional[str]) -> List[str]:
    if not tags:
        return []
    return [tag.strip() for tag in tags.split("|") if tag.strip()]


def increment_views(db: Session, *, publish_id: str) -> int:
    from models import Publish

    return (
        db.query(Publish)
        .filter(Publish.id == publish_id)
        .update({Publish.views: Publish.views + 1}, synchronize_session=False)
    )
