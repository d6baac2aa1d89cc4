"""Bookmark repository layer."""

from datetime import datetime

from sqlalchemy import insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def insert_bookmark_if_absent(db: Session, *, profile_id: str, publish_id: str) -> bool:
    from models import Bookmark, generate_id

    return insert_if_absent(
        db,
        insert(Bookmark).values(
            id=generate_id(), profile_id=profile_id, publish_id=publish_id, created_at=datetime.utcnow()
        ),
    )


def delete_bookmark(db: Session, *, profile_id: str, publish_id: str) -> int:
    from models import Bookmark

    return (
        db.query(Bookmark)
        .filter(Bookmark.profile_id == profile_id, Bookmark.publish_id == publish_id)
        .delete(synchronize_session=False)
    )


def delete_all(db: Session, *, profile_id: str) -> int:
    from models import Bookmark

    return db.query(Bookmark).filter(Bookmark.profile_id == profile_id).delete(synchronize_session=False)


def bookmarks_query(db: Session, *, profile_id: str):
    from models import Bookmark

    return db.query(Bookmark).filter(Bookmark.profile_id == profile_id)
