"""Watch-later repository layer."""

from datetime import datetime

from sqlalchemy import insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def get_item_by_id(db: Session, *, item_id: str):
    from models import WatchLater

    return db.query(WatchLater).filter(WatchLater.id == item_id).first()


def insert_if_missing(db: Session, *, profile_id: str, publish_id: str) -> bool:
    from models import WatchLater, generate_id

    return insert_if_absent(
        db,
        insert(WatchLater).values(
            id=generate_id(), profile_id=profile_id, publish_id=publish_id, created_at=datetime.utcnow()
        ),
    )


def delete_item(db: Session, *, item_id: str) -> int:
    from models import WatchLater

    return db.query(WatchLater).filter(WatchLater.id == item_id).delete(synchronize_session=False)


def delete_publish_items(db: Session, *, profile_id: str, publish_id: str) -> int:
    from models import WatchLater

    return (
        db.query(WatchLater)
        .filter(WatchLater.profile_id == profile_id, WatchLater.publish_id == publish_id)
        .delete(synchronize_session=False)
    )


def delete_all(db: Session, *, profile_id: str) -> int:
    from models import WatchLater

    return db.query(WatchLater).filter(WatchLater.profile_id == profile_id).delete(synchronize_session=False)


def items_query(db: Session, *, profile_id: str):
    from models import WatchLater

    return db.query(WatchLater).filter(WatchLater.profile_id == profile_id)
