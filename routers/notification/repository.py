"""Notification repository layer."""

from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session


def notifications_query(db: Session, *, receiver_id: str):
    from models import Notification

    return db.query(Notification).filter(Notification.receiver_id == receiver_id)


def count_unread(db: Session, *, receiver_id: str) -> int:
    from models import Notification, ReadStatus

    return (
        db.query(func.count(Notification.id))
        .filter(Notification.receiver_id == receiver_id, Notification.status == ReadStatus.unread)
        .scalar()
        or 0
    )


def mark_read(db: Session, *, receiver_id: str, ids: List[str]) -> int:
    from models import Notification, ReadStatus

    return (
        db.query(Notification)
        .filter(Notification.receiver_id == receiver_id, Notification.id.in_(ids))
        .update({Notification.status: ReadStatus.read}, synchronize_session=False)
    )
