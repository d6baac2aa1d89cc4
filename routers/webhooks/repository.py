"""Webhook repository layer."""

from sqlalchemy.orm import Session


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def get_playback(db: Session, *, publish_id: str):
    from models import Playback

    return db.query(Playback).filter(Playback.publish_id == publish_id).first()


def upsert_playback(db: Session, *, publish_id: str, live_status=None, **fields):
    """Create the publish's playback, or overwrite it (including ``live_status``)."""
    from models import Playback

    playback = get_playback(db, publish_id=publish_id)
    if playback is None:
        playback = Playback(publish_id=publish_id, live_status=live_status, **fields)
        db.add(playback)
    else:
        for name, value in fields.items():
            setattr(playback, name, value)
        playback.live_status = live_status
    db.flush()
    return playback


def delete_publish(db: Session, *, publish_id: str) -> int:
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).delete(synchronize_session=False)
