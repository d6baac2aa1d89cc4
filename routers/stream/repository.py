"""Live stream repository layer."""

from sqlalchemy.orm import Session

from core.publish_filters import is_live_stream


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def live_streams_query(db: Session, *, creator_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.creator_id == creator_id, *is_live_stream())


def create_live_publish(db: Session, **fields):
    from models import Publish, PublishType, StreamType, ThumbnailType

    publish = Publish(
        thumbnail_type=ThumbnailType.custom,
        stream_type=StreamType.Live,
        publish_type=PublishType.Video,
        **fields,
    )
    db.add(publish)
    db.flush()
    return publish


def create_playback(db: Session, **fields):
    from models import Playback

    playback = Playback(**fields)
    db.add(playback)
    db.flush()
    return playback
