"""Playlist repository layer."""

from datetime import datetime

from sqlalchemy import func, insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_playlist_by_id(db: Session, *, playlist_id: str):
    from models import Playlist

    return db.query(Playlist).filter(Playlist.id == playlist_id).first()


def get_playlist_by_name(db: Session, *, owner_id: str, name: str):
    from models import Playlist

    return db.query(Playlist).filter(Playlist.owner_id == owner_id, Playlist.name == name).first()


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def insert_playlist_if_absent(db: Session, *, owner_id: str, name: str) -> bool:
    from models import Playlist, generate_id

    now = datetime.utcnow()
    return insert_if_absent(
        db,
        insert(Playlist).values(id=generate_id(), owner_id=owner_id, name=name, created_at=now, updated_at=now),
    )


def insert_item_if_absent(db: Session, *, owner_id: str, playlist_id: str, publish_id: str) -> bool:
    from models import PlaylistItem, generate_id

    return insert_if_absent(
        db,
        insert(PlaylistItem).values(
            id=generate_id(),
            owner_id=owner_id,
            playlist_id=playlist_id,
            publish_id=publish_id,
            created_at=datetime.utcnow(),
        ),
    )


def touch_playlist(db: Session, *, playlist_id: str) -> int:
    from models import Playlist

    return (
        db.query(Playlist)
        .filter(Playlist.id == playlist_id)
        .update({Playlist.updated_at: datetime.utcnow()}, synchronize_session=False)
    )


def delete_item(db: Session, *, playlist_id: str, publish_id: str) -> int:
    from models import PlaylistItem

    return (
        db.query(PlaylistItem)
        .filter(PlaylistItem.playlist_id == playlist_id, PlaylistItem.publish_id == publish_id)
        .delete(synchronize_session=False)
    )


def delete_all_items(db: Session, *, playlist_id: str) -> int:
    from models import PlaylistItem

    return db.query(PlaylistItem).filter(PlaylistItem.playlist_id == playlist_id).delete(synchronize_session=False)


def delete_playlist(db: Session, *, playlist_id: str) -> int:
    from models import Playlist

    return db.query(Playlist).filter(Playlist.id == playlist_id).delete(synchronize_session=False)


def playlists_query(db: Session, *, owner_id: str):
    from models import Playlist

    return db.query(Playlist).filter(Playlist.owner_id == owner_id)


def items_query(db: Session, *, playlist_id: str):
    from models import PlaylistItem

    return db.query(PlaylistItem).filter(PlaylistItem.playlist_id == playlist_id)


def items_of_publish(db: Session, *, owner_id: str, publish_id: str):
    from models import PlaylistItem

    return (
        db.query(PlaylistItem)
        .filter(PlaylistItem.owner_id == owner_id, PlaylistItem.publish_id == publish_id)
        .all()
    )


def count_items(db: Session, *, playlist_id: str) -> int:
    from models import PlaylistItem

    return db.query(func.count(PlaylistItem.id)).filter(PlaylistItem.playlist_id == playlist_id).scalar() or 0


def latest_item(db: Session, *, playlist_id: str):
    from models import PlaylistItem

    return (
        db.query(PlaylistItem)
        .filter(PlaylistItem.playlist_id == playlist_id)
        .order_by(PlaylistItem.created_at.desc())
        .first()
    )


def in_watch_later(db: Session, *, profile_id: str, publish_id: str) -> bool:
    from models import WatchLater

    return (
        db.query(WatchLater)
        .filter(WatchLater.profile_id == profile_id, WatchLater.publish_id == publish_id)
        .first()
        is not None
    )
