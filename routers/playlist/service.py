"""Playlist service layer."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import bad_input, bad_request, not_found, require_input, unauthorized
from core.pagination import ASC, DESC, Page, paginate
from core.publish_view import publish_node
from core.schemas import ListOrderBy
from models import Playlist, PlaylistItem

from . import repository

logger = logging.getLogger(__name__)

NAME_TAKEN = "A playlist with this name already exists."


def _authenticate(db: Session, authenticator: Authenticator, *, owner, account_id, profile_id):
    require_input(owner, account_id, profile_id)
    return authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)


def _own_playlist(db: Session, *, playlist_id: str, profile_id: str):
    playlist = repository.get_playlist_by_id(db, playlist_id=playlist_id)
    if not playlist:
        raise not_found()
    if playlist.owner_id != profile_id:
        raise unauthorized()
    return playlist


def _existing_publish(db: Session, publish_id: str):
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish:
        raise not_found()
    return publish


def item_node(db: Session, item, *, requestor_id: Optional[str] = None, with_publish: bool = True) -> dict:
    return {
        "id": item.id,
        "created_at": item.created_at,
        "owner_id": item.owner_id,
        "playlist_id": item.playlist_id,
        "publish_id": item.publish_id,
        "publish": publish_node(db, item.publish, requestor_id=requestor_id) if with_publish else None,
    }


def preview_node(db: Session, playlist, *, requestor_id: Optional[str] = None) -> dict:
    last = repository.latest_item(db, playlist_id=playlist.id)
    return {
        "id": playlist.id,
        "name": playlist.name,
        "count": repository.count_items(db, playlist_id=playlist.id),
        "last_item": publish_node(db, last.publish, requestor_id=requestor_id) if last else None,
    }


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def fetch_my_playlists(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, cursor: Optional[str] = None
) -> Page:
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    return paginate(
        repository.playlists_query(db, owner_id=profile_id),
        key=Playlist.id,
        order=[(Playlist.created_at, DESC)],
        cursor=cursor,
    )


def fetch_preview_playlists(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, cursor: Optional[str] = None
) -> Page:
    """Most recently updated playlists first, with their item count and newest item."""
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    return paginate(
        repository.playlists_query(db, owner_id=profile_id),
        key=Playlist.id,
        order=[(Playlist.updated_at, DESC), (Playlist.created_at, DESC)],
        cursor=cursor,
        with_count=True,
    )


def check_publish_playlists(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, publish_id: str
) -> dict:
    require_input(publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    items = repository.items_of_publish(db, owner_id=profile_id, publish_id=publish_id)
    return {
        "items": [item_node(db, item, with_publish=False) for item in items],
        "is_in_watch_later": repository.in_watch_later(db, profile_id=profile_id, publish_id=publish_id),
        "publish_id": publish_id,
    }


def fetch_playlist_items(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    playlist_id: str,
    cursor: Optional[str] = None,
    order_by: ListOrderBy = ListOrderBy.newest,
):
    require_input(playlist_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    playlist = _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    direction = ASC if order_by == ListOrderBy.oldest else DESC
    page = paginate(
        repository.items_query(db, playlist_id=playlist_id),
        key=PlaylistItem.id,
        order=[(PlaylistItem.created_at, direction)],
        cursor=cursor,
        with_count=True,
    )
    return playlist, page


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def add_to_new_playlist(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, name: str, publish_id: str
) -> dict:
    """Create the playlist (or reuse the one with this name) and add the publish to it."""
    require_input(name, publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    _existing_publish(db, publish_id)

    with unit_of_work(db):
        repository.insert_playlist_if_absent(db, owner_id=profile_id, name=name)
        playlist = repository.get_playlist_by_name(db, owner_id=profile_id, name=name)
        repository.insert_item_if_absent(db, owner_id=profile_id, playlist_id=playlist.id, publish_id=publish_id)
        repository.touch_playlist(db, playlist_id=playlist.id)
    return {"status": "Ok"}


def add_to_playlist(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    playlist_id: str,
    publish_id: str,
) -> dict:
    require_input(playlist_id, publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    _existing_publish(db, publish_id)

    with unit_of_work(db):
        repository.insert_item_if_absent(db, owner_id=profile_id, playlist_id=playlist_id, publish_id=publish_id)
        repository.touch_playlist(db, playlist_id=playlist_id)
    return {"status": "Ok"}


def update_playlists(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
    playlists: List[dict],
) -> dict:
    """Add the publish to, or remove it from, several playlists at once."""
    require_input(publish_id)
    if not playlists:
        raise bad_input()
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    _existing_publish(db, publish_id)
    for status in playlists:
        _own_playlist(db, playlist_id=status["playlist_id"], profile_id=profile_id)

    with unit_of_work(db):
        for status in playlists:
            playlist_id = status["playlist_id"]
            if status["is_in_playlist"]:
                repository.insert_item_if_absent(
                    db, owner_id=profile_id, playlist_id=playlist_id, publish_id=publish_id
                )
                repository.touch_playlist(db, playlist_id=playlist_id)
            else:
                repository.delete_item(db, playlist_id=playlist_id, publish_id=publish_id)
    return {"status": "Ok"}


def delete_playlist(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, playlist_id: str
) -> dict:
    require_input(playlist_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_playlist(db, playlist_id=playlist_id)
    logger.info("Playlist deleted | playlist=%s | owner=%s", playlist_id, profile_id)
    return {"status": "Ok"}


def update_playlist_name(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, playlist_id: str, name: str
) -> dict:
    require_input(playlist_id, name)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    playlist = _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    existing = repository.get_playlist_by_name(db, owner_id=profile_id, name=name)
    if existing and existing.id != playlist_id:
        raise bad_request(NAME_TAKEN)
    with unit_of_work(db):
        playlist.name = name
    return {"status": "Ok"}


def update_playlist_description(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    playlist_id: str,
    description: str,
) -> dict:
    require_input(playlist_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    playlist = _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    with unit_of_work(db):
        playlist.description = description
    return {"status": "Ok"}


def remove_from_playlist(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    playlist_id: str,
    publish_id: str,
) -> dict:
    require_input(playlist_id, publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_item(db, playlist_id=playlist_id, publish_id=publish_id)
    return {"status": "Ok"}


def delete_all_playlist_items(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, playlist_id: str
) -> dict:
    require_input(playlist_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    _own_playlist(db, playlist_id=playlist_id, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_all_items(db, playlist_id=playlist_id)
    return {"status": "Ok"}
