"""Bookmark service layer."""

from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import not_found, require_input
from core.pagination import ASC, DESC, PREVIEW_QTY, Page, paginate
from core.publish_view import publish_node
from core.schemas import ListOrderBy
from models import Bookmark

from . import repository


def _authenticate(db: Session, authenticator: Authenticator, *, owner, account_id, profile_id):
    require_input(owner, account_id, profile_id)
    return authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)


def bookmark_node(db: Session, bookmark, *, requestor_id: Optional[str] = None) -> dict:
    return {
        "id": bookmark.id,
        "created_at": bookmark.created_at,
        "profile_id": bookmark.profile_id,
        "publish_id": bookmark.publish_id,
        "publish": publish_node(db, bookmark.publish, requestor_id=requestor_id),
    }


def fetch_preview_bookmarks(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str
) -> Page:
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    return paginate(
        repository.bookmarks_query(db, profile_id=profile_id),
        key=Bookmark.id,
        order=[(Bookmark.created_at, DESC)],
        take=PREVIEW_QTY,
        with_count=True,
    )


def fetch_bookmarks(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    cursor: Optional[str] = None,
    order_by: ListOrderBy = ListOrderBy.newest,
) -> Page:
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    direction = ASC if order_by == ListOrderBy.oldest else DESC
    return paginate(
        repository.bookmarks_query(db, profile_id=profile_id),
        key=Bookmark.id,
        order=[(Bookmark.created_at, direction)],
        cursor=cursor,
        with_count=True,
    )


def bookmark_post(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, publish_id: str
) -> dict:
    """Toggle: bookmark the publish, or remove the existing bookmark."""
    require_input(publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    if not repository.get_publish_by_id(db, publish_id=publish_id):
        raise not_found()
    with unit_of_work(db):
        if not repository.insert_bookmark_if_absent(db, profile_id=profile_id, publish_id=publish_id):
            repository.delete_bookmark(db, profile_id=profile_id, publish_id=publish_id)
    return {"status": "Ok"}


def remove_bookmark(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, publish_id: str
) -> dict:
    require_input(publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_bookmark(db, profile_id=profile_id, publish_id=publish_id)
    return {"status": "Ok"}


def remove_all_bookmarks(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str
) -> dict:
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_all(db, profile_id=profile_id)
    return {"status": "Ok"}
