"""Watch-later service layer."""

from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import not_found, require_input, unauthorized
from core.pagination import ASC, DESC, PREVIEW_QTY, Page, paginate
from core.publish_view import publish_node
from core.schemas import ListOrderBy
from models import WatchLater

from . import repository


def _authenticate(db: Session, authenticator: Authenticator, *, owner, account_id, profile_id):
    require_input(owner, account_id, profile_id)
    return authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)


def item_node(db: Session, item, *, requestor_id: Optional[str] = None) -> dict:
    return {
        "id": item.id,
        "created_at": item.created_at,
        "profile_id": item.profile_id,
        "publish_id": item.publish_id,
        "publish": publish_node(db, item.publish, requestor_id=requestor_id),
    }


def fetch_preview_watch_later(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str
) -> Page:
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    return paginate(
        repository.items_query(db, profile_id=profile_id),
        key=WatchLater.id,
        order=[(WatchLater.created_at, DESC)],
        take=PREVIEW_QTY,
        with_count=True,
    )


def fetch_watch_later(
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
        repository.items_query(db, profile_id=profile_id),
        key=WatchLater.id,
        order=[(WatchLater.created_at, direction)],
        cursor=cursor,
        with_count=True,
    )


def add_to_watch_later(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, publish_id: str
) -> dict:
    require_input(publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    if not repository.get_publish_by_id(db, publish_id=publish_id):
        raise not_found()
    with unit_of_work(db):
        repository.insert_if_missing(db, profile_id=profile_id, publish_id=publish_id)
    return {"status": "Ok"}


def remove_from_watch_later(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
    id: Optional[str] = None,
) -> dict:
    """Remove one row by ``id``, or every row of ``publish_id`` when no id is given."""
    require_input(publish_id)
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    with unit_of_work(db):
        if id:
            item = repository.get_item_by_id(db, item_id=id)
            if not item:
                raise not_found()
            if item.profile_id != profile_id:
                raise unauthorized()
            repository.delete_item(db, item_id=id)
        else:
            repository.delete_publish_items(db, profile_id=profile_id, publish_id=publish_id)
    return {"status": "Ok"}


def remove_all_watch_later(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str
) -> dict:
    _authenticate(db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_all(db, profile_id=profile_id)
    return {"status": "Ok"}
