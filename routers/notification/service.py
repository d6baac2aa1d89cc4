"""Notification service layer."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import bad_input, require_input
from core.pagination import DESC, Page, paginate
from models import Notification

from . import repository

logger = logging.getLogger(__name__)


def fetch_my_notifications(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    cursor: Optional[str] = None,
):
    """Newest first; returns the page and the receiver's unread count."""
    require_input(owner, account_id, profile_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    page: Page = paginate(
        repository.notifications_query(db, receiver_id=profile_id),
        key=Notification.id,
        order=[(Notification.created_at, DESC)],
        cursor=cursor,
        with_count=True,
    )
    return page, repository.count_unread(db, receiver_id=profile_id)


def update_notifications_status(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    ids: List[str],
) -> dict:
    """Mark the given notifications read; ids that are not the caller's are ignored."""
    require_input(owner, account_id, profile_id)
    if not ids:
        raise bad_input()
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    with unit_of_work(db):
        updated = repository.mark_read(db, receiver_id=profile_id, ids=ids)
    logger.debug("Notifications marked read | receiver=%s | count=%s", profile_id, updated)
    return {"status": "Ok"}
