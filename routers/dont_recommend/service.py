"""Don't-recommend service layer.

Creators listed here are filtered out of the requestor's publish and
suggestion feeds.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import bad_request, not_found, require_input
from core.pagination import DESC, Page, paginate
from models import DontRecommend

from . import repository

logger = logging.getLogger(__name__)


def fetch_dont_recommends(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    requestor_id: str,
    cursor: Optional[str] = None,
) -> Page:
    require_input(owner, account_id, requestor_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=requestor_id)
    return paginate(
        repository.dont_recommends_query(db, requestor_id=requestor_id),
        key=DontRecommend.id,
        order=[(DontRecommend.created_at, DESC)],
        cursor=cursor,
        with_count=True,
    )


def dont_recommend(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, target_id: str
) -> dict:
    require_input(owner, account_id, profile_id, target_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    if profile_id == target_id:
        raise bad_request()
    if not repository.get_profile_by_id(db, profile_id=target_id):
        raise not_found()
    with unit_of_work(db):
        created = repository.insert_if_not_listed(db, requestor_id=profile_id, target_id=target_id)
    if created:
        logger.info("Creator hidden from recommendations | requestor=%s | target=%s", profile_id, target_id)
    return {"status": "Ok"}


def remove_dont_recommend(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, target_id: str
) -> dict:
    require_input(owner, account_id, profile_id, target_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    with unit_of_work(db):
        repository.delete_dont_recommend(db, requestor_id=profile_id, target_id=target_id)
    return {"status": "Ok"}
