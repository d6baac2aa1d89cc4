import logging

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import not_found, require_input
from models import ReportReason

from . import repository

logger = logging.getLogger(__name__)


def report_publish(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
    reason: ReportReason,
) -> dict:
    """A profile reports a publish once per reason; repeats are no-ops."""
    require_input(owner, account_id, profile_id, publish_id, reason)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    if not repository.get_publish_by_id(db, publish_id=publish_id):
        raise not_found()
    with unit_of_work(db):
        created = repository.insert_report_if_absent(
            db, submitted_by_id=profile_id, publish_id=publish_id, reason=reason
        )
    if created:
        logger.warning("Publish reported | publish=%s | by=%s | reason=%s", publish_id, profile_id, reason.value)
    return {"status": "Ok"}
