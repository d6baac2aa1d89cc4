"""Report repository layer."""

from sqlalchemy import insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_publish_by_id(db: Session, *, publish_id: str):
    from models import Publish

    return db.query(Publish).filter(Publish.id == publish_id).first()


def insert_report_if_absent(db: Session, *, submitted_by_id: str, publish_id: str, reason) -> bool:
    from models import Report

    return insert_if_absent(
        db, insert(Report).values(submitted_by_id=submitted_by_id, publish_id=publish_id, reason=reason)
    )
