"""Don't-recommend repository layer."""

from sqlalchemy import insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_profile_by_id(db: Session, *, profile_id: str):
    from models import Profile

    return db.query(Profile).filter(Profile.id == profile_id).first()


def dont_recommends_query(db: Session, *, requestor_id: str):
    from models import DontRecommend

    return db.query(DontRecommend).filter(DontRecommend.requestor_id == requestor_id)


def insert_if_not_listed(db: Session, *, requestor_id: str, target_id: str) -> bool:
    from models import DontRecommend

    return insert_if_absent(db, insert(DontRecommend).values(requestor_id=requestor_id, target_id=target_id))


def delete_dont_recommend(db: Session, *, requestor_id: str, target_id: str) -> int:
    from models import DontRecommend

    return (
        db.query(DontRecommend)
        .filter(DontRecommend.requestor_id == requestor_id, DontRecommend.target_id == target_id)
        .delete(synchronize_session=False)
    )
