"""Profile repository layer."""

from sqlalchemy import func, insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_profile_by_id(db: Session, *, profile_id: str):
    from models import Profile

    return db.query(Profile).filter(Profile.id == profile_id).first()


def get_profile_by_name(db: Session, *, name: str):
    from models import Profile

    return db.query(Profile).filter(Profile.name == name.lower()).first()


def create_profile(db: Session, *, owner: str, name: str, display_name: str, account_id: str, default_color: str):
    from models import Profile

    profile = Profile(
        owner=owner.lower(),
        name=name.lower(),
        display_name=display_name,
        account_id=account_id,
        default_color=default_color,
        watch_preferences=[],
        read_preferences=[],
    )
    db.add(profile)
    db.flush()
    return profile


def count_followers(db: Session, *, profile_id: str) -> int:
    from models import Follow

    return db.query(func.count()).select_from(Follow).filter(Follow.following_id == profile_id).scalar() or 0


def count_following(db: Session, *, profile_id: str) -> int:
    from models import Follow

    return db.query(func.count()).select_from(Follow).filter(Follow.follower_id == profile_id).scalar() or 0


def count_publishes(db: Session, *, profile_id: str) -> int:
    from models import Publish

    return db.query(func.count(Publish.id)).filter(Publish.creator_id == profile_id).scalar() or 0


def is_following(db: Session, *, follower_id: str, following_id: str) -> bool:
    from models import Follow

    return (
        db.query(Follow)
        .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
        .first()
        is not None
    )


def insert_follow_if_absent(db: Session, *, follower_id: str, following_id: str) -> bool:
    from models import Follow

    return insert_if_absent(db, insert(Follow).values(follower_id=follower_id, following_id=following_id))


def delete_follow(db: Session, *, follower_id: str, following_id: str) -> int:
    from models import Follow

    return (
        db.query(Follow)
        .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
        .delete(synchronize_session=False)
    )


def followers_query(db: Session, *, profile_id: str):
    from models import Follow

    return db.query(Follow).filter(Follow.following_id == profile_id)


def following_query(db: Session, *, profile_id: str):
    from models import Follow

    return db.query(Follow).filter(Follow.follower_id == profile_id)
