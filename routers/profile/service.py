"""Profile service layer."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import bad_request, not_found, require_input
from core.notifications import NotificationEmitter, follow_content
from core.pagination import DESC, Page, paginate
from core.text import generate_color
from models import Follow, NotificationType

from . import repository

logger = logging.getLogger(__name__)

NAME_TAKEN = "This name was taken."


def to_profile_response(db: Session, profile, *, requestor_id: Optional[str] = None) -> dict:
    response = {
        "id": profile.id,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
        "owner": profile.owner,
        "name": profile.name,
        "display_name": profile.display_name,
        "image": profile.image,
        "image_ref": profile.image_ref,
        "banner_image": profile.banner_image,
        "banner_image_ref": profile.banner_image_ref,
        "default_color": profile.default_color,
        "account_id": profile.account_id,
        "watch_preferences": profile.watch_preferences or [],
        "read_preferences": profile.read_preferences or [],
        "followers_count": repository.count_followers(db, profile_id=profile.id),
        "following_count": repository.count_following(db, profile_id=profile.id),
        "publishes_count": repository.count_publishes(db, profile_id=profile.id),
        "is_following": None,
        "is_owner": None,
    }
    if requestor_id:
        requestor = repository.get_profile_by_id(db, profile_id=requestor_id)
        response["is_following"] = repository.is_following(
            db, follower_id=requestor_id, following_id=profile.id
        )
        response["is_owner"] = bool(requestor) and requestor.owner.lower() == profile.owner.lower()
    return response


def get_profile_by_id(db: Session, *, target_id: str, requestor_id: Optional[str] = None):
    require_input(target_id)
    profile = repository.get_profile_by_id(db, profile_id=target_id)
    if not profile:
        return None
    return to_profile_response(db, profile, requestor_id=requestor_id)


def get_profile_by_name(db: Session, *, name: str, requestor_id: Optional[str] = None):
    """Soft-fail lookup: an empty or unknown name is None."""
    if not name:
        return None
    profile = repository.get_profile_by_name(db, name=name)
    if not profile:
        return None
    return to_profile_response(db, profile, requestor_id=requestor_id)


def validate_name(db: Session, *, name: str) -> bool:
    """True when ``name`` is free to take."""
    if not name:
        return False
    return repository.get_profile_by_name(db, name=name) is None


def create_profile(db: Session, *, authenticator: Authenticator, owner: str, account_id: str, name: str):
    require_input(owner, account_id, name)
    authenticator.validate(db, account_id=account_id, owner=owner)

    if repository.get_profile_by_name(db, name=name):
        raise bad_request(NAME_TAKEN)

    with unit_of_work(db):
        profile = repository.create_profile(
            db,
            owner=owner,
            name=name,
            display_name=name,
            account_id=account_id,
            default_color=generate_color(),
        )
    logger.info("Profile created | profile=%s | account=%s", profile.id, account_id)
    return to_profile_response(db, profile)


def update_name(db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, new_name: str):
    require_input(owner, account_id, profile_id, new_name)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)

    if repository.get_profile_by_name(db, name=new_name):
        raise bad_request(NAME_TAKEN)

    with unit_of_work(db):
        profile.name = new_name.lower()
    return {"status": "Ok"}


def update_display_name(
    db: Session, *, authenticator: Authenticator, owner: str, account_id: str, profile_id: str, new_name: str
):
    require_input(owner, account_id, profile_id, new_name)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)

    with unit_of_work(db):
        profile.display_name = new_name
    return {"status": "Ok"}


def _replace_image(
    db: Session, *, authenticator: Authenticator, upload, owner, account_id, profile_id, image, image_ref, field: str
):
    require_input(owner, account_id, profile_id, image, image_ref)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)

    old_ref = getattr(profile, f"{field}_ref")
    with unit_of_work(db) as uow:
        setattr(profile, field, image)
        setattr(profile, f"{field}_ref", image_ref)
        if old_ref and old_ref != image_ref:
            uow.after_commit(upload.delete_image, authenticator.id_token, ref=old_ref)
    return {"status": "Ok"}


def update_profile_image(db: Session, **kwargs):
    return _replace_image(db, field="image", **kwargs)


def update_banner_image(db: Session, **kwargs):
    return _replace_image(db, field="banner_image", **kwargs)


def follow(
    db: Session,
    *,
    authenticator: Authenticator,
    emitter: NotificationEmitter,
    owner: str,
    account_id: str,
    profile_id: str,
    follower_id: str,
):
    """Toggle: ``profile_id`` (the caller) follows or unfollows ``follower_id``."""
    require_input(owner, account_id, profile_id, follower_id)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)

    if profile_id == follower_id:
        raise bad_request()

    target = repository.get_profile_by_id(db, profile_id=follower_id)
    if not target:
        raise not_found()

    with unit_of_work(db) as uow:
        followed = repository.insert_follow_if_absent(db, follower_id=profile_id, following_id=follower_id)
        if followed:
            emitter.emit(
                uow,
                receiver_id=follower_id,
                actor_id=profile_id,
                kind=NotificationType.FOLLOW,
                content=follow_content(profile.name),
            )
        else:
            repository.delete_follow(db, follower_id=profile_id, following_id=follower_id)
    return {"status": "Ok"}


def _update_preferences(db: Session, *, authenticator, owner, account_id, profile_id, preferences, field: str):
    require_input(owner, account_id, profile_id, preferences is not None)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)

    with unit_of_work(db):
        setattr(profile, field, [getattr(p, "value", p) for p in preferences])
    return {"status": "Ok"}


def update_watch_preferences(db: Session, **kwargs):
    return _update_preferences(db, field="watch_preferences", **kwargs)


def update_read_preferences(db: Session, **kwargs):
    return _update_preferences(db, field="read_preferences", **kwargs)


def _follow_page(db: Session, query, cursor: Optional[str]) -> Page:
    return paginate(
        query,
        key=(Follow.follower_id, Follow.following_id),
        order=[(Follow.created_at, DESC)],
        cursor=cursor,
    )


def fetch_followers(db: Session, *, profile_id: str, cursor: Optional[str] = None) -> Page:
    """Profiles following ``profile_id``; an empty page on bad input."""
    if not profile_id:
        return Page()
    return _follow_page(db, repository.followers_query(db, profile_id=profile_id), cursor)


def fetch_following(db: Session, *, profile_id: str, cursor: Optional[str] = None) -> Page:
    """Profiles that ``profile_id`` follows; an empty page on bad input."""
    if not profile_id:
        return Page()
    return _follow_page(db, repository.following_query(db, profile_id=profile_id), cursor)
