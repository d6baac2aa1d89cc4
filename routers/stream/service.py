"""Live stream service layer."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import ExternalServiceError, bad_request, require_input, unauthorized
from core.pagination import DESC, Page, paginate
from core.ports.media import StreamPort
from core.publish_view import publish_node
from models import LiveStatus, Publish

from . import repository

logger = logging.getLogger(__name__)


def fetch_my_live_stream(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    creator_id: str,
    cursor: Optional[str] = None,
) -> Page:
    require_input(owner, account_id, creator_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)
    return paginate(
        repository.live_streams_query(db, creator_id=creator_id),
        key=Publish.id,
        order=[(Publish.created_at, DESC)],
        cursor=cursor,
    )


def get_live_stream_publish(
    db: Session,
    *,
    authenticator: Authenticator,
    stream: StreamPort,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
) -> Optional[dict]:
    """Return the publish with its CDN live input, or None when either cannot be loaded.

    Only the creator may read the stream keys, and a publish that never got
    a live input is a BAD_REQUEST.
    """
    require_input(owner, account_id, profile_id, publish_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish:
        return None
    if publish.creator_id != profile_id:
        raise unauthorized()
    if not publish.live_input_uid:
        raise bad_request()
    try:
        live_input = stream.get_live_input(publish.live_input_uid)
    except ExternalServiceError as exc:
        logger.warning("Live input lookup failed | publish=%s | %s", publish_id, exc)
        return None
    return {"publish": publish_node(db, publish, requestor_id=profile_id), "live_input": live_input}


def request_live_stream(
    db: Session,
    *,
    authenticator: Authenticator,
    stream: StreamPort,
    playback_base_url: str,
    default_thumbnail: str,
    owner: str,
    account_id: str,
    profile_id: str,
    title: str,
    primary_category,
    visibility,
    broadcast_type,
    description: Optional[str] = None,
    thumbnail: Optional[str] = None,
    thumbnail_ref: Optional[str] = None,
    secondary_category=None,
    tags: Optional[str] = None,
) -> dict:
    require_input(owner, account_id, profile_id, title, primary_category, visibility, broadcast_type)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)

    video_thumbnail = thumbnail or default_thumbnail
    with unit_of_work(db):
        publish = repository.create_live_publish(
            db,
            creator_id=profile_id,
            title=title,
            description=description,
            thumbnail=video_thumbnail,
            thumbnail_ref=thumbnail_ref,
            primary_category=primary_category,
            secondary_category=secondary_category,
            visibility=visibility,
            tags=tags,
            broadcast_type=broadcast_type,
        )
    publish_id = publish.id

    live_input = stream.create_live_input(publish_id=publish_id)
    if not live_input.get("success"):
        logger.error("Live input was not created | publish=%s | errors=%s", publish_id, live_input.get("errors"))
        return {"id": publish_id}

    uid = live_input["result"]["uid"]
    with unit_of_work(db):
        publish.live_input_uid = uid
        repository.create_playback(
            db,
            publish_id=publish_id,
            video_id="",
            thumbnail=video_thumbnail or "",
            preview="",
            duration=0,
            hls=f"{playback_base_url}/{uid}/video.m3u8",
            dash=f"{playback_base_url}/{uid}/video.mpd",
            live_status=LiveStatus.inprogress,
        )
    logger.info("Live stream requested | publish=%s | live_input=%s", publish_id, uid)
    return {"id": publish_id}
