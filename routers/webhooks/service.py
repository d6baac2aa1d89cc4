"""
Webhook handling: Cloudflare transcoding results and video deletion.

Both paths end by publishing the publish id so downstream processors can
refresh their copy.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from core.db import unit_of_work
from core.ports.bus import MessageBusPort
from models import LiveStatus, PublishType, StreamType, ThumbnailType

from . import repository

logger = logging.getLogger(__name__)

SHORT_MAX_DURATION_SECONDS = 60


def publish_id_from_meta(body: Dict[str, Any]) -> str:
    """The CDN upload is named ``"<publish id> <original filename>"``."""
    name = (body.get("meta") or {}).get("name") or ""
    parts = name.split(" ")
    return parts[0] if parts else ""


def _classify(publish, duration: float) -> PublishType:
    if publish.stream_type == StreamType.Live:
        return PublishType.Video
    return PublishType.Short if duration <= SHORT_MAX_DURATION_SECONDS else PublishType.Video


def apply_transcoding_result(db: Session, *, publish_id: str, body: Dict[str, Any]) -> None:
    """Store the playback of a transcoded video and clear the publish's upload flags."""
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    playback = body.get("playback") or {}
    meta = body.get("meta") or {}
    duration = body.get("duration") or 0

    with unit_of_work(db):
        repository.upsert_playback(
            db,
            publish_id=publish_id,
            thumbnail=body.get("thumbnail") or "",
            preview=body.get("preview") or "",
            duration=duration,
            hls=playback.get("hls") or "",
            dash=playback.get("dash") or "",
            video_id=body.get("uid") or "",
            live_status=LiveStatus.ready if publish and publish.stream_type == StreamType.Live else None,
        )
        if publish:
            publish.upload_error = False
            publish.uploading = False
            publish.transcode_error = False
            publish.thumbnail_type = publish.thumbnail_type or ThumbnailType.generated
            publish.content_uri = meta.get("contentURI")
            publish.content_ref = meta.get("contentRef")
            publish.publish_type = _classify(publish, duration)
            publish.stream_type = StreamType.onDemand
    logger.info("Transcoding finished | publish=%s | duration=%s", publish_id, duration)


def mark_transcode_error(db: Session, *, publish_id: str) -> None:
    if not publish_id:
        return
    with unit_of_work(db):
        publish = repository.get_publish_by_id(db, publish_id=publish_id)
        if publish:
            publish.transcode_error = True
            publish.uploading = False
    logger.warning("Transcoding failed | publish=%s", publish_id)


def on_transcoding_finished(
    db: Session, *, bus: MessageBusPort, processing_topic: str, body: Dict[str, Any]
) -> Optional[str]:
    """
    Handle a verified Cloudflare Stream notification.

    Any failure marks the publish with ``transcode_error`` before re-raising.
    The processing topic is notified either way.
    """
    publish_id = publish_id_from_meta(body)
    try:
        if body.get("readyToStream"):
            apply_transcoding_result(db, publish_id=publish_id, body=body)
        elif (body.get("status") or {}).get("state") == "error":
            mark_transcode_error(db, publish_id=publish_id)
    except Exception:
        logger.exception("Failed to apply transcoding result | publish=%s", publish_id)
        db.rollback()
        mark_transcode_error(db, publish_id=publish_id)
        bus.publish(processing_topic, publish_id)
        raise
    bus.publish(processing_topic, publish_id)
    return publish_id


def delete_video_publish(db: Session, *, bus: MessageBusPort, deletion_topic: str, publish_id: str) -> bool:
    """Delete the publish of a removed video. False when it no longer exists."""
    with unit_of_work(db) as uow:
        deleted = repository.delete_publish(db, publish_id=publish_id)
        if deleted:
            uow.after_commit(bus.publish, deletion_topic, publish_id)
    if not deleted:
        logger.warning("Video deletion for unknown publish | publish=%s", publish_id)
        return False
    logger.info("Publish deleted after video removal | publish=%s", publish_id)
    return True
