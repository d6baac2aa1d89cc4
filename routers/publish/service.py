"""Publish service layer: feeds, search, drafts, reactions, deletion and tips."""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import UnitOfWork, unit_of_work
from core.errors import AppError, bad_input, bad_request, not_found, require_input, unauthorized
from core.notifications import NotificationEmitter, like_publish_content, tip_content
from core.pagination import Page, paginate
from core.ports.bus import MessageBusPort
from core.ports.media import StreamPort, UploadPort
from core.publish_filters import (
    PublishKind,
    PublishScope,
    feed_visibility_filter,
    publish_kind_filter,
)
from core.publish_view import PublishOrderBy, excluded_creators, publish_node, publish_order
from core.text import excerpt, reading_time
from models import NotificationType, Publish, PublishType, StreamType, ThumbnailType, Visibility

from . import repository

logger = logging.getLogger(__name__)

VIDEO_TYPES = (PublishType.Video, PublishType.Short)
STORAGE_ERROR = "STORAGE_ERROR"


def _page(query, *, cursor: Optional[str], order_by=PublishOrderBy.latest, with_count: bool = False) -> Page:
    return paginate(
        query,
        key=Publish.id,
        order=publish_order(order_by),
        cursor=cursor,
        with_count=with_count,
    )


def _require_own_publish(db: Session, authenticator: Authenticator, *, owner, account_id, creator_id, publish_id):
    creator = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish:
        raise not_found()
    if publish.creator_id != creator_id:
        raise unauthorized()
    return creator, publish


def _notify_processing(uow: UnitOfWork, bus: MessageBusPort, topic: str, publish_id: str) -> None:
    uow.after_commit(bus.publish, topic, publish_id)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_publish_by_id(db: Session, *, target_id: str, requestor_id: Optional[str] = None):
    require_input(target_id)
    publish = repository.get_publish_by_id(db, publish_id=target_id)
    if not publish:
        return None
    return publish_node(db, publish, requestor_id=requestor_id)


def get_short(db: Session, *, target_id: str, requestor_id: Optional[str] = None):
    return get_publish_by_id(db, target_id=target_id, requestor_id=requestor_id)


def fetch_my_publishes(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    creator_id: str,
    cursor: Optional[str] = None,
    publish_type: PublishKind = PublishKind.all,
) -> Page:
    """Every publish of the creator, drafts and private ones included."""
    require_input(owner, account_id, creator_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)

    query = repository.publishes_query(
        db,
        Publish.creator_id == creator_id,
        *publish_kind_filter(publish_type, scope=PublishScope.CREATOR),
    )
    return _page(query, cursor=cursor, with_count=True)


def fetch_publishes(
    db: Session,
    *,
    requestor_id: Optional[str] = None,
    cursor: Optional[str] = None,
    order_by: PublishOrderBy = PublishOrderBy.latest,
    publish_type: PublishKind = PublishKind.all,
) -> Page:
    query = repository.publishes_query(
        db,
        *feed_visibility_filter(excluded_creators(db, requestor_id)),
        *publish_kind_filter(publish_type, scope=PublishScope.FEED),
    )
    return _page(query, cursor=cursor, order_by=order_by)


def fetch_videos_by_category(
    db: Session, *, category, requestor_id: Optional[str] = None, cursor: Optional[str] = None
) -> Page:
    query = repository.publishes_query(
        db,
        *feed_visibility_filter(excluded_creators(db, requestor_id)),
        Publish.publish_type == PublishType.Video,
        repository.category_clause(category),
    )
    return _page(query, cursor=cursor)


def _fetch_suggested(
    db: Session,
    *,
    publish_type: PublishType,
    preferences_field: str,
    publish_id: str,
    requestor_id: Optional[str],
    cursor: Optional[str],
) -> Page:
    source = repository.get_publish_by_id(db, publish_id=publish_id) if publish_id else None
    if not source:
        return Page()

    clauses = feed_visibility_filter(excluded_creators(db, requestor_id))
    clauses += [Publish.publish_type == publish_type, Publish.id != publish_id]

    tags = repository.split_tags(source.tags)
    if tags:
        clauses.append(repository.any_tag_clause(tags))
    elif requestor_id:
        requestor = repository.get_profile_by_id(db, profile_id=requestor_id)
        preferences = getattr(requestor, preferences_field, None) if requestor else None
        if preferences:
            clauses.append(repository.categories_clause(preferences))

    return _page(repository.publishes_query(db, *clauses), cursor=cursor)


def fetch_suggested_videos(
    db: Session, *, publish_id: str, requestor_id: Optional[str] = None, cursor: Optional[str] = None
) -> Page:
    return _fetch_suggested(
        db,
        publish_type=PublishType.Video,
        preferences_field="watch_preferences",
        publish_id=publish_id,
        requestor_id=requestor_id,
        cursor=cursor,
    )


def fetch_suggested_blogs(
    db: Session, *, publish_id: str, requestor_id: Optional[str] = None, cursor: Optional[str] = None
) -> Page:
    return _fetch_suggested(
        db,
        publish_type=PublishType.Blog,
        preferences_field="read_preferences",
        publish_id=publish_id,
        requestor_id=requestor_id,
        cursor=cursor,
    )


def fetch_profile_publishes(
    db: Session,
    *,
    creator_id: str,
    cursor: Optional[str] = None,
    publish_type: PublishKind = PublishKind.all,
    order_by: PublishOrderBy = PublishOrderBy.latest,
) -> Page:
    require_input(creator_id)
    query = repository.publishes_query(
        db,
        Publish.creator_id == creator_id,
        Publish.visibility == Visibility.public,
        *publish_kind_filter(publish_type, scope=PublishScope.CREATOR),
    )
    return _page(query, cursor=cursor, order_by=order_by)


def _search(db: Session, match_clause, *, requestor_id, cursor, publish_type) -> Page:
    query = repository.publishes_query(
        db,
        *feed_visibility_filter(excluded_creators(db, requestor_id)),
        *publish_kind_filter(publish_type, scope=PublishScope.SEARCH),
        match_clause,
    )
    return _page(query, cursor=cursor)


def fetch_publishes_by_tag(
    db: Session,
    *,
    tag: str,
    requestor_id: Optional[str] = None,
    cursor: Optional[str] = None,
    publish_type: PublishKind = PublishKind.all,
) -> Page:
    words = (tag or "").split()
    if not words:
        return Page()
    return _search(db, repository.tag_clause(words), requestor_id=requestor_id, cursor=cursor, publish_type=publish_type)


def fetch_publishes_by_query_string(
    db: Session,
    *,
    query: str,
    requestor_id: Optional[str] = None,
    cursor: Optional[str] = None,
    publish_type: PublishKind = PublishKind.all,
) -> Page:
    words = (query or "").split()
    if not words:
        return Page()
    return _search(
        db, repository.query_string_clause(words), requestor_id=requestor_id, cursor=cursor, publish_type=publish_type
    )


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def create_draft_video(
    db: Session,
    *,
    authenticator: Authenticator,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    creator_id: str,
    filename: str,
) -> dict:
    require_input(owner, account_id, creator_id, filename)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)

    with unit_of_work(db) as uow:
        publish = repository.create_publish(
            db,
            creator_id=creator_id,
            title=filename,
            filename=filename,
            uploading=True,
            visibility=Visibility.draft,
        )
        _notify_processing(uow, bus, processing_topic, publish.id)
    logger.info("Draft video created | publish=%s | creator=%s", publish.id, creator_id)
    return {"id": publish.id, "filename": publish.filename}


def create_draft_blog(
    db: Session,
    *,
    authenticator: Authenticator,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    creator_id: str,
) -> dict:
    require_input(owner, account_id, creator_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)

    with unit_of_work(db) as uow:
        publish = repository.create_publish(
            db,
            creator_id=creator_id,
            publish_type=PublishType.Blog,
            thumbnail_type=ThumbnailType.custom,
            visibility=Visibility.draft,
        )
        _notify_processing(uow, bus, processing_topic, publish.id)
    logger.info("Draft blog created | publish=%s | creator=%s", publish.id, creator_id)
    return {"id": publish.id}


VIDEO_FIELDS = (
    "content_uri",
    "content_ref",
    "thumbnail",
    "thumbnail_ref",
    "title",
    "description",
    "primary_category",
    "secondary_category",
    "tags",
)


def update_video(
    db: Session,
    *,
    authenticator: Authenticator,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    creator_id: str,
    publish_id: str,
    thumbnail_type,
    visibility=None,
    broadcast_type=None,
    **fields,
) -> dict:
    require_input(owner, account_id, creator_id, publish_id)
    _, publish = _require_own_publish(
        db, authenticator, owner=owner, account_id=account_id, creator_id=creator_id, publish_id=publish_id
    )

    if broadcast_type and publish.stream_type != StreamType.Live:
        raise bad_request()

    with unit_of_work(db) as uow:
        for name in VIDEO_FIELDS:
            if fields.get(name) is not None:
                setattr(publish, name, fields[name])
        publish.thumbnail_type = thumbnail_type
        publish.visibility = visibility or Visibility.private
        publish.broadcast_type = broadcast_type or publish.broadcast_type
        _notify_processing(uow, bus, processing_topic, publish_id)
    return {"status": "Ok"}


def update_blog(
    db: Session,
    *,
    authenticator: Authenticator,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    creator_id: str,
    publish_id: str,
    title: Optional[str] = None,
    image_url: Optional[str] = None,
    image_ref: Optional[str] = None,
    filename: Optional[str] = None,
    primary_category=None,
    secondary_category=None,
    tags: Optional[str] = None,
    content=None,
    html_content: Optional[str] = None,
    preview: Optional[str] = None,
    visibility=None,
) -> dict:
    require_input(owner, account_id, creator_id, publish_id)
    creator = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish or publish.publish_type != PublishType.Blog:
        raise not_found()
    if publish.creator_id != creator.id:
        raise unauthorized()

    publishing = visibility == Visibility.public
    blog = repository.get_blog(db, publish_id=publish_id)
    minutes = reading_time(preview) if preview else None
    summary = excerpt(preview) if preview else None

    if publishing:
        has_title = bool(title or publish.title)
        has_content = bool(content or (blog and blog.content))
        has_html = bool(html_content or (blog and blog.html_content))
        if not (has_title and has_content and has_html):
            raise bad_request()

    with unit_of_work(db) as uow:
        if not blog:
            repository.create_blog(
                db,
                publish_id=publish_id,
                content=content or {},
                html_content=html_content,
                reading_time=minutes,
                excerpt=summary,
            )
        elif content or html_content or preview:
            if content:
                blog.content = content
            if html_content:
                blog.html_content = html_content
            if preview:
                blog.reading_time = minutes
                blog.excerpt = summary

        publish.title = title or publish.title
        if image_url is not None:
            publish.thumbnail = image_url
        if image_ref is not None:
            publish.thumbnail_ref = image_ref
        if filename is not None:
            publish.filename = filename
        publish.tags = tags or publish.tags
        publish.visibility = visibility or publish.visibility
        publish.primary_category = primary_category or publish.primary_category
        publish.secondary_category = secondary_category or publish.secondary_category
        _notify_processing(uow, bus, processing_topic, publish_id)
    return {"status": "Ok"}


def like_publish(
    db: Session,
    *,
    authenticator: Authenticator,
    emitter: NotificationEmitter,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
) -> dict:
    """Toggle a like; liking clears an existing dislike."""
    require_input(owner, account_id, profile_id, publish_id)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish:
        raise not_found()

    with unit_of_work(db) as uow:
        if repository.insert_like_if_absent(db, profile_id=profile_id, publish_id=publish_id):
            repository.delete_dislike(db, profile_id=profile_id, publish_id=publish_id)
            emitter.emit(
                uow,
                receiver_id=publish.creator_id,
                actor_id=profile_id,
                kind=NotificationType.LIKE,
                content=like_publish_content(profile.name, publish.title, publish.publish_type),
            )
            _notify_processing(uow, bus, processing_topic, publish_id)
        else:
            repository.delete_like(db, profile_id=profile_id, publish_id=publish_id)
    return {"status": "Ok"}


def dislike_publish(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
) -> dict:
    """Toggle a dislike; disliking clears an existing like."""
    require_input(owner, account_id, profile_id, publish_id)
    authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    if not repository.get_publish_by_id(db, publish_id=publish_id):
        raise not_found()

    with unit_of_work(db):
        if repository.insert_dislike_if_absent(db, profile_id=profile_id, publish_id=publish_id):
            repository.delete_like(db, profile_id=profile_id, publish_id=publish_id)
        else:
            repository.delete_dislike(db, profile_id=profile_id, publish_id=publish_id)
    return {"status": "Ok"}


def count_views(db: Session, *, publish_id: str) -> dict:
    require_input(publish_id)
    with unit_of_work(db):
        if not repository.increment_views(db, publish_id=publish_id):
            raise not_found()
    return {"status": "Ok"}


def _delete_one(
    db: Session,
    publish,
    *,
    creator,
    authenticator: Authenticator,
    upload: UploadPort,
    stream: StreamPort,
    bus: MessageBusPort,
    processing_topic: str,
) -> None:
    publish_id = publish.id
    content_ref = f"publishes/{creator.name}/{publish_id}/"
    video_id = publish.playback.video_id if publish.playback and publish.playback.video_id else None
    thumbnail_ref = publish.thumbnail_ref

    with unit_of_work(db) as uow:
        if publish.publish_type in VIDEO_TYPES:
            # The row itself is removed by the video-deletion listener.
            publish.deleting = True
            uow.after_commit(upload.delete_video, authenticator.id_token, ref=content_ref, publish_id=publish_id)
            if video_id:
                uow.after_commit(stream.delete_video, video_id)
            _notify_processing(uow, bus, processing_topic, publish_id)
            return

        had_content = bool(publish.content_ref)
        repository.delete_publish(db, publish_id=publish_id)
        if thumbnail_ref:
            uow.after_commit(upload.delete_image, authenticator.id_token, ref=thumbnail_ref)
        if publish.publish_type != PublishType.Blog:
            if had_content:
                uow.after_commit(upload.delete_video, authenticator.id_token, ref=content_ref, publish_id=publish_id)
            if video_id:
                uow.after_commit(stream.delete_video, video_id)
    logger.info("Publish deleted | publish=%s | creator=%s", publish_id, creator.id)


def delete_publish(
    db: Session,
    *,
    authenticator: Authenticator,
    upload: UploadPort,
    stream: StreamPort,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    creator_id: str,
    publish_id: str,
) -> dict:
    require_input(owner, account_id, creator_id, publish_id)
    creator, publish = _require_own_publish(
        db, authenticator, owner=owner, account_id=account_id, creator_id=creator_id, publish_id=publish_id
    )
    _delete_one(
        db,
        publish,
        creator=creator,
        authenticator=authenticator,
        upload=upload,
        stream=stream,
        bus=bus,
        processing_topic=processing_topic,
    )
    return {"status": "Ok"}


def delete_publishes(
    db: Session,
    *,
    authenticator: Authenticator,
    upload: UploadPort,
    stream: StreamPort,
    bus: MessageBusPort,
    processing_topic: str,
    owner: str,
    account_id: str,
    creator_id: str,
    publish_ids: List[str],
) -> dict:
    """Delete each publish independently; one failure does not stop the rest."""
    require_input(owner, account_id, creator_id, publish_ids)
    creator = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=creator_id)

    results = []
    for publish_id in publish_ids:
        try:
            publish = repository.get_publish_by_id(db, publish_id=publish_id)
            if not publish:
                raise not_found()
            if publish.creator_id != creator_id:
                raise unauthorized()
            _delete_one(
                db,
                publish,
                creator=creator,
                authenticator=authenticator,
                upload=upload,
                stream=stream,
                bus=bus,
                processing_topic=processing_topic,
            )
        except AppError as exc:
            results.append({"publish_id": publish_id, "status": "Failed", "error": exc.kind.value})
            continue
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Publish delete failed | publish=%s", publish_id)
            results.append({"publish_id": publish_id, "status": "Failed", "error": STORAGE_ERROR})
            continue
        results.append({"publish_id": publish_id, "status": "Ok"})
    return {"status": "Ok", "results": results}


def calculate_tips(*, authenticator: Authenticator, qty: int) -> dict:
    if not qty or qty <= 0:
        raise bad_input()
    return {"tips": str(authenticator.wallet.calculate_tips(authenticator.id_token, qty=qty))}


def send_tips(
    db: Session,
    *,
    authenticator: Authenticator,
    emitter: NotificationEmitter,
    owner: str,
    account_id: str,
    profile_id: str,
    publish_id: str,
    receiver_id: str,
    qty: int,
) -> dict:
    require_input(owner, account_id, profile_id, publish_id, receiver_id, qty)
    sender = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    receiver = repository.get_profile_by_id(db, profile_id=receiver_id)
    if not receiver:
        raise not_found()
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish:
        raise not_found()

    result = authenticator.wallet.send_tips(authenticator.id_token, to=receiver.owner, qty=qty)

    with unit_of_work(db) as uow:
        repository.create_tip(
            db,
            sender_id=profile_id,
            from_address=result["from"].lower(),
            publish_id=publish_id,
            receiver_id=receiver_id,
            to_address=result["to"].lower(),
            amount=str(result["amount"]),
            fee=str(result["fee"]),
        )
        emitter.emit(
            uow,
            receiver_id=receiver_id,
            actor_id=profile_id,
            kind=NotificationType.TIP,
            content=tip_content(sender.name, str(result["amount"]), publish.title),
        )
    logger.info("Tips sent | publish=%s | sender=%s | receiver=%s", publish_id, profile_id, receiver_id)
    return result
