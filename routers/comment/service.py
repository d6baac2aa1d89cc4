"""Comment service layer."""

import logging
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import bad_input, bad_request, not_found, require_input, unauthorized
from core.notifications import NotificationEmitter, comment_content, like_comment_content
from core.pagination import DESC, Page, paginate
from core.ports.bus import MessageBusPort
from core.text import count_words
from models import Comment, CommentDisLike, CommentLike, CommentType, NotificationType, PublishType

from . import repository

logger = logging.getLogger(__name__)

MAX_COMMENT_WORDS = 5000


class CommentsOrderBy(str, Enum):
    counts = "counts"
    newest = "newest"


def to_comment_node(db: Session, comment, *, requestor_id: Optional[str] = None) -> dict:
    node = {column.key: getattr(comment, column.key) for column in Comment.__table__.columns}
    node.update(
        creator=comment.creator,
        likes_count=repository.count_rows(db, CommentLike, comment_id=comment.id),
        dislikes_count=repository.count_rows(db, CommentDisLike, comment_id=comment.id),
        comments_count=repository.count_rows(db, Comment, comment_id=comment.id),
        liked=None,
        disliked=None,
    )
    if requestor_id:
        node["liked"] = repository.reaction_exists(db, CommentLike, profile_id=requestor_id, comment_id=comment.id)
        node["disliked"] = repository.reaction_exists(
            db, CommentDisLike, profile_id=requestor_id, comment_id=comment.id
        )
    return node


def fetch_comments_by_publish_id(
    db: Session,
    *,
    publish_id: str,
    cursor: Optional[str] = None,
    order_by: CommentsOrderBy = CommentsOrderBy.counts,
) -> Page:
    require_input(publish_id)
    if order_by == CommentsOrderBy.newest:
        order = [(Comment.created_at, DESC)]
    else:
        order = [(repository.replies_count_expr(), DESC), (Comment.created_at, DESC)]
    return paginate(
        repository.publish_comments_query(db, publish_id=publish_id),
        key=Comment.id,
        order=order,
        cursor=cursor,
        with_count=True,
    )


def fetch_sub_comments(db: Session, *, comment_id: str, cursor: Optional[str] = None) -> Page:
    require_input(comment_id)
    return paginate(
        repository.sub_comments_query(db, comment_id=comment_id),
        key=Comment.id,
        order=[(Comment.created_at, DESC)],
        cursor=cursor,
        with_count=True,
    )


def comment(
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
    comment_id: Optional[str] = None,
    content: Optional[str] = None,
    content_blog=None,
    html_content_blog: Optional[str] = None,
) -> dict:
    """Comment on a publish, or reply to one of its comments when ``comment_id`` is given."""
    require_input(owner, account_id, profile_id, publish_id)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    publish = repository.get_publish_by_id(db, publish_id=publish_id)
    if not publish:
        raise not_found()

    if comment_id:
        parent = repository.get_comment_by_id(db, comment_id=comment_id)
        if not parent or parent.publish_id != publish_id:
            raise not_found()

    fields = {
        "creator_id": profile_id,
        "publish_id": publish_id,
        "comment_id": comment_id,
        "comment_type": CommentType.COMMENT if comment_id else CommentType.PUBLISH,
    }
    if publish.publish_type == PublishType.Blog:
        if not content_blog or not html_content_blog:
            raise bad_input()
        if count_words(html_content_blog) > MAX_COMMENT_WORDS:
            raise bad_request("Comment is too long.")
        fields.update(content_blog=content_blog, html_content_blog=html_content_blog)
    else:
        if not content:
            raise bad_input()
        fields.update(content=content)

    with unit_of_work(db) as uow:
        created = repository.create_comment(db, **fields)
        emitter.emit(
            uow,
            receiver_id=publish.creator_id,
            actor_id=profile_id,
            kind=NotificationType.COMMENT,
            content=comment_content(profile.name, publish.title, publish.publish_type),
        )
        uow.after_commit(bus.publish, processing_topic, publish_id)
    logger.info("Comment created | comment=%s | publish=%s", created.id, publish_id)
    return {"status": "Ok"}


def _require_comment(db: Session, authenticator: Authenticator, *, owner, account_id, profile_id, comment_id):
    require_input(owner, account_id, profile_id, comment_id)
    profile = authenticator.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
    target = repository.get_comment_by_id(db, comment_id=comment_id)
    if not target:
        raise not_found()
    return profile, target


def like_comment(
    db: Session,
    *,
    authenticator: Authenticator,
    emitter: NotificationEmitter,
    owner: str,
    account_id: str,
    profile_id: str,
    comment_id: str,
) -> dict:
    """Toggle a like; liking clears an existing dislike."""
    profile, target = _require_comment(
        db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id, comment_id=comment_id
    )
    with unit_of_work(db) as uow:
        if repository.insert_reaction_if_absent(db, CommentLike, profile_id=profile_id, comment_id=comment_id):
            repository.delete_reaction(db, CommentDisLike, profile_id=profile_id, comment_id=comment_id)
            emitter.emit(
                uow,
                receiver_id=target.creator_id,
                actor_id=profile_id,
                kind=NotificationType.LIKE,
                content=like_comment_content(profile.name),
            )
        else:
            repository.delete_reaction(db, CommentLike, profile_id=profile_id, comment_id=comment_id)
    return {"status": "Ok"}


def dislike_comment(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    comment_id: str,
) -> dict:
    _require_comment(
        db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id, comment_id=comment_id
    )
    with unit_of_work(db):
        if repository.insert_reaction_if_absent(db, CommentDisLike, profile_id=profile_id, comment_id=comment_id):
            repository.delete_reaction(db, CommentLike, profile_id=profile_id, comment_id=comment_id)
        else:
            repository.delete_reaction(db, CommentDisLike, profile_id=profile_id, comment_id=comment_id)
    return {"status": "Ok"}


def delete_comment(
    db: Session,
    *,
    authenticator: Authenticator,
    owner: str,
    account_id: str,
    profile_id: str,
    comment_id: str,
) -> dict:
    _, target = _require_comment(
        db, authenticator, owner=owner, account_id=account_id, profile_id=profile_id, comment_id=comment_id
    )
    if target.creator_id != profile_id:
        raise unauthorized()
    with unit_of_work(db):
        repository.delete_comment(db, comment_id=comment_id)
    return {"status": "Ok"}
