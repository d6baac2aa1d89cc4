from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import Settings, get_settings
from core.pagination import to_connection
from core.schemas import Connection, WriteResult
from routers.dependencies import (
    get_authenticator,
    get_db,
    get_message_bus,
    get_notification_emitter,
)

from . import service
from .schemas import CommentNode, CommentRequest, DeleteCommentRequest, LikeCommentRequest
from .service import CommentsOrderBy

router = APIRouter(prefix="/comment", tags=["Comment"])


@router.get("/publish/{publish_id}", response_model=Connection[CommentNode])
def fetch_comments_by_publish_id(
    publish_id: str,
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    order_by: CommentsOrderBy = Query(CommentsOrderBy.counts),
    db: Session = Depends(get_db),
):
    page = service.fetch_comments_by_publish_id(db, publish_id=publish_id, cursor=cursor, order_by=order_by)
    return to_connection(page, lambda item: service.to_comment_node(db, item, requestor_id=requestor_id))


@router.get("/{comment_id}/replies", response_model=Connection[CommentNode])
def fetch_sub_comments(
    comment_id: str,
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    page = service.fetch_sub_comments(db, comment_id=comment_id, cursor=cursor)
    return to_connection(page, lambda item: service.to_comment_node(db, item, requestor_id=requestor_id))


@router.post("", response_model=WriteResult)
def comment(
    payload: CommentRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    emitter=Depends(get_notification_emitter),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.comment(
        db,
        authenticator=authenticator,
        emitter=emitter,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.post("/like", response_model=WriteResult)
def like_comment(
    payload: LikeCommentRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    emitter=Depends(get_notification_emitter),
):
    return service.like_comment(db, authenticator=authenticator, emitter=emitter, **payload.model_dump())


@router.post("/dislike", response_model=WriteResult)
def dislike_comment(
    payload: LikeCommentRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    return service.dislike_comment(db, authenticator=authenticator, **payload.model_dump())


@router.post("/delete", response_model=WriteResult)
def delete_comment(
    payload: DeleteCommentRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    return service.delete_comment(db, authenticator=authenticator, **payload.model_dump())
