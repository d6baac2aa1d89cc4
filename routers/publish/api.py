from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import Settings, get_settings
from core.pagination import Page, to_connection
from core.publish_filters import PublishKind
from core.publish_view import PublishOrderBy, publish_node
from core.schemas import Connection, PublishNode, WriteResult
from models import Category
from routers.dependencies import (
    get_authenticator,
    get_db,
    get_message_bus,
    get_notification_emitter,
    get_stream_client,
    get_upload_client,
)

from . import service
from .schemas import (
    CalculateTipsResponse,
    CreateDraftVideoRequest,
    CreatorRequest,
    DeletePublishesRequest,
    DeletePublishesResponse,
    DraftBlogResponse,
    DraftVideoResponse,
    FetchMyPublishesRequest,
    LikePublishRequest,
    PublishRequest,
    SendTipsRequest,
    SendTipsResponse,
    UpdateBlogRequest,
    UpdateVideoRequest,
)

router = APIRouter(prefix="/publish", tags=["Publish"])


def _connection(db: Session, page: Page, requestor_id: Optional[str] = None) -> dict:
    return to_connection(page, lambda publish: publish_node(db, publish, requestor_id=requestor_id))


# =================================
#  Queries
# =================================
@router.get("", response_model=Connection[PublishNode])
def fetch_publishes(
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    order_by: PublishOrderBy = Query(PublishOrderBy.latest),
    publish_type: PublishKind = Query(PublishKind.all),
    db: Session = Depends(get_db),
):
    page = service.fetch_publishes(
        db, requestor_id=requestor_id, cursor=cursor, order_by=order_by, publish_type=publish_type
    )
    return _connection(db, page, requestor_id)


@router.post("/mine", response_model=Connection[PublishNode])
def fetch_my_publishes(
    payload: FetchMyPublishesRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    page = service.fetch_my_publishes(db, authenticator=authenticator, **payload.model_dump())
    return _connection(db, page, payload.creator_id)


@router.get("/category/{category}", response_model=Connection[PublishNode])
def fetch_videos_by_category(
    category: Category,
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    page = service.fetch_videos_by_category(db, category=category, requestor_id=requestor_id, cursor=cursor)
    return _connection(db, page, requestor_id)


@router.get("/profile/{creator_id}", response_model=Connection[PublishNode])
def fetch_profile_publishes(
    creator_id: str,
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    order_by: PublishOrderBy = Query(PublishOrderBy.latest),
    publish_type: PublishKind = Query(PublishKind.all),
    db: Session = Depends(get_db),
):
    page = service.fetch_profile_publishes(
        db, creator_id=creator_id, cursor=cursor, publish_type=publish_type, order_by=order_by
    )
    return _connection(db, page, requestor_id)


@router.get("/tag", response_model=Connection[PublishNode])
def fetch_publishes_by_tag(
    tag: str = Query(""),
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    publish_type: PublishKind = Query(PublishKind.all),
    db: Session = Depends(get_db),
):
    page = service.fetch_publishes_by_tag(
        db, tag=tag, requestor_id=requestor_id, cursor=cursor, publish_type=publish_type
    )
    return _connection(db, page, requestor_id)


@router.get("/search", response_model=Connection[PublishNode])
def fetch_publishes_by_query_string(
    query: str = Query(""),
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    publish_type: PublishKind = Query(PublishKind.all),
    db: Session = Depends(get_db),
):
    page = service.fetch_publishes_by_query_string(
        db, query=query, requestor_id=requestor_id, cursor=cursor, publish_type=publish_type
    )
    return _connection(db, page, requestor_id)


@router.get("/short/{target_id}", response_model=Optional[PublishNode])
def get_short(target_id: str, requestor_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return service.get_short(db, target_id=target_id, requestor_id=requestor_id)


@router.get("/tips/calculate", response_model=CalculateTipsResponse)
def calculate_tips(qty: int = Query(...), authenticator=Depends(get_authenticator)):
    return service.calculate_tips(authenticator=authenticator, qty=qty)


@router.get("/{target_id}", response_model=Optional[PublishNode])
def get_publish_by_id(target_id: str, requestor_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return service.get_publish_by_id(db, target_id=target_id, requestor_id=requestor_id)


@router.get("/{publish_id}/suggested-videos", response_model=Connection[PublishNode])
def fetch_suggested_videos(
    publish_id: str,
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    page = service.fetch_suggested_videos(db, publish_id=publish_id, requestor_id=requestor_id, cursor=cursor)
    return _connection(db, page, requestor_id)


@router.get("/{publish_id}/suggested-blogs", response_model=Connection[PublishNode])
def fetch_suggested_blogs(
    publish_id: str,
    requestor_id: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    page = service.fetch_suggested_blogs(db, publish_id=publish_id, requestor_id=requestor_id, cursor=cursor)
    return _connection(db, page, requestor_id)


# =================================
#  Mutations
# =================================
@router.post("/draft-video", response_model=DraftVideoResponse)
def create_draft_video(
    payload: CreateDraftVideoRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.create_draft_video(
        db,
        authenticator=authenticator,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.post("/draft-blog", response_model=DraftBlogResponse)
def create_draft_blog(
    payload: CreatorRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.create_draft_blog(
        db,
        authenticator=authenticator,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.put("/video", response_model=WriteResult)
def update_video(
    payload: UpdateVideoRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.update_video(
        db,
        authenticator=authenticator,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.put("/blog", response_model=WriteResult)
def update_blog(
    payload: UpdateBlogRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.update_blog(
        db,
        authenticator=authenticator,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.post("/like", response_model=WriteResult)
def like_publish(
    payload: LikePublishRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    emitter=Depends(get_notification_emitter),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.like_publish(
        db,
        authenticator=authenticator,
        emitter=emitter,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.post("/dislike", response_model=WriteResult)
def dislike_publish(
    payload: LikePublishRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    return service.dislike_publish(db, authenticator=authenticator, **payload.model_dump())


@router.post("/{publish_id}/views", response_model=WriteResult)
def count_views(publish_id: str, db: Session = Depends(get_db)):
    return service.count_views(db, publish_id=publish_id)


@router.post("/delete", response_model=WriteResult)
def delete_publish(
    payload: PublishRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    upload=Depends(get_upload_client),
    stream=Depends(get_stream_client),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.delete_publish(
        db,
        authenticator=authenticator,
        upload=upload,
        stream=stream,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.post("/delete-many", response_model=DeletePublishesResponse)
def delete_publishes(
    payload: DeletePublishesRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    upload=Depends(get_upload_client),
    stream=Depends(get_stream_client),
    bus=Depends(get_message_bus),
    settings: Settings = Depends(get_settings),
):
    return service.delete_publishes(
        db,
        authenticator=authenticator,
        upload=upload,
        stream=stream,
        bus=bus,
        processing_topic=settings.publish_processing_topic,
        **payload.model_dump(),
    )


@router.post("/tips", response_model=SendTipsResponse)
def send_tips(
    payload: SendTipsRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    emitter=Depends(get_notification_emitter),
):
    return service.send_tips(db, authenticator=authenticator, emitter=emitter, **payload.model_dump())
