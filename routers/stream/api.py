from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import Settings, get_settings
from core.pagination import to_connection
from core.publish_view import publish_node
from core.schemas import Connection, PublishNode
from routers.dependencies import get_authenticator, get_db, get_stream_client

from . import service
from .schemas import (
    FetchMyLiveStreamRequest,
    GetLiveStreamPublishRequest,
    LiveStreamPublishResponse,
    RequestLiveStreamRequest,
    RequestLiveStreamResponse,
)

router = APIRouter(prefix="/stream", tags=["Stream"])


@router.post("/mine", response_model=Connection[PublishNode])
def fetch_my_live_stream(
    payload: FetchMyLiveStreamRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_my_live_stream(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page, lambda publish: publish_node(db, publish, requestor_id=payload.creator_id))


@router.post("/publish", response_model=Optional[LiveStreamPublishResponse])
def get_live_stream_publish(
    payload: GetLiveStreamPublishRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    stream=Depends(get_stream_client),
):
    return service.get_live_stream_publish(db, authenticator=authenticator, stream=stream, **payload.model_dump())


@router.post("", response_model=RequestLiveStreamResponse)
def request_live_stream(
    payload: RequestLiveStreamRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    stream=Depends(get_stream_client),
    settings: Settings = Depends(get_settings),
):
    return service.request_live_stream(
        db,
        authenticator=authenticator,
        stream=stream,
        playback_base_url=settings.live_stream_playback_base_url,
        default_thumbnail=settings.default_live_stream_thumbnail,
        **payload.model_dump(),
    )
