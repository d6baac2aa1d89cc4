from typing import Any, Dict, Optional

from pydantic import BaseModel

from core.schemas import AuthenticatedRequest, ProfileRequest, PublishNode
from models import BroadcastType, Category, Visibility


class FetchMyLiveStreamRequest(AuthenticatedRequest):
    creator_id: str
    cursor: Optional[str] = None


class GetLiveStreamPublishRequest(ProfileRequest):
    publish_id: str


class LiveStreamPublishResponse(BaseModel):
    publish: PublishNode
    live_input: Dict[str, Any]


class RequestLiveStreamRequest(ProfileRequest):
    title: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    thumbnail_ref: Optional[str] = None
    primary_category: Category
    secondary_category: Optional[Category] = None
    tags: Optional[str] = None
    visibility: Visibility
    broadcast_type: BroadcastType


class RequestLiveStreamResponse(BaseModel):
    id: str
