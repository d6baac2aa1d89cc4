"""Response shapes shared by every domain."""

from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from models import (
    BroadcastType,
    Category,
    LiveStatus,
    PublishType,
    StreamType,
    ThumbnailType,
    Visibility,
)

T = TypeVar("T")


class ListOrderBy(str, Enum):
    newest = "newest"
    oldest = "oldest"


class PageInfo(BaseModel):
    end_cursor: Optional[str] = None
    has_next_page: bool = False
    count: Optional[int] = None


class Edge(BaseModel, Generic[T]):
    cursor: str
    node: T


class Connection(BaseModel, Generic[T]):
    page_info: PageInfo
    edges: List[Edge[T]]


class WriteResult(BaseModel):
    status: str = "Ok"


class AuthenticatedRequest(BaseModel):
    """Fields every mutation carries so the caller's account can be cross-checked."""

    owner: str
    account_id: str


class ProfileRequest(AuthenticatedRequest):
    profile_id: str


class ProfileSummary(BaseModel):
    id: str
    name: str
    display_name: str
    image: Optional[str] = None
    default_color: Optional[str] = None

    class Config:
        from_attributes = True


class PlaybackResponse(BaseModel):
    id: str
    video_id: str
    thumbnail: str
    preview: str
    duration: float
    hls: str
    dash: str
    live_status: Optional[LiveStatus] = None

    class Config:
        from_attributes = True


class BlogResponse(BaseModel):
    content: Optional[Any] = None
    html_content: Optional[str] = None
    reading_time: Optional[str] = None
    excerpt: Optional[str] = None

    class Config:
        from_attributes = True


class PublishNode(BaseModel):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    creator_id: str
    creator: ProfileSummary
    content_uri: Optional[str] = None
    content_ref: Optional[str] = None
    filename: Optional[str] = None
    thumbnail: Optional[str] = None
    thumbnail_ref: Optional[str] = None
    thumbnail_type: Optional[ThumbnailType] = None
    title: Optional[str] = None
    description: Optional[str] = None
    views: int = 0
    primary_category: Optional[Category] = None
    secondary_category: Optional[Category] = None
    publish_type: Optional[PublishType] = None
    visibility: Visibility
    tags: Optional[str] = None
    upload_error: bool = False
    transcode_error: bool = False
    uploading: bool = False
    deleting: bool = False
    stream_type: Optional[StreamType] = None
    broadcast_type: Optional[BroadcastType] = None
    live_input_uid: Optional[str] = None
    playback: Optional[PlaybackResponse] = None
    blog: Optional[BlogResponse] = None
    likes_count: int = 0
    dislikes_count: int = 0
    tips_count: int = 0
    comments_count: int = 0
    liked: Optional[bool] = None
    disliked: Optional[bool] = None
    bookmarked: Optional[bool] = None


class SavedPublishNode(BaseModel):
    """A watch-later or bookmark row with its publish."""

    id: str
    created_at: datetime
    profile_id: str
    publish_id: str
    publish: PublishNode
