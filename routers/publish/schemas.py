from typing import Any, List, Optional

from pydantic import BaseModel, Field

from core.publish_filters import PublishKind
from core.schemas import AuthenticatedRequest, ProfileRequest
from models import BroadcastType, Category, ThumbnailType, Visibility


class CreatorRequest(AuthenticatedRequest):
    creator_id: str


class PublishRequest(CreatorRequest):
    publish_id: str


class CreateDraftVideoRequest(CreatorRequest):
    filename: str


class DraftVideoResponse(BaseModel):
    id: str
    filename: Optional[str] = None


class DraftBlogResponse(BaseModel):
    id: str


class UpdateVideoRequest(PublishRequest):
    content_uri: Optional[str] = None
    content_ref: Optional[str] = None
    thumbnail: Optional[str] = None
    thumbnail_ref: Optional[str] = None
    thumbnail_type: ThumbnailType
    title: Optional[str] = None
    description: Optional[str] = None
    primary_category: Optional[Category] = None
    secondary_category: Optional[Category] = None
    tags: Optional[str] = None
    visibility: Optional[Visibility] = None
    broadcast_type: Optional[BroadcastType] = None


class UpdateBlogRequest(PublishRequest):
    title: Optional[str] = None
    image_url: Optional[str] = None
    image_ref: Optional[str] = None
    filename: Optional[str] = None
    primary_category: Optional[Category] = None
    secondary_category: Optional[Category] = None
    tags: Optional[str] = None
    content: Optional[Any] = None
    html_content: Optional[str] = None
    preview: Optional[str] = Field(None, description="Plain text used for reading time and excerpt")
    visibility: Optional[Visibility] = None


class LikePublishRequest(ProfileRequest):
    publish_id: str


class DeletePublishesRequest(CreatorRequest):
    publish_ids: List[str]


class DeleteOutcome(BaseModel):
    publish_id: str
    status: str
    error: Optional[str] = None


class DeletePublishesResponse(BaseModel):
    status: str = "Ok"
    results: List[DeleteOutcome] = []


class CalculateTipsResponse(BaseModel):
    tips: str


class SendTipsRequest(ProfileRequest):
    publish_id: str
    receiver_id: str
    qty: int


class SendTipsResponse(BaseModel):
    from_address: str = Field(..., alias="from")
    to: str
    amount: str
    fee: str

    class Config:
        populate_by_name = True


class FetchMyPublishesRequest(CreatorRequest):
    cursor: Optional[str] = None
    publish_type: PublishKind = PublishKind.all

