from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.schemas import Edge, PageInfo, ProfileRequest, ProfileSummary
from models import NotificationType, ReadStatus


class NotificationNode(BaseModel):
    id: str
    created_at: datetime
    profile_id: str
    profile: ProfileSummary
    receiver_id: str
    type: NotificationType
    content: str
    status: ReadStatus

    class Config:
        from_attributes = True


class NotificationsResponse(BaseModel):
    page_info: PageInfo
    unread: int
    edges: List[Edge[NotificationNode]]


class FetchNotificationsRequest(ProfileRequest):
    cursor: Optional[str] = None


class UpdateNotificationsStatusRequest(ProfileRequest):
    ids: List[str] = Field(..., description="Notification ids to mark as read")
