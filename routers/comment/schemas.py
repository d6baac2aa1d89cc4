from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from core.schemas import ProfileRequest, ProfileSummary
from models import CommentType


class CommentNode(BaseModel):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    creator_id: str
    creator: ProfileSummary
    publish_id: str
    comment_id: Optional[str] = None
    comment_type: CommentType
    content: Optional[str] = None
    content_blog: Optional[Any] = None
    html_content_blog: Optional[str] = None
    likes_count: int = 0
    dislikes_count: int = 0
    comments_count: int = 0
    liked: Optional[bool] = None
    disliked: Optional[bool] = None


class CommentRequest(ProfileRequest):
    publish_id: str
    comment_id: Optional[str] = None
    content: Optional[str] = None
    content_blog: Optional[Any] = None
    html_content_blog: Optional[str] = None


class LikeCommentRequest(ProfileRequest):
    comment_id: str


class DeleteCommentRequest(ProfileRequest):
    comment_id: str
