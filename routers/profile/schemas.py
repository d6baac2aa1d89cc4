from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.schemas import AuthenticatedRequest, ProfileRequest, ProfileSummary
from models import Category


class ProfileResponse(BaseModel):
    id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    owner: str
    name: str
    display_name: str
    image: Optional[str] = None
    image_ref: Optional[str] = None
    banner_image: Optional[str] = None
    banner_image_ref: Optional[str] = None
    default_color: Optional[str] = None
    account_id: str
    watch_preferences: List[Category] = []
    read_preferences: List[Category] = []
    followers_count: int = 0
    following_count: int = 0
    publishes_count: int = 0
    is_following: Optional[bool] = None
    is_owner: Optional[bool] = None


class CreateProfileRequest(AuthenticatedRequest):
    name: str


class UpdateNameRequest(ProfileRequest):
    new_name: str


class UpdateImageRequest(ProfileRequest):
    image: str
    image_ref: str


class FollowRequest(ProfileRequest):
    follower_id: str = Field(..., description="Id of the profile to follow or unfollow")


class UpdatePreferencesRequest(ProfileRequest):
    preferences: List[Category]
