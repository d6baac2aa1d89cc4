from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from core.schemas import AuthenticatedRequest, ProfileRequest, ProfileSummary


class DontRecommendNode(BaseModel):
    id: str
    created_at: datetime
    requestor_id: str
    target_id: str
    target: ProfileSummary

    class Config:
        from_attributes = True


class FetchDontRecommendsRequest(AuthenticatedRequest):
    requestor_id: str
    cursor: Optional[str] = None


class DontRecommendRequest(ProfileRequest):
    target_id: str
