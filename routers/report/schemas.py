from core.schemas import ProfileRequest
from models import ReportReason


class ReportPublishRequest(ProfileRequest):
    publish_id: str
    reason: ReportReason
