from typing import Optional

from core.schemas import ListOrderBy, ProfileRequest


class FetchWatchLaterRequest(ProfileRequest):
    cursor: Optional[str] = None
    order_by: ListOrderBy = ListOrderBy.newest


class WatchLaterRequest(ProfileRequest):
    publish_id: str


class RemoveWatchLaterRequest(ProfileRequest):
    publish_id: str
    id: Optional[str] = None
