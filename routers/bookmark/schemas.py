from typing import Optional

from core.schemas import ListOrderBy, ProfileRequest


class FetchBookmarksRequest(ProfileRequest):
    cursor: Optional[str] = None
    order_by: ListOrderBy = ListOrderBy.newest


class BookmarkRequest(ProfileRequest):
    publish_id: str
