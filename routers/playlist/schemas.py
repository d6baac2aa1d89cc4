from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from core.schemas import Edge, ListOrderBy, PageInfo, ProfileRequest, PublishNode


class PlaylistItemNode(BaseModel):
    id: str
    created_at: datetime
    owner_id: str
    playlist_id: str
    publish_id: str
    publish: Optional[PublishNode] = None


class PlaylistNode(BaseModel):
    id: str
    created_at: datetime
    updated_at: datetime
    name: str
    description: Optional[str] = None
    owner_id: str

    class Config:
        from_attributes = True


class PreviewPlaylistNode(BaseModel):
    id: str
    name: str
    count: int
    last_item: Optional[PublishNode] = None


class PlaylistItemsResponse(BaseModel):
    playlist_name: str
    playlist_description: Optional[str] = None
    page_info: PageInfo
    edges: List[Edge[PlaylistItemNode]]


class CheckPublishPlaylistsResponse(BaseModel):
    items: List[PlaylistItemNode]
    is_in_watch_later: bool
    publish_id: str


class FetchMyPlaylistsRequest(ProfileRequest):
    cursor: Optional[str] = None


class FetchPlaylistItemsRequest(ProfileRequest):
    playlist_id: str
    cursor: Optional[str] = None
    order_by: ListOrderBy = ListOrderBy.newest


class PublishRefRequest(ProfileRequest):
    publish_id: str


class CreatePlaylistRequest(ProfileRequest):
    name: str
    publish_id: str


class PlaylistRequest(ProfileRequest):
    playlist_id: str


class PlaylistPublishRequest(PlaylistRequest):
    publish_id: str


class PlaylistItemStatus(BaseModel):
    is_in_playlist: bool
    playlist_id: str


class UpdatePlaylistsRequest(ProfileRequest):
    publish_id: str
    playlists: List[PlaylistItemStatus]


class UpdatePlaylistNameRequest(PlaylistRequest):
    name: str


class UpdatePlaylistDescriptionRequest(PlaylistRequest):
    description: str
