from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.pagination import to_connection
from core.schemas import Connection, WriteResult
from routers.dependencies import get_authenticator, get_db

from . import service
from .schemas import (
    CheckPublishPlaylistsResponse,
    CreatePlaylistRequest,
    FetchMyPlaylistsRequest,
    FetchPlaylistItemsRequest,
    PlaylistItemsResponse,
    PlaylistNode,
    PlaylistPublishRequest,
    PlaylistRequest,
    PreviewPlaylistNode,
    PublishRefRequest,
    UpdatePlaylistDescriptionRequest,
    UpdatePlaylistNameRequest,
    UpdatePlaylistsRequest,
)

router = APIRouter(prefix="/playlist", tags=["Playlist"])


# =================================
#  Queries (authenticated, so they take a body)
# =================================
@router.post("/mine", response_model=Connection[PlaylistNode])
def fetch_my_playlists(
    payload: FetchMyPlaylistsRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_my_playlists(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page)


@router.post("/preview", response_model=Connection[PreviewPlaylistNode])
def fetch_preview_playlists(
    payload: FetchMyPlaylistsRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_preview_playlists(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page, lambda playlist: service.preview_node(db, playlist, requestor_id=payload.profile_id))


@router.post("/check", response_model=CheckPublishPlaylistsResponse)
def check_publish_playlists(
    payload: PublishRefRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.check_publish_playlists(db, authenticator=authenticator, **payload.model_dump())


@router.post("/items", response_model=PlaylistItemsResponse)
def fetch_playlist_items(
    payload: FetchPlaylistItemsRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    playlist, page = service.fetch_playlist_items(db, authenticator=authenticator, **payload.model_dump())
    connection = to_connection(page, lambda item: service.item_node(db, item, requestor_id=payload.profile_id))
    return {
        "playlist_name": playlist.name,
        "playlist_description": playlist.description,
        **connection,
    }


# =================================
#  Mutations
# =================================
@router.post("", response_model=WriteResult)
def add_to_new_playlist(
    payload: CreatePlaylistRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.add_to_new_playlist(db, authenticator=authenticator, **payload.model_dump())


@router.post("/add", response_model=WriteResult)
def add_to_playlist(
    payload: PlaylistPublishRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.add_to_playlist(db, authenticator=authenticator, **payload.model_dump())


@router.put("/batch", response_model=WriteResult)
def update_playlists(
    payload: UpdatePlaylistsRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.update_playlists(db, authenticator=authenticator, **payload.model_dump())


@router.post("/delete", response_model=WriteResult)
def delete_playlist(payload: PlaylistRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)):
    return service.delete_playlist(db, authenticator=authenticator, **payload.model_dump())


@router.put("/name", response_model=WriteResult)
def update_playlist_name(
    payload: UpdatePlaylistNameRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.update_playlist_name(db, authenticator=authenticator, **payload.model_dump())


@router.put("/description", response_model=WriteResult)
def update_playlist_description(
    payload: UpdatePlaylistDescriptionRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.update_playlist_description(db, authenticator=authenticator, **payload.model_dump())


@router.post("/remove", response_model=WriteResult)
def remove_from_playlist(
    payload: PlaylistPublishRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.remove_from_playlist(db, authenticator=authenticator, **payload.model_dump())


@router.post("/clear", response_model=WriteResult)
def delete_all_playlist_items(
    payload: PlaylistRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.delete_all_playlist_items(db, authenticator=authenticator, **payload.model_dump())
