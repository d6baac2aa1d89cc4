from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.pagination import to_connection
from core.schemas import Connection, ProfileRequest, SavedPublishNode, WriteResult
from routers.dependencies import get_authenticator, get_db

from . import service
from .schemas import BookmarkRequest, FetchBookmarksRequest

router = APIRouter(prefix="/bookmark", tags=["Bookmark"])


@router.post("/preview", response_model=Connection[SavedPublishNode])
def fetch_preview_bookmarks(
    payload: ProfileRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_preview_bookmarks(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page, lambda item: service.bookmark_node(db, item, requestor_id=payload.profile_id))


@router.post("/list", response_model=Connection[SavedPublishNode])
def fetch_bookmarks(
    payload: FetchBookmarksRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_bookmarks(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page, lambda item: service.bookmark_node(db, item, requestor_id=payload.profile_id))


@router.post("", response_model=WriteResult)
def bookmark_post(payload: BookmarkRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)):
    return service.bookmark_post(db, authenticator=authenticator, **payload.model_dump())


@router.post("/remove", response_model=WriteResult)
def remove_bookmark(
    payload: BookmarkRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.remove_bookmark(db, authenticator=authenticator, **payload.model_dump())


@router.post("/clear", response_model=WriteResult)
def remove_all_bookmarks(
    payload: ProfileRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.remove_all_bookmarks(db, authenticator=authenticator, **payload.model_dump())
