from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.pagination import to_connection
from core.schemas import Connection, ProfileRequest, SavedPublishNode, WriteResult
from routers.dependencies import get_authenticator, get_db

from . import service
from .schemas import FetchWatchLaterRequest, RemoveWatchLaterRequest, WatchLaterRequest

router = APIRouter(prefix="/watch-later", tags=["Watch Later"])


@router.post("/preview", response_model=Connection[SavedPublishNode])
def fetch_preview_watch_later(
    payload: ProfileRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_preview_watch_later(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page, lambda item: service.item_node(db, item, requestor_id=payload.profile_id))


@router.post("/list", response_model=Connection[SavedPublishNode])
def fetch_watch_later(
    payload: FetchWatchLaterRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_watch_later(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page, lambda item: service.item_node(db, item, requestor_id=payload.profile_id))


@router.post("", response_model=WriteResult)
def add_to_watch_later(
    payload: WatchLaterRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.add_to_watch_later(db, authenticator=authenticator, **payload.model_dump())


@router.post("/remove", response_model=WriteResult)
def remove_from_watch_later(
    payload: RemoveWatchLaterRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.remove_from_watch_later(db, authenticator=authenticator, **payload.model_dump())


@router.post("/clear", response_model=WriteResult)
def remove_all_watch_later(
    payload: ProfileRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.remove_all_watch_later(db, authenticator=authenticator, **payload.model_dump())
