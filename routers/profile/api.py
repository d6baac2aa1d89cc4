from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.pagination import to_connection
from core.schemas import Connection, WriteResult
from routers.dependencies import (
    get_authenticator,
    get_db,
    get_notification_emitter,
    get_upload_client,
)

from . import service
from .schemas import (
    CreateProfileRequest,
    FollowRequest,
    ProfileResponse,
    ProfileSummary,
    UpdateImageRequest,
    UpdateNameRequest,
    UpdatePreferencesRequest,
)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/by-name/{name}", response_model=Optional[ProfileResponse])
def get_profile_by_name(name: str, requestor_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return service.get_profile_by_name(db, name=name, requestor_id=requestor_id)


@router.get("/validate-name", response_model=bool)
def validate_name(name: str = Query(""), db: Session = Depends(get_db)):
    return service.validate_name(db, name=name)


@router.get("/{target_id}", response_model=Optional[ProfileResponse])
def get_profile_by_id(target_id: str, requestor_id: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return service.get_profile_by_id(db, target_id=target_id, requestor_id=requestor_id)


@router.get("/{profile_id}/followers", response_model=Connection[ProfileSummary])
def fetch_followers(profile_id: str, cursor: Optional[str] = Query(None), db: Session = Depends(get_db)):
    page = service.fetch_followers(db, profile_id=profile_id, cursor=cursor)
    return to_connection(page, lambda follow: follow.follower)


@router.get("/{profile_id}/following", response_model=Connection[ProfileSummary])
def fetch_following(profile_id: str, cursor: Optional[str] = Query(None), db: Session = Depends(get_db)):
    page = service.fetch_following(db, profile_id=profile_id, cursor=cursor)
    return to_connection(page, lambda follow: follow.following)


@router.post("", response_model=ProfileResponse)
def create_profile(
    payload: CreateProfileRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    return service.create_profile(
        db,
        authenticator=authenticator,
        owner=payload.owner,
        account_id=payload.account_id,
        name=payload.name,
    )


@router.put("/name", response_model=WriteResult)
def update_name(payload: UpdateNameRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)):
    return service.update_name(db, authenticator=authenticator, **payload.model_dump())


@router.put("/display-name", response_model=WriteResult)
def update_display_name(payload: UpdateNameRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)):
    return service.update_display_name(db, authenticator=authenticator, **payload.model_dump())


@router.put("/image", response_model=WriteResult)
def update_profile_image(
    payload: UpdateImageRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    upload=Depends(get_upload_client),
):
    return service.update_profile_image(db, authenticator=authenticator, upload=upload, **payload.model_dump())


@router.put("/banner-image", response_model=WriteResult)
def update_banner_image(
    payload: UpdateImageRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    upload=Depends(get_upload_client),
):
    return service.update_banner_image(db, authenticator=authenticator, upload=upload, **payload.model_dump())


@router.post("/follow", response_model=WriteResult)
def follow(
    payload: FollowRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    emitter=Depends(get_notification_emitter),
):
    return service.follow(db, authenticator=authenticator, emitter=emitter, **payload.model_dump())


@router.put("/watch-preferences", response_model=WriteResult)
def update_watch_preferences(
    payload: UpdatePreferencesRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    return service.update_watch_preferences(db, authenticator=authenticator, **payload.model_dump())


@router.put("/read-preferences", response_model=WriteResult)
def update_read_preferences(
    payload: UpdatePreferencesRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
):
    return service.update_read_preferences(db, authenticator=authenticator, **payload.model_dump())
