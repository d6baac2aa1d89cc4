from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.pagination import to_connection
from core.schemas import WriteResult
from routers.dependencies import get_authenticator, get_db

from . import service
from .schemas import FetchNotificationsRequest, NotificationsResponse, UpdateNotificationsStatusRequest

router = APIRouter(prefix="/notification", tags=["Notification"])


@router.post("/mine", response_model=NotificationsResponse)
def fetch_my_notifications(
    payload: FetchNotificationsRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page, unread = service.fetch_my_notifications(db, authenticator=authenticator, **payload.model_dump())
    return {"unread": unread, **to_connection(page)}


@router.put("/status", response_model=WriteResult)
def update_notifications_status(
    payload: UpdateNotificationsStatusRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.update_notifications_status(db, authenticator=authenticator, **payload.model_dump())
