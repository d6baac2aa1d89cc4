from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.schemas import WriteResult
from routers.dependencies import get_authenticator, get_db

from . import service
from .schemas import ReportPublishRequest

router = APIRouter(prefix="/report", tags=["Report"])


@router.post("", response_model=WriteResult)
def report_publish(
    payload: ReportPublishRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.report_publish(db, authenticator=authenticator, **payload.model_dump())
