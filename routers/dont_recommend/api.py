from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.pagination import to_connection
from core.schemas import Connection, WriteResult
from routers.dependencies import get_authenticator, get_db

from . import service
from .schemas import DontRecommendNode, DontRecommendRequest, FetchDontRecommendsRequest

router = APIRouter(prefix="/dont-recommend", tags=["Don't Recommend"])


@router.post("/list", response_model=Connection[DontRecommendNode])
def fetch_dont_recommends(
    payload: FetchDontRecommendsRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    page = service.fetch_dont_recommends(db, authenticator=authenticator, **payload.model_dump())
    return to_connection(page)


@router.post("", response_model=WriteResult)
def dont_recommend(
    payload: DontRecommendRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.dont_recommend(db, authenticator=authenticator, **payload.model_dump())


@router.post("/remove", response_model=WriteResult)
def remove_dont_recommend(
    payload: DontRecommendRequest, db: Session = Depends(get_db), authenticator=Depends(get_authenticator)
):
    return service.remove_dont_recommend(db, authenticator=authenticator, **payload.model_dump())
