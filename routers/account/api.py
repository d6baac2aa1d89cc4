from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.schemas import WriteResult
from models import AccountType
from routers.dependencies import (
    get_authenticator,
    get_db,
    get_optional_authenticator,
    get_session_cache,
)

from . import service
from .schemas import (
    AccountResponse,
    AccountTypeRequest,
    BalanceResponse,
    CacheSessionRequest,
    ValidateAuthRequest,
    ValidateAuthResponse,
)

router = APIRouter(prefix="/account", tags=["Account"])


@router.get("/me", response_model=Optional[AccountResponse])
def get_my_account(
    account_type: AccountType = Query(...),
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    cache=Depends(get_session_cache),
):
    account = service.get_my_account(db, authenticator=authenticator, account_type=account_type)
    if not account:
        return None
    return service.to_account_response(account, cache=cache)


@router.get("/balance", response_model=BalanceResponse)
def get_balance(address: str = Query(""), authenticator=Depends(get_authenticator)):
    return {"balance": service.get_balance(authenticator=authenticator, address=address)}


@router.post("", response_model=Optional[AccountResponse])
def create_account(
    payload: AccountTypeRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    cache=Depends(get_session_cache),
):
    account = service.create_account(db, authenticator=authenticator, account_type=payload.account_type)
    if not account:
        return None
    return service.to_account_response(account, cache=cache)


@router.post("/cache-session", response_model=WriteResult)
def cache_session(
    payload: CacheSessionRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_authenticator),
    cache=Depends(get_session_cache),
):
    return service.cache_session(
        db,
        authenticator=authenticator,
        cache=cache,
        address=payload.address,
        profile_id=payload.profile_id,
        account_id=payload.account_id,
    )


@router.post("/validate-auth", response_model=ValidateAuthResponse)
def validate_auth(
    payload: ValidateAuthRequest,
    db: Session = Depends(get_db),
    authenticator=Depends(get_optional_authenticator),
):
    is_authenticated = service.validate_auth(
        db,
        authenticator=authenticator,
        account_id=payload.account_id,
        owner=payload.owner,
        profile_id=payload.profile_id,
    )
    return {"is_authenticated": is_authenticated}
