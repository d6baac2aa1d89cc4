"""Account service layer."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.authenticity import Authenticator
from core.db import unit_of_work
from core.errors import bad_input, bad_request, unauthorized
from core.identity import recover_address
from core.ports.bus import SessionCachePort
from core.session_cache import resolve_default_profile
from models import AccountType

from . import repository

logger = logging.getLogger(__name__)


def to_account_response(account, *, cache: SessionCachePort) -> dict:
    profiles = list(account.profiles)
    return {
        "id": account.id,
        "owner": account.owner,
        "auth_uid": account.auth_uid,
        "type": account.type,
        "created_at": account.created_at,
        "updated_at": account.updated_at,
        "profiles": profiles,
        "default_profile": resolve_default_profile(cache, owner=account.owner, profiles=profiles),
    }


def _signed_owner(authenticator: Authenticator) -> str:
    if not authenticator.signature:
        raise unauthorized()
    return recover_address(authenticator.signature, message=authenticator.message).lower()


def get_my_account(db: Session, *, authenticator: Authenticator, account_type: AccountType):
    authenticator.wallet.verify_user(authenticator.id_token)

    if account_type == AccountType.TRADITIONAL:
        address = authenticator.wallet.get_wallet_address(authenticator.id_token)
        if not address:
            return None
        return repository.get_account_by_owner(db, owner=address)

    return repository.get_account_by_owner(db, owner=_signed_owner(authenticator))


def get_balance(*, authenticator: Authenticator, address: str) -> str:
    if not address:
        raise bad_input()
    return authenticator.wallet.get_balance(authenticator.id_token, address=address)


def create_account(db: Session, *, authenticator: Authenticator, account_type: AccountType):
    uid = authenticator.wallet.verify_user(authenticator.id_token)

    if account_type == AccountType.TRADITIONAL:
        wallet = authenticator.wallet.create_wallet(authenticator.id_token)
        owner = wallet["address"].lower()
        with unit_of_work(db):
            created = repository.insert_account_if_absent(
                db, owner=owner, account_type=AccountType.TRADITIONAL, auth_uid=wallet["uid"]
            )
    else:
        if repository.get_account_by_auth_uid(db, auth_uid=uid):
            raise bad_request()
        owner = _signed_owner(authenticator)
        with unit_of_work(db):
            created = repository.insert_account_if_absent(
                db, owner=owner, account_type=AccountType.WALLET
            )

    logger.info("Account %s | owner=%s | type=%s", "created" if created else "kept", owner, account_type.value)
    return repository.get_account_by_owner(db, owner=owner)


def cache_session(
    db: Session,
    *,
    authenticator: Authenticator,
    cache: SessionCachePort,
    address: str,
    profile_id: str,
    account_id: str,
):
    if not address or not profile_id or not account_id:
        raise bad_input()
    authenticator.require_profile(db, account_id=account_id, owner=address, profile_id=profile_id)
    cache.set_default_profile(address, profile_id)
    return {"status": "Ok"}


def validate_auth(
    db: Session,
    *,
    authenticator: Optional[Authenticator],
    account_id: Optional[str],
    owner: Optional[str],
    profile_id: Optional[str],
) -> bool:
    if authenticator is None or not account_id or not owner or not profile_id:
        return False
    return authenticator.is_authentic(db, account_id=account_id, owner=owner, profile_id=profile_id)
