"""Account repository layer."""

from sqlalchemy import insert
from sqlalchemy.orm import Session

from core.db import insert_if_absent


def get_account_by_owner(db: Session, *, owner: str):
    from models import Account

    return db.query(Account).filter(Account.owner == owner.lower()).first()


def get_account_by_auth_uid(db: Session, *, auth_uid: str):
    from models import Account

    return db.query(Account).filter(Account.auth_uid == auth_uid).first()


def insert_account_if_absent(db: Session, *, owner: str, account_type, auth_uid=None) -> bool:
    """Create the account for ``owner`` unless one already exists."""
    from models import Account, generate_id

    statement = insert(Account).values(
        id=generate_id(),
        owner=owner.lower(),
        auth_uid=auth_uid,
        type=account_type,
    )
    return insert_if_absent(db, statement)
