"""Account authenticity: the single authorization check every mutation runs.

The caller proves who they are twice: the wallet service vouches for the
bearer id token, and (for wallet-only accounts) the signed login message
recovers their address. The account found that way must match both the
account id and the owner address the client sent in the request.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.errors import AppError, ExternalServiceError, not_found, unauthorized
from core.identity import InvalidSignatureError, recover_address
from core.ports.wallet import WalletPort

logger = logging.getLogger(__name__)


class Authenticator:
    """Request-scoped authenticity validator.

    Holds the caller's credentials (bearer id token and optional wallet
    signature) together with the wallet client used to verify them.
    """

    def __init__(self, wallet: WalletPort, *, id_token: str, signature: Optional[str], message: str):
        self.wallet = wallet
        self.id_token = id_token
        self.signature = signature
        self.message = message

    def resolve_account(self, db: Session):
        """Steps 1-2: the account behind the caller's credentials, or None."""
        from models import Account

        uid = self.wallet.verify_user(self.id_token)
        account = db.query(Account).filter(Account.auth_uid == uid).first()
        if not account and self.signature:
            address = recover_address(self.signature, message=self.message)
            account = db.query(Account).filter(Account.owner == address.lower()).first()
        return account

    def validate(self, db: Session, *, account_id: str, owner: str):
        from models import Account

        account = self.resolve_account(db)
        if not account:
            raise unauthorized()

        claimed = db.query(Account).filter(Account.id == account_id).first()
        if not claimed:
            raise unauthorized()

        if account.owner.lower() != claimed.owner.lower():
            raise unauthorized()
        if claimed.owner.lower() != (owner or "").lower():
            raise unauthorized()

        return account

    def require_profile(self, db: Session, *, account_id: str, owner: str, profile_id: str):
        """Validate the caller, then make sure ``profile_id`` is one of theirs."""
        from models import Profile

        account = self.validate(db, account_id=account_id, owner=owner)
        profile = db.query(Profile).filter(Profile.id == profile_id).first()
        if not profile:
            raise not_found()
        if profile.owner.lower() != account.owner.lower():
            logger.info(
                "Profile ownership mismatch | profile=%s | account=%s", profile_id, account.id
            )
            raise unauthorized()
        return profile

    def is_authentic(self, db: Session, *, account_id: str, owner: str, profile_id: str) -> bool:
        """Soft-fail variant behind the validate-auth endpoint."""
        try:
            self.require_profile(db, account_id=account_id, owner=owner, profile_id=profile_id)
        except (AppError, ExternalServiceError, InvalidSignatureError, ValueError):
            return False
        return True
