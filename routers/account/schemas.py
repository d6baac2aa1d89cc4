from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.schemas import ProfileSummary
from models import AccountType


class AccountTypeRequest(BaseModel):
    account_type: AccountType = Field(..., description="TRADITIONAL (custodial wallet) or WALLET (self custody)")


class AccountResponse(BaseModel):
    id: str
    owner: str
    auth_uid: Optional[str] = None
    type: AccountType
    created_at: datetime
    updated_at: datetime
    profiles: List[ProfileSummary] = []
    default_profile: Optional[ProfileSummary] = None


class BalanceResponse(BaseModel):
    balance: str


class CacheSessionRequest(BaseModel):
    address: str
    profile_id: str
    account_id: str


class ValidateAuthRequest(BaseModel):
    account_id: Optional[str] = None
    owner: Optional[str] = None
    profile_id: Optional[str] = None


class ValidateAuthResponse(BaseModel):
    is_authenticated: bool
