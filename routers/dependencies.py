import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from config import Settings, get_settings
from core.authenticity import Authenticator
from core.db import get_db  # noqa: F401  re-exported for domain routers
from core.errors import unauthenticated
from core.notifications import NotificationEmitter
from core.pubsub import RedisMessageBus
from core.session_cache import RedisSessionCache
from utils.cloudflare_client import CloudflareStreamClient
from utils.upload_client import UploadClient
from utils.wallet_client import WalletClient

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "auth-wallet-signature"


def get_id_token(request: Request) -> Optional[str]:
    """The bearer id token from the Authorization header, if any."""
    auth_header = request.headers.get("authorization") or request.headers.get("Authorization")
    if not auth_header or not auth_header.lower().startswith("bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


def get_signature(request: Request) -> Optional[str]:
    return request.headers.get(SIGNATURE_HEADER) or None


def get_wallet_client(settings: Settings = Depends(get_settings)) -> WalletClient:
    return WalletClient(settings.private_service_url, timeout=settings.http_timeout_seconds)


def get_upload_client(settings: Settings = Depends(get_settings)) -> UploadClient:
    return UploadClient(settings.upload_service_url, timeout=settings.http_timeout_seconds)


def get_stream_client(settings: Settings = Depends(get_settings)) -> CloudflareStreamClient:
    return CloudflareStreamClient(
        settings.cloudflare_base_url,
        account_id=settings.cloudflare_account_id,
        api_token=settings.cloudflare_api_token,
        timeout=settings.http_timeout_seconds,
    )


@lru_cache()
def _message_bus(redis_url: str) -> RedisMessageBus:
    return RedisMessageBus(redis_url)


@lru_cache()
def _session_cache(redis_url: str) -> RedisSessionCache:
    return RedisSessionCache(redis_url)


def get_message_bus(settings: Settings = Depends(get_settings)):
    return _message_bus(settings.redis_url)


def get_session_cache(settings: Settings = Depends(get_settings)):
    return _session_cache(settings.redis_url)


def get_notification_emitter(
    bus=Depends(get_message_bus), settings: Settings = Depends(get_settings)
) -> NotificationEmitter:
    return NotificationEmitter(bus, settings.new_notification_topic)


def get_optional_authenticator(
    request: Request,
    wallet=Depends(get_wallet_client),
    settings: Settings = Depends(get_settings),
) -> Optional[Authenticator]:
    """Like :func:`get_authenticator` but None when no id token was sent."""
    id_token = get_id_token(request)
    if not id_token:
        return None
    return Authenticator(
        wallet,
        id_token=id_token,
        signature=get_signature(request),
        message=settings.message,
    )


def get_authenticator(
    authenticator: Optional[Authenticator] = Depends(get_optional_authenticator),
) -> Authenticator:
    """
    Caller credentials for the authenticity check.

    Requires a bearer id token; the wallet signature header is optional and
    only needed for accounts that are not bound to an external auth uid.
    """
    if authenticator is None:
        raise unauthenticated()
    return authenticator
