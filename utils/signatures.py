"""Webhook signature checks."""

import hashlib
import hmac
import time
from typing import Optional

CLOUDFLARE_MAX_AGE_SECONDS = 60 * 60


def _hex_digest(key: str, payload: bytes) -> str:
    return hmac.new(key.encode(), payload, hashlib.sha256).hexdigest()


def is_valid_alchemy_signature(raw_body: bytes, signature: str, *, signing_key: str) -> bool:
    return hmac.compare_digest(_hex_digest(signing_key, raw_body), signature or "")


def parse_cloudflare_signature(header: str):
    """``time=<unix>,sig1=<hex>`` -> ``(time, sig1)``."""
    parts = dict(item.split("=", 1) for item in header.split(",") if "=" in item)
    return parts["time"], parts["sig1"]


def cloudflare_signature_expired(timestamp: str, *, now: Optional[float] = None) -> bool:
    now = time.time() if now is None else now
    return now - float(timestamp) > CLOUDFLARE_MAX_AGE_SECONDS


def is_valid_cloudflare_signature(raw_body: bytes, timestamp: str, signature: str, *, signing_key: str) -> bool:
    source = timestamp.encode() + b"." + raw_body
    return hmac.compare_digest(_hex_digest(signing_key, source), signature)
