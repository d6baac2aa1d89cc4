import hashlib
import hmac

import pytest

from utils.crypto import decrypt_string, encrypt_string
from utils.signatures import (
    cloudflare_signature_expired,
    is_valid_alchemy_signature,
    is_valid_cloudflare_signature,
    parse_cloudflare_signature,
)


def test_alchemy_signature():
    body = b'{"webhookId": "wh_1"}'
    digest = hmac.new(b"key", body, hashlib.sha256).hexdigest()
    assert is_valid_alchemy_signature(body, digest, signing_key="key") is True
    assert is_valid_alchemy_signature(body, digest, signing_key="other") is False
    assert is_valid_alchemy_signature(body, None, signing_key="key") is False


def test_cloudflare_signature_header():
    assert parse_cloudflare_signature("time=1700000000,sig1=abc") == ("1700000000", "abc")
    with pytest.raises(KeyError):
        parse_cloudflare_signature("sig1=abc")


def test_cloudflare_signature_age():
    assert cloudflare_signature_expired("1000", now=1000 + 3600) is False
    assert cloudflare_signature_expired("1000", now=1000 + 3601) is True


def test_cloudflare_signature():
    body = b'{"uid": "v1"}'
    digest = hmac.new(b"key", b"1700000000." + body, hashlib.sha256).hexdigest()
    assert is_valid_cloudflare_signature(body, "1700000000", digest, signing_key="key") is True
    assert is_valid_cloudflare_signature(body, "1700000001", digest, signing_key="key") is False


def test_decrypts_cryptojs_payload():
    encrypted = encrypt_string("publish-123", "passphrase", salt=b"saltsalt")
    assert encrypted.startswith("U2FsdGVkX1")
    assert decrypt_string(encrypted, "passphrase") == "publish-123"


def test_wrong_passphrase_or_format_yields_empty():
    encrypted = encrypt_string("publish-123", "passphrase", salt=b"saltsalt")
    assert decrypt_string(encrypted, "wrong") != "publish-123"
    assert decrypt_string("bm90IHNhbHRlZA==", "passphrase") == ""
