"""Recover the wallet address that signed the platform login message."""

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature
from eth_utils.exceptions import ValidationError


class InvalidSignatureError(ValueError):
    """The wallet signature could not be decoded or recovered."""


def recover_address(signature: str, *, message: str) -> str:
    """Return the checksummed address that produced ``signature`` over ``message``.

    The message is signed with the EIP-191 personal-sign prefix. Any malformed
    signature (bad hex, wrong length, out-of-range values) raises
    ``InvalidSignatureError``.
    """
    try:
        return Account.recover_message(encode_defunct(text=message), signature=signature)
    except (BadSignature, ValidationError, ValueError, TypeError) as exc:
        raise InvalidSignatureError(str(exc)) from exc
