"""Decrypt strings produced by CryptoJS ``AES.encrypt(text, passphrase)``.

The ciphertext is base64 of ``b"Salted__" + salt(8) + body``; key and iv are
derived from the passphrase with OpenSSL's EVP_BytesToKey (MD5, one round).
"""

import base64
import hashlib

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

SALT_HEADER = b"Salted__"
KEY_SIZE = 32
IV_SIZE = 16


def evp_bytes_to_key(passphrase: bytes, salt: bytes, key_size: int = KEY_SIZE, iv_size: int = IV_SIZE):
    derived = b""
    block = b""
    while len(derived) < key_size + iv_size:
        block = hashlib.md5(block + passphrase + salt).digest()
        derived += block
    return derived[:key_size], derived[key_size:key_size + iv_size]


def decrypt_string(text: str, passphrase: str) -> str:
    """
    Decrypt a CryptoJS AES string.

    Returns an empty string when the payload is not in the salted format or
    does not decode as UTF-8, mirroring CryptoJS's empty result.
    """
    raw = base64.b64decode(text)
    if not raw.startswith(SALT_HEADER):
        return ""
    salt, body = raw[8:16], raw[16:]
    key, iv = evp_bytes_to_key(passphrase.encode(), salt)

    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(body) + decryptor.finalize()
    unpadder = padding.PKCS7(128).unpadder()
    try:
        plain = unpadder.update(padded) + unpadder.finalize()
        return plain.decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return ""


def encrypt_string(text: str, passphrase: str, *, salt: bytes) -> str:
    """Inverse of :func:`decrypt_string`; used by publishers and tests."""
    key, iv = evp_bytes_to_key(passphrase.encode(), salt)
    padder = padding.PKCS7(128).padder()
    padded = padder.update(text.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    body = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(SALT_HEADER + salt + body).decode()
