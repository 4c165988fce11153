"""
Reversible encryption for in-game account passwords.

Admins need the customer's game password to log in and work on the
order, so it cannot be hashed.  It is encrypted with AES-256-CBC under
the configured ``ENCRYPTION_KEY`` and stored as an envelope of the form
``<iv hex>:<ciphertext hex>``.  A fresh IV is drawn for every call, so
encrypting the same text twice gives different envelopes.

The key is static, so this only protects the snapshot file against
casual inspection.
"""

import logging
import os
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .config import settings

logger = logging.getLogger(__name__)

# Returned instead of raising when an envelope cannot be decrypted.
UNAVAILABLE = "[encrypted]"

_KEY_SIZE = 32
_IV_SIZE = 16


def _key_bytes(key: Optional[str] = None) -> bytes:
    """Space-pad or truncate the configured key to 32 bytes."""
    raw = (key if key is not None else settings.encryption_key).encode("utf-8")
    return raw.ljust(_KEY_SIZE, b" ")[:_KEY_SIZE]


def encrypt_secret(plaintext: str, key: Optional[str] = None) -> str:
    """Encrypt ``plaintext`` and return an ``iv:ciphertext`` envelope."""
    iv = os.urandom(_IV_SIZE)
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(_key_bytes(key)), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return f"{iv.hex()}:{ciphertext.hex()}"


def decrypt_secret(envelope: str, key: Optional[str] = None) -> str:
    """Decrypt an envelope produced by :func:`encrypt_secret`.

    Corrupt envelopes and wrong keys yield :data:`UNAVAILABLE` so that one
    bad record does not break the admin order listing.
    """
    try:
        iv_hex, ciphertext_hex = envelope.split(":", 1)
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(ciphertext_hex)
        decryptor = Cipher(algorithms.AES(_key_bytes(key)), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        data = unpadder.update(padded) + unpadder.finalize()
        return data.decode("utf-8")
    except (ValueError, TypeError, AttributeError, UnicodeDecodeError) as exc:
        logger.warning("Could not decrypt stored secret: %s", exc)
        return UNAVAILABLE
