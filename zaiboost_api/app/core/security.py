"""
Security helpers for password hashing and bearer-token authentication.

Tokens follow the JWT layout ``header.payload.signature`` with each part
base64url encoded without padding.  The signature is HMAC-SHA256 over
``header.payload`` keyed with ``JWT_SECRET``, and the payload carries
the user's identity claims plus an ``exp`` field in epoch milliseconds.
There is no revocation list or refresh flow; a token is valid until its
expiry.

Passwords are stored as ``salt:hash`` where the salt is 16 random bytes
in hex and the hash is a 64-byte PBKDF2-HMAC-SHA256 digest in hex.

The FastAPI dependencies ``get_current_user`` and ``require_roles`` sit
at the bottom of the module.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings

PBKDF2_ITERATIONS = 100_000
PBKDF2_KEY_LENGTH = 64
SALT_BYTES = 16

_HEADER = {"alg": "HS256", "typ": "JWT"}


class TokenError(ValueError):
    """Base class for token verification failures."""


class MalformedToken(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


class TokenExpired(TokenError):
    pass


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_access_token(
    claims: Dict[str, Any],
    expires_hours: Optional[float] = None,
    secret: Optional[str] = None,
) -> str:
    """Create a signed token carrying ``claims``.

    Parameters
    ----------
    claims : dict
        Identity claims, normally ``{"id", "username", "role"}``.
    expires_hours : Optional[float]
        Lifetime in hours.  Defaults to ``settings.token_expire_hours``.
    secret : Optional[str]
        Signing key.  Defaults to ``settings.jwt_secret``.

    Returns
    -------
    str
        The ``header.payload.signature`` token.
    """
    hours = settings.token_expire_hours if expires_hours is None else expires_hours
    payload = dict(claims)
    payload["exp"] = _now_ms() + int(hours * 3600 * 1000)
    header_b64 = _b64_url_encode(json.dumps(_HEADER, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret or settings.jwt_secret))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """Verify a token and return its payload.

    Raises
    ------
    MalformedToken
        The token does not have three segments or its payload is not JSON.
    InvalidSignature
        The signature does not match the header and payload.
    TokenExpired
        The current time is past the ``exp`` field.
    """
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise MalformedToken("Malformed token")
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected = _b64_url_encode(_sign(signing_input, secret or settings.jwt_secret))
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(expected.encode("utf-8"), signature_b64.encode("utf-8")):
        raise InvalidSignature("Invalid signature")
    try:
        payload = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        expires_at = int(payload["exp"])
    except (ValueError, KeyError, TypeError) as exc:
        raise MalformedToken("Malformed token payload") from exc
    if expires_at < _now_ms():
        raise TokenExpired("Token expired")
    return payload


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    The hex salt string itself is fed to PBKDF2 as the salt, giving
    ``"<salt hex>:<hash hex>"``.
    """
    salt = os.urandom(SALT_BYTES).hex()
    dk = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS, PBKDF2_KEY_LENGTH
    )
    return f"{salt}:{dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a stored ``salt:hash`` string.

    A malformed stored value is treated as a failed verification.
    """
    if not isinstance(hashed_password, str) or hashed_password.count(":") != 1:
        return False
    salt, hash_hex = hashed_password.split(":", 1)
    if not salt or not hash_hex:
        return False
    dk = hashlib.pbkdf2_hmac(
        "sha256", plain_password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS, PBKDF2_KEY_LENGTH
    )
    return hmac.compare_digest(dk.hex().encode("utf-8"), hash_hex.encode("utf-8"))


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------

security = HTTPBearer(auto_error=False)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, Any]:
    """Dependency that returns the claims of the authenticated user.

    Raises 401 when the header is missing, the token fails verification
    or the user it names no longer exists in the ledger.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    from .store import get_ledger

    user = get_ledger().get_user(payload.get("id"))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"id": user.id, "username": user.username, "role": user.role}


def require_roles(*roles: str) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    """Dependency factory allowing only users whose role is in ``roles``."""

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required" if roles == ("admin",) else "Insufficient permissions",
            )
        return current_user

    return _role_dependency


require_admin = require_roles("admin")
