"""
Security helpers for password hashing and bearer token authentication.

Tokens are JSON Web Tokens signed with HMAC‑SHA256 (``HS256``) and
base64url encoded.  They embed the id of the user they were issued to
in the ``sub`` claim and, optionally, an expiration timestamp
(``exp``).  Issuing tokens is a developer tooling concern here (see
``create_token.py``); the request path only ever verifies them.

``TokenVerifier`` turns the raw ``Authorization`` header into an
``AuthenticatedSubject`` or raises one of the ``Unauthorized``
subclasses from ``core.errors``.  Everything up to and including the
signature and claim checks is done without touching the store, so a
request with a missing or forged credential never reaches the
database.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi.security.utils import get_authorization_scheme_param

from .db import MAX_ROW_ID
from .errors import (
    InvalidClaims,
    InvalidSignature,
    MalformedCredential,
    MissingCredential,
    SubjectNotFound,
)

logger = logging.getLogger(__name__)

SUPPORTED_ALGORITHM = "HS256"
PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    claims: Dict[str, Any],
    secret_key: str,
    expires_in: Optional[int] = None,
) -> str:
    """Create a signed token carrying ``claims``.

    Parameters
    ----------
    claims : dict
        Claims to embed, e.g. ``{"sub": 42}``.
    secret_key : str
        HMAC secret shared with the verifier.
    expires_in : Optional[int]
        Lifetime in seconds.  When omitted, no ``exp`` claim is added
        unless ``claims`` already carries one.

    Returns
    -------
    str
        ``header.payload.signature``, each part base64url encoded.
    """
    to_encode = dict(claims)
    if expires_in is not None:
        to_encode["exp"] = int(time.time()) + expires_in
    header = {"alg": SUPPORTED_ALGORITHM, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def _decode_segment(segment: str) -> Dict[str, Any]:
    try:
        value = json.loads(_b64_url_decode(segment).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        raise MalformedCredential("Token is not a valid JWT") from exc
    if not isinstance(value, dict):
        raise MalformedCredential("Token is not a valid JWT")
    return value


def decode_access_token(token: str, secret_key: str, algorithm: str = SUPPORTED_ALGORITHM) -> Dict[str, Any]:
    """Verify a token's signature and return its claims.

    Raises ``MalformedCredential`` when the token cannot be parsed,
    ``InvalidSignature`` when the declared algorithm is not the expected
    one or the signature does not match, and ``InvalidClaims`` when the
    token has expired.
    """
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise MalformedCredential("Token is not a valid JWT")
    header_b64, payload_b64, signature_b64 = parts
    header = _decode_segment(header_b64)
    if algorithm != SUPPORTED_ALGORITHM or header.get("alg") != algorithm:
        raise InvalidSignature("Unexpected signing method")
    try:
        actual_sig = _b64_url_decode(signature_b64)
    except binascii.Error as exc:
        raise MalformedCredential("Token is not a valid JWT") from exc
    expected_sig = _sign(f"{header_b64}.{payload_b64}".encode("utf-8"), secret_key)
    if not hmac.compare_digest(expected_sig, actual_sig):
        raise InvalidSignature()
    claims = _decode_segment(payload_b64)
    if "exp" in claims:
        exp = claims["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidClaims("Invalid expiration claim")
        if exp < time.time():
            raise InvalidClaims("Token has expired")
    return claims


def subject_id_from_claims(claims: Dict[str, Any]) -> int:
    """Extract the user id from ``sub`` (or the legacy ``userId`` claim)."""
    raw = claims.get("sub", claims.get("userId"))
    if isinstance(raw, bool) or raw is None:
        raise InvalidClaims()
    if isinstance(raw, int):
        user_id = raw
    elif isinstance(raw, float) and raw.is_integer():
        user_id = int(raw)
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        user_id = int(raw)
    else:
        raise InvalidClaims()
    # Ids outside the row id range cannot name a stored user.
    if not 1 <= user_id <= MAX_ROW_ID:
        raise InvalidClaims()
    return user_id


@dataclass(frozen=True)
class AuthenticatedSubject:
    """The verified identity behind a request."""

    user_id: int
    user: Any


class TokenVerifier:
    """Validate bearer credentials and resolve them to stored users.

    ``users`` is any object exposing an awaitable ``get(user_id)`` that
    returns the user or ``None``; in the application it is a
    ``UserService``.
    """

    def __init__(self, secret_key: str, algorithm: str, users: Any) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.users = users

    def extract_token(self, authorization: Optional[str]) -> str:
        if not authorization or not authorization.strip():
            raise MissingCredential()
        scheme, token = get_authorization_scheme_param(authorization)
        if scheme.lower() != "bearer" or not token:
            raise MalformedCredential("Bearer token missing")
        return token

    async def verify(self, authorization: Optional[str]) -> AuthenticatedSubject:
        token = self.extract_token(authorization)
        claims = decode_access_token(token, self.secret_key, self.algorithm)
        user_id = subject_id_from_claims(claims)
        user = await self.users.get(user_id)
        if user is None:
            logger.info("Token subject %s does not match any user", user_id)
            raise SubjectNotFound()
        return AuthenticatedSubject(user_id=user_id, user=user)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Returns the random 16‑byte salt and the derived key, hex encoded and
    separated by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"

