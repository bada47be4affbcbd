"""
JWT bearer token creation and verification.

Tokens are HS256-signed JWTs carrying the member's ``id``, ``email`` and
``role`` plus ``iat``/``exp``.  Secret key is loaded from
``config.jwt_secret`` (env var: ``JWT_SECRET``) and is mandatory.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum

import jwt
from pydantic import BaseModel, ValidationError

from config.settings import config

logger = logging.getLogger(__name__)


class TokenClaims(BaseModel):
    """Decoded token payload."""
    id: int
    email: str
    role: str
    iat: int
    exp: int


class TokenErrorKind(str, Enum):
    MALFORMED = "malformed"
    EXPIRED = "expired"
    INVALID_SIGNATURE = "invalid_signature"


class TokenError(Exception):
    """Token rejected; ``kind`` is for server-side logs only."""

    def __init__(self, kind: TokenErrorKind, reason: str = "") -> None:
        super().__init__(f"{kind.value}: {reason}" if reason else kind.value)
        self.kind = kind


def create_token(
    member_id: int,
    email: str,
    role: str,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed token that expires ``jwt_expiry_seconds`` after issuance."""
    now = issued_at or datetime.now(timezone.utc)
    payload = {
        "id": member_id,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=config.jwt_expiry_seconds)).timestamp()),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def verify_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry and return the embedded claims.

    Raises ``TokenError`` classified as malformed, expired or
    invalid_signature.
    """
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret,
            algorithms=[config.jwt_algorithm],
            options={"require": ["id", "email", "role", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError(TokenErrorKind.EXPIRED, str(exc)) from exc
    except jwt.InvalidSignatureError as exc:
        raise TokenError(TokenErrorKind.INVALID_SIGNATURE, str(exc)) from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError(TokenErrorKind.MALFORMED, str(exc)) from exc

    try:
        return TokenClaims(**payload)
    except ValidationError as exc:
        raise TokenError(TokenErrorKind.MALFORMED, "unexpected claim types") from exc
