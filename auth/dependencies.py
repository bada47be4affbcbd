"""
FastAPI dependencies for authentication.

Provides ``db_session`` and ``get_current_member`` dependencies that
are used across all protected routes.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from api.errors import Forbidden, Unauthorized
from auth.tokens import TokenClaims, TokenError, verify_token
from database.session import get_db_session

logger = logging.getLogger(__name__)

# auto_error is off so a missing header maps to 401 rather than the framework default.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


async def get_current_member(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> TokenClaims:
    """
    Extract and verify the Bearer token, returning its claims.

    Missing token → 401; any verification failure → 403 with one message,
    whatever the underlying reason.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access token required")

    try:
        claims = verify_token(credentials.credentials)
    except TokenError as exc:
        logger.info("Rejected bearer token on %s (%s)", request.url.path, exc.kind.value)
        raise Forbidden("Invalid or expired token") from exc

    request.state.member = claims
    return claims
