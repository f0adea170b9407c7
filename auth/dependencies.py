"""
FastAPI dependencies for authentication.

Provides ``db_session`` and the ``get_current_user`` gate used by every
protected route, plus accessors for the token signer and password hasher
that the app factory puts on ``app.state``.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import TokenClaims, TokenSigner
from auth.password import PasswordHasher
from database.session import get_db_session

logger = logging.getLogger(__name__)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    signer: TokenSigner = Depends(get_token_signer),
) -> TokenClaims:
    """
    Extract and verify the Bearer token, returning its claims.

    401 when no token is presented, 403 when the token does not verify.
    """
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
        )
    claims = signer.verify(token)
    if claims is None:
        logger.info("Rejected invalid bearer token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized: Invalid token",
        )
    return claims
