"""
Auth API routes — register, login.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import db_session, get_password_hasher, get_token_signer
from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from database.helpers import create_user, get_user_by_username

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class Credentials(BaseModel):
    username: Optional[str] = Field(None, max_length=64)
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


def _require_credentials(req: Credentials) -> None:
    if not req.username or not req.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing username or password",
        )


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=MessageResponse)
async def register(
    req: Credentials,
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> Dict[str, str]:
    """Register a new user."""
    _require_credentials(req)
    try:
        user = await create_user(session, req.username, hasher.hash(req.password))
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.info("Registration refused, username %r is taken", req.username)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )
    except SQLAlchemyError:
        logger.exception("Failed to register user %r", req.username)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user",
        )

    logger.info("Registered user %s (%s)", user.username, user.user_id)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=TokenResponse)
async def login(
    req: Credentials,
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, str]:
    """Login with username + password."""
    _require_credentials(req)
    try:
        user = await get_user_by_username(session, req.username)
    except SQLAlchemyError:
        logger.exception("User lookup failed during login")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to login",
        )

    # Same answer for an unknown user and a wrong password.
    if user is None or not hasher.verify(req.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    token = signer.issue(str(user.user_id), user.username)
    logger.info("Login: %s (%s)", user.username, user.user_id)
    return {"token": token}
