"""
JWT-style token issuing and verification.

Tokens are urlsafe-base64 JSON claim bundles signed with HMAC-SHA256.
They are signed, not encrypted: anyone holding a token can read its claims.
The secret is handed to ``TokenSigner`` by the app factory
(env var: ``JWT_SECRET``).

No ``exp`` claim is written unless ``expiry_seconds`` is configured, so by
default an issued token stays valid for as long as the secret does.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import logging
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class TokenClaims(BaseModel):
    user_id: str
    username: str
    iat: int
    exp: Optional[int] = None


class TokenSigner:
    def __init__(self, secret: str, expiry_seconds: Optional[int] = None):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str, username: str) -> str:
        """Create a signed token carrying ``user_id`` and ``username``."""
        now = int(time.time())
        payload = {"user_id": user_id, "username": username, "iat": now}
        if self._expiry_seconds:
            payload["exp"] = now + self._expiry_seconds
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Return the token's claims, or ``None`` when the token is malformed,
        carries a bad signature, or has expired.
        """
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return None
        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except (binascii.Error, ValueError):
            return None
        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            return None
        try:
            claims = TokenClaims.model_validate_json(raw)
        except ValidationError:
            logger.warning("Signed token carried an unreadable claim bundle")
            return None
        if claims.exp is not None and claims.exp < time.time():
            return None
        return claims
