# -*- coding: utf-8 -*-
"""
Auth — password hashes, session tokens and the FastAPI user dependency.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt>$<digest>``. Tokens are
compact HS256 JWTs carrying the user id and email; the browser client may send
them as a bearer header or keep them in the ``nutrilens_token`` cookie.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request

from ..config import settings
from ..timeutil import utc_now
from .storage import get_user_by_id

TOKEN_COOKIE_NAME = "nutrilens_token"

_HASH_ALG = "sha256"
_HASH_ITERATIONS = 200_000
_SALT_BYTES = 16
_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _json_b64(obj: Dict[str, Any]) -> str:
    return _b64(json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


# ---- passwords ----


def hash_password(password: str) -> str:
    salt = os.urandom(_SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(_HASH_ALG, password.encode("utf-8"), salt, _HASH_ITERATIONS)
    return "$".join((f"pbkdf2_{_HASH_ALG}", str(_HASH_ITERATIONS), _b64(salt), _b64(digest)))


def verify_password(password: str, stored: str) -> bool:
    parts = stored.split("$")
    if len(parts) != 4 or not parts[0].startswith("pbkdf2_"):
        return False
    scheme, iterations, salt, digest = parts
    try:
        candidate = hashlib.pbkdf2_hmac(
            scheme[len("pbkdf2_"):], password.encode("utf-8"), _unb64(salt), int(iterations)
        )
        return hmac.compare_digest(candidate, _unb64(digest))
    except (ValueError, TypeError):
        return False


# ---- tokens ----


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str
    issued_at: int
    expires_at: int


def _signature(message: str) -> bytes:
    return hmac.new(settings.jwt_secret.encode("utf-8"), message.encode("ascii"), hashlib.sha256).digest()


def create_access_token(*, user_id: str, email: str) -> str:
    issued = utc_now()
    expires = issued + timedelta(days=int(settings.token_ttl_days))
    message = ".".join(
        (
            _json_b64(_JWT_HEADER),
            _json_b64(
                {
                    "sub": user_id,
                    "email": email,
                    "iat": int(issued.timestamp()),
                    "exp": int(expires.timestamp()),
                }
            ),
        )
    )
    return f"{message}.{_b64(_signature(message))}"


def read_token(token: str) -> TokenClaims:
    """Verify signature and expiry; any failure is a 401."""
    try:
        header_part, claims_part, sig_part = token.split(".")
        if not hmac.compare_digest(_signature(f"{header_part}.{claims_part}"), _unb64(sig_part)):
            raise ValueError("signature mismatch")
        claims = json.loads(_unb64(claims_part).decode("utf-8"))
        if not isinstance(claims, dict):
            raise ValueError("claims must be an object")
        parsed = TokenClaims(
            user_id=str(claims.get("sub") or ""),
            email=str(claims.get("email") or ""),
            issued_at=int(claims.get("iat") or 0),
            expires_at=int(claims.get("exp") or 0),
        )
    except (ValueError, TypeError, UnicodeError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    if not parsed.user_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    if parsed.expires_at and parsed.expires_at < int(utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    return parsed


# ---- request helpers ----


def _request_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization") or ""
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return request.cookies.get(TOKEN_COOKIE_NAME) or None


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    cached = getattr(request.state, "user", None)
    if cached:
        return cached

    token = _request_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = get_user_by_id(read_token(token).user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
