"""Signed session cookie for the dashboard routes.

The cookie value is a compact HS256 token whose claims are validated as
`SessionClaims` on every request.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Request, Response
from pydantic import ValidationError

from app.core.config import get_config
from app.core.exceptions import AuthenticationError, AuthError
from app.schemas.auth import SessionClaims

SESSION_COOKIE = "session"
_TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class SessionUser:
    user_id: str
    email: str


def _segment(document: dict) -> str:
    raw = json.dumps(document, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _signature(signing_input: str, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), signing_input.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def create_session_token(user_id: str, email: str, secret: str, ttl_minutes: int = 60) -> str:
    """Sign the claims stored in the session cookie."""
    if not secret:
        raise AuthError("Session secret must be configured.")
    issued = datetime.now(timezone.utc)
    claims = SessionClaims(
        sub=user_id,
        email=email,
        iat=int(issued.timestamp()),
        exp=int((issued + timedelta(minutes=ttl_minutes)).timestamp()),
        jti=str(uuid.uuid4()),
    )
    signing_input = f"{_segment(_TOKEN_HEADER)}.{_segment(claims.model_dump())}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def read_session_token(token: str, secret: str) -> SessionClaims:
    """Verify signature and expiry, returning the validated claims.

    Every failure is an AuthenticationError so the caller can send the
    visitor back to the login page.
    """
    if not secret:
        raise AuthenticationError("Session secret must be configured.")
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError("Invalid token format.")
    header_segment, claims_segment, signature = parts
    expected = _signature(f"{header_segment}.{claims_segment}", secret)
    if not hmac.compare_digest(expected, signature):
        raise AuthenticationError("Invalid token signature.")

    try:
        padded = claims_segment + "=" * (-len(claims_segment) % 4)
        claims = SessionClaims.model_validate_json(base64.urlsafe_b64decode(padded))
    except (ValueError, ValidationError) as exc:
        raise AuthenticationError("Invalid session claims.") from exc

    if claims.exp < int(datetime.now(timezone.utc).timestamp()):
        raise AuthenticationError("Token has expired.")
    return claims


def get_current_user(request: Request) -> SessionUser:
    """Resolve the signed-in user or raise AuthenticationError."""
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise AuthenticationError("Sign-in required.")
    claims = read_session_token(token, secret=get_config().SESSION_SECRET)
    return SessionUser(user_id=claims.sub, email=claims.email)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=get_config().SESSION_TTL_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE, path="/")
