"""Credentials provider the login action delegates to."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.auth.session import create_session_token
from app.core.config import Config, get_config
from app.core.exceptions import CredentialsSignin
from app.core.security import verify_password
from app.schemas.auth import LoginRequest
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


class CredentialsProvider:
    """Check an email/password pair against the users table.

    `sign_in` returns a session token on success and raises
    CredentialsSignin when the pair does not identify a user. Other
    AuthError subclasses signal a provider fault (e.g. no session secret);
    anything else, database errors included, propagates untouched.
    """

    def __init__(self, db: Session, config: Config | None = None) -> None:
        self.users = UserService(db=db)
        self.config = config or get_config()

    def sign_in(self, form: Mapping[str, Any]) -> str:
        try:
            credentials = LoginRequest.model_validate(
                {"email": form.get("email"), "password": form.get("password")}
            )
        except ValidationError as exc:
            raise CredentialsSignin("Malformed credentials.") from exc

        user = self.users.get_by_email(credentials.email)
        if user is None or not verify_password(
            credentials.password, user.hashed_password, pepper=self.config.PASSWORD_PEPPER
        ):
            raise CredentialsSignin("Credentials do not match a user.")

        logger.info("auth.signed_in", extra={"event": "auth.signed_in", "user_id": user.id})
        return create_session_token(
            user_id=user.id,
            email=user.email,
            secret=self.config.SESSION_SECRET,
            ttl_minutes=self.config.SESSION_TTL_MINUTES,
        )
