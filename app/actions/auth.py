"""Login action."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.auth.provider import CredentialsProvider
from app.core.exceptions import AuthError, CredentialsSignin

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_AUTH_MESSAGE = "Something went wrong."


@dataclass(frozen=True)
class LoginOutcome:
    message: str | None = None
    session_token: str | None = None


def authenticate(
    prev_state: LoginOutcome | None,
    form: Mapping[str, Any],
    provider: CredentialsProvider,
) -> LoginOutcome:
    """Sign in through the provider.

    ``prev_state`` is accepted for form-state symmetry and ignored. Errors
    that are not AuthError propagate to the caller.
    """
    try:
        token = provider.sign_in(form)
    except CredentialsSignin:
        logger.info("auth.sign_in_rejected", extra={"event": "auth.sign_in_rejected"})
        return LoginOutcome(message=INVALID_CREDENTIALS_MESSAGE)
    except AuthError as exc:
        logger.warning(
            "auth.sign_in_failed",
            extra={"event": "auth.sign_in_failed", "detail": str(exc)},
        )
        return LoginOutcome(message=GENERIC_AUTH_MESSAGE)
    return LoginOutcome(session_token=token)
