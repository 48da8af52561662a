"""Global exception handlers for the dashboard."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse

from app.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        """Send anonymous or expired sessions to the login page."""
        logger.info(
            "auth.redirect_to_login",
            extra={"event": "auth.redirect_to_login", "path": request.url.path, "detail": str(exc)},
        )
        return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
