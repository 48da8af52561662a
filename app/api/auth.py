"""Login and logout pages."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from app.actions.auth import authenticate
from app.api.rendering import render_login
from app.auth.provider import CredentialsProvider
from app.auth.session import clear_session_cookie, set_session_cookie
from app.core.dependencies import get_credentials_provider
from app.core.enums import INVOICES_PATH

router = APIRouter(tags=["auth"])


@router.get("/login", response_class=HTMLResponse)
def login_page() -> HTMLResponse:
    return HTMLResponse(render_login())


@router.post("/login")
async def login(
    request: Request,
    provider: CredentialsProvider = Depends(get_credentials_provider),
) -> Response:
    form = await request.form()
    outcome = await run_in_threadpool(authenticate, None, form, provider)
    if outcome.session_token is None:
        email = form.get("email")
        return HTMLResponse(
            render_login(outcome.message, email if isinstance(email, str) else None),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    response = RedirectResponse(INVOICES_PATH, status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookie(response, outcome.session_token)
    return response


@router.post("/logout")
def logout() -> Response:
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response)
    return response
