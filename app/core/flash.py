"""One-shot notification flags carried by short-lived cookies.

An action sets a flag on the redirect response with a max-age of one
second; the listing page rendered right after the redirect sees the cookie
and shows a banner. Nothing clears the flag; the browser drops it once
the max-age elapses.
"""

from __future__ import annotations

from fastapi import Request, Response

from app.core.config import get_config
from app.core.enums import FlashFlag

FLAG_MESSAGES: dict[FlashFlag, str] = {
    FlashFlag.INVOICE_CREATED: "Invoice created successfully!",
    FlashFlag.INVOICE_UPDATED: "Invoice updated successfully!",
}


def set_transient_flag(response: Response, flag: FlashFlag, max_age: int | None = None) -> None:
    response.set_cookie(
        key=flag.value,
        value="true",
        max_age=max_age if max_age is not None else get_config().FLASH_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        samesite="lax",
    )


def read_transient_flags(request: Request) -> list[FlashFlag]:
    """Return the flags present on this request, in declaration order."""
    return [flag for flag in FlashFlag if flag.value in request.cookies]
