"""Pydantic schema package for forms and session tokens."""

from app.schemas.auth import LoginRequest, SessionClaims
from app.schemas.invoices import InvoiceForm, State

__all__ = [
    "InvoiceForm",
    "LoginRequest",
    "SessionClaims",
    "State",
]
