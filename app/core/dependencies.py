"""Dependency providers for the dashboard routes."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.auth.provider import CredentialsProvider
from app.core.config import Config, get_config
from app.database.db import get_db
from app.services.invoice_service import InvoiceService


def get_settings() -> Config:
    """Return validated application configuration."""
    return get_config()


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_invoice_service(db: Session = Depends(get_db_session)) -> InvoiceService:
    return InvoiceService(db=db)


def get_credentials_provider(
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> CredentialsProvider:
    return CredentialsProvider(db=db, config=settings)
