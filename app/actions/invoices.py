"""Create, update and delete actions behind the invoice forms.

Each action validates the submitted fields in one pass, issues a single
statement through InvoiceService and reports the outcome either as a
``State`` for the form to re-render or as an ``ActionRedirect`` the route
turns into a 303 response.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Union

from app.core.enums import INVOICES_PATH, FlashFlag
from app.core.exceptions import DatabaseError, NotFoundError
from app.core.page_cache import expire_path
from app.schemas.invoices import InvoiceValidationFailure, State, raw_form_values, validate_invoice_form
from app.services.invoice_service import InvoiceService

logger = logging.getLogger(__name__)

CREATE_VALIDATION_MESSAGE = "Missing Fields. Failed to Create Invoice."
UPDATE_VALIDATION_MESSAGE = "Missing Fields. Failed to Update Invoice."
UPDATE_DATABASE_MESSAGE = "Database Error: Failed to Update Invoice."
DELETE_DATABASE_MESSAGE = "Database Error: Failed to Delete Invoice."
DELETE_SUCCESS_MESSAGE = "Deleted Invoice."


@dataclass(frozen=True)
class ActionRedirect:
    location: str
    flag: FlashFlag | None = None


ActionResult = Union[State, ActionRedirect]


def _today() -> date:
    return datetime.now(timezone.utc).date()


def create_invoice(
    form: Mapping[str, Any],
    service: InvoiceService,
    today: date | None = None,
) -> ActionResult:
    values = raw_form_values(form)
    try:
        invoice = validate_invoice_form(values)
    except InvoiceValidationFailure as exc:
        logger.info(
            "invoice.create_rejected",
            extra={"event": "invoice.create_rejected", "fields": sorted(exc.errors)},
        )
        return State(errors=exc.errors, message=CREATE_VALIDATION_MESSAGE, data=values)

    created_on = (today or _today()).isoformat()
    try:
        invoice_id = service.insert_invoice(
            customer_id=invoice.customer_id,
            amount_cents=invoice.amount_cents,
            status=invoice.status.value,
            date=created_on,
        )
    except DatabaseError as exc:
        logger.error(
            "invoice.create_failed",
            extra={"event": "invoice.create_failed", "detail": str(exc)},
        )
        return State(message=f"Database Error: {exc}. Failed to Create Invoice.")

    logger.info("invoice.created", extra={"event": "invoice.created", "invoice_id": invoice_id})
    expire_path(INVOICES_PATH)
    return ActionRedirect(location=INVOICES_PATH, flag=FlashFlag.INVOICE_CREATED)


def update_invoice(
    invoice_id: str,
    form: Mapping[str, Any],
    service: InvoiceService,
) -> ActionResult:
    values = raw_form_values(form)
    try:
        invoice = validate_invoice_form(values)
    except InvoiceValidationFailure as exc:
        logger.info(
            "invoice.update_rejected",
            extra={"event": "invoice.update_rejected", "invoice_id": invoice_id, "fields": sorted(exc.errors)},
        )
        return State(errors=exc.errors, message=UPDATE_VALIDATION_MESSAGE, data=values)

    try:
        service.update_invoice(
            invoice_id=invoice_id,
            customer_id=invoice.customer_id,
            amount_cents=invoice.amount_cents,
            status=invoice.status.value,
        )
    except (DatabaseError, NotFoundError) as exc:
        logger.error(
            "invoice.update_failed",
            extra={"event": "invoice.update_failed", "invoice_id": invoice_id, "detail": str(exc)},
        )
        return State(message=UPDATE_DATABASE_MESSAGE)

    logger.info("invoice.updated", extra={"event": "invoice.updated", "invoice_id": invoice_id})
    expire_path(INVOICES_PATH)
    return ActionRedirect(location=INVOICES_PATH, flag=FlashFlag.INVOICE_UPDATED)


def delete_invoice(invoice_id: str, service: InvoiceService) -> State:
    """Delete in place; the caller stays on the current view."""
    try:
        service.delete_invoice(invoice_id)
    except (DatabaseError, NotFoundError) as exc:
        logger.error(
            "invoice.delete_failed",
            extra={"event": "invoice.delete_failed", "invoice_id": invoice_id, "detail": str(exc)},
        )
        return State(message=DELETE_DATABASE_MESSAGE)

    logger.info("invoice.deleted", extra={"event": "invoice.deleted", "invoice_id": invoice_id})
    expire_path(INVOICES_PATH)
    return State(message=DELETE_SUCCESS_MESSAGE)
