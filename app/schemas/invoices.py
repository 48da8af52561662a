"""Invoice form schemas and the form state returned to the pages."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from app.core.enums import InvoiceStatus

INVOICE_FORM_FIELDS = ("customer_id", "amount", "status")

# Largest amount whose cent value fits the 32-bit `invoices.amount` column.
MAX_AMOUNT = Decimal("21474836.47")


class FieldErrorKind(str, Enum):
    MISSING_OR_INVALID_CUSTOMER = "MissingOrInvalidCustomer"
    INVALID_AMOUNT = "InvalidAmount"
    INVALID_STATUS = "InvalidStatus"


FIELD_ERROR_KINDS: dict[str, FieldErrorKind] = {
    "customer_id": FieldErrorKind.MISSING_OR_INVALID_CUSTOMER,
    "amount": FieldErrorKind.INVALID_AMOUNT,
    "status": FieldErrorKind.INVALID_STATUS,
}

FIELD_ERROR_MESSAGES: dict[FieldErrorKind, str] = {
    FieldErrorKind.MISSING_OR_INVALID_CUSTOMER: "Please select a customer.",
    FieldErrorKind.INVALID_AMOUNT: "Please enter an amount greater than $0.",
    FieldErrorKind.INVALID_STATUS: "Please select an invoice status.",
}


class InvoiceForm(BaseModel):
    """Validated create/update payload. `id` and `date` are never client supplied."""

    customer_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    status: InvoiceStatus

    @field_validator("amount", mode="before")
    @classmethod
    def _blank_amount_is_zero(cls, value: Any) -> Any:
        if value is None:
            return 0
        if isinstance(value, str) and not value.strip():
            return 0
        return value

    @field_validator("amount")
    @classmethod
    def _at_least_one_cent(cls, value: Decimal) -> Decimal:
        if to_minor_units(value) <= 0:
            raise ValueError("amount rounds to zero cents")
        return value

    @property
    def amount_cents(self) -> int:
        return to_minor_units(self.amount)


class State(BaseModel):
    """Outcome of a form action handed back to the page for re-rendering.

    An empty state means the action succeeded (or has not run yet).
    """

    errors: dict[str, list[str]] | None = None
    message: str | None = None
    data: dict[str, str | None] | None = None


class InvoiceValidationFailure(Exception):
    """Carries every field error collected in one validation pass."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(", ".join(sorted(errors)))
        self.errors = errors


def to_minor_units(amount: Decimal) -> int:
    """Convert a major-unit amount to integer cents, rounding half up."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def raw_form_values(form: Mapping[str, Any]) -> dict[str, str | None]:
    """Pick the invoice fields out of a submitted form as a loose string bag."""
    values: dict[str, str | None] = {}
    for field in INVOICE_FORM_FIELDS:
        value = form.get(field)
        values[field] = value if isinstance(value, str) else None
    return values


def flatten_field_errors(exc: ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__root__"
        kind = FIELD_ERROR_KINDS.get(field)
        message = FIELD_ERROR_MESSAGES[kind] if kind else error["msg"]
        bucket = errors.setdefault(field, [])
        if message not in bucket:
            bucket.append(message)
    return errors


def validate_invoice_form(values: Mapping[str, Any]) -> InvoiceForm:
    """Validate all invoice fields at once.

    Raises InvoiceValidationFailure holding every failing field, each mapped
    to a list of human-readable messages.
    """
    try:
        return InvoiceForm.model_validate(dict(values))
    except ValidationError as exc:
        raise InvoiceValidationFailure(flatten_field_errors(exc)) from exc
