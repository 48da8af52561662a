"""Enums for the invoice dashboard."""

from enum import Enum


class InvoiceStatus(str, Enum):
    """Status of invoices."""

    PENDING = "pending"
    PAID = "paid"


class FlashFlag(str, Enum):
    """Names of the one-shot notification cookies read by the listing page."""

    INVOICE_CREATED = "invoiceCreated"
    INVOICE_UPDATED = "invoiceUpdated"


INVOICE_PENDING = InvoiceStatus.PENDING.value
INVOICE_PAID = InvoiceStatus.PAID.value

INVOICES_PATH = "/dashboard/invoices"
