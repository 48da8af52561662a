from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

import app.actions.invoices as invoice_actions
from app.actions.invoices import ActionRedirect, create_invoice, delete_invoice, update_invoice
from app.core.enums import INVOICES_PATH, FlashFlag
from app.core.exceptions import DatabaseError
from app.database.models import Invoice
from app.schemas.invoices import State
from app.services.invoice_service import InvoiceService


class _RecordingService:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.error = error

    def _record(self, name: str, **kwargs):
        self.calls.append((name, kwargs))
        if self.error is not None:
            raise self.error

    def insert_invoice(self, **kwargs):
        self._record("insert", **kwargs)
        return "new-id"

    def update_invoice(self, **kwargs):
        self._record("update", **kwargs)

    def delete_invoice(self, invoice_id):
        self._record("delete", invoice_id=invoice_id)


@pytest.fixture
def expired_paths(monkeypatch):
    paths: list[str] = []
    monkeypatch.setattr(invoice_actions, "expire_path", paths.append)
    return paths


def test_create_persists_cents_and_today_then_redirects(db_session, customer, expired_paths):
    service = InvoiceService(db=db_session)
    result = create_invoice({"customer_id": "c1", "amount": "49.99", "status": "pending"}, service)

    assert result == ActionRedirect(location=INVOICES_PATH, flag=FlashFlag.INVOICE_CREATED)
    assert expired_paths == [INVOICES_PATH]
    stored = db_session.query(Invoice).one()
    assert stored.amount == 4999
    assert stored.status == "pending"
    assert stored.customer_id == "c1"
    assert stored.date == datetime.now(timezone.utc).date().isoformat()


def test_create_uses_supplied_date():
    service = _RecordingService()
    create_invoice(
        {"customer_id": "c1", "amount": "10", "status": "paid"}, service, today=date(2024, 2, 29)
    )
    assert service.calls == [
        ("insert", {"customer_id": "c1", "amount_cents": 1000, "status": "paid", "date": "2024-02-29"})
    ]


def test_create_with_missing_customer_echoes_input_without_persisting(expired_paths):
    service = _RecordingService()
    submitted = {"customer_id": "", "amount": "10", "status": "paid"}

    result = create_invoice(submitted, service)

    assert isinstance(result, State)
    assert result.errors["customer_id"]
    assert result.message == "Missing Fields. Failed to Create Invoice."
    assert result.data == submitted
    assert service.calls == []
    assert expired_paths == []


@pytest.mark.parametrize("amount", ["0", "-5"])
def test_non_positive_amount_never_reaches_persistence(amount):
    service = _RecordingService()
    created = create_invoice({"customer_id": "c1", "amount": amount, "status": "paid"}, service)
    updated = update_invoice("inv-1", {"customer_id": "c1", "amount": amount, "status": "paid"}, service)

    assert "amount" in created.errors
    assert "amount" in updated.errors
    assert updated.message == "Missing Fields. Failed to Update Invoice."
    assert service.calls == []


@pytest.mark.parametrize("amount", ["1e20", "1e999999", "0.001"])
def test_unstorable_amount_is_a_field_error_not_a_crash(amount, expired_paths):
    service = _RecordingService()
    submitted = {"customer_id": "c1", "amount": amount, "status": "paid"}

    created = create_invoice(submitted, service)
    updated = update_invoice("inv-1", submitted, service)

    assert created.errors == {"amount": ["Please enter an amount greater than $0."]}
    assert created.data == submitted
    assert updated.errors == created.errors
    assert service.calls == []
    assert expired_paths == []


def test_create_database_error_includes_detail(expired_paths):
    service = _RecordingService(error=DatabaseError("FOREIGN KEY constraint failed"))
    result = create_invoice({"customer_id": "nope", "amount": "5", "status": "paid"}, service)

    assert result == State(
        message="Database Error: FOREIGN KEY constraint failed. Failed to Create Invoice."
    )
    assert expired_paths == []


def test_create_for_unknown_customer_is_a_database_error(db_session, customer):
    result = create_invoice(
        {"customer_id": "missing", "amount": "5", "status": "paid"}, InvoiceService(db=db_session)
    )
    assert isinstance(result, State)
    assert result.message.startswith("Database Error: ")
    assert result.message.endswith(". Failed to Create Invoice.")
    assert db_session.query(Invoice).count() == 0


def test_update_changes_fields_but_not_id_or_date(db_session, customer, expired_paths):
    service = InvoiceService(db=db_session)
    invoice_id = service.insert_invoice("c1", 1000, "pending", "2023-01-15")

    result = update_invoice(
        invoice_id,
        {"customer_id": "c1", "amount": "12.5", "status": "paid", "id": "other", "date": "2030-01-01"},
        service,
    )

    assert result == ActionRedirect(location=INVOICES_PATH, flag=FlashFlag.INVOICE_UPDATED)
    assert expired_paths == [INVOICES_PATH]
    db_session.expire_all()
    stored = db_session.get(Invoice, invoice_id)
    assert stored.amount == 1250
    assert stored.status == "paid"
    assert stored.date == "2023-01-15"
    assert db_session.query(Invoice).count() == 1


def test_update_of_missing_invoice_reports_generic_database_error(db_session, customer):
    result = update_invoice(
        "does-not-exist",
        {"customer_id": "c1", "amount": "1", "status": "paid"},
        InvoiceService(db=db_session),
    )
    assert result == State(message="Database Error: Failed to Update Invoice.")


def test_delete_removes_row_and_expires_listing(db_session, customer, expired_paths):
    service = InvoiceService(db=db_session)
    invoice_id = service.insert_invoice("c1", 1000, "pending", "2023-01-15")

    assert delete_invoice(invoice_id, service) == State(message="Deleted Invoice.")
    assert expired_paths == [INVOICES_PATH]
    assert db_session.query(Invoice).count() == 0


def test_delete_of_missing_invoice_is_a_database_error(db_session, expired_paths):
    result = delete_invoice("does-not-exist", InvoiceService(db=db_session))
    assert result == State(message="Database Error: Failed to Delete Invoice.")
    assert expired_paths == []
