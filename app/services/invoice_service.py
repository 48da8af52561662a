"""Invoice persistence for the dashboard actions and pages."""

from __future__ import annotations

import math

from sqlalchemy import String, cast, delete, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DatabaseError, NotFoundError
from app.database.models import Customer, Invoice
from app.services.base_service import BaseService
from app.utils.ids import new_record_id


class InvoiceService(BaseService):
    """Parameterized writes against `invoices` plus the listing queries."""

    def _execute_write(self, stmt) -> int:
        """Run one DML statement in its own transaction; return the matched row count."""
        try:
            rowcount = self.db.execute(stmt).rowcount
            self.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            # sqlite3 reports out-of-range integers as a bare OverflowError.
            self.rollback()
            detail = getattr(exc, "orig", None) or exc
            raise DatabaseError(str(detail)) from exc
        return rowcount

    def insert_invoice(self, customer_id: str, amount_cents: int, status: str, date: str) -> str:
        invoice_id = new_record_id()
        self._execute_write(
            insert(Invoice.__table__).values(
                id=invoice_id,
                customer_id=customer_id,
                amount=amount_cents,
                status=status,
                date=date,
            )
        )
        return invoice_id

    def update_invoice(self, invoice_id: str, customer_id: str, amount_cents: int, status: str) -> None:
        matched = self._execute_write(
            update(Invoice.__table__)
            .where(Invoice.__table__.c.id == invoice_id)
            .values(customer_id=customer_id, amount=amount_cents, status=status)
        )
        if matched == 0:
            raise NotFoundError(f"Invoice {invoice_id} does not exist.")

    def delete_invoice(self, invoice_id: str) -> None:
        matched = self._execute_write(delete(Invoice.__table__).where(Invoice.__table__.c.id == invoice_id))
        if matched == 0:
            raise NotFoundError(f"Invoice {invoice_id} does not exist.")

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        return self.db.get(Invoice, invoice_id)

    def list_customers(self) -> list[Customer]:
        return list(self.db.scalars(select(Customer).order_by(Customer.name)))

    def _search_clause(self, query: str):
        pattern = f"%{query}%"
        return or_(
            Customer.name.ilike(pattern),
            Customer.email.ilike(pattern),
            cast(Invoice.amount, String).ilike(pattern),
            Invoice.date.ilike(pattern),
            Invoice.status.ilike(pattern),
        )

    def fetch_filtered_invoices(self, query: str, page: int, per_page: int) -> list[dict]:
        """Return one page of invoices joined with their customer, newest first."""
        offset = (max(page, 1) - 1) * per_page
        stmt = (
            select(
                Invoice.id,
                Invoice.amount,
                Invoice.date,
                Invoice.status,
                Customer.name,
                Customer.email,
                Customer.image_url,
            )
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(self._search_clause(query))
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(per_page)
            .offset(offset)
        )
        return [dict(row) for row in self.db.execute(stmt).mappings()]

    def fetch_invoice_pages(self, query: str, per_page: int) -> int:
        stmt = (
            select(func.count(Invoice.id))
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(self._search_clause(query))
        )
        total = self.db.execute(stmt).scalar() or 0
        return math.ceil(total / per_page)
