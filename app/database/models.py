from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.core.enums import InvoiceStatus
from app.utils.ids import new_record_id

from .db import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=new_record_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False)
    image_url = Column(String(512))

    invoices = relationship("Invoice", back_populates="customer")


class Invoice(Base):
    __tablename__ = "invoices"
    __table_args__ = (
        Index("idx_invoices_status", "status"),
        Index("idx_invoices_customer", "customer_id"),
        CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        CheckConstraint(
            "status IN ('%s', '%s')" % (InvoiceStatus.PENDING.value, InvoiceStatus.PAID.value),
            name="ck_invoices_status",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_record_id)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=False)
    # Minor currency units (cents).
    amount = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default=InvoiceStatus.PENDING.value)
    # YYYY-MM-DD, stamped at creation.
    date = Column(String(10), nullable=False)

    customer = relationship("Customer", back_populates="invoices")


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_record_id)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    hashed_password = Column(String(255), nullable=False)
