"""Identifier generation helpers."""

from __future__ import annotations

import uuid


def new_record_id() -> str:
    """Create a UUID4-based primary key for invoices, customers and users."""
    return str(uuid.uuid4())
