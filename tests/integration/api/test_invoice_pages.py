from __future__ import annotations

import time
from datetime import datetime, timezone

from app.database.models import Invoice
from app.services.invoice_service import InvoiceService


def test_dashboard_redirects_anonymous_visitors_to_login(client):
    response = client.get("/dashboard/invoices", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_with_wrong_password_shows_invalid_credentials(client, user):
    response = client.post("/login", data={"email": user.email, "password": "nope-nope"})
    assert response.status_code == 401
    assert "Invalid credentials." in response.text
    assert "session" not in client.cookies


def test_create_invoice_redirects_with_created_flag(signed_in_client, customer, db_session):
    response = signed_in_client.post(
        "/dashboard/invoices/create",
        data={"customer_id": "c1", "amount": "49.99", "status": "pending"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard/invoices"
    assert "invoiceCreated=true" in response.headers["set-cookie"]
    assert "Max-Age=1" in response.headers["set-cookie"]

    stored = db_session.query(Invoice).one()
    assert stored.amount == 4999
    assert stored.date == datetime.now(timezone.utc).date().isoformat()


def _at_start_of_second() -> None:
    # Cookie expiry is tracked in whole seconds; leave the full second for the redirect.
    time.sleep(1 - time.time() % 1)


def test_created_flag_is_shown_once_after_following_the_redirect(signed_in_client, customer):
    _at_start_of_second()
    listing = signed_in_client.post(
        "/dashboard/invoices/create",
        data={"customer_id": "c1", "amount": "49.99", "status": "pending"},
    )

    assert listing.status_code == 200
    assert listing.url.path == "/dashboard/invoices"
    assert [r.status_code for r in listing.history] == [303]
    assert "Max-Age=1" in listing.history[0].headers["set-cookie"]
    assert "Invoice created successfully!" in listing.text
    assert "$49.99" in listing.text

    time.sleep(2)
    later = signed_in_client.get("/dashboard/invoices")
    assert "successfully!" not in later.text
    assert "$49.99" in later.text


def test_listing_without_flag_has_no_banner(signed_in_client):
    response = signed_in_client.get("/dashboard/invoices")
    assert response.status_code == 200
    assert "successfully!" not in response.text
    assert "No invoices found." in response.text


def test_create_with_errors_rerenders_form_with_submitted_values(signed_in_client, customer, db_session):
    response = signed_in_client.post(
        "/dashboard/invoices/create",
        data={"customer_id": "c1", "amount": "0", "status": "paid"},
        follow_redirects=False,
    )

    assert response.status_code == 200
    assert "Please enter an amount greater than $0." in response.text
    assert "Missing Fields. Failed to Create Invoice." in response.text
    assert 'value="c1" selected' in response.text
    assert 'value="paid" checked' in response.text
    assert db_session.query(Invoice).count() == 0


def test_edit_updates_invoice_and_sets_updated_flag(signed_in_client, customer, db_session):
    invoice_id = InvoiceService(db=db_session).insert_invoice("c1", 1000, "pending", "2023-05-05")

    page = signed_in_client.get(f"/dashboard/invoices/{invoice_id}/edit")
    assert page.status_code == 200
    assert 'value="10.00"' in page.text

    response = signed_in_client.post(
        f"/dashboard/invoices/{invoice_id}/edit",
        data={"customer_id": "c1", "amount": "20", "status": "paid"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert "invoiceUpdated=true" in response.headers["set-cookie"]

    db_session.expire_all()
    stored = db_session.get(Invoice, invoice_id)
    assert (stored.amount, stored.status, stored.date) == (2000, "paid", "2023-05-05")


def test_edit_page_for_unknown_invoice_is_404(signed_in_client):
    assert signed_in_client.get("/dashboard/invoices/missing/edit").status_code == 404


def test_delete_stays_on_listing_and_refreshes_cached_table(signed_in_client, customer, db_session):
    invoice_id = InvoiceService(db=db_session).insert_invoice("c1", 1234, "pending", "2023-05-05")

    before = signed_in_client.get("/dashboard/invoices")
    assert "$12.34" in before.text

    response = signed_in_client.post(f"/dashboard/invoices/{invoice_id}/delete")
    assert response.status_code == 200
    assert "Deleted Invoice." in response.text
    assert "$12.34" not in response.text

    again = signed_in_client.post(f"/dashboard/invoices/{invoice_id}/delete")
    assert "Database Error: Failed to Delete Invoice." in again.text


def test_search_and_page_parameters(signed_in_client, customer, db_session):
    service = InvoiceService(db=db_session)
    for day in range(1, 8):
        service.insert_invoice("c1", 100 * day, "pending", f"2024-01-0{day}")

    first = signed_in_client.get("/dashboard/invoices", params={"page": "not-a-number"})
    assert "$7.00" in first.text
    assert "$1.00" not in first.text
    assert 'href="/dashboard/invoices?query=&amp;page=2"' in first.text

    second = signed_in_client.get("/dashboard/invoices", params={"page": "2"})
    assert "$1.00" in second.text

    filtered = signed_in_client.get("/dashboard/invoices", params={"query": "2024-01-03"})
    assert "$3.00" in filtered.text
    assert "$4.00" not in filtered.text


def test_logout_clears_session(signed_in_client):
    response = signed_in_client.post("/logout", follow_redirects=False)
    assert response.status_code == 303
    follow = signed_in_client.get("/dashboard/invoices", follow_redirects=False)
    assert follow.headers["location"] == "/login"


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"


def test_page_beyond_the_last_shows_the_last_page(signed_in_client, customer, db_session):
    service = InvoiceService(db=db_session)
    for day in range(1, 8):
        service.insert_invoice("c1", 100 * day, "pending", f"2024-01-0{day}")

    response = signed_in_client.get("/dashboard/invoices", params={"page": "99999999999999999999"})
    assert response.status_code == 200
    assert "$1.00" in response.text
    assert '<span aria-current="page">2</span>' in response.text


def test_huge_page_on_empty_listing_is_page_one(signed_in_client):
    response = signed_in_client.get("/dashboard/invoices", params={"page": str(2**70)})
    assert response.status_code == 200
    assert "No invoices found." in response.text


def test_delete_keeps_the_current_search_and_page(signed_in_client, customer, db_session):
    service = InvoiceService(db=db_session)
    doomed = service.insert_invoice("c1", 300, "pending", "2024-01-03")
    service.insert_invoice("c1", 400, "paid", "2024-01-04")

    listing = signed_in_client.get("/dashboard/invoices", params={"query": "pending"})
    assert 'name="query" value="pending"' in listing.text

    response = signed_in_client.post(
        f"/dashboard/invoices/{doomed}/delete", data={"query": "pending", "page": "1"}
    )
    assert response.status_code == 200
    assert "Deleted Invoice." in response.text
    assert 'type="search" name="query" placeholder="Search invoices..." value="pending"' in response.text
    assert "$3.00" not in response.text
    assert "$4.00" not in response.text
