"""HTML fragments for the dashboard pages."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode

from app.core.enums import INVOICES_PATH, InvoiceStatus
from app.schemas.invoices import State
from app.utils.validators import escape_html


def format_currency(amount_cents: int) -> str:
    return f"${amount_cents / 100:,.2f}"


def layout(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape_html(title)}</title></head>"
        f"<body>{body}</body></html>"
    )


def render_banner(message: str, duration_ms: int) -> str:
    """Fixed banner that fades out after ``duration_ms``."""
    return (
        f'<div class="banner" role="status" data-duration="{duration_ms}">{escape_html(message)}</div>'
        "<script>"
        "document.querySelectorAll('.banner').forEach(function (el) {"
        "setTimeout(function () { el.style.opacity = '0'; }, Number(el.dataset.duration));"
        "});"
        "</script>"
    )


def render_login(message: str | None = None, email: str | None = None) -> str:
    error = f'<p class="error" aria-live="polite">{escape_html(message)}</p>' if message else ""
    body = (
        "<h1>Please log in to continue.</h1>"
        '<form method="post" action="/login">'
        f'<label>Email <input type="email" name="email" value="{escape_html(email)}" required></label>'
        '<label>Password <input type="password" name="password" minlength="6" required></label>'
        '<button type="submit">Log in</button>'
        f"{error}</form>"
    )
    return layout("Login", body)


def render_invoice_table(rows: Iterable[Mapping[str, Any]], query: str = "", page: int = 1) -> str:
    """Listing rows; each delete form carries the current search so the page stays put."""
    keep_view = (
        f'<input type="hidden" name="query" value="{escape_html(query)}">'
        f'<input type="hidden" name="page" value="{page}">'
    )
    body_rows = []
    for row in rows:
        invoice_id = escape_html(row["id"])
        body_rows.append(
            "<tr>"
            f"<td>{escape_html(row['name'])}</td>"
            f"<td>{escape_html(row['email'])}</td>"
            f"<td>{format_currency(row['amount'])}</td>"
            f"<td>{escape_html(row['date'])}</td>"
            f'<td class="status-{escape_html(row["status"])}">{escape_html(row["status"])}</td>'
            "<td>"
            f'<a href="{INVOICES_PATH}/{invoice_id}/edit">Edit</a>'
            f'<form method="post" action="{INVOICES_PATH}/{invoice_id}/delete">'
            f"{keep_view}"
            '<button type="submit">Delete</button></form>'
            "</td></tr>"
        )
    if not body_rows:
        body_rows.append('<tr><td colspan="6">No invoices found.</td></tr>')
    return (
        '<table class="invoices"><thead><tr>'
        "<th>Customer</th><th>Email</th><th>Amount</th><th>Date</th><th>Status</th><th></th>"
        f"</tr></thead><tbody>{''.join(body_rows)}</tbody></table>"
    )


def render_pagination(query: str, current_page: int, total_pages: int) -> str:
    if total_pages <= 1:
        return ""
    links = []
    for page in range(1, total_pages + 1):
        href = f"{INVOICES_PATH}?{urlencode({'query': query, 'page': page})}"
        if page == current_page:
            links.append(f'<span aria-current="page">{page}</span>')
        else:
            links.append(f'<a href="{escape_html(href)}">{page}</a>')
    return f'<nav class="pagination">{"".join(links)}</nav>'


def render_invoice_listing(
    table_html: str,
    query: str,
    current_page: int,
    total_pages: int,
    banners: Iterable[str] = (),
    notice: str | None = None,
) -> str:
    notice_html = f'<p class="notice" aria-live="polite">{escape_html(notice)}</p>' if notice else ""
    body = (
        f"{''.join(banners)}"
        "<h1>Invoices</h1>"
        f'<form method="get" action="{INVOICES_PATH}">'
        f'<input type="search" name="query" placeholder="Search invoices..." value="{escape_html(query)}">'
        "</form>"
        f'<a href="{INVOICES_PATH}/create">Create Invoice</a>'
        '<form method="post" action="/logout"><button type="submit">Sign Out</button></form>'
        f"{notice_html}{table_html}"
        f"{render_pagination(query, current_page, total_pages)}"
    )
    return layout("Invoices", body)


def _field_errors(state: State, field: str) -> str:
    messages = (state.errors or {}).get(field) or []
    items = "".join(f'<p class="error">{escape_html(message)}</p>' for message in messages)
    return f'<div id="{field}-error" aria-live="polite">{items}</div>'


def render_invoice_form(
    title: str,
    action: str,
    submit_label: str,
    customers: Iterable[Any],
    state: State,
    values: Mapping[str, str | None],
) -> str:
    """Form pre-filled from ``values``; field and summary errors come from ``state``."""
    selected_customer = values.get("customer_id") or ""
    options = ['<option value="">Select a customer</option>']
    for customer in customers:
        selected = " selected" if customer.id == selected_customer else ""
        options.append(
            f'<option value="{escape_html(customer.id)}"{selected}>{escape_html(customer.name)}</option>'
        )

    radios = []
    for status in InvoiceStatus:
        checked = " checked" if values.get("status") == status.value else ""
        radios.append(
            f'<label><input type="radio" name="status" value="{status.value}"{checked}> '
            f"{status.value.capitalize()}</label>"
        )

    summary = f'<p class="error" aria-live="polite">{escape_html(state.message)}</p>' if state.message else ""
    body = (
        f"<h1>{escape_html(title)}</h1>"
        f'<form method="post" action="{escape_html(action)}">'
        f'<label>Choose customer <select name="customer_id">{"".join(options)}</select></label>'
        f'{_field_errors(state, "customer_id")}'
        '<label>Choose an amount <input type="number" name="amount" step="0.01" '
        f'placeholder="Enter USD amount" value="{escape_html(values.get("amount"))}"></label>'
        f'{_field_errors(state, "amount")}'
        f'<fieldset><legend>Set the invoice status</legend>{"".join(radios)}</fieldset>'
        f'{_field_errors(state, "status")}'
        f"{summary}"
        f'<a href="{INVOICES_PATH}">Cancel</a><button type="submit">{escape_html(submit_label)}</button>'
        "</form>"
    )
    return layout(title, body)
