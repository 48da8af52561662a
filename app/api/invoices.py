"""Invoice dashboard pages and form endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from app.actions.invoices import ActionRedirect, ActionResult, create_invoice, delete_invoice, update_invoice
from app.api.rendering import (
    render_banner,
    render_invoice_form,
    render_invoice_listing,
    render_invoice_table,
)
from app.auth.session import get_current_user
from app.core.config import Config
from app.core.dependencies import get_invoice_service, get_settings
from app.core.enums import INVOICES_PATH
from app.core.flash import FLAG_MESSAGES, read_transient_flags, set_transient_flag
from app.core.page_cache import page_cache
from app.schemas.invoices import State
from app.services.invoice_service import InvoiceService
from app.utils.validators import parse_page, sanitize_text

router = APIRouter(
    prefix=INVOICES_PATH,
    tags=["invoices"],
    dependencies=[Depends(get_current_user)],
)


def _listing_page(
    request: Request,
    service: InvoiceService,
    settings: Config,
    query: str,
    page: int,
    notice: str | None = None,
) -> str:
    total_pages = service.fetch_invoice_pages(query, settings.ITEMS_PER_PAGE)
    page = min(page, max(total_pages, 1))
    table_html = page_cache.get_or_render(
        INVOICES_PATH,
        f"{query}\x00{page}",
        lambda: render_invoice_table(
            service.fetch_filtered_invoices(query, page, settings.ITEMS_PER_PAGE),
            query=query,
            page=page,
        ),
    )
    banners = [
        render_banner(FLAG_MESSAGES[flag], settings.BANNER_DURATION_MS)
        for flag in read_transient_flags(request)
    ]
    return render_invoice_listing(
        table_html,
        query=query,
        current_page=page,
        total_pages=total_pages,
        banners=banners,
        notice=notice,
    )


def _to_response(result: ActionResult, render_failure) -> Response:
    if isinstance(result, ActionRedirect):
        response = RedirectResponse(result.location, status_code=status.HTTP_303_SEE_OTHER)
        if result.flag is not None:
            set_transient_flag(response, result.flag)
        return response
    return HTMLResponse(render_failure(result), status_code=status.HTTP_200_OK)


@router.get("", response_class=HTMLResponse)
def list_invoices(
    request: Request,
    query: str = "",
    page: str | None = None,
    service: InvoiceService = Depends(get_invoice_service),
    settings: Config = Depends(get_settings),
) -> HTMLResponse:
    html = _listing_page(request, service, settings, sanitize_text(query), parse_page(page))
    return HTMLResponse(html)


@router.get("/create", response_class=HTMLResponse)
def create_invoice_page(service: InvoiceService = Depends(get_invoice_service)) -> HTMLResponse:
    return HTMLResponse(
        render_invoice_form(
            title="Create Invoice",
            action=f"{INVOICES_PATH}/create",
            submit_label="Create Invoice",
            customers=service.list_customers(),
            state=State(),
            values={},
        )
    )


@router.post("/create")
async def submit_create_invoice(
    request: Request,
    service: InvoiceService = Depends(get_invoice_service),
) -> Response:
    form = await request.form()
    result = await run_in_threadpool(create_invoice, form, service)

    def render_failure(state: State) -> str:
        return render_invoice_form(
            title="Create Invoice",
            action=f"{INVOICES_PATH}/create",
            submit_label="Create Invoice",
            customers=service.list_customers(),
            state=state,
            values=state.data or {},
        )

    return await run_in_threadpool(_to_response, result, render_failure)


@router.get("/{invoice_id}/edit", response_class=HTMLResponse)
def edit_invoice_page(
    invoice_id: str,
    service: InvoiceService = Depends(get_invoice_service),
) -> HTMLResponse:
    invoice = service.get_invoice(invoice_id)
    if invoice is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found.")
    values = {
        "customer_id": invoice.customer_id,
        "amount": f"{invoice.amount / 100:.2f}",
        "status": invoice.status,
    }
    return HTMLResponse(
        render_invoice_form(
            title="Edit Invoice",
            action=f"{INVOICES_PATH}/{invoice_id}/edit",
            submit_label="Edit Invoice",
            customers=service.list_customers(),
            state=State(),
            values=values,
        )
    )


@router.post("/{invoice_id}/edit")
async def submit_update_invoice(
    invoice_id: str,
    request: Request,
    service: InvoiceService = Depends(get_invoice_service),
) -> Response:
    form = await request.form()
    result = await run_in_threadpool(update_invoice, invoice_id, form, service)

    def render_failure(state: State) -> str:
        return render_invoice_form(
            title="Edit Invoice",
            action=f"{INVOICES_PATH}/{invoice_id}/edit",
            submit_label="Edit Invoice",
            customers=service.list_customers(),
            state=state,
            values=state.data or {},
        )

    return await run_in_threadpool(_to_response, result, render_failure)


@router.post("/{invoice_id}/delete", response_class=HTMLResponse)
async def submit_delete_invoice(
    invoice_id: str,
    request: Request,
    service: InvoiceService = Depends(get_invoice_service),
    settings: Config = Depends(get_settings),
) -> HTMLResponse:
    form = await request.form()
    query = sanitize_text(form.get("query"))
    page = parse_page(form.get("page"))
    state = await run_in_threadpool(delete_invoice, invoice_id, service)
    html = await run_in_threadpool(
        _listing_page, request, service, settings, query, page, state.message
    )
    return HTMLResponse(html)
