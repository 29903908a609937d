"""
Invoice endpoints.
Listing, draft initialisation, saving and preview export.
"""

from fastapi import APIRouter, Response, status

from invoice_desk.api.deps import DbSession
from invoice_desk.schemas.invoice import (
    InvoiceDraft,
    InvoicePreview,
    InvoiceResponse,
    InvoiceSummary,
)
from invoice_desk.services.invoice import InvoiceService
from invoice_desk.services.pdf import PDFService


router = APIRouter()


@router.get(
    "",
    response_model=list[InvoiceSummary],
    summary="List invoices",
    description="All invoices and quotes, newest first",
)
async def list_invoices(db: DbSession) -> list[InvoiceSummary]:
    """List all invoices."""
    service = InvoiceService(db)
    invoices = await service.list_all()
    return [InvoiceSummary.model_validate(i) for i in invoices]


@router.get(
    "/new",
    response_model=InvoiceDraft,
    summary="New invoice draft",
    description="Draft seeded from the company settings with the next invoice number",
)
async def new_invoice_draft(db: DbSession) -> InvoiceDraft:
    """Initialise a draft for a new invoice."""
    service = InvoiceService(db)
    return await service.new_draft()


@router.post(
    "/preview",
    response_model=InvoicePreview,
    summary="Preview a draft",
    description="Read-only snapshot of a draft with computed totals",
)
async def preview_invoice(draft: InvoiceDraft, db: DbSession) -> InvoicePreview:
    """Build the preview snapshot of a draft."""
    service = InvoiceService(db)
    return await service.build_preview(draft)


@router.post(
    "/preview/pdf",
    summary="Export a draft as PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def export_invoice_pdf(draft: InvoiceDraft, db: DbSession) -> Response:
    """Render the preview of a draft as a PDF document."""
    service = InvoiceService(db)
    preview = await service.build_preview(draft)

    pdf_service = PDFService()
    content = await pdf_service.generate_preview_pdf(preview)

    prefix = "quote" if preview.title == "QUOTE" else "invoice"
    filename = f"{prefix}_{preview.invoice_number.replace('/', '-') or 'draft'}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an invoice",
    description="Save a new invoice and advance the invoice number sequence",
)
async def create_invoice(draft: InvoiceDraft, db: DbSession) -> InvoiceResponse:
    """Create a new invoice from a draft."""
    service = InvoiceService(db)
    invoice = await service.save(draft)
    return InvoiceResponse.model_validate(invoice)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Invoice details",
)
async def get_invoice(invoice_id: int, db: DbSession) -> InvoiceResponse:
    """Get invoice by ID."""
    service = InvoiceService(db)
    invoice = await service.get_or_404(invoice_id)
    return InvoiceResponse.model_validate(invoice)


@router.get(
    "/{invoice_id}/draft",
    response_model=InvoiceDraft,
    summary="Editable draft of an invoice",
)
async def get_invoice_draft(invoice_id: int, db: DbSession) -> InvoiceDraft:
    """Load an existing invoice as a draft."""
    service = InvoiceService(db)
    return await service.load_draft(invoice_id)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Save an invoice",
    description="Overwrite an invoice and replace all of its line items",
)
async def update_invoice(
    invoice_id: int,
    draft: InvoiceDraft,
    db: DbSession,
) -> InvoiceResponse:
    """Save a draft over an existing invoice."""
    service = InvoiceService(db)
    invoice = await service.save(draft, invoice_id)
    return InvoiceResponse.model_validate(invoice)
