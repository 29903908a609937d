"""
Invoice service.
Handles invoice listing, draft initialisation, saving and previews.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from fastapi import HTTPException, status

from invoice_desk.models.company_settings import CompanySettings
from invoice_desk.models.invoice import Invoice, LineItem
from invoice_desk.schemas.company_settings import CompanySettingsResponse
from invoice_desk.schemas.invoice import InvoiceDraft, InvoicePreview
from invoice_desk.services.calculations import format_invoice_number
from invoice_desk.services.company_settings import CompanySettingsService


logger = logging.getLogger(__name__)


def seed_draft(
    company: CompanySettings | None = None,
    assign_number: bool = True,
) -> InvoiceDraft:
    """
    Blank draft seeded from the company settings.

    Tax and payment term defaults are copied from the settings. Unless
    assign_number is False, the number is taken from the sequence counter.
    """
    draft = InvoiceDraft()
    if company is not None:
        draft.tax_enabled = company.tax_enabled
        draft.tax_rate = company.tax_rate
        draft.payment_terms = company.default_payment_terms
        if assign_number:
            draft.invoice_number = format_invoice_number(company.next_invoice_number)
    return draft


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.company_settings = CompanySettingsService(db)

    async def list_all(self) -> list[Invoice]:
        """List all invoices, newest first."""
        result = await self.db.execute(
            select(Invoice).order_by(Invoice.created_at.desc(), Invoice.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID with its line items loaded."""
        result = await self.db.execute(
            select(Invoice)
            .options(selectinload(Invoice.line_items))
            .where(Invoice.id == invoice_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, invoice_id: int) -> Invoice:
        """Get invoice by ID or raise 404."""
        invoice = await self.get_by_id(invoice_id)
        if not invoice:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Invoice not found",
            )
        return invoice

    async def new_draft(self) -> InvoiceDraft:
        """Initialise the draft of a new invoice from the company settings."""
        company = await self.company_settings.get_or_404()
        return seed_draft(company)

    async def load_draft(self, invoice_id: int) -> InvoiceDraft:
        """Load an existing invoice as an editable draft."""
        company = await self.company_settings.get_or_404()
        invoice = await self.get_or_404(invoice_id)
        return InvoiceDraft.from_invoice(invoice, tax_rate=company.tax_rate)

    async def save(self, draft: InvoiceDraft, invoice_id: int | None = None) -> Invoice:
        """
        Persist a draft.

        Existing invoice: the record is overwritten and all of its line items
        are deleted, then the draft's items are inserted.
        New invoice: the record is inserted and the company sequence counter
        is advanced by one, then the draft's items are inserted.

        Every step runs on this session; the caller owns the transaction, so a
        failure anywhere leaves nothing committed.

        Args:
            draft: Invoice draft to save
            invoice_id: ID of the invoice being edited, None to create

        Returns:
            Saved invoice with its new line items

        Raises:
            HTTPException: 422 if the client name is empty, 404 if the invoice
                or the company settings do not exist
        """
        if not draft.client_name:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Client name is required",
            )

        values = self._invoice_values(draft)

        if invoice_id is not None:
            invoice = await self.get_or_404(invoice_id)
            for field, value in values.items():
                setattr(invoice, field, value)

            # Replace all line items, no diffing
            invoice.line_items.clear()
            await self.db.flush()
        else:
            invoice = Invoice(**values, line_items=[])
            self.db.add(invoice)
            await self.db.flush()

            company = await self.company_settings.get_or_404()
            await self.company_settings.increment_sequence(company)

        invoice.line_items.extend(self._build_line_items(invoice, draft))
        await self.db.flush()
        await self.db.refresh(invoice)

        action = "updated" if invoice_id is not None else "created"
        logger.info(
            f"Invoice {invoice.invoice_number} {action} "
            f"({len(invoice.line_items)} items, total={invoice.total})"
        )
        return invoice

    async def build_preview(self, draft: InvoiceDraft) -> InvoicePreview:
        """Snapshot a draft for the preview, with the company profile attached."""
        company = await self.company_settings.get()
        company_data = CompanySettingsResponse.model_validate(company) if company else None
        return InvoicePreview.from_draft(draft, company_data)

    def _invoice_values(self, draft: InvoiceDraft) -> dict:
        """Column values of the invoice record, totals included."""
        totals = draft.totals()
        return {
            "invoice_number": draft.invoice_number,
            "invoice_type": draft.invoice_type,
            "invoice_date": draft.invoice_date,
            "due_date": draft.due_date,
            "status": draft.status,
            "client_name": draft.client_name,
            "client_email": draft.client_email,
            "client_address": draft.client_address,
            "subtotal": totals.subtotal,
            "tax_enabled": draft.tax_enabled,
            "tax_amount": totals.tax_amount,
            "total": totals.total,
            "payment_terms": draft.payment_terms,
            "notes": draft.notes,
        }

    def _build_line_items(self, invoice: Invoice, draft: InvoiceDraft) -> list[LineItem]:
        """Line item rows in display order."""
        return [
            LineItem(
                invoice_id=invoice.id,
                description=item.description,
                quantity=item.quantity,
                rate=item.rate,
                amount=item.amount,
                sort_order=index,
            )
            for index, item in enumerate(draft.line_items)
        ]
