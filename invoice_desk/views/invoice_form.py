"""
Invoice form screen.

Holds one InvoiceDraft in memory, applies the user's edits to it and saves
it. The screen is either editing the draft or showing its preview.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Awaitable, Callable

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoice_desk.core.database import async_session_maker
from invoice_desk.models.company_settings import CompanySettings
from invoice_desk.models.invoice import Invoice
from invoice_desk.schemas.company_settings import CompanySettingsResponse
from invoice_desk.schemas.invoice import InvoiceDraft, InvoicePreview, LineItemDraft
from invoice_desk.services.company_settings import CompanySettingsService
from invoice_desk.services.invoice import InvoiceService, seed_draft
from invoice_desk.services.pdf import PDFService
from invoice_desk.views.notifications import Notifier


logger = logging.getLogger(__name__)

LINE_ITEM_FIELDS = ("description", "quantity", "rate")


class FormMode(str, Enum):
    EDITING = "editing"
    PREVIEWING = "previewing"


def toggle_mode(mode: FormMode) -> FormMode:
    """Switch between editing and previewing."""
    if mode == FormMode.EDITING:
        return FormMode.PREVIEWING
    return FormMode.EDITING


class InvoiceFormView:
    """
    Create or edit one invoice.

    Args:
        on_back: Called after a successful save, and when the user leaves
        notifier: Receives load/save notifications
        invoice_id: Invoice to edit, None to create a new one
        session_factory: Source of database sessions
    """

    def __init__(
        self,
        on_back: Callable[[], Awaitable[object]],
        notifier: Notifier,
        invoice_id: int | None = None,
        session_factory: async_sessionmaker[AsyncSession] = async_session_maker,
    ):
        self._on_back = on_back
        self._session_factory = session_factory
        self.notifier = notifier
        self.invoice_id = invoice_id
        self.draft = InvoiceDraft()
        self.company: CompanySettingsResponse | None = None
        self.mode = FormMode.EDITING
        self.saving = False

    @property
    def is_new(self) -> bool:
        return self.invoice_id is None

    # ----- Loading -----

    async def load(self) -> None:
        """
        Initialise the draft.

        Company settings always seed the tax and payment term defaults. An
        existing invoice then overwrites every field; a new one gets the next
        invoice number and a single blank row. Failures are notified and
        leave the defaults in place.
        """
        self.mode = FormMode.EDITING
        company = await self._load_company()
        self.draft = seed_draft(company, assign_number=self.is_new)

        if self.is_new:
            return

        invoice = await self._load_invoice()
        if invoice is not None:
            self.draft = InvoiceDraft.from_invoice(invoice, tax_rate=self.draft.tax_rate)

    async def _load_company(self) -> CompanySettings | None:
        try:
            async with self._session_factory() as session:
                company = await CompanySettingsService(session).get_or_404()
        except (HTTPException, SQLAlchemyError) as e:
            logger.error(f"Error loading company settings: {e}")
            self.notifier.error("Failed to load company settings")
            return None

        self.company = CompanySettingsResponse.model_validate(company)
        return company

    async def _load_invoice(self) -> Invoice | None:
        try:
            async with self._session_factory() as session:
                return await InvoiceService(session).get_or_404(self.invoice_id)
        except (HTTPException, SQLAlchemyError) as e:
            logger.error(f"Error loading invoice {self.invoice_id}: {e}")
            self.notifier.error("Failed to load invoice")
            return None

    # ----- Editing -----

    def set_field(self, name: str, value: Any) -> None:
        """Set one invoice field (client name, dates, status, ...)."""
        if name == "line_items" or name not in InvoiceDraft.model_fields:
            raise ValueError(f"Not an editable invoice field: {name}")
        setattr(self.draft, name, value)

    def update_line_item(self, index: int, field: str, value: Any) -> LineItemDraft:
        """Edit one cell of a row; the row amount follows quantity and rate."""
        if field not in LINE_ITEM_FIELDS:
            raise ValueError(f"Not an editable line item field: {field}")
        item = self.draft.line_items[index]
        setattr(item, field, value)
        return item

    def add_line_item(self) -> LineItemDraft:
        item = LineItemDraft()
        self.draft.line_items.append(item)
        return item

    def remove_line_item(self, index: int) -> bool:
        """Remove a row. Unknown indexes and the last remaining row are left alone."""
        if not 0 <= index < len(self.draft.line_items):
            return False
        if len(self.draft.line_items) <= 1:
            return False
        del self.draft.line_items[index]
        return True

    @property
    def subtotal(self) -> Decimal:
        return self.draft.totals().subtotal

    @property
    def tax_amount(self) -> Decimal:
        return self.draft.totals().tax_amount

    @property
    def total(self) -> Decimal:
        return self.draft.totals().total

    # ----- Preview -----

    def toggle_preview(self) -> FormMode:
        self.mode = toggle_mode(self.mode)
        return self.mode

    def preview(self) -> InvoicePreview:
        return InvoicePreview.from_draft(self.draft, self.company)

    async def export_pdf(self) -> bytes:
        return await PDFService().generate_preview_pdf(self.preview())

    # ----- Saving -----

    async def save(self) -> bool:
        """
        Save the draft in a single transaction.

        Returns:
            True on success (the back callback has been called), False when
            validation or any persistence step failed. The draft is left
            untouched either way.
        """
        self.saving = True
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    invoice = await InvoiceService(session).save(self.draft, self.invoice_id)
        except HTTPException as e:
            if e.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
                self.notifier.validation_error(e.detail)
            else:
                logger.error(f"Error saving invoice: {e.detail}")
                self.notifier.error("Failed to save invoice")
            return False
        except SQLAlchemyError as e:
            logger.error(f"Error saving invoice: {e}", exc_info=True)
            self.notifier.error("Failed to save invoice")
            return False
        finally:
            self.saving = False

        created = self.is_new
        # Later saves from this form update the new record
        self.invoice_id = invoice.id
        self.notifier.success(
            "Invoice created successfully" if created else "Invoice updated successfully"
        )
        await self._on_back()
        return True

    async def back(self) -> None:
        await self._on_back()
