"""
Invoice schemas for request/response validation.

InvoiceDraft is the editable state of one invoice: every field plus its line
items. Totals are never stored on it; they are derived on each read.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from pydantic import ConfigDict, Field, computed_field

from invoice_desk.core.config import settings
from invoice_desk.models.invoice import InvoiceStatus, InvoiceType
from invoice_desk.schemas.base import BaseSchema, TimestampSchema
from invoice_desk.schemas.company_settings import CompanySettingsResponse
from invoice_desk.services.calculations import (
    InvoiceTotals,
    calculate_line_amount,
    calculate_totals,
    format_money,
)

if TYPE_CHECKING:
    from invoice_desk.models.invoice import Invoice


class LineItemDraft(BaseSchema):
    """Editable line item. The amount follows quantity and rate."""

    model_config = ConfigDict(validate_assignment=True)

    description: str = ""
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    rate: Decimal = Field(default=Decimal("0"), ge=0)

    @computed_field
    @property
    def amount(self) -> Decimal:
        return calculate_line_amount(self.quantity, self.rate)


class InvoiceDraft(BaseSchema):
    """Editable invoice or quote, as held by the invoice form."""

    model_config = ConfigDict(validate_assignment=True)

    invoice_number: str = Field(default="", max_length=50)
    invoice_type: InvoiceType = InvoiceType.INVOICE
    invoice_date: date = Field(default_factory=date.today)
    due_date: date | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT

    client_name: str = Field(default="", max_length=255)
    client_email: str = ""
    client_address: str = ""

    tax_enabled: bool = True
    tax_rate: Decimal = Field(default=settings.DEFAULT_TAX_RATE, ge=0, le=100)
    payment_terms: str = settings.DEFAULT_PAYMENT_TERMS
    notes: str = ""

    line_items: list[LineItemDraft] = Field(
        default_factory=lambda: [LineItemDraft()],
        min_length=1,
    )

    def totals(self) -> InvoiceTotals:
        """Compute subtotal, tax and total from the current line items."""
        return calculate_totals(
            (item.amount for item in self.line_items),
            self.tax_enabled,
            self.tax_rate,
        )

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.totals().subtotal

    @computed_field
    @property
    def tax_amount(self) -> Decimal:
        return self.totals().tax_amount

    @computed_field
    @property
    def total(self) -> Decimal:
        return self.totals().total

    @classmethod
    def from_invoice(cls, invoice: "Invoice", tax_rate: Decimal) -> "InvoiceDraft":
        """
        Build a draft from a stored invoice.

        The tax rate is not stored per invoice; it comes from the company
        settings at load time.
        """
        line_items = [LineItemDraft.model_validate(item) for item in invoice.line_items]
        return cls(
            invoice_number=invoice.invoice_number,
            invoice_type=invoice.invoice_type,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            status=invoice.status,
            client_name=invoice.client_name,
            client_email=invoice.client_email or "",
            client_address=invoice.client_address or "",
            tax_enabled=invoice.tax_enabled,
            tax_rate=tax_rate,
            payment_terms=invoice.payment_terms or "",
            notes=invoice.notes or "",
            line_items=line_items or [LineItemDraft()],
        )


class LineItemResponse(BaseSchema):
    """Stored line item."""

    id: int
    invoice_id: int
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    sort_order: int


class InvoiceSummary(TimestampSchema):
    """Invoice summary for list views."""

    id: int
    invoice_number: str
    invoice_type: InvoiceType
    invoice_date: date
    client_name: str
    status: InvoiceStatus
    total: Decimal

    @computed_field
    @property
    def display_title(self) -> str:
        label = "Quote" if self.invoice_type == InvoiceType.QUOTE else "Invoice"
        return f"{label} #{self.invoice_number}"

    @computed_field
    @property
    def display_total(self) -> str:
        return format_money(self.total)


class InvoiceResponse(TimestampSchema):
    """Full invoice response schema."""

    id: int
    invoice_number: str
    invoice_type: InvoiceType
    invoice_date: date
    due_date: date | None
    status: InvoiceStatus
    client_name: str
    client_email: str | None
    client_address: str | None
    subtotal: Decimal
    tax_enabled: bool
    tax_amount: Decimal
    total: Decimal
    payment_terms: str | None
    notes: str | None
    line_items: list[LineItemResponse]


class PreviewLineItem(BaseSchema):
    """Line item as shown on the preview."""

    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


class InvoicePreview(BaseSchema):
    """
    Read-only snapshot consumed by the preview and the PDF export.
    Carries the computed totals and the tax rate next to the display fields.
    """

    invoice_number: str
    invoice_type: InvoiceType
    invoice_date: date
    due_date: date | None = None
    status: InvoiceStatus
    client_name: str
    client_email: str = ""
    client_address: str = ""
    subtotal: Decimal
    tax_enabled: bool
    tax_amount: Decimal
    tax_rate: Decimal
    total: Decimal
    payment_terms: str = ""
    notes: str = ""
    line_items: list[PreviewLineItem]
    company: CompanySettingsResponse | None = None

    @property
    def title(self) -> str:
        return "QUOTE" if self.invoice_type == InvoiceType.QUOTE else "INVOICE"

    @classmethod
    def from_draft(
        cls,
        draft: InvoiceDraft,
        company: CompanySettingsResponse | None = None,
    ) -> "InvoicePreview":
        """Freeze a draft, totals included."""
        return cls.model_validate({**draft.model_dump(), "company": company})
