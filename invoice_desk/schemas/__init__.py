"""
Pydantic schemas for request/response validation.
"""

from invoice_desk.schemas.company_settings import (
    CompanySettingsUpdate,
    CompanySettingsResponse,
)
from invoice_desk.schemas.invoice import (
    LineItemDraft,
    InvoiceDraft,
    InvoicePreview,
    InvoiceResponse,
    InvoiceSummary,
    LineItemResponse,
)
from invoice_desk.schemas.base import MessageResponse


__all__ = [
    "CompanySettingsUpdate",
    "CompanySettingsResponse",
    "LineItemDraft",
    "InvoiceDraft",
    "InvoicePreview",
    "InvoiceResponse",
    "InvoiceSummary",
    "LineItemResponse",
    "MessageResponse",
]
