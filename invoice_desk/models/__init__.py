"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from invoice_desk.models.company_settings import CompanySettings
from invoice_desk.models.invoice import Invoice, LineItem, InvoiceStatus, InvoiceType


__all__ = [
    "CompanySettings",
    "Invoice",
    "LineItem",
    "InvoiceStatus",
    "InvoiceType",
]
