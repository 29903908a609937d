"""
Company settings model.
A single row holds the company profile and the invoice defaults.
"""

from decimal import Decimal
from typing import Optional
from sqlalchemy import String, Text, Boolean, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from invoice_desk.models.base import BaseModel


class CompanySettings(BaseModel):
    """
    Company profile and invoicing defaults.

    Exactly one row is expected to exist. It is edited from the settings
    screen and its sequence counter is advanced every time a new invoice
    is saved.

    Attributes:
        company_name: Name printed on invoices
        company_email: Contact email
        company_phone: Contact phone number
        company_address: Postal address
        tax_enabled: Whether new invoices charge tax by default
        tax_rate: Tax percentage applied to the subtotal
        default_payment_terms: Payment terms copied onto new invoices
        next_invoice_number: Sequence counter for the next invoice number
    """

    __tablename__ = "company_settings"

    company_name: Mapped[str] = mapped_column(
        String(255),
        default="",
        nullable=False,
    )
    company_email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    company_phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    company_address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Tax
    tax_enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    tax_rate: Mapped[Decimal] = mapped_column(
        Numeric(precision=5, scale=2),
        default=Decimal("10.00"),
        nullable=False,
    )

    default_payment_terms: Mapped[str] = mapped_column(
        Text,
        default="Due within 30 days",
        nullable=False,
    )
    next_invoice_number: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<CompanySettings(id={self.id}, company='{self.company_name}', next={self.next_invoice_number})>"
