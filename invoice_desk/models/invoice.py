"""
Invoice and LineItem models.
An invoice can also be a quote; both share the same table.
"""

from typing import Optional, List
from decimal import Decimal
from datetime import date
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Numeric, Date, Boolean, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoice_desk.models.base import BaseModel


class InvoiceType(str, Enum):
    """Document type."""
    INVOICE = "invoice"
    QUOTE = "quote"


class InvoiceStatus(str, Enum):
    """Invoice status enumeration."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class Invoice(BaseModel):
    """
    Invoice (or quote) model.

    The subtotal, tax_amount and total columns are snapshots written on
    every save; they are always computed from the line items first.

    Attributes:
        invoice_number: Human readable number (e.g. INV-0007)
        invoice_type: invoice or quote
        status: Current status
        invoice_date: Issue date
        due_date: Optional payment due date
        client_name: Billed party, required
        tax_enabled: Whether tax was charged
    """

    __tablename__ = "invoices"

    invoice_number: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
    )
    invoice_type: Mapped[InvoiceType] = mapped_column(
        SQLEnum(InvoiceType),
        default=InvoiceType.INVOICE,
        nullable=False,
    )
    status: Mapped[InvoiceStatus] = mapped_column(
        SQLEnum(InvoiceStatus),
        default=InvoiceStatus.DRAFT,
        nullable=False,
    )

    # Dates
    invoice_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    # Client
    client_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    client_email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    client_address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Totals (calculated from line items, stored unrounded)
    subtotal: Mapped[Decimal] = mapped_column(
        Numeric,
        default=Decimal("0.00"),
        nullable=False,
    )
    tax_enabled: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    tax_amount: Mapped[Decimal] = mapped_column(
        Numeric,
        default=Decimal("0.00"),
        nullable=False,
    )
    total: Mapped[Decimal] = mapped_column(
        Numeric,
        default=Decimal("0.00"),
        nullable=False,
    )

    # Terms and notes
    payment_terms: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    line_items: Mapped[List["LineItem"]] = relationship(
        "LineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="LineItem.sort_order",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number='{self.invoice_number}', total={self.total})>"


class LineItem(BaseModel):
    """
    One billable row of an invoice.

    Attributes:
        invoice_id: Foreign key to the invoice
        description: Item description
        quantity: Number of units
        rate: Price per unit
        amount: quantity * rate
        sort_order: Position of the row on the invoice
    """

    __tablename__ = "line_items"

    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    # No fixed scale: amount must stay equal to quantity * rate
    quantity: Mapped[Decimal] = mapped_column(
        Numeric,
        default=Decimal("1.00"),
        nullable=False,
    )
    rate: Mapped[Decimal] = mapped_column(
        Numeric,
        default=Decimal("0.00"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric,
        default=Decimal("0.00"),
        nullable=False,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    invoice: Mapped["Invoice"] = relationship(
        "Invoice",
        back_populates="line_items",
    )

    def __repr__(self) -> str:
        return f"<LineItem(id={self.id}, description='{self.description[:30]}', amount={self.amount})>"
