"""
Invoice arithmetic.
Pure functions with no database or framework dependency.
"""

from decimal import Decimal
from typing import Iterable, NamedTuple

from invoice_desk.core.config import settings


ZERO = Decimal("0")
HUNDRED = Decimal("100")


class InvoiceTotals(NamedTuple):
    """Computed amounts of an invoice."""

    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def calculate_line_amount(quantity: Decimal, rate: Decimal) -> Decimal:
    """Line amount, unrounded."""
    return quantity * rate


def calculate_totals(
    amounts: Iterable[Decimal],
    tax_enabled: bool,
    tax_rate: Decimal,
) -> InvoiceTotals:
    """
    Compute subtotal, tax and total from line amounts.

    Args:
        amounts: Line item amounts
        tax_enabled: Whether tax is charged
        tax_rate: Tax percentage (10 means 10%)

    Returns:
        InvoiceTotals with total == subtotal + tax_amount
    """
    subtotal = sum(amounts, ZERO)
    tax_amount = subtotal * tax_rate / HUNDRED if tax_enabled else ZERO
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )


def format_invoice_number(
    counter: int,
    prefix: str | None = None,
    width: int | None = None,
) -> str:
    """
    Build the human readable invoice number.
    Format: INV-{counter zero padded to 4 digits}, e.g. 7 -> INV-0007
    """
    prefix = settings.INVOICE_NUMBER_PREFIX if prefix is None else prefix
    width = settings.INVOICE_NUMBER_WIDTH if width is None else width
    return f"{prefix}{str(counter).zfill(width)}"


def format_money(amount: Decimal) -> str:
    """Fixed two-decimal display, e.g. $38.50"""
    return f"{settings.CURRENCY_SYMBOL}{amount:.2f}"
