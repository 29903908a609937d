"""
Company settings schemas for request/response validation.
"""

from decimal import Decimal
from pydantic import ConfigDict, Field

from invoice_desk.core.config import settings
from invoice_desk.schemas.base import BaseSchema, TimestampSchema


class CompanySettingsBase(BaseSchema):
    """Editable company settings fields."""

    company_name: str = Field(default="", max_length=255)
    company_email: str | None = Field(None, max_length=255)
    company_phone: str | None = Field(None, max_length=50)
    company_address: str | None = None
    tax_enabled: bool = True
    tax_rate: Decimal = Field(
        default=settings.DEFAULT_TAX_RATE,
        ge=0,
        le=100,
        decimal_places=2,
    )
    default_payment_terms: str = settings.DEFAULT_PAYMENT_TERMS


class CompanySettingsUpdate(CompanySettingsBase):
    """
    Schema for updating the settings record.
    Also used as the mutable form state of the settings screen.
    """

    model_config = ConfigDict(validate_assignment=True)


class CompanySettingsResponse(CompanySettingsBase, TimestampSchema):
    """Company settings response schema."""

    id: int
    next_invoice_number: int
