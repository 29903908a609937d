"""
Company settings service.
Reads and updates the singleton settings row.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from invoice_desk.core.config import settings
from invoice_desk.models.company_settings import CompanySettings
from invoice_desk.schemas.company_settings import CompanySettingsUpdate


logger = logging.getLogger(__name__)


class CompanySettingsService:
    """Service for the company settings record."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self) -> CompanySettings | None:
        """
        Get the settings row.
        Raises MultipleResultsFound if more than one row exists.
        """
        result = await self.db.execute(select(CompanySettings))
        return result.scalar_one_or_none()

    async def get_or_404(self) -> CompanySettings:
        """Get the settings row or raise 404 when it was never provisioned."""
        company = await self.get()
        if not company:
            logger.warning("Company settings row is missing")
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company settings have not been configured",
            )
        return company

    async def update(self, data: CompanySettingsUpdate) -> CompanySettings:
        """
        Overwrite every editable field of the settings row.

        Raises:
            HTTPException: 422 if the company name is empty, 404 if no row exists
        """
        if not data.company_name:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Company name is required",
            )

        company = await self.get_or_404()
        for field, value in data.model_dump().items():
            setattr(company, field, value)

        await self.db.flush()
        await self.db.refresh(company)
        logger.info(f"Company settings updated for '{company.company_name}'")
        return company

    async def increment_sequence(self, company: CompanySettings) -> int:
        """Advance the invoice sequence counter by one and return the new value."""
        company.next_invoice_number += 1
        await self.db.flush()
        return company.next_invoice_number

    async def ensure_exists(self) -> CompanySettings:
        """Provision the settings row with defaults if it does not exist yet."""
        company = await self.get()
        if company:
            return company

        company = CompanySettings(
            company_name="My Company",
            tax_enabled=True,
            tax_rate=settings.DEFAULT_TAX_RATE,
            default_payment_terms=settings.DEFAULT_PAYMENT_TERMS,
            next_invoice_number=1,
        )
        self.db.add(company)
        await self.db.flush()
        logger.info("Provisioned default company settings")
        return company
