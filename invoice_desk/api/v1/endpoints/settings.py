"""
Company settings endpoints.
"""

from fastapi import APIRouter

from invoice_desk.api.deps import DbSession
from invoice_desk.schemas.company_settings import (
    CompanySettingsResponse,
    CompanySettingsUpdate,
)
from invoice_desk.services.company_settings import CompanySettingsService


router = APIRouter()


@router.get(
    "",
    response_model=CompanySettingsResponse,
    summary="Company settings",
)
async def get_settings(db: DbSession) -> CompanySettingsResponse:
    """Get the company settings."""
    service = CompanySettingsService(db)
    company = await service.get_or_404()
    return CompanySettingsResponse.model_validate(company)


@router.put(
    "",
    response_model=CompanySettingsResponse,
    summary="Update company settings",
)
async def update_settings(
    data: CompanySettingsUpdate,
    db: DbSession,
) -> CompanySettingsResponse:
    """Update the company settings."""
    service = CompanySettingsService(db)
    company = await service.update(data)
    return CompanySettingsResponse.model_validate(company)
