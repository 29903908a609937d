"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from invoice_desk.api.v1.endpoints import (
    invoices,
    settings,
)

api_router = APIRouter()

api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["Invoices"],
)

api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"],
)
