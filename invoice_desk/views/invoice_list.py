"""
Invoice list screen.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoice_desk.core.database import async_session_maker
from invoice_desk.schemas.invoice import InvoiceSummary
from invoice_desk.services.invoice import InvoiceService
from invoice_desk.views.notifications import Notifier


logger = logging.getLogger(__name__)


class ListState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    POPULATED = "populated"


class InvoiceListView:
    """
    All invoices, newest first.

    Selecting an invoice, creating one and opening the settings are routed
    to the callbacks given by the caller.
    """

    def __init__(
        self,
        on_create: Callable[[], Awaitable[object]],
        on_edit: Callable[[int], Awaitable[object]],
        on_view_settings: Callable[[], Awaitable[object]],
        notifier: Notifier,
        session_factory: async_sessionmaker[AsyncSession] = async_session_maker,
    ):
        self._on_create = on_create
        self._on_edit = on_edit
        self._on_view_settings = on_view_settings
        self._session_factory = session_factory
        self.notifier = notifier
        self.invoices: list[InvoiceSummary] = []
        self.loading = True

    @property
    def state(self) -> ListState:
        if self.loading:
            return ListState.LOADING
        return ListState.POPULATED if self.invoices else ListState.EMPTY

    async def load(self) -> None:
        """Fetch the invoice summaries. On failure the list stays empty."""
        self.loading = True
        try:
            async with self._session_factory() as session:
                invoices = await InvoiceService(session).list_all()
                self.invoices = [InvoiceSummary.model_validate(i) for i in invoices]
        except (HTTPException, SQLAlchemyError) as e:
            logger.error(f"Error loading invoices: {e}", exc_info=True)
            self.invoices = []
            self.notifier.error("Failed to load invoices")
        finally:
            self.loading = False

    async def select_invoice(self, invoice_id: int) -> None:
        await self._on_edit(invoice_id)

    async def create_invoice(self) -> None:
        await self._on_create()

    async def view_settings(self) -> None:
        await self._on_view_settings()
