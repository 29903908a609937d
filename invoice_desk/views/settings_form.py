"""
Company settings screen.
"""

import logging
from typing import Any, Awaitable, Callable

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoice_desk.core.database import async_session_maker
from invoice_desk.schemas.company_settings import CompanySettingsUpdate
from invoice_desk.services.company_settings import CompanySettingsService
from invoice_desk.views.notifications import Notifier


logger = logging.getLogger(__name__)


class SettingsView:
    """Edit the singleton company settings record."""

    def __init__(
        self,
        on_back: Callable[[], Awaitable[object]],
        notifier: Notifier,
        session_factory: async_sessionmaker[AsyncSession] = async_session_maker,
    ):
        self._on_back = on_back
        self._session_factory = session_factory
        self.notifier = notifier
        self.form = CompanySettingsUpdate()
        self.saving = False

    @property
    def tax_rate_editable(self) -> bool:
        """The rate input is hidden while tax is off; its value is kept."""
        return self.form.tax_enabled

    async def load(self) -> None:
        try:
            async with self._session_factory() as session:
                company = await CompanySettingsService(session).get_or_404()
        except (HTTPException, SQLAlchemyError) as e:
            logger.error(f"Error loading settings: {e}")
            self.notifier.error("Failed to load settings")
            return

        self.form = CompanySettingsUpdate.model_validate(company)

    def set_field(self, name: str, value: Any) -> None:
        if name not in CompanySettingsUpdate.model_fields:
            raise ValueError(f"Not an editable settings field: {name}")
        setattr(self.form, name, value)

    async def save(self) -> bool:
        """Write every field back to the settings record."""
        self.saving = True
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await CompanySettingsService(session).update(self.form)
        except HTTPException as e:
            if e.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
                self.notifier.validation_error(e.detail)
            else:
                logger.error(f"Error saving settings: {e.detail}")
                self.notifier.error("Failed to save settings")
            return False
        except SQLAlchemyError as e:
            logger.error(f"Error saving settings: {e}", exc_info=True)
            self.notifier.error("Failed to save settings")
            return False
        finally:
            self.saving = False

        self.notifier.success("Settings saved successfully")
        return True

    async def back(self) -> None:
        await self._on_back()
