"""
Screen navigation.

List -> form (create or edit) -> back to list; settings is reachable from
the list and returns to it. Every screen change builds a fresh view and
reloads its data.
"""

from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from invoice_desk.core.database import async_session_maker
from invoice_desk.views.invoice_form import InvoiceFormView
from invoice_desk.views.invoice_list import InvoiceListView
from invoice_desk.views.notifications import Notifier
from invoice_desk.views.settings_form import SettingsView


class Screen(str, Enum):
    LIST = "list"
    FORM = "form"
    SETTINGS = "settings"


class InvoiceApp:
    """Owns the current screen and wires the view callbacks together."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = async_session_maker,
        notifier: Notifier | None = None,
    ):
        self._session_factory = session_factory
        self.notifier = notifier or Notifier()
        self.screen = Screen.LIST
        self.view: InvoiceListView | InvoiceFormView | SettingsView | None = None

    async def show_list(self) -> InvoiceListView:
        view = InvoiceListView(
            on_create=self.create_invoice,
            on_edit=self.edit_invoice,
            on_view_settings=self.view_settings,
            notifier=self.notifier,
            session_factory=self._session_factory,
        )
        self.screen, self.view = Screen.LIST, view
        await view.load()
        return view

    async def create_invoice(self) -> InvoiceFormView:
        return await self._open_form(None)

    async def edit_invoice(self, invoice_id: int) -> InvoiceFormView:
        return await self._open_form(invoice_id)

    async def view_settings(self) -> SettingsView:
        view = SettingsView(
            on_back=self.show_list,
            notifier=self.notifier,
            session_factory=self._session_factory,
        )
        self.screen, self.view = Screen.SETTINGS, view
        await view.load()
        return view

    async def _open_form(self, invoice_id: int | None) -> InvoiceFormView:
        view = InvoiceFormView(
            on_back=self.show_list,
            notifier=self.notifier,
            invoice_id=invoice_id,
            session_factory=self._session_factory,
        )
        self.screen, self.view = Screen.FORM, view
        await view.load()
        return view
