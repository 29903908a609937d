"""
Invoice endpoint tests.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from invoice_desk.models import CompanySettings, Invoice, LineItem


async def _counter(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(CompanySettings.next_invoice_number))
    return result.scalar_one()


async def _invoice_count(db_session: AsyncSession) -> int:
    result = await db_session.execute(select(func.count(Invoice.id)))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_new_draft_uses_sequence_counter(client: AsyncClient, company_settings):
    """Counter 7 gives INV-0007 and settings defaults."""
    response = await client.get("/api/v1/invoices/new")

    assert response.status_code == 200
    data = response.json()
    assert data["invoice_number"] == "INV-0007"
    assert data["tax_enabled"] is True
    assert Decimal(data["tax_rate"]) == Decimal("10")
    assert data["payment_terms"] == "Due within 14 days"
    assert data["status"] == "draft"
    assert len(data["line_items"]) == 1
    assert Decimal(data["line_items"][0]["quantity"]) == 1
    assert Decimal(data["line_items"][0]["rate"]) == 0
    assert Decimal(data["total"]) == 0


@pytest.mark.asyncio
async def test_new_draft_without_settings(client: AsyncClient):
    response = await client.get("/api/v1/invoices/new")

    assert response.status_code == 404
    assert response.json()["detail"] == "Company settings have not been configured"


@pytest.mark.asyncio
async def test_create_invoice(
    client: AsyncClient,
    db_session: AsyncSession,
    company_settings,
    invoice_payload,
):
    """Totals are computed and the counter advances once."""
    response = await client.post("/api/v1/invoices", json=invoice_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["invoice_number"] == "INV-0007"
    assert data["client_name"] == "Blue Gum Cafe"
    assert Decimal(data["subtotal"]) == Decimal("35")
    assert Decimal(data["tax_amount"]) == Decimal("3.5")
    assert Decimal(data["total"]) == Decimal("38.5")

    items = data["line_items"]
    assert [i["description"] for i in items] == ["Switchboard inspection", "Call-out fee"]
    assert [i["sort_order"] for i in items] == [0, 1]
    assert [Decimal(i["amount"]) for i in items] == [Decimal("30"), Decimal("5")]
    assert all(i["invoice_id"] == data["id"] for i in items)

    assert await _counter(db_session) == 8


@pytest.mark.asyncio
async def test_create_invoice_ignores_client_amounts(
    client: AsyncClient,
    company_settings,
    invoice_payload,
):
    invoice_payload["line_items"][0]["amount"] = "999"

    response = await client.post("/api/v1/invoices", json=invoice_payload)

    assert response.status_code == 201
    assert Decimal(response.json()["line_items"][0]["amount"]) == Decimal("30")


@pytest.mark.asyncio
async def test_create_invoice_without_tax(client: AsyncClient, company_settings, invoice_payload):
    invoice_payload["tax_enabled"] = False

    response = await client.post("/api/v1/invoices", json=invoice_payload)

    data = response.json()
    assert Decimal(data["tax_amount"]) == 0
    assert Decimal(data["total"]) == Decimal(data["subtotal"]) == Decimal("35")


@pytest.mark.asyncio
async def test_fractional_quantity_is_stored_exactly(
    client: AsyncClient,
    db_session: AsyncSession,
    company_settings,
    invoice_payload,
):
    """A quantity like 1.125 hours survives the round trip unrounded."""
    invoice_payload["tax_enabled"] = False
    invoice_payload["line_items"] = [
        {"description": "Fault finding (hours)", "quantity": "1.125", "rate": "10"},
    ]
    created = (await client.post("/api/v1/invoices", json=invoice_payload)).json()

    stored = (await client.get(f"/api/v1/invoices/{created['id']}")).json()
    item = stored["line_items"][0]
    assert Decimal(item["quantity"]) == Decimal("1.125")
    assert Decimal(item["amount"]) == Decimal(item["quantity"]) * Decimal(item["rate"])
    assert Decimal(stored["total"]) == Decimal("11.25")

    row = (await db_session.execute(select(LineItem))).scalar_one()
    assert row.amount == row.quantity * row.rate

    draft = (await client.get(f"/api/v1/invoices/{created['id']}/draft")).json()
    assert Decimal(draft["total"]) == Decimal(stored["total"])

    listed = (await client.get("/api/v1/invoices")).json()
    assert Decimal(listed[0]["total"]) == Decimal(draft["total"])


@pytest.mark.asyncio
async def test_tax_on_fractional_amounts_is_not_rounded(client: AsyncClient, company_settings, invoice_payload):
    invoice_payload["line_items"] = [
        {"description": "Conduit (m)", "quantity": "2.5", "rate": "4.45"},
    ]

    created = (await client.post("/api/v1/invoices", json=invoice_payload)).json()
    draft = (await client.get(f"/api/v1/invoices/{created['id']}/draft")).json()

    assert Decimal(created["subtotal"]) == Decimal("11.125")
    assert Decimal(created["tax_amount"]) == Decimal("1.1125")
    assert Decimal(created["total"]) == Decimal("12.2375")
    assert Decimal(draft["total"]) == Decimal(created["total"])


@pytest.mark.asyncio
async def test_create_invoice_requires_client_name(
    client: AsyncClient,
    db_session: AsyncSession,
    company_settings,
    invoice_payload,
):
    """A blank client name writes nothing and leaves the counter alone."""
    invoice_payload["client_name"] = "   "

    response = await client.post("/api/v1/invoices", json=invoice_payload)

    assert response.status_code == 422
    assert response.json()["detail"] == "Client name is required"
    assert await _invoice_count(db_session) == 0
    assert await _counter(db_session) == 7


@pytest.mark.asyncio
async def test_create_invoice_requires_a_line_item(client: AsyncClient, company_settings, invoice_payload):
    invoice_payload["line_items"] = []

    response = await client.post("/api/v1/invoices", json=invoice_payload)

    assert response.status_code == 422
    assert response.json()["detail"] == "Validation error"


@pytest.mark.asyncio
async def test_create_invoice_rejects_negative_quantity(client: AsyncClient, company_settings, invoice_payload):
    invoice_payload["line_items"][0]["quantity"] = "-2"

    response = await client.post("/api/v1/invoices", json=invoice_payload)

    assert response.status_code == 422
    fields = [e["field"] for e in response.json()["errors"]]
    assert "body -> line_items -> 0 -> quantity" in fields


@pytest.mark.asyncio
async def test_update_replaces_line_items(
    client: AsyncClient,
    db_session: AsyncSession,
    company_settings,
    invoice_payload,
):
    created = (await client.post("/api/v1/invoices", json=invoice_payload)).json()

    invoice_payload["client_name"] = "Blue Gum Cafe Pty Ltd"
    invoice_payload["status"] = "sent"
    invoice_payload["line_items"] = [
        {"description": "Labour", "quantity": "2", "rate": "80"},
        {"description": "Cable", "quantity": "10", "rate": "1.5"},
        {"description": "Switch", "quantity": "1", "rate": "20"},
    ]
    response = await client.put(f"/api/v1/invoices/{created['id']}", json=invoice_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == created["id"]
    assert data["client_name"] == "Blue Gum Cafe Pty Ltd"
    assert data["status"] == "sent"
    assert [i["description"] for i in data["line_items"]] == ["Labour", "Cable", "Switch"]
    assert [i["sort_order"] for i in data["line_items"]] == [0, 1, 2]
    assert Decimal(data["subtotal"]) == Decimal("195")
    assert Decimal(data["total"]) == Decimal("214.5")

    result = await db_session.execute(
        select(LineItem.description)
        .where(LineItem.invoice_id == created["id"])
        .order_by(LineItem.sort_order)
    )
    assert list(result.scalars().all()) == ["Labour", "Cable", "Switch"]

    # Editing does not consume a number
    assert await _counter(db_session) == 8


@pytest.mark.asyncio
async def test_update_unknown_invoice(client: AsyncClient, company_settings, invoice_payload):
    response = await client.put("/api/v1/invoices/999", json=invoice_payload)

    assert response.status_code == 404
    assert response.json()["detail"] == "Invoice not found"


@pytest.mark.asyncio
async def test_get_invoice(client: AsyncClient, company_settings, invoice_payload):
    created = (await client.post("/api/v1/invoices", json=invoice_payload)).json()

    response = await client.get(f"/api/v1/invoices/{created['id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["invoice_number"] == "INV-0007"
    assert data["due_date"] == "2026-10-15"
    assert len(data["line_items"]) == 2


@pytest.mark.asyncio
async def test_get_unknown_invoice(client: AsyncClient, company_settings):
    response = await client.get("/api/v1/invoices/12345")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_load_draft_of_existing_invoice(client: AsyncClient, company_settings, invoice_payload):
    invoice_payload["tax_enabled"] = False
    created = (await client.post("/api/v1/invoices", json=invoice_payload)).json()

    response = await client.get(f"/api/v1/invoices/{created['id']}/draft")

    assert response.status_code == 200
    draft = response.json()
    assert draft["invoice_number"] == "INV-0007"
    assert draft["client_email"] == "owner@bluegum.example"
    assert draft["tax_enabled"] is False
    assert Decimal(draft["tax_rate"]) == Decimal("10")
    assert [i["description"] for i in draft["line_items"]] == ["Switchboard inspection", "Call-out fee"]
    assert Decimal(draft["total"]) == Decimal("35")


@pytest.mark.asyncio
async def test_list_invoices_newest_first(client: AsyncClient, company_settings, invoice_payload):
    empty = await client.get("/api/v1/invoices")
    assert empty.status_code == 200
    assert empty.json() == []

    await client.post("/api/v1/invoices", json=invoice_payload)
    invoice_payload["invoice_number"] = "INV-0008"
    invoice_payload["invoice_type"] = "quote"
    await client.post("/api/v1/invoices", json=invoice_payload)

    response = await client.get("/api/v1/invoices")

    data = response.json()
    assert [i["invoice_number"] for i in data] == ["INV-0008", "INV-0007"]
    assert data[0]["display_title"] == "Quote #INV-0008"
    assert data[1]["display_title"] == "Invoice #INV-0007"
    assert data[1]["display_total"] == "$38.50"


@pytest.mark.asyncio
async def test_preview(client: AsyncClient, company_settings, invoice_payload):
    response = await client.post("/api/v1/invoices/preview", json=invoice_payload)

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["tax_rate"]) == Decimal("10")
    assert Decimal(data["total"]) == Decimal("38.5")
    assert data["company"]["company_name"] == "Harbour Electrical"
    assert [Decimal(i["amount"]) for i in data["line_items"]] == [Decimal("30"), Decimal("5")]


@pytest.mark.asyncio
async def test_preview_pdf(client: AsyncClient, company_settings, invoice_payload):
    invoice_payload["invoice_type"] = "quote"

    response = await client.post("/api/v1/invoices/preview/pdf", json=invoice_payload)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="quote_INV-0007.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")
