"""Integration tests for the Invoice API"""

import pytest
from decimal import Decimal


async def bulk_invoice(client, customer_id: int, order_ids, **extra):
    return await client.post(
        "/api/invoices/bulk", json={"customer_id": customer_id, "order_ids": order_ids, **extra}
    )


@pytest.mark.asyncio
class TestPendingByCustomer:

    async def test_groups_delivered_uninvoiced_orders(self, client, catalog, add_delivered_order):
        # Arrange
        customer_id, other_id = catalog["customer"].id, catalog["other_customer"].id
        box, film = catalog["box"], catalog["film"]
        first = await add_delivered_order(customer_id, [(box, 10, "100.00")])
        second = await add_delivered_order(customer_id, [(box, 10, "110.00"), (film, 8, "50.00")])
        await add_delivered_order(other_id, [(film, 1, "50.00")])
        box_id = box.id

        # Act
        response = await client.get("/api/invoices/pending-by-customer")

        # Assert
        assert response.status_code == 200
        groups = {g["customer_id"]: g for g in response.json()["groups"]}
        assert set(groups) == {customer_id, other_id}
        group = groups[customer_id]
        assert group["company_name"] == "Yildiz Ambalaj"
        assert sorted(group["order_ids"]) == sorted([first.id, second.id])
        assert Decimal(group["total_amount"]) == Decimal("2500")
        rollup = {p["product_id"]: p for p in group["products"]}
        assert rollup[box_id]["total_quantity"] == 20
        assert Decimal(rollup[box_id]["total_amount"]) == Decimal("2100")

    async def test_filter_by_customer(self, client, catalog, add_delivered_order):
        customer_id = catalog["customer"].id
        await add_delivered_order(customer_id, [(catalog["box"], 1, "100.00")])
        await add_delivered_order(catalog["other_customer"].id, [(catalog["film"], 1, "50.00")])

        response = await client.get("/api/invoices/pending-by-customer", params={"customer_id": customer_id})

        assert [g["customer_id"] for g in response.json()["groups"]] == [customer_id]


@pytest.mark.asyncio
class TestBulkInvoiceEndpoint:

    async def test_bulk_invoice_success(self, client, catalog, add_delivered_order):
        """
        Given: three delivered orders worth 3500 in total
        When: POST /invoices/bulk with the default 20% tax
        Then: 201, totals 3500 / 700 / 4200, nothing left pending
        """
        # Arrange
        customer_id, address = catalog["customer"].id, catalog["customer"].address
        box, film = catalog["box"], catalog["film"]
        orders = [
            await add_delivered_order(customer_id, [(box, 10, "100.00")]),
            await add_delivered_order(customer_id, [(box, 10, "110.00"), (film, 8, "50.00")]),
            await add_delivered_order(customer_id, [(box, 10, "100.00")]),
        ]
        order_ids = [o.id for o in orders]

        # Act
        response = await bulk_invoice(client, customer_id, order_ids)

        # Assert
        assert response.status_code == 201, response.json()
        body = response.json()
        assert body["status"] == "generated"
        assert body["order_count"] == 3
        assert Decimal(body["subtotal_amount"]) == Decimal("3500")
        assert Decimal(body["tax_amount"]) == Decimal("700")
        assert Decimal(body["total_amount"]) == Decimal("4200")
        assert body["shipping_address"] == address
        assert sorted(body["order_ids"]) == sorted(order_ids)

        pending = await client.get("/api/invoices/pending-by-customer", params={"customer_id": customer_id})
        assert pending.json()["groups"] == []

    async def test_rebilling_an_order_is_a_conflict(self, client, catalog, add_delivered_order):
        customer_id = catalog["customer"].id
        order = await add_delivered_order(customer_id, [(catalog["box"], 1, "100.00")])
        first = await bulk_invoice(client, customer_id, [order.id])

        second = await bulk_invoice(client, customer_id, [order.id])

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "ORDER_ALREADY_INVOICED"

    async def test_empty_selection(self, client, catalog):
        response = await bulk_invoice(client, catalog["customer"].id, [])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_ORDER_SELECTION"

    async def test_order_of_another_customer(self, client, catalog, add_delivered_order):
        customer_id = catalog["customer"].id
        foreign = await add_delivered_order(catalog["other_customer"].id, [(catalog["film"], 1, "50.00")])

        response = await bulk_invoice(client, customer_id, [foreign.id])

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ORDER_CUSTOMER_MISMATCH"

    async def test_requested_number_and_tax_rate(self, client, catalog, add_delivered_order):
        customer_id = catalog["customer"].id
        order = await add_delivered_order(customer_id, [(catalog["box"], 2, "100.00")])

        response = await bulk_invoice(client, customer_id, [order.id], invoice_number="FAT-7", tax_rate="10")

        assert response.status_code == 201
        assert response.json()["invoice_number"] == "FAT-7"
        assert Decimal(response.json()["total_amount"]) == Decimal("220")


@pytest.mark.asyncio
class TestInvoiceQueries:

    async def test_get_and_list(self, client, catalog, add_delivered_order):
        # Arrange
        customer_id = catalog["customer"].id
        order = await add_delivered_order(customer_id, [(catalog["box"], 1, "100.00")])
        created = (await bulk_invoice(client, customer_id, [order.id])).json()

        # Act
        fetched = await client.get(f"/api/invoices/{created['invoice_id']}")
        listed = await client.get("/api/invoices", params={"customer_id": customer_id, "status": "generated"})

        # Assert
        assert fetched.status_code == 200
        assert fetched.json()["order_ids"] == [order.id]
        assert fetched.json()["items"][0]["product_name"] == "Karton Koli"
        assert [i["invoice_id"] for i in listed.json()["invoices"]] == [created["invoice_id"]]

    async def test_unknown_invoice(self, client):
        response = await client.get("/api/invoices/987654")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
class TestInvoiceStatusEndpoint:

    async def test_paid_invoice_is_final(self, client, catalog, add_delivered_order):
        customer_id = catalog["customer"].id
        order = await add_delivered_order(customer_id, [(catalog["box"], 1, "100.00")])
        invoice_id = (await bulk_invoice(client, customer_id, [order.id])).json()["invoice_id"]

        paid = await client.put(f"/api/invoices/{invoice_id}/status", json={"status": "paid"})
        cancelled = await client.put(f"/api/invoices/{invoice_id}/status", json={"status": "cancelled"})

        assert paid.status_code == 200
        assert paid.json()["paid_at"] is not None
        assert cancelled.status_code == 409
        assert cancelled.json()["error"]["code"] == "INVALID_INVOICE_STATUS"

    async def test_cancel_releases_orders(self, client, catalog, add_delivered_order):
        # Arrange
        customer_id = catalog["customer"].id
        order = await add_delivered_order(customer_id, [(catalog["box"], 1, "100.00")])
        invoice_id = (await bulk_invoice(client, customer_id, [order.id])).json()["invoice_id"]

        # Act
        response = await client.put(f"/api/invoices/{invoice_id}/status", json={"status": "cancelled"})

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert response.json()["order_ids"] == []
        rebilled = await bulk_invoice(client, customer_id, [order.id])
        assert rebilled.status_code == 201
