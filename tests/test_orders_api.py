from __future__ import annotations


def test_create_order_clamps_quantity(client):
    response = client.post(
        "/api/orders",
        json={
            "client_name": "Globex",
            "order_date": "2026-04-01",
            "items": [
                {"description": "Workshop", "quantity": 0, "unit_price": 1000},
                {"description": "Kits", "quantity": 3, "unit_price": "250"},
            ],
        },
    )
    assert response.status_code == 201
    order = response.json()

    assert order["status"] == "Pending"
    assert order["order_number"].startswith("ORD-")
    assert [item["total"] for item in order["items"]] == [1000.0, 750.0]
    assert order["subtotal"] == 1750.0
    assert order["gst"] == 315.0
    assert order["total"] == 2065.0


def test_create_order_for_unknown_quotation_is_rejected(client):
    response = client.post("/api/orders", json={"client_name": "Globex", "quotation_id": "nope"})
    assert response.status_code == 400
    assert "nope" in response.json()["detail"]


def test_list_and_get_orders(client):
    created = client.post("/api/orders", json={"client_name": "Globex"}).json()

    assert [o["id"] for o in client.get("/api/orders").json()] == [created["id"]]
    assert client.get(f"/api/orders/{created['id']}").json()["client_name"] == "Globex"
    assert client.get("/api/orders/missing").status_code == 404


def test_order_status_transitions(client):
    order = client.post("/api/orders", json={"client_name": "Globex"}).json()
    url = f"/api/orders/{order['id']}/status"

    assert client.patch(url, json={"status": "Processing"}).json()["status"] == "Processing"
    assert client.patch(url, json={"status": "Completed"}).json()["status"] == "Completed"
    assert client.patch(url, json={"status": "Shipped"}).status_code == 400
    assert client.patch("/api/orders/missing/status", json={"status": "Cancelled"}).status_code == 404


def test_order_totals_preview(client):
    response = client.post(
        "/api/orders/totals",
        json={"items": [
            {"quantity": 0, "unit_price": 80},
            {"quantity": 2, "unit_price": ""},
            {"quantity": 1.5, "unit_price": 40},
        ]},
    )
    assert response.json() == {
        "per_item_totals": [80.0, 0.0, 0.0],
        "subtotal": 80.0,
        "gst": 14.4,
        "total": 94.4,
    }
