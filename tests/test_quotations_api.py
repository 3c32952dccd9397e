from __future__ import annotations


def _create_quotation(client, items, **fields):
    payload = {"client_name": "Acme Corp", "contact_person": "R. Singh", "items": items}
    payload.update(fields)
    response = client.post("/api/quotations", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_computes_totals_server_side(client, lab_item):
    quotation = _create_quotation(client, [lab_item], subtotal=999, total=1)

    assert quotation["status"] == "Pending"
    assert quotation["quotation_number"].startswith("QT-")
    assert quotation["items"][0]["total"] == 200.0
    assert quotation["subtotal"] == 200.0
    assert quotation["gst"] == 36.0
    assert quotation["total"] == 236.0


def test_create_keeps_given_quotation_number(client, lab_item):
    quotation = _create_quotation(client, [lab_item], quotation_number="QT-CUSTOM-1")
    assert quotation["quotation_number"] == "QT-CUSTOM-1"


def test_blank_and_invalid_item_fields_count_as_zero(client, lab_item):
    items = [
        {"category": "Assessment with Proctoring", "cost": "", "quantity": ""},
        {"category": "Other", "cost": "abc", "quantity": 3},
        lab_item,
    ]
    quotation = _create_quotation(client, items)

    assert [item["total"] for item in quotation["items"]] == [0.0, 0.0, 200.0]
    assert quotation["subtotal"] == 200.0


def test_list_and_filter_by_lead(client, lab_item):
    _create_quotation(client, [lab_item], lead_id="lead-a")
    _create_quotation(client, [lab_item], lead_id="lead-b")

    assert len(client.get("/api/quotations").json()) == 2
    filtered = client.get("/api/quotations", params={"lead_id": "lead-a"}).json()
    assert [q["lead_id"] for q in filtered] == ["lead-a"]


def test_get_unknown_quotation_is_404(client):
    assert client.get("/api/quotations/missing").status_code == 404
    assert client.get("/api/quotations/missing/profit").status_code == 404
    assert client.get("/api/quotations/missing/download").status_code == 404
    assert client.post("/api/quotations/missing/convert").status_code == 404
    assert client.put("/api/quotations/missing", json={"notes": "x"}).status_code == 404


def test_update_recomputes_totals_and_records_history(client, lab_item):
    quotation = _create_quotation(client, [lab_item])

    response = client.put(
        f"/api/quotations/{quotation['id']}",
        json={
            "items": [{"category": "Trainer Cost", "description": "Trainer", "cost": 500, "quantity": 3}],
            "edit_reason": "Client asked for a trainer-led session",
        },
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["subtotal"] == 1500.0
    assert updated["gst"] == 270.0
    assert updated["total"] == 1770.0
    assert updated["client_name"] == "Acme Corp"
    assert "last_modified" in updated
    assert "edit_reason" not in updated

    history = client.get(f"/api/quotations/{quotation['id']}/history").json()
    assert len(history) == 1
    assert history[0]["reason"] == "Client asked for a trainer-led session"
    assert history[0]["editor"] == "System User"
    assert history[0]["changes"]["subtotal"] == 1500.0


def test_update_without_items_keeps_totals(client, lab_item):
    quotation = _create_quotation(client, [lab_item])

    updated = client.put(f"/api/quotations/{quotation['id']}", json={"notes": "Weekend batch"}).json()
    assert updated["notes"] == "Weekend batch"
    assert updated["total"] == 236.0


def test_status_update(client, lab_item):
    quotation = _create_quotation(client, [lab_item])
    url = f"/api/quotations/{quotation['id']}/status"

    assert client.patch(url, json={"status": "Rejected"}).json()["status"] == "Rejected"
    assert client.patch(url, json={"status": "Lost"}).status_code == 400
    assert client.patch("/api/quotations/missing/status", json={"status": "Approved"}).status_code == 404


def test_profit_analysis(client, lab_item):
    quotation = _create_quotation(client, [lab_item])

    analysis = client.get(f"/api/quotations/{quotation['id']}/profit").json()
    assert analysis["quotation_id"] == quotation["id"]
    assert analysis["total_price"] == 200.0
    assert analysis["total_cost"] == 100.0
    assert analysis["total_profit"] == 100.0
    assert analysis["gst"] == 36.0
    assert analysis["total_with_gst"] == 236.0
    assert analysis["profit_margin_pct"] == 50.0
    assert analysis["markup_pct"] == 100.0
    assert analysis["margin_rating"] == "healthy"
    assert analysis["target_progress_pct"] == 100.0
    assert analysis["items"][0]["category"] == "Lab Cost per pax per day"


def test_profit_analysis_of_empty_quotation_has_null_margins(client):
    quotation = _create_quotation(client, [])

    analysis = client.get(f"/api/quotations/{quotation['id']}/profit").json()
    assert analysis["total_price"] == 0.0
    assert analysis["profit_margin_pct"] is None
    assert analysis["markup_pct"] is None
    assert analysis["margin_rating"] is None


def test_totals_preview(client, lab_item):
    response = client.post(
        "/api/quotations/totals",
        json={"items": [{"category": "Assessment with Proctoring"}, lab_item]},
    )
    assert response.status_code == 200
    assert response.json() == {
        "per_item_totals": [0.0, 200.0],
        "subtotal": 200.0,
        "gst": 36.0,
        "total": 236.0,
    }
    assert client.get("/api/quotations").json() == []


def test_download_pdf(client, lab_item):
    quotation = _create_quotation(client, [lab_item], notes="Includes <lab> access & support")

    response = client.get(f"/api/quotations/{quotation['id']}/download")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert f"Quotation-{quotation['id']}.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_convert_to_order(client, lab_item):
    lead = client.post(
        "/api/leads",
        json={"company_name": "Acme Corp", "contact_person": "R. Singh"},
    ).json()
    quotation = _create_quotation(
        client,
        [{"category": "Assessment with Proctoring", "cost": 0, "quantity": 0}, lab_item],
        lead_id=lead["id"],
        date="2026-03-02",
    )

    response = client.post(f"/api/quotations/{quotation['id']}/convert")
    assert response.status_code == 201
    order = response.json()
    assert order["id"].startswith("order_")
    assert order["quotation_id"] == quotation["id"]
    assert order["order_date"] == "2026-03-02"
    assert order["client_name"] == "Acme Corp"
    assert len(order["items"]) == 1
    assert order["items"][0]["unit_price"] == 100.0
    assert order["items"][0]["description"] == "Cloud lab access"
    assert order["subtotal"] == 200.0
    assert order["total"] == 236.0

    converted = client.get(f"/api/quotations/{quotation['id']}").json()
    assert converted["status"] == "Approved"
    assert converted["order_id"] == order["id"]
    assert client.get(f"/api/leads/{lead['id']}").json()["status"] == "Converted"


def test_convert_with_missing_lead_still_creates_order(client, lab_item):
    quotation = _create_quotation(client, [lab_item], lead_id="gone")

    response = client.post(f"/api/quotations/{quotation['id']}/convert")
    assert response.status_code == 201
    assert len(client.get("/api/orders").json()) == 1


def test_update_with_null_items_clears_items_and_totals(client, lab_item):
    quotation = _create_quotation(client, [lab_item])

    response = client.put(
        f"/api/quotations/{quotation['id']}",
        json={"items": None, "edit_reason": "clear"},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["items"] == []
    assert updated["subtotal"] == 0.0
    assert updated["gst"] == 0.0
    assert updated["total"] == 0.0

    stored = client.get(f"/api/quotations/{quotation['id']}").json()
    assert stored["items"] == []
    assert stored["total"] == 0.0


def test_fractional_quantity_is_not_totalled(client):
    response = client.post(
        "/api/quotations/totals",
        json={"items": [{"category": "Other", "cost": 100, "quantity": 2.5}]},
    )
    assert response.json()["per_item_totals"] == [0.0]
    assert response.json()["subtotal"] == 0.0


def test_quotation_converts_only_once(client, lab_item):
    quotation = _create_quotation(client, [lab_item])
    first = client.post(f"/api/quotations/{quotation['id']}/convert").json()

    response = client.post(f"/api/quotations/{quotation['id']}/convert")
    assert response.status_code == 400
    assert first["id"] in response.json()["detail"]

    assert len(client.get("/api/orders").json()) == 1
    assert client.get(f"/api/quotations/{quotation['id']}").json()["order_id"] == first["id"]
