"""HTTP behaviour of the unified /api/tx endpoints."""

from __future__ import annotations

import pytest


def add_tx(client, kind="Income", amount=1000, on="2024-03-01", description=None):
    payload = {"occurredOn": on, "type": kind, "amount": amount}
    if description is not None:
        payload["description"] = description
    return client.post("/api/tx", json=payload)


def test_create_transaction(client) -> None:
    response = add_tx(client, kind="Expense", amount=12.5, description="Coffee beans")

    assert response.status_code == 201
    body = response.json()
    assert body["type"] == "Expense"
    assert body["amount"] == 12.5
    assert body["occurredOn"] == "2024-03-01"
    assert body["description"] == "Coffee beans"
    assert response.headers["location"] == f"/api/tx/{body['id']}"


def test_blank_description_is_stored_as_null(client) -> None:
    body = add_tx(client, description="   ").json()

    assert body["description"] is None


@pytest.mark.parametrize("kind", ["income", "Transfer", ""])
def test_unknown_type_is_rejected(client, kind) -> None:
    response = add_tx(client, kind=kind)

    assert response.status_code == 400
    assert response.text == "Type must be 'Income' or 'Expense'"


def test_missing_or_null_type_is_rejected(client) -> None:
    payload = {"occurredOn": "2024-03-01", "amount": 10}

    missing = client.post("/api/tx", json=payload)
    null = client.post("/api/tx", json={**payload, "type": None})

    for response in (missing, null):
        assert response.status_code == 400
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Type must be 'Income' or 'Expense'"


def test_missing_date_is_rejected(client) -> None:
    response = client.post("/api/tx", json={"type": "Income", "amount": 10})

    assert response.status_code == 400
    assert response.text == "OccurredOn is required"


def test_zero_amount_is_rejected(client) -> None:
    response = add_tx(client, amount=0)

    assert response.status_code == 400
    assert response.text == "Amount must be > 0"


def test_huge_negative_amount_reports_sign(client) -> None:
    response = add_tx(client, amount=-1e30)

    assert response.status_code == 400
    assert response.text == "Amount must be > 0"


def test_list_orders_newest_first_with_id_tie_break(client) -> None:
    first = add_tx(client, on="2024-03-10").json()
    second = add_tx(client, kind="Expense", amount=5, on="2024-03-10").json()
    latest = add_tx(client, kind="Expense", amount=7, on="2024-03-20").json()
    add_tx(client, on="2024-04-01")

    items = client.get("/api/tx", params={"year": 2024, "month": 3}).json()["items"]

    assert [item["id"] for item in items] == [latest["id"], second["id"], first["id"]]


def test_list_filters_by_type(client) -> None:
    add_tx(client)
    add_tx(client, kind="Expense", amount=5)

    items = client.get("/api/tx", params={"year": 2024, "month": 3, "type": "Expense"}).json()["items"]

    assert [item["type"] for item in items] == ["Expense"]


def test_summary(client) -> None:
    add_tx(client, amount=1000)
    add_tx(client, kind="Expense", amount=250, on="2024-03-15")

    body = client.get("/api/tx/summary", params={"year": 2024, "month": 3}).json()

    assert body == {"income": 1000, "expense": 250, "balance": 750, "spentPercent": 25}


def test_summary_without_income_reports_everything_spent(client) -> None:
    add_tx(client, kind="Expense", amount=40)

    body = client.get("/api/tx/summary", params={"year": 2024, "month": 3}).json()

    assert body["spentPercent"] == 100
    assert body["balance"] == -40


def test_summary_caps_spent_percent(client) -> None:
    add_tx(client, amount=100)
    add_tx(client, kind="Expense", amount=300)

    body = client.get("/api/tx/summary", params={"year": 2024, "month": 3}).json()

    assert body["spentPercent"] == 100
    assert body["income"] - body["expense"] == body["balance"]


def test_split_and_unified_tables_are_independent(client) -> None:
    add_tx(client)

    summary = client.get("/api/summary", params={"year": 2024, "month": 3}).json()

    assert summary["totalIncome"] == 0


def test_root_reports_running(client) -> None:
    assert client.get("/").json() == {"message": "Money Tracker API running"}
