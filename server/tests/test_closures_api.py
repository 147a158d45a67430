from __future__ import annotations

from clubfinance.models.audit_log import AuditEntry


def _payment_payload(month: str) -> dict:
    return {"amount": "50", "paymentDate": f"{month}-10", "referenceMonth": month}


def test_toggle_closes_then_reopens(client, authorize, treasurer, db_session):
    authorize(treasurer)

    first = client.post("/closures/2024-05/toggle")
    assert first.status_code == 200, first.text
    assert first.json()["isClosed"] is True
    assert first.json()["closedBy"] == "admin"

    second = client.post("/closures/2024-05/toggle")
    assert second.status_code == 200
    assert second.json()["isClosed"] is False

    details = [entry.details for entry in db_session.query(AuditEntry).order_by(AuditEntry.id).all()]
    assert details == ["Month 2024-05 closed.", "Month 2024-05 reopened."]


def test_unknown_month_reads_as_open(client, authorize, member):
    authorize(member)
    resp = client.get("/closures/2023-01")
    assert resp.status_code == 200
    assert resp.json()["isClosed"] is False


def test_closed_month_rejects_new_payments(client, authorize, treasurer):
    authorize(treasurer)
    client.post("/closures/2024-05/toggle")

    blocked = client.post("/fees/payments", json=_payment_payload("2024-05"))
    assert blocked.status_code == 400
    assert "2024-05" in blocked.json()["detail"]

    other_month = client.post("/fees/payments", json=_payment_payload("2024-06"))
    assert other_month.status_code == 201, other_month.text

    client.post("/closures/2024-05/toggle")
    reopened = client.post("/fees/payments", json=_payment_payload("2024-05"))
    assert reopened.status_code == 201


def test_closed_month_rejects_expenses(client, authorize, treasurer):
    authorize(treasurer)
    client.post("/closures/2024-05/toggle")

    resp = client.post(
        "/expenses",
        json={
            "date": "2024-05-12",
            "description": "Aluguel",
            "amount": "300",
            "category": "Sede",
            "referenceMonth": "2024-05",
        },
    )
    assert resp.status_code == 400


def test_members_cannot_toggle(client, authorize, member):
    authorize(member)
    resp = client.post("/closures/2024-05/toggle")
    assert resp.status_code == 403


def test_invalid_month_is_rejected(client, authorize, treasurer):
    authorize(treasurer)
    resp = client.post("/closures/2024-13/toggle")
    assert resp.status_code == 422


def test_list_closures_newest_first(client, authorize, treasurer):
    authorize(treasurer)
    client.post("/closures/2024-03/toggle")
    client.post("/closures/2024-07/toggle")

    resp = client.get("/closures")
    assert resp.status_code == 200
    assert [item["month"] for item in resp.json()] == ["2024-07", "2024-03"]
