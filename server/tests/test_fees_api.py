from __future__ import annotations

from decimal import Decimal

PROOF = "data:image/png;base64,iVBORw0KGgo="


def _payload(month: str = "2024-05", amount: str = "100", **extra) -> dict:
    body = {"amount": amount, "paymentDate": f"{month}-05", "referenceMonth": month}
    body.update(extra)
    return body


def test_member_payment_is_pending_and_for_self(client, authorize, member):
    authorize(member)
    resp = client.post("/fees/payments", json=_payload(proof=PROOF, note="pix"))
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["status"] == "pending"
    assert body["memberId"] == member.id
    assert body["proof"] == PROOF


def test_member_cannot_pay_for_someone_else(client, authorize, member, make_member):
    other = make_member("tanque")
    authorize(member)
    resp = client.post("/fees/payments", json=_payload(memberId=other.id))
    assert resp.status_code == 403


def test_treasurer_payment_is_validated(client, authorize, treasurer, member):
    authorize(treasurer)
    resp = client.post("/fees/payments", json=_payload(memberId=member.id))
    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "validated"
    assert resp.json()["memberId"] == member.id


def test_treasurer_payment_for_unknown_member(client, authorize, treasurer):
    authorize(treasurer)
    resp = client.post("/fees/payments", json=_payload(memberId=9999))
    assert resp.status_code == 400


def test_invalid_proof_is_rejected(client, authorize, member):
    authorize(member)
    resp = client.post("/fees/payments", json=_payload(proof="data:text/plain;base64,aGVsbG8="))
    assert resp.status_code == 422


def test_members_see_only_their_payments(client, authorize, treasurer, member, make_member):
    other = make_member("tanque")
    authorize(treasurer)
    client.post("/fees/payments", json=_payload(memberId=member.id))
    client.post("/fees/payments", json=_payload(memberId=other.id))

    assert len(client.get("/fees/payments").json()) == 2

    authorize(member)
    own = client.get("/fees/payments").json()
    assert [item["memberId"] for item in own] == [member.id]


def test_status_review_only_from_pending(client, authorize, treasurer, member):
    authorize(member)
    payment_id = client.post("/fees/payments", json=_payload()).json()["id"]

    forbidden = client.post(f"/fees/payments/{payment_id}/status", json={"status": "validated"})
    assert forbidden.status_code == 403

    authorize(treasurer)
    ok = client.post(f"/fees/payments/{payment_id}/status", json={"status": "validated"})
    assert ok.status_code == 200
    assert ok.json()["status"] == "validated"

    again = client.post(f"/fees/payments/{payment_id}/status", json={"status": "rejected"})
    assert again.status_code == 400

    missing = client.post("/fees/payments/9999/status", json={"status": "rejected"})
    assert missing.status_code == 404


def test_fee_config_upsert(client, authorize, treasurer):
    authorize(treasurer)
    created = client.put("/fees/configs/2024-05", json={"expectedAmount": "100"})
    assert created.status_code == 200, created.text
    updated = client.put("/fees/configs/2024-05", json={"expectedAmount": "120"})
    assert Decimal(updated.json()["expectedAmount"]) == Decimal("120")

    configs = client.get("/fees/configs").json()
    assert len(configs) == 1
    assert configs[0]["month"] == "2024-05"


def test_member_status_board(client, authorize, treasurer, member, make_member):
    waiting = make_member("tanque")
    idle = make_member("corvo")
    make_member("sumido", status="inactive")
    authorize(treasurer)
    client.put("/fees/configs/2024-05", json={"expectedAmount": "100"})
    client.post("/fees/payments", json=_payload(memberId=member.id, amount="60"))
    client.post("/fees/payments", json=_payload(memberId=waiting.id, amount="100"))
    client.post("/fees/payments", json=_payload(memberId=treasurer.id, amount="100"))

    authorize(waiting)
    client.post("/fees/payments", json=_payload(amount="20"))

    authorize(treasurer)
    resp = client.get("/fees/status", params={"month": "2024-05"})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert Decimal(body["expected"]) == Decimal("100")
    by_nickname = {item["member"]["nickname"]: item for item in body["items"]}
    assert set(by_nickname) == {"admin", "ferrugem", "tanque", "corvo"}
    assert by_nickname["ferrugem"]["status"] == "partial"
    assert Decimal(by_nickname["ferrugem"]["totalPaid"]) == Decimal("60")
    assert by_nickname["tanque"]["status"] == "awaiting"
    assert by_nickname["admin"]["status"] == "ok"
    assert by_nickname[idle.nickname]["status"] == "none"


def test_member_status_board_is_treasurer_only(client, authorize, member):
    authorize(member)
    assert client.get("/fees/status").status_code == 403
