from __future__ import annotations

from datetime import datetime, timedelta, timezone

from clubfinance.models.audit_log import AuditEntry


def test_audit_log_newest_first(client, authorize, treasurer, db_session):
    base = datetime(2024, 5, 1, tzinfo=timezone.utc)
    for offset in range(3):
        db_session.add(
            AuditEntry(
                timestamp=base + timedelta(hours=offset),
                user_id=treasurer.id,
                username=treasurer.nickname,
                action="Members",
                details=f"entry {offset}",
            )
        )
    db_session.commit()

    authorize(treasurer)
    resp = client.get("/audit")
    assert resp.status_code == 200, resp.text
    assert [item["details"] for item in resp.json()] == ["entry 2", "entry 1", "entry 0"]

    limited = client.get("/audit", params={"limit": 1}).json()
    assert len(limited) == 1


def test_audit_filters_by_action(client, authorize, treasurer):
    authorize(treasurer)
    client.post("/closures/2024-05/toggle")
    client.post("/members", json={"displayName": "Rodrigo", "nickname": "tanque"})

    resp = client.get("/audit", params={"action": "Closure"}).json()
    assert [item["details"] for item in resp] == ["Month 2024-05 closed."]
    assert resp[0]["username"] == "admin"


def test_audit_is_treasurer_only(client, authorize, member):
    authorize(member)
    assert client.get("/audit").status_code == 403
