from __future__ import annotations

from clubfinance.auth.security import verify_password
from clubfinance.models.audit_log import AuditEntry
from clubfinance.models.dues import DuesPayment
from clubfinance.models.member import Member


def test_create_member_with_default_password(client, authorize, treasurer, db_session):
    authorize(treasurer)
    resp = client.post(
        "/members",
        json={"displayName": "Rodrigo Alves", "nickname": "tanque", "position": "Road captain"},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["requiresPasswordChange"] is True
    assert body["role"] == "member"

    stored = db_session.get(Member, body["id"])
    assert verify_password("mudar123", stored.password_hash)
    assert db_session.query(AuditEntry).count() == 1


def test_nickname_uniqueness_is_case_insensitive(client, authorize, treasurer, member):
    authorize(treasurer)
    resp = client.post("/members", json={"displayName": "Outro", "nickname": "FERRUGEM"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "This nickname is already in use."


def test_update_member_keeps_own_nickname(client, authorize, treasurer, member):
    authorize(treasurer)
    resp = client.put(
        f"/members/{member.id}",
        json={"displayName": "Carlos F.", "nickname": "Ferrugem", "role": "member", "status": "inactive"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "inactive"
    assert resp.json()["nickname"] == "Ferrugem"


def test_list_members_sorted_and_filtered(client, authorize, treasurer, member, make_member):
    make_member("corvo", "Marcos Lima", status="inactive")
    authorize(treasurer)
    listing = client.get("/members").json()
    assert listing["total"] == 3
    assert [item["displayName"] for item in listing["items"]] == ["Administrador", "Carlos Ferreira", "Marcos Lima"]

    active = client.get("/members", params={"status": "active"}).json()
    assert active["total"] == 2


def test_delete_member_keeps_history(client, authorize, treasurer, member, db_session):
    member_id = member.id
    authorize(treasurer)
    client.post(
        "/fees/payments",
        json={"memberId": member_id, "amount": "100", "paymentDate": "2024-05-05", "referenceMonth": "2024-05"},
    )

    resp = client.delete(f"/members/{member_id}")
    assert resp.status_code == 204

    db_session.expire_all()
    assert db_session.query(Member).filter_by(id=member_id).first() is None
    payment = db_session.query(DuesPayment).one()
    assert payment.member_id is None


def test_cannot_delete_self_or_seed_treasurer(client, authorize, treasurer, make_member):
    second = make_member("vlad", "Vladimir", role="treasurer")
    authorize(treasurer)
    assert client.delete(f"/members/{treasurer.id}").status_code == 400

    authorize(second)
    assert client.delete(f"/members/{treasurer.id}").status_code == 400


def test_seed_treasurer_survives_rename_attempt(client, authorize, treasurer, make_member):
    second = make_member("vlad", "Vladimir", role="treasurer")
    authorize(second)

    renamed = client.put(
        f"/members/{treasurer.id}",
        json={"displayName": "Administrador", "nickname": "old-admin", "role": "treasurer", "status": "active"},
    )
    assert renamed.status_code == 400

    demoted = client.put(
        f"/members/{treasurer.id}",
        json={"displayName": "Administrador", "nickname": "admin", "role": "member", "status": "active"},
    )
    assert demoted.status_code == 400

    deactivated = client.put(
        f"/members/{treasurer.id}",
        json={"displayName": "Administrador", "nickname": "admin", "role": "treasurer", "status": "inactive"},
    )
    assert deactivated.status_code == 400

    assert client.delete(f"/members/{treasurer.id}").status_code == 400

    relabeled = client.put(
        f"/members/{treasurer.id}",
        json={"displayName": "Chefe", "nickname": "Admin", "position": "Tesoureiro", "role": "treasurer"},
    )
    assert relabeled.status_code == 200, relabeled.text
    assert relabeled.json()["displayName"] == "Chefe"


def test_other_treasurers_can_be_deleted(client, authorize, treasurer, make_member):
    second = make_member("vlad", "Vladimir", role="treasurer")
    authorize(treasurer)
    assert client.delete(f"/members/{second.id}").status_code == 204


def test_new_member_password_respects_minimum_length(client, authorize, treasurer):
    authorize(treasurer)
    short = client.post("/members", json={"displayName": "Rodrigo", "nickname": "tanque", "password": "abc"})
    assert short.status_code == 422

    ok = client.post("/members", json={"displayName": "Rodrigo", "nickname": "tanque", "password": "segura1"})
    assert ok.status_code == 201, ok.text


def test_reset_password_forces_change(client, authorize, treasurer, member, db_session):
    authorize(treasurer)
    resp = client.post(f"/members/{member.id}/reset-password")
    assert resp.status_code == 200
    assert resp.json()["requiresPasswordChange"] is True

    db_session.expire_all()
    stored = db_session.get(Member, member.id)
    assert verify_password("mudar123", stored.password_hash)
    entry = db_session.query(AuditEntry).one()
    assert entry.action == "Security"


def test_members_area_is_treasurer_only(client, authorize, member):
    authorize(member)
    assert client.get("/members").status_code == 403
