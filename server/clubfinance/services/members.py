from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from clubfinance.auth.security import hash_password, verify_password
from clubfinance.core.config import settings
from clubfinance.models.audit_log import AuditEntry
from clubfinance.models.campaign import Contribution
from clubfinance.models.dues import DuesPayment
from clubfinance.models.expense import Expense
from clubfinance.models.member import ROLE_TREASURER, STATUS_ACTIVE, Member
from clubfinance.schemas.member import MemberCreate, MemberUpdate
from clubfinance.services.audit import ACTION_MEMBERS, ACTION_SECURITY, record_audit
from clubfinance.services.gateway import commit

logger = logging.getLogger(__name__)


def _nickname_query(db: Session, nickname: str):
    return db.query(Member).filter(func.lower(Member.nickname) == nickname.strip().lower())


def ensure_unique_nickname(db: Session, nickname: str, exclude_member_id: int | None = None) -> None:
    query = _nickname_query(db, nickname)
    if exclude_member_id is not None:
        query = query.filter(Member.id != exclude_member_id)
    if query.first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This nickname is already in use.")


def get_member(db: Session, member_id: int) -> Member:
    member = db.get(Member, member_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    return member


def authenticate(db: Session, nickname: str, password: str) -> Member | None:
    member = _nickname_query(db, nickname).first()
    if not member or not member.is_active:
        return None
    if not verify_password(password.strip(), member.password_hash):
        return None
    return member


def create_member(db: Session, payload: MemberCreate, actor: Member) -> Member:
    ensure_unique_nickname(db, payload.nickname)
    password = (payload.password or settings.DEFAULT_MEMBER_PASSWORD).strip()
    member = Member(
        display_name=payload.display_name,
        nickname=payload.nickname,
        position=payload.position,
        role=payload.role,
        status=payload.status,
        password_hash=hash_password(password),
        requires_password_change=payload.requires_password_change,
    )
    db.add(member)
    record_audit(db, actor, ACTION_MEMBERS, f"Member {member.nickname} created.")
    commit(db)
    db.refresh(member)
    logger.info("member_created", extra={"member_id": member.id, "actor": actor.nickname})
    return member


def update_member(db: Session, member_id: int, payload: MemberUpdate, actor: Member) -> Member:
    member = get_member(db, member_id)
    ensure_unique_nickname(db, payload.nickname, exclude_member_id=member.id)
    if member.id == actor.id and (payload.role != member.role or payload.status != member.status):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot change your own role or status.",
        )
    if member.is_seed_treasurer and (
        payload.nickname.lower() != member.nickname.lower()
        or payload.role != ROLE_TREASURER
        or payload.status != STATUS_ACTIVE
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The primary treasurer account must stay an active treasurer under the same nickname.",
        )
    member.display_name = payload.display_name
    member.nickname = payload.nickname
    member.position = payload.position
    member.role = payload.role
    member.status = payload.status
    if payload.requires_password_change is not None:
        member.requires_password_change = payload.requires_password_change
    db.add(member)
    record_audit(db, actor, ACTION_MEMBERS, f"Member {member.nickname} updated.")
    commit(db)
    db.refresh(member)
    return member


def delete_member(db: Session, member_id: int, actor: Member) -> None:
    member = get_member(db, member_id)
    if member.id == actor.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account.")
    if member.is_seed_treasurer:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The primary treasurer account cannot be deleted.")

    nickname = member.nickname
    # financial history outlives the member
    db.query(DuesPayment).filter(DuesPayment.member_id == member.id).update(
        {DuesPayment.member_id: None}, synchronize_session=False
    )
    db.query(Contribution).filter(Contribution.member_id == member.id).update(
        {Contribution.member_id: None}, synchronize_session=False
    )
    db.query(Expense).filter(Expense.responsible_id == member.id).update(
        {Expense.responsible_id: None}, synchronize_session=False
    )
    db.query(AuditEntry).filter(AuditEntry.user_id == member.id).update(
        {AuditEntry.user_id: None}, synchronize_session=False
    )
    db.delete(member)
    record_audit(db, actor, ACTION_MEMBERS, f"Member {nickname} permanently deleted.")
    commit(db)
    logger.info("member_deleted", extra={"member_id": member_id, "actor": actor.nickname})


def reset_password(db: Session, member_id: int, actor: Member) -> Member:
    member = get_member(db, member_id)
    member.password_hash = hash_password(settings.DEFAULT_MEMBER_PASSWORD)
    member.requires_password_change = True
    db.add(member)
    record_audit(db, actor, ACTION_SECURITY, f"Password for member {member.nickname} reset by the treasurer.")
    commit(db)
    db.refresh(member)
    return member


def change_password(db: Session, member: Member, new_password: str) -> Member:
    cleaned = new_password.strip()
    if len(cleaned) < settings.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long.",
        )
    target = get_member(db, member.id)
    target.password_hash = hash_password(cleaned)
    target.requires_password_change = False
    db.add(target)
    record_audit(db, target, ACTION_SECURITY, f"Member {target.nickname} changed their password.")
    commit(db)
    db.refresh(target)
    return target
