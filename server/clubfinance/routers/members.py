from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from clubfinance.auth.deps import require_treasurer
from clubfinance.core.db import get_db
from clubfinance.models.member import Member
from clubfinance.schemas.common import MemberStatus
from clubfinance.schemas.member import MemberCreate, MemberListResponse, MemberOut, MemberUpdate
from clubfinance.services import members as members_service
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=MemberListResponse)
def list_members(
    q: str | None = Query(default=None, max_length=150),
    status_filter: MemberStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(require_treasurer),
) -> MemberListResponse:
    items = store.refresh(db).members
    if status_filter:
        items = [item for item in items if item.status == status_filter]
    if q:
        needle = q.strip().lower()
        items = [
            item
            for item in items
            if needle in item.display_name.lower() or needle in item.nickname.lower()
        ]
    return MemberListResponse(items=items, total=len(items))


@router.post("", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
def create_member(
    payload: MemberCreate,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> MemberOut:
    member = members_service.create_member(db, payload, treasurer)
    store.refresh(db)
    return MemberOut.model_validate(member)


@router.put("/{member_id}", response_model=MemberOut)
def update_member(
    member_id: int,
    payload: MemberUpdate,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> MemberOut:
    member = members_service.update_member(db, member_id, payload, treasurer)
    store.refresh(db)
    return MemberOut.model_validate(member)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(
    member_id: int,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> Response:
    members_service.delete_member(db, member_id, treasurer)
    store.refresh(db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{member_id}/reset-password", response_model=MemberOut)
def reset_password(
    member_id: int,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> MemberOut:
    member = members_service.reset_password(db, member_id, treasurer)
    store.refresh(db)
    return MemberOut.model_validate(member)
