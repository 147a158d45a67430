from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from clubfinance.auth.deps import get_current_member, require_treasurer
from clubfinance.core.db import get_db
from clubfinance.models.expense import EXPENSE_CATEGORIES
from clubfinance.models.member import Member
from clubfinance.schemas.expense import ExpenseIn, ExpenseOut
from clubfinance.services import expenses as expenses_service
from clubfinance.services.gateway import FinanceStore, get_finance_store

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=list[ExpenseOut])
def list_expenses(
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    _: Member = Depends(get_current_member),
) -> list[ExpenseOut]:
    return store.refresh(db).expenses


@router.get("/categories", response_model=list[str])
def list_categories(_: Member = Depends(get_current_member)) -> list[str]:
    return list(EXPENSE_CATEGORIES)


@router.post("", response_model=ExpenseOut, status_code=status.HTTP_201_CREATED)
def create_expense(
    payload: ExpenseIn,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> ExpenseOut:
    expense = expenses_service.create_expense(db, payload, treasurer)
    store.refresh(db)
    return ExpenseOut.model_validate(expense)


@router.put("/{expense_id}", response_model=ExpenseOut)
def update_expense(
    expense_id: int,
    payload: ExpenseIn,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> ExpenseOut:
    expense = expenses_service.update_expense(db, expense_id, payload, treasurer)
    store.refresh(db)
    return ExpenseOut.model_validate(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db),
    store: FinanceStore = Depends(get_finance_store),
    treasurer: Member = Depends(require_treasurer),
) -> Response:
    expenses_service.delete_expense(db, expense_id, treasurer)
    store.refresh(db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
