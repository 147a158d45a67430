"""Financial aggregates derived from the in-memory collections.

Everything here is a pure function over already-loaded rows. Amounts are
coerced with :func:`to_amount` so a malformed value contributes zero instead of
poisoning a total.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

from clubfinance.models.dues import PAYMENT_PENDING, PAYMENT_VALIDATED
from clubfinance.models.member import STATUS_ACTIVE
from clubfinance.schemas.dashboard import CategoryTotal, DashboardResponse, TrendPoint

ZERO = Decimal("0")

MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

STATUS_NONE = "none"
STATUS_PARTIAL = "partial"
STATUS_OK = "ok"
STATUS_AWAITING = "awaiting"


@dataclass(frozen=True)
class MonthFlow:
    inflow: Decimal
    outflow: Decimal


@dataclass(frozen=True)
class MemberMonthRow:
    member: Any
    total_paid: Decimal
    status: str


def to_amount(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite():
        return ZERO
    return amount


def month_of(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return f"{value.year:04d}-{value.month:02d}"
    return str(value)[:7]


def current_month(now: Optional[datetime] = None) -> str:
    return month_of(now or datetime.now(timezone.utc))


def shift_month(month: str, offset: int) -> str:
    year, month_number = (int(part) for part in month.split("-"))
    index = year * 12 + (month_number - 1) + offset
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def trailing_months(month: str, count: int = 6) -> list[str]:
    return [shift_month(month, -offset) for offset in range(count - 1, -1, -1)]


def month_label(month: str) -> str:
    try:
        return MONTH_NAMES[int(month.split("-")[1]) - 1]
    except (IndexError, ValueError):
        return "---"


def _is_validated(row: Any) -> bool:
    return getattr(row, "status", None) == PAYMENT_VALIDATED


def validated_total(rows: Iterable[Any]) -> Decimal:
    return sum((to_amount(row.amount) for row in rows if _is_validated(row)), ZERO)


def expense_total(rows: Iterable[Any]) -> Decimal:
    return sum((to_amount(row.amount) for row in rows), ZERO)


def current_balance(
    payments: Iterable[Any],
    contributions: Iterable[Any],
    expenses: Iterable[Any],
) -> Decimal:
    return validated_total(payments) + validated_total(contributions) - expense_total(expenses)


def month_flow(
    payments: Iterable[Any],
    contributions: Iterable[Any],
    expenses: Iterable[Any],
    month: str,
) -> MonthFlow:
    dues = validated_total(p for p in payments if p.reference_month == month)
    raised = validated_total(c for c in contributions if month_of(c.date) == month)
    spent = expense_total(e for e in expenses if e.reference_month == month)
    return MonthFlow(inflow=dues + raised, outflow=spent)


def six_month_trend(
    payments: Sequence[Any],
    contributions: Sequence[Any],
    expenses: Sequence[Any],
    month: str,
) -> list[TrendPoint]:
    points: list[TrendPoint] = []
    for item in trailing_months(month, 6):
        flow = month_flow(payments, contributions, expenses, item)
        points.append(TrendPoint(month=item, label=month_label(item), inflow=flow.inflow, outflow=flow.outflow))
    return points


def category_breakdown(expenses: Iterable[Any]) -> "OrderedDict[str, Decimal]":
    totals: "OrderedDict[str, Decimal]" = OrderedDict()
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, ZERO) + to_amount(expense.amount)
    return totals


def expected_for_month(configs: Iterable[Any], month: str) -> Decimal:
    for config in configs:
        if config.month == month:
            return to_amount(config.expected_amount)
    return ZERO


def classify_member_month(total_paid: Decimal, expected: Decimal, has_pending: bool) -> str:
    if has_pending:
        return STATUS_AWAITING
    if expected > 0 and total_paid >= expected:
        return STATUS_OK
    if total_paid > 0 and total_paid < expected:
        return STATUS_PARTIAL
    return STATUS_NONE


def member_month_status(
    members: Iterable[Any],
    configs: Iterable[Any],
    payments: Sequence[Any],
    month: str,
) -> list[MemberMonthRow]:
    expected = expected_for_month(configs, month)
    rows: list[MemberMonthRow] = []
    for member in members:
        if member.status != STATUS_ACTIVE:
            continue
        own = [p for p in payments if p.member_id == member.id and p.reference_month == month]
        total_paid = validated_total(own)
        has_pending = any(p.status == PAYMENT_PENDING for p in own)
        rows.append(MemberMonthRow(member=member, total_paid=total_paid, status=classify_member_month(total_paid, expected, has_pending)))
    return rows


def campaign_raised(contributions: Iterable[Any], campaign_id: int) -> Decimal:
    return validated_total(c for c in contributions if c.campaign_id == campaign_id)


def campaign_progress(raised: Decimal, goal: Any) -> int:
    goal_amount = to_amount(goal)
    if goal_amount <= 0:
        return 0
    percent = (raised / goal_amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(max(min(percent, Decimal("100")), ZERO))


def build_dashboard(snapshot: Any, month: str, closed: bool) -> DashboardResponse:
    flow = month_flow(snapshot.fee_payments, snapshot.contributions, snapshot.expenses, month)
    categories = category_breakdown(snapshot.expenses)
    return DashboardResponse(
        current_month=month,
        balance=current_balance(snapshot.fee_payments, snapshot.contributions, snapshot.expenses),
        month_inflow=flow.inflow,
        month_outflow=flow.outflow,
        is_month_closed=closed,
        active_members=sum(1 for member in snapshot.members if member.status == STATUS_ACTIVE),
        trend=six_month_trend(snapshot.fee_payments, snapshot.contributions, snapshot.expenses, month),
        categories=[CategoryTotal(category=name, total=total) for name, total in categories.items()],
    )
