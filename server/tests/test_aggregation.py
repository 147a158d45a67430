from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from clubfinance.services.aggregation import (
    STATUS_AWAITING,
    STATUS_NONE,
    STATUS_OK,
    STATUS_PARTIAL,
    campaign_progress,
    campaign_raised,
    category_breakdown,
    current_balance,
    current_month,
    member_month_status,
    month_flow,
    month_label,
    six_month_trend,
    to_amount,
    trailing_months,
)


def _payment(member_id, amount, month, status="validated"):
    return SimpleNamespace(member_id=member_id, amount=amount, reference_month=month, status=status)


def _contribution(campaign_id, amount, day, status="validated"):
    return SimpleNamespace(campaign_id=campaign_id, amount=amount, date=day, status=status)


def _expense(amount, category, month):
    return SimpleNamespace(amount=amount, category=category, reference_month=month)


def _member(member_id, status="active"):
    return SimpleNamespace(id=member_id, status=status)


def test_to_amount_treats_garbage_as_zero():
    assert to_amount(None) == Decimal("0")
    assert to_amount("") == Decimal("0")
    assert to_amount("abc") == Decimal("0")
    assert to_amount("NaN") == Decimal("0")
    assert to_amount(float("inf")) == Decimal("0")
    assert to_amount("12.50") == Decimal("12.50")
    assert to_amount(7) == Decimal("7")


def test_balance_counts_only_validated_inflows():
    payments = [
        _payment(1, "100", "2024-05"),
        _payment(1, "50", "2024-05", status="pending"),
        _payment(2, "30", "2024-05", status="rejected"),
    ]
    contributions = [_contribution(1, "20", date(2024, 5, 3)), _contribution(1, "999", date(2024, 5, 3), "pending")]
    expenses = [_expense("45", "Sede", "2024-05")]

    assert current_balance(payments, contributions, expenses) == Decimal("75")


def test_balance_is_independent_of_row_order():
    payments = [_payment(1, "10", "2024-01"), _payment(2, "25.5", "2024-02"), _payment(3, "4", "2024-03")]
    contributions = [_contribution(1, "7", date(2024, 2, 1))]
    expenses = [_expense("3", "Outros", "2024-01"), _expense("9", "Sede", "2024-02")]

    forward = current_balance(payments, contributions, expenses)
    backward = current_balance(list(reversed(payments)), contributions, list(reversed(expenses)))
    assert forward == backward == Decimal("34.5")


def test_month_flow_uses_reference_month_and_contribution_date():
    payments = [_payment(1, "100", "2024-05"), _payment(1, "100", "2024-04")]
    contributions = [_contribution(1, "40", date(2024, 5, 20)), _contribution(1, "60", date(2024, 4, 30))]
    expenses = [_expense("30", "Eventos", "2024-05"), _expense("80", "Sede", "2024-06")]

    flow = month_flow(payments, contributions, expenses, "2024-05")

    assert flow.inflow == Decimal("140")
    assert flow.outflow == Decimal("30")


def test_trailing_months_cross_year_boundary_oldest_first():
    assert trailing_months("2024-02") == ["2023-09", "2023-10", "2023-11", "2023-12", "2024-01", "2024-02"]


def test_six_month_trend_labels_and_totals():
    payments = [_payment(1, "100", "2024-06"), _payment(1, "100", "2024-01")]
    trend = six_month_trend(payments, [], [_expense("20", "Sede", "2024-03")], "2024-06")

    assert [point.month for point in trend] == ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06"]
    assert trend[0].label == "janeiro"
    assert trend[0].inflow == Decimal("100")
    assert trend[2].outflow == Decimal("20")
    assert trend[-1].inflow == Decimal("100")


def test_month_label_handles_bad_input():
    assert month_label("2024-03") == "março"
    assert month_label("garbage") == "---"


def test_current_month_uses_given_clock():
    assert current_month(datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc)) == "2024-12"


def test_category_breakdown_sums_per_category():
    breakdown = category_breakdown(
        [_expense("50", "Sede", "2024-05"), _expense("30", "Eventos", "2024-05"), _expense("20", "Sede", "2024-04")]
    )
    assert breakdown == {"Sede": Decimal("70"), "Eventos": Decimal("30")}
    assert list(breakdown) == ["Sede", "Eventos"]


def test_member_month_status_classification():
    configs = [SimpleNamespace(month="2024-05", expected_amount="100")]
    members = [_member(1), _member(2), _member(3), _member(4), _member(5, status="inactive")]
    payments = [
        _payment(1, "60", "2024-05"),
        _payment(2, "100", "2024-05"),
        _payment(2, "20", "2024-05", status="pending"),
        _payment(3, "100", "2024-05"),
        _payment(5, "100", "2024-05"),
    ]

    rows = {row.member.id: row for row in member_month_status(members, configs, payments, "2024-05")}

    assert set(rows) == {1, 2, 3, 4}
    assert rows[1].status == STATUS_PARTIAL
    assert rows[1].total_paid == Decimal("60")
    assert rows[2].status == STATUS_AWAITING
    assert rows[2].total_paid == Decimal("100")
    assert rows[3].status == STATUS_OK
    assert rows[4].status == STATUS_NONE


def test_member_month_status_without_config_is_never_ok():
    rows = member_month_status([_member(1)], [], [_payment(1, "100", "2024-05")], "2024-05")
    assert rows[0].status == STATUS_NONE


def test_campaign_progress_rounds_and_caps():
    contributions = [
        _contribution(1, "333", date(2024, 5, 1)),
        _contribution(1, "100", date(2024, 5, 1), status="pending"),
        _contribution(2, "5000", date(2024, 5, 1)),
    ]
    raised = campaign_raised(contributions, 1)

    assert raised == Decimal("333")
    assert campaign_progress(raised, "1000") == 33
    assert campaign_progress(Decimal("1500"), "1000") == 100
    assert campaign_progress(Decimal("10"), "0") == 0
