"""Reduce period-level series into caller-facing summaries."""

from __future__ import annotations

from typing import Dict, List, Sequence

from calc_backend.core.errors import InvalidParameter
from calc_backend.core.records import PeriodRecord, Totals, YearlySummary


def totals(periods: Sequence[PeriodRecord]) -> Totals:
    return Totals(
        total_paid=sum(p.contribution_or_payment for p in periods),
        total_interest=sum(p.interest_accrued for p in periods),
        total_contributions=sum(p.principal_component for p in periods),
    )


def to_yearly_summaries(
    periods: Sequence[PeriodRecord],
    periods_per_year: int,
) -> List[YearlySummary]:
    """Group a period series into one row per year.

    A trailing partial year still gets its own row. Period ``k`` (1-based)
    belongs to year ``(k - 1) // periods_per_year + 1``.
    """
    if periods_per_year <= 0:
        raise InvalidParameter("periods per year must be > 0", field="periods_per_year")

    rows: List[YearlySummary] = []
    cumulative_paid = 0
    cumulative_interest = 0
    year_paid = year_interest = year_principal = 0

    for position, record in enumerate(periods, start=1):
        cumulative_paid += record.contribution_or_payment
        cumulative_interest += record.interest_accrued
        year_paid += record.contribution_or_payment
        year_interest += record.interest_accrued
        year_principal += record.principal_component

        if position % periods_per_year == 0 or position == len(periods):
            rows.append(
                YearlySummary(
                    year=(position - 1) // periods_per_year + 1,
                    balance=record.closing_balance,
                    cumulative_contributions_or_payments=cumulative_paid,
                    cumulative_interest=cumulative_interest,
                    contributions_or_payments=year_paid,
                    interest=year_interest,
                    principal=year_principal,
                )
            )
            year_paid = year_interest = year_principal = 0

    return rows


def balance_breakpoints(
    periods: Sequence[PeriodRecord],
    every: int,
    opening_balance: int,
) -> List[Dict[str, int]]:
    """Sample the balance every ``every`` periods for charting.

    Always includes period 0 and the final period.
    """
    if every <= 0:
        raise InvalidParameter("sampling step must be > 0", field="every")

    points = [{"period": 0, "balance": opening_balance}]
    for position in range(every, len(periods) + 1, every):
        points.append({"period": position, "balance": periods[position - 1].closing_balance})
    if periods and points[-1]["period"] != len(periods):
        points.append({"period": len(periods), "balance": periods[-1].closing_balance})
    return points
