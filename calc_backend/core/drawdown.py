"""Shrinking balances: retirement withdrawals and constant-rate elimination."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from calc_backend.core.aggregate import totals
from calc_backend.core.errors import DidNotConverge, InvalidParameter
from calc_backend.core.limits import MAX_PERIODS, SOBER_THRESHOLD
from calc_backend.core.money import apply_rate, to_cents
from calc_backend.core.rates import horizon_periods, periods_per_year, to_periodic_rate
from calc_backend.core.records import DrawdownResult, EliminationResult, PeriodRecord
from calc_backend.core.validation import require_non_negative
from calc_backend.models import SimulationParameters

logger = logging.getLogger(__name__)


def draw_down(
    balance: int,
    rate: float,
    annual_withdrawal: float,
    periods: int,
    per_year: int,
    inflation: float = 0.0,
) -> Tuple[List[PeriodRecord], Optional[int]]:
    """Withdraw then grow, period by period.

    The annual withdrawal is split evenly across the year's periods and
    escalated by ``inflation`` at the start of every year after the first.
    Returns the schedule and the period at which the balance ran out
    (None if it lasted).
    """
    schedule: List[PeriodRecord] = []
    depleted_at: Optional[int] = None
    current_annual = annual_withdrawal
    withdrawal = to_cents(current_annual / per_year)

    for period in range(1, periods + 1):
        if period > 1 and (period - 1) % per_year == 0:
            current_annual *= 1 + inflation
            withdrawal = to_cents(current_annual / per_year)

        opening = balance
        remaining = opening - withdrawal
        if remaining <= 0:
            schedule.append(
                PeriodRecord(
                    period_index=period,
                    opening_balance=opening,
                    interest_accrued=0,
                    contribution_or_payment=opening,
                    principal_component=opening,
                    closing_balance=0,
                )
            )
            depleted_at = period
            break

        interest = apply_rate(remaining, rate)
        balance = remaining + interest
        schedule.append(
            PeriodRecord(
                period_index=period,
                opening_balance=opening,
                interest_accrued=interest,
                contribution_or_payment=withdrawal,
                principal_component=withdrawal,
                closing_balance=balance,
            )
        )

    return schedule, depleted_at


def simulate_drawdown(params: SimulationParameters) -> DrawdownResult:
    """Withdraw ``withdrawal_amount`` a year from ``principal`` for ``horizon_years``.

    Tracks the period at which the balance is depleted, which is what "will
    my savings last" reporting reads.
    """
    balance = to_cents(require_non_negative(params.principal, "principal"))
    per_year = periods_per_year(params.compounding_frequency)
    rate = to_periodic_rate(params.annual_rate_percent, per_year)
    withdrawal = require_non_negative(params.withdrawal_amount, "withdrawal_amount")
    inflation = require_non_negative(params.inflation_rate_percent, "inflation_rate_percent") / 100.0
    periods = horizon_periods(params.horizon_years, per_year)

    schedule, depleted_at = draw_down(balance, rate, withdrawal, periods, per_year, inflation)
    if depleted_at is not None:
        logger.debug("balance of %d cents depleted at period %d of %d", balance, depleted_at, periods)
    return DrawdownResult(schedule=schedule, summary=totals(schedule), depleted_at_period=depleted_at)


def eliminate(
    level: float,
    elimination_per_hour: float,
    threshold: float = SOBER_THRESHOLD,
    max_steps: int = MAX_PERIODS,
) -> EliminationResult:
    """Hours for ``level`` to fall to ``threshold`` at a constant hourly decrement.

    Zero-growth drawdown: no compounding, a fixed amount removed every hour.
    The last hour is prorated so the result is a continuous scalar.
    """
    if elimination_per_hour <= 0:
        raise InvalidParameter("elimination rate must be > 0", field="elimination_per_hour")
    if level < 0:
        raise InvalidParameter("level must be >= 0", field="level")

    curve: List[Tuple[float, float]] = [(0.0, level)]
    if level <= threshold:
        return EliminationResult(hours=0.0, curve=curve)

    current = level
    hours = 0.0
    for step in range(1, max_steps + 1):
        after = current - elimination_per_hour
        if after <= threshold:
            hours = (step - 1) + (current - threshold) / elimination_per_hour
            curve.append((round(hours, 4), threshold))
            return EliminationResult(hours=hours, curve=curve)
        current = after
        curve.append((float(step), round(current, 6)))

    raise DidNotConverge(max_steps, current)
