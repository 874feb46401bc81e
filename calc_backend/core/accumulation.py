"""Compound growth of a balance with periodic contributions."""

from __future__ import annotations

import logging
from typing import List, Sequence, Union

from calc_backend.core.aggregate import totals
from calc_backend.core.money import apply_rate, to_cents
from calc_backend.core.rates import (
    contribution_cycle,
    horizon_periods,
    periods_per_year,
    spread_contribution,
    to_periodic_rate,
)
from calc_backend.core.records import AccumulationResult, PeriodRecord
from calc_backend.core.validation import require_non_negative
from calc_backend.models import ContributionTiming, SimulationParameters

logger = logging.getLogger(__name__)


def accumulate(
    principal: int,
    rate: float,
    contribution: Union[int, Sequence[int]],
    periods: int,
    timing: ContributionTiming = ContributionTiming.PRE_COMPOUND,
) -> List[PeriodRecord]:
    """Grow a cents balance for ``periods`` periods.

    PRE_COMPOUND adds the contribution before interest accrues (it earns
    interest in its own period); POST_COMPOUND accrues interest on the
    opening balance and adds the contribution afterwards.
    ``contribution`` is one per-period amount or a repeating cycle of them.
    """
    cycle = contribution_cycle(contribution)
    schedule: List[PeriodRecord] = []
    balance = principal

    for period in range(1, periods + 1):
        deposit = cycle[(period - 1) % len(cycle)]
        if timing == ContributionTiming.PRE_COMPOUND:
            interest = apply_rate(balance + deposit, rate)
        else:
            interest = apply_rate(balance, rate)

        closing = balance + deposit + interest
        schedule.append(
            PeriodRecord(
                period_index=period,
                opening_balance=balance,
                interest_accrued=interest,
                contribution_or_payment=deposit,
                principal_component=deposit,
                closing_balance=closing,
            )
        )
        balance = closing

    return schedule


def simulate_accumulation(params: SimulationParameters) -> AccumulationResult:
    principal = to_cents(require_non_negative(params.principal, "principal"))
    per_year = periods_per_year(params.compounding_frequency)
    rate = to_periodic_rate(params.annual_rate_percent, per_year)
    contribution = spread_contribution(
        require_non_negative(params.contribution_amount, "contribution_amount"),
        params.contribution_frequency,
        per_year,
    )
    periods = horizon_periods(params.horizon_years, per_year)

    schedule = accumulate(principal, rate, contribution, periods, params.contribution_timing)
    logger.debug(
        "accumulated %d cents over %d periods (%s): final=%d",
        principal,
        periods,
        params.contribution_timing.value,
        schedule[-1].closing_balance,
    )
    return AccumulationResult(schedule=schedule, summary=totals(schedule), principal=principal)
