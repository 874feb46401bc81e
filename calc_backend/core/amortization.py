"""Amortizing loan schedules (mortgages, loans, credit-card payoff)."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from calc_backend.core.aggregate import totals
from calc_backend.core.errors import DidNotConverge, InvalidParameter
from calc_backend.core.limits import EPSILON_CENTS, MAX_PERIODS
from calc_backend.core.money import apply_rate, from_cents, to_cents
from calc_backend.core.rates import (
    contribution_cycle,
    horizon_periods,
    periods_per_year,
    spread_contribution,
    to_periodic_contribution,
    to_periodic_rate,
)
from calc_backend.core.records import AmortizationResult, PeriodRecord
from calc_backend.core.solver import check_payment_covers_interest, level_payment
from calc_backend.core.validation import require_non_negative, require_positive
from calc_backend.models import SimulationParameters

logger = logging.getLogger(__name__)


def amortize(
    principal: int,
    rate: float,
    payment: int,
    extra: Union[int, Sequence[int]] = 0,
    max_periods: int = MAX_PERIODS,
    term: Optional[int] = None,
) -> List[PeriodRecord]:
    """Run the period loop on a cents balance until it is paid off.

    Each period: interest = balance * rate (to the cent), the rest of
    ``payment + extra`` reduces the balance. A remaining balance of at most
    EPSILON_CENTS is folded into that period's payment, so the last closing
    balance is exactly 0. ``extra`` is one amount or a repeating cycle of
    per-period amounts. Period ``term``, when given, takes whatever is left.
    """
    cycle = contribution_cycle(extra)
    check_payment_covers_interest(principal, rate, payment + min(cycle))

    schedule: List[PeriodRecord] = []
    balance = principal
    period = 0

    while balance > 0:
        period += 1
        if period > max_periods:
            raise DidNotConverge(max_periods, from_cents(balance))

        interest = apply_rate(balance, rate)
        principal_part = payment + cycle[(period - 1) % len(cycle)] - interest
        if balance - principal_part <= EPSILON_CENTS or period == term:
            principal_part = balance

        closing = balance - principal_part
        schedule.append(
            PeriodRecord(
                period_index=period,
                opening_balance=balance,
                interest_accrued=interest,
                contribution_or_payment=principal_part + interest,
                principal_component=principal_part,
                closing_balance=closing,
            )
        )
        balance = closing

    return schedule


def simulate_amortization(params: SimulationParameters) -> AmortizationResult:
    """Amortization schedule driven by either ``fixed_payment`` or ``horizon_years``.

    With a horizon the level payment is solved first: the smallest whole-cent
    payment that clears the loan in exactly that many periods.
    ``contribution_amount`` / ``contribution_frequency`` act as an extra
    principal payment spread over the periods of each year.
    """
    principal = to_cents(require_positive(params.principal, "principal"))
    if principal <= 0:
        raise InvalidParameter("principal must be at least one cent", field="principal")

    has_payment = params.fixed_payment is not None
    has_horizon = params.horizon_years is not None
    if has_payment == has_horizon:
        raise InvalidParameter(
            "exactly one of fixed_payment or horizon_years must be given",
            field="fixed_payment" if has_payment else "horizon_years",
        )

    per_year = periods_per_year(params.compounding_frequency)
    rate = to_periodic_rate(params.annual_rate_percent, per_year)
    extra_amount = require_non_negative(params.contribution_amount, "contribution_amount")
    extra = spread_contribution(extra_amount, params.contribution_frequency, per_year)

    scheduled_periods: Optional[int] = None
    if has_horizon:
        scheduled_periods = horizon_periods(params.horizon_years, per_year)
        if scheduled_periods > MAX_PERIODS:
            raise InvalidParameter(
                f"loan term exceeds {MAX_PERIODS} payment periods",
                field="horizon_years",
            )
        payment = level_payment(principal, rate, scheduled_periods)
    else:
        payment = to_cents(require_positive(params.fixed_payment, "fixed_payment"))

    schedule = amortize(principal, rate, payment, extra, term=scheduled_periods)
    logger.debug(
        "amortized %d cents at %.6f/period: payment=%d extra/yr=%d periods=%d",
        principal,
        rate,
        payment,
        sum(extra),
        len(schedule),
    )
    return AmortizationResult(
        schedule=schedule,
        summary=totals(schedule),
        payment=payment,
        extra_payment=to_cents(to_periodic_contribution(extra_amount, params.contribution_frequency, per_year)),
        scheduled_periods=scheduled_periods,
    )
