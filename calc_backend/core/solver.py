"""Closed-form inverse problems: payment for a horizon, horizon for a payment,
and the lump sum needed to fund a stream of withdrawals."""

from __future__ import annotations

import logging
import math
from typing import Sequence, Union

from calc_backend.core.errors import InvalidParameter, PaymentTooLowError
from calc_backend.core.limits import EPSILON_CENTS, MAX_PERIODS
from calc_backend.core.money import apply_rate, ceil_cents, from_cents, to_cents
from calc_backend.core.rates import (
    contribution_cycle,
    horizon_periods,
    periods_per_year,
    spread_contribution,
    to_periodic_rate,
)
from calc_backend.core.validation import require_non_negative, require_positive
from calc_backend.models import CompoundingFrequency, SimulationParameters

logger = logging.getLogger(__name__)


def annuity_payment(principal: int, rate: float, periods: int) -> int:
    """Level payment in cents from the annuity formula, rounded up to the cent.

    P = B * r * (1+r)^n / ((1+r)^n - 1), or B / n without interest.
    """
    if periods < 1:
        raise InvalidParameter("number of periods must be >= 1", field="horizon_years")
    if rate == 0:
        return -(-principal // periods)
    growth = (1 + rate) ** periods
    payment = from_cents(principal) * rate * growth / (growth - 1)
    return ceil_cents(payment)


def check_payment_covers_interest(principal: int, rate: float, payment: int) -> None:
    """Raise PaymentTooLowError unless ``payment`` beats the first period's interest to the cent."""
    first_interest = apply_rate(principal, rate)
    if payment <= first_interest:
        raise PaymentTooLowError(from_cents(payment), from_cents(first_interest))


def _periods_needed(
    principal: int,
    rate: float,
    payment: int,
    limit: int,
    extra: Sequence[int] = (0,),
) -> int:
    """Periods the cents recurrence takes to retire ``principal``; ``limit + 1`` if more than ``limit``."""
    balance = principal
    for period in range(1, limit + 1):
        total = payment + extra[(period - 1) % len(extra)]
        balance -= total - apply_rate(balance, rate)
        if balance <= EPSILON_CENTS:
            return period
    return limit + 1


def level_payment(principal: int, rate: float, periods: int) -> int:
    """Whole-cent level payment for a schedule of exactly ``periods`` periods.

    The smallest payment that retires ``principal`` within ``periods``,
    measured on the same cent-rounded interest the amortization loop
    charges, starting from the annuity formula and moving a cent at a time.
    When even that payment finishes early, no whole-cent payment lands on
    ``periods`` exactly; the payment is then one cent less and the last
    period of a horizon schedule takes the remaining balance.
    """
    payment = annuity_payment(principal, rate, periods)
    first_interest = apply_rate(principal, rate)

    if _periods_needed(principal, rate, payment, periods) <= periods:
        while payment - 1 > first_interest and _periods_needed(principal, rate, payment - 1, periods) <= periods:
            payment -= 1
    else:
        payment += 1
        while _periods_needed(principal, rate, payment, periods) > periods:
            payment += 1

    if _periods_needed(principal, rate, payment, periods) < periods and payment - 1 > first_interest:
        payment -= 1
    return payment


def periods_to_payoff(
    principal: int,
    rate: float,
    payment: int,
    extra: Union[int, Sequence[int]] = 0,
) -> int:
    """Number of periods a fixed payment (cents) needs to retire ``principal`` cents.

    The closed form n = ln((P - eps*r) / (P - B*r)) / ln(1+r), measured to
    the point where at most EPSILON_CENTS remain, gives the count on exact
    arithmetic. Within the period cap it is then settled against the
    cent-rounded recurrence, so it always equals the amortization schedule's
    length. ``extra`` is an extra payment per period, or a repeating cycle of
    them.
    """
    cycle = contribution_cycle(extra)
    if payment <= 0:
        raise InvalidParameter("payment must be > 0", field="fixed_payment")
    if principal <= 0:
        return 0
    check_payment_covers_interest(principal, rate, payment + min(cycle))
    if principal <= EPSILON_CENTS:
        return 1

    average = payment + sum(cycle) / len(cycle)
    if rate == 0:
        estimate = max(1, math.ceil((principal - EPSILON_CENTS) / average))
    else:
        exact = math.log((average - EPSILON_CENTS * rate) / (average - principal * rate)) / math.log1p(rate)
        estimate = max(1, math.ceil(exact - 1e-9))
    if estimate > MAX_PERIODS:
        return estimate

    limit = estimate + 1
    while True:
        periods = _periods_needed(principal, rate, payment, limit, cycle)
        if periods <= limit:
            return periods
        limit *= 2


def present_value_of_annuity(payment: float, rate: float, periods: int) -> float:
    """Lump sum that funds ``periods`` payments of ``payment`` at periodic ``rate``."""
    if rate == 0:
        return payment * periods
    return payment * (1 - (1 + rate) ** -periods) / rate


def solve_payment(params: SimulationParameters) -> float:
    """Periodic payment that pays off ``principal`` over ``horizon_years``, see ``level_payment``."""
    principal = to_cents(require_positive(params.principal, "principal"))
    per_year = periods_per_year(params.compounding_frequency)
    rate = to_periodic_rate(params.annual_rate_percent, per_year)
    periods = horizon_periods(params.horizon_years, per_year)
    if periods > MAX_PERIODS:
        raise InvalidParameter(
            f"loan term exceeds {MAX_PERIODS} payment periods",
            field="horizon_years",
        )
    return from_cents(level_payment(principal, rate, periods))


def solve_months_to_payoff(params: SimulationParameters) -> int:
    """Periods needed to pay off ``principal`` with ``fixed_payment`` plus any extra payment."""
    principal = to_cents(require_positive(params.principal, "principal"))
    payment = to_cents(require_positive(params.fixed_payment, "fixed_payment"))
    per_year = periods_per_year(params.compounding_frequency)
    rate = to_periodic_rate(params.annual_rate_percent, per_year)
    extra = spread_contribution(
        require_non_negative(params.contribution_amount, "contribution_amount"),
        params.contribution_frequency,
        per_year,
    )
    return periods_to_payoff(principal, rate, payment, extra)


def solve_retirement_goal(params: SimulationParameters) -> float:
    """Savings needed at retirement to fund ``withdrawal_amount`` a year for ``horizon_years``.

    Withdrawals are monthly (W / 12) and the balance keeps earning
    ``annual_rate_percent`` compounded monthly. ``withdrawal_amount`` is
    expected in retirement-date money already.
    """
    withdrawal = require_non_negative(params.withdrawal_amount, "withdrawal_amount")
    rate = to_periodic_rate(params.annual_rate_percent, CompoundingFrequency.MONTHLY)
    months = horizon_periods(params.horizon_years, 12)
    goal = present_value_of_annuity(withdrawal / 12.0, rate, months)
    logger.debug("retirement goal %.2f for %.2f/yr over %d months", goal, withdrawal, months)
    return from_cents(to_cents(goal))
