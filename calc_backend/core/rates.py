"""Rate and frequency normalisation."""

from __future__ import annotations

from typing import List, Sequence, Union

from calc_backend.core.errors import InvalidParameter
from calc_backend.core.limits import MAX_HORIZON_YEARS
from calc_backend.core.money import to_cents
from calc_backend.models import CompoundingFrequency, ContributionFrequency

PERIODS_PER_YEAR = {
    CompoundingFrequency.ANNUALLY: 1,
    CompoundingFrequency.SEMIANNUALLY: 2,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.DAILY: 365,
}

CONTRIBUTIONS_PER_YEAR = {
    ContributionFrequency.NONE: 0,
    ContributionFrequency.WEEKLY: 52,
    ContributionFrequency.BIWEEKLY: 26,
    ContributionFrequency.MONTHLY: 12,
    ContributionFrequency.QUARTERLY: 4,
    ContributionFrequency.SEMIANNUALLY: 2,
    ContributionFrequency.ANNUALLY: 1,
}


def periods_per_year(frequency: Union[CompoundingFrequency, int]) -> int:
    if isinstance(frequency, CompoundingFrequency):
        return PERIODS_PER_YEAR[frequency]
    if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency <= 0:
        raise InvalidParameter(
            f"periods per year must be a positive integer, got {frequency!r}",
            field="compounding_frequency",
        )
    return frequency


def contributions_per_year(frequency: Union[ContributionFrequency, int]) -> int:
    if isinstance(frequency, ContributionFrequency):
        return CONTRIBUTIONS_PER_YEAR[frequency]
    if isinstance(frequency, bool) or not isinstance(frequency, int) or frequency < 0:
        raise InvalidParameter(
            f"contribution frequency must be a non-negative integer, got {frequency!r}",
            field="contribution_frequency",
        )
    return frequency


def to_periodic_rate(
    annual_rate_percent: float,
    compounding_frequency: Union[CompoundingFrequency, int],
) -> float:
    """5.5 with monthly compounding -> 0.055 / 12."""
    if annual_rate_percent < 0:
        raise InvalidParameter("annual rate must be >= 0", field="annual_rate_percent")
    return annual_rate_percent / 100.0 / periods_per_year(compounding_frequency)


def to_periodic_contribution(
    amount: float,
    contribution_frequency: Union[ContributionFrequency, int],
    periods_per_year: int,
) -> float:
    """Spread a contribution declared at one cadence over the compounding cadence.

    $100 monthly with daily compounding is 100 * 12 / 365 per period.
    """
    if isinstance(periods_per_year, bool) or periods_per_year <= 0:
        raise InvalidParameter("periods per year must be > 0", field="compounding_frequency")
    per_year = contributions_per_year(contribution_frequency)
    if per_year == 0:
        return 0.0
    if amount < 0:
        raise InvalidParameter("contribution must be >= 0", field="contribution_amount")
    return amount * per_year / periods_per_year


def spread_contribution(
    amount: float,
    contribution_frequency: Union[ContributionFrequency, int],
    periods_per_year: int,
) -> List[int]:
    """Whole-cent contribution for each period of one year.

    Cents are handed out with a running remainder, so the periods of a year
    add up to exactly ``amount * contributions_per_year``.
    """
    if isinstance(periods_per_year, bool) or periods_per_year <= 0:
        raise InvalidParameter("periods per year must be > 0", field="compounding_frequency")
    per_year = contributions_per_year(contribution_frequency)
    if per_year == 0:
        return [0] * periods_per_year
    if amount < 0:
        raise InvalidParameter("contribution must be >= 0", field="contribution_amount")

    yearly = to_cents(amount * per_year)
    return [
        yearly * k // periods_per_year - yearly * (k - 1) // periods_per_year
        for k in range(1, periods_per_year + 1)
    ]


def contribution_cycle(contribution: Union[int, Sequence[int]]) -> List[int]:
    """A single per-period amount or a repeating per-period sequence, as a list."""
    if isinstance(contribution, int):
        return [contribution]
    cycle = list(contribution)
    if not cycle:
        raise InvalidParameter("contribution cycle is empty", field="contribution_amount")
    return cycle


def effective_annual_yield(
    annual_rate_percent: float,
    compounding_frequency: Union[CompoundingFrequency, int],
) -> float:
    """Effective annual yield in percent for a nominal rate and compounding cadence."""
    m = periods_per_year(compounding_frequency)
    r = to_periodic_rate(annual_rate_percent, m)
    return ((1 + r) ** m - 1) * 100.0


def horizon_periods(horizon_years: float, periods_per_year: int, field: str = "horizon_years") -> int:
    if horizon_years is None:
        raise InvalidParameter("horizon_years is required", field=field)
    if horizon_years <= 0 or horizon_years > MAX_HORIZON_YEARS:
        raise InvalidParameter(
            f"horizon must be within (0, {MAX_HORIZON_YEARS}] years",
            field=field,
        )
    periods = int(round(horizon_years * periods_per_year))
    if periods < 1:
        raise InvalidParameter("horizon is shorter than one period", field=field)
    return periods
