from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CompoundingFrequency(str, Enum):
    ANNUALLY = "annually"
    SEMIANNUALLY = "semiannually"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    DAILY = "daily"


class ContributionFrequency(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUALLY = "semiannually"
    ANNUALLY = "annually"


class ContributionTiming(str, Enum):
    """Where a period's contribution lands relative to that period's interest.

    PRE_COMPOUND: contribution first, so it earns interest in the same period
    (annuity due). POST_COMPOUND: interest on the opening balance, then the
    contribution (ordinary annuity).
    """

    PRE_COMPOUND = "pre_compound"
    POST_COMPOUND = "post_compound"


class SimulationParameters(BaseModel):
    """Inputs for a single engine run. Amounts are currency units, rates are percents."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    principal: float
    annual_rate_percent: float = 0.0
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY

    contribution_amount: float = 0.0
    contribution_frequency: ContributionFrequency = ContributionFrequency.NONE
    contribution_timing: ContributionTiming = ContributionTiming.PRE_COMPOUND

    horizon_years: Optional[float] = None
    fixed_payment: Optional[float] = None

    withdrawal_amount: float = Field(
        0.0,
        description="Annual withdrawal for drawdown runs, in retirement-date currency.",
    )
    inflation_rate_percent: float = 0.0
