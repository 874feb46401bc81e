"""Value objects produced by the simulators. All amounts are integer cents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class PeriodRecord:
    """One compounding/payment period.

    accumulation: closing = opening + interest + contribution
    amortization: closing = opening - principal_component
    drawdown:     closing = opening - withdrawal + interest
    """

    period_index: int
    opening_balance: int
    interest_accrued: int
    contribution_or_payment: int
    principal_component: int
    closing_balance: int


@dataclass(frozen=True)
class YearlySummary:
    year: int
    balance: int
    cumulative_contributions_or_payments: int
    cumulative_interest: int
    contributions_or_payments: int = 0
    interest: int = 0
    principal: int = 0


@dataclass(frozen=True)
class Totals:
    total_paid: int
    total_interest: int
    total_contributions: int


@dataclass(frozen=True)
class AmortizationResult:
    schedule: List[PeriodRecord]
    summary: Totals
    payment: int
    extra_payment: int = 0
    scheduled_periods: Optional[int] = None

    @property
    def periods(self) -> int:
        return len(self.schedule)


@dataclass(frozen=True)
class AccumulationResult:
    schedule: List[PeriodRecord]
    summary: Totals
    principal: int

    @property
    def final_balance(self) -> int:
        return self.schedule[-1].closing_balance if self.schedule else self.principal


@dataclass(frozen=True)
class DrawdownResult:
    schedule: List[PeriodRecord]
    summary: Totals
    depleted_at_period: Optional[int] = None

    @property
    def final_balance(self) -> int:
        return self.schedule[-1].closing_balance if self.schedule else 0


@dataclass(frozen=True)
class EliminationResult:
    """Time for a level (e.g. BAC) to decay below a threshold.

    ``curve`` holds (hour, level) points, starting at hour 0.
    """

    hours: float
    curve: List[Tuple[float, float]] = field(default_factory=list)
