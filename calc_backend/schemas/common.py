"""Shared output contracts. Engine records are cents; these are currency units."""

from typing import List, Sequence

from pydantic import BaseModel, Field

from calc_backend.core.money import from_cents
from calc_backend.core.records import PeriodRecord, Totals, YearlySummary


class PeriodRow(BaseModel):
    """Single period of a simulated schedule."""

    period: int = Field(..., ge=1)
    opening_balance: float
    interest: float
    payment: float = Field(..., description="Contribution, payment or withdrawal for the period.")
    principal: float
    closing_balance: float = Field(..., ge=0)

    @classmethod
    def from_record(cls, record: PeriodRecord) -> "PeriodRow":
        return cls(
            period=record.period_index,
            opening_balance=from_cents(record.opening_balance),
            interest=from_cents(record.interest_accrued),
            payment=from_cents(record.contribution_or_payment),
            principal=from_cents(record.principal_component),
            closing_balance=from_cents(record.closing_balance),
        )


class YearRow(BaseModel):
    year: int = Field(..., ge=0)
    balance: float
    cumulative_paid: float
    cumulative_interest: float
    paid: float = 0.0
    interest: float = 0.0
    principal: float = 0.0

    @classmethod
    def from_summary(cls, summary: YearlySummary) -> "YearRow":
        return cls(
            year=summary.year,
            balance=from_cents(summary.balance),
            cumulative_paid=from_cents(summary.cumulative_contributions_or_payments),
            cumulative_interest=from_cents(summary.cumulative_interest),
            paid=from_cents(summary.contributions_or_payments),
            interest=from_cents(summary.interest),
            principal=from_cents(summary.principal),
        )


class TotalsOut(BaseModel):
    total_paid: float
    total_interest: float
    total_contributions: float

    @classmethod
    def from_totals(cls, summary: Totals) -> "TotalsOut":
        return cls(
            total_paid=from_cents(summary.total_paid),
            total_interest=from_cents(summary.total_interest),
            total_contributions=from_cents(summary.total_contributions),
        )


def period_rows(records: Sequence[PeriodRecord]) -> List[PeriodRow]:
    return [PeriodRow.from_record(record) for record in records]


def year_rows(summaries: Sequence[YearlySummary]) -> List[YearRow]:
    return [YearRow.from_summary(summary) for summary in summaries]
