"""Data contracts for the raw engine endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field

from calc_backend.schemas.common import PeriodRow, TotalsOut, YearRow


class AmortizationResponse(BaseModel):
    payment: float = Field(..., description="Scheduled periodic payment, excluding extra payments.")
    extra_payment: float = 0.0
    periods: int
    scheduled_periods: Optional[int] = None
    schedule: List[PeriodRow]
    yearly: List[YearRow]
    summary: TotalsOut


class AccumulationResponse(BaseModel):
    principal: float
    final_balance: float = Field(..., ge=0)
    schedule: List[PeriodRow]
    yearly: List[YearRow]
    summary: TotalsOut


class DrawdownResponse(BaseModel):
    final_balance: float = Field(..., ge=0)
    depleted_at_period: Optional[int] = None
    schedule: List[PeriodRow]
    yearly: List[YearRow]
    summary: TotalsOut


class PaymentSolution(BaseModel):
    payment: float


class PayoffSolution(BaseModel):
    periods: int


class GoalSolution(BaseModel):
    goal: float
