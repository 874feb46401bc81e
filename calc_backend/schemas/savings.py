"""Data contracts for the compound interest, investment and retirement calculators."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calc_backend.models import CompoundingFrequency, ContributionFrequency, ContributionTiming


class CompoundInterestRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., ge=0)
    contribution: float = Field(0.0, ge=0)
    contribution_frequency: ContributionFrequency = ContributionFrequency.MONTHLY
    contribution_timing: ContributionTiming = ContributionTiming.PRE_COMPOUND
    interest_rate: float = Field(..., ge=0, le=100)
    years: int = Field(..., ge=1, le=100)
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.ANNUALLY
    inflation_rate: float = Field(0.0, ge=0, le=100)
    include_inflation: bool = False


class CompoundInterestYear(BaseModel):
    year: int
    balance: float
    contributions: float = Field(..., description="Principal plus all contributions so far.")
    interest: float
    inflation_adjusted: float


class CompoundInterestResponse(BaseModel):
    future_value: float
    total_deposits: float
    interest_earned: float
    inflation_adjusted_value: float
    yearly: List[CompoundInterestYear]


class InvestmentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initial_investment: float = Field(..., ge=0)
    monthly_contribution: float = Field(0.0, ge=0)
    interest_rate: float = Field(..., ge=0, le=100)
    years: int = Field(..., ge=1, le=100)
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY


class InvestmentYear(BaseModel):
    year: int = Field(..., ge=0)
    total_value: float
    principal: float
    interest_earned: float


class InvestmentResponse(BaseModel):
    future_value: float
    total_principal: float
    total_interest: float
    effective_annual_yield: float
    return_on_investment: float
    yearly: List[InvestmentYear]


class RetirementRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_age: int = Field(..., ge=0, le=110)
    retirement_age: int = Field(..., ge=1, le=110)
    current_savings: float = Field(0.0, ge=0)
    monthly_contribution: float = Field(0.0, ge=0)
    annual_return: float = Field(..., ge=0, le=100, description="Return before retirement, percent.")
    return_during_retirement: float = Field(..., ge=0, le=100)
    years_in_retirement: Optional[int] = Field(default=None, ge=1, le=80)
    annual_expenses: float = Field(..., ge=0, description="Retirement spending in today's money.")
    inflation_rate: float = Field(0.0, ge=0, le=30)

    @model_validator(mode="after")
    def ensure_validity(self) -> "RetirementRequest":
        if self.retirement_age <= self.current_age:
            raise ValueError("retirement_age must be greater than current_age")
        return self


class AgeRow(BaseModel):
    age: int
    savings: float = Field(..., ge=0)
    contributions: float = 0.0
    interest: float = 0.0
    withdrawal: float = 0.0


class RetirementResponse(BaseModel):
    retirement_savings_goal: float
    projected_savings: float
    additional_savings_needed: float = Field(..., ge=0)
    first_year_expenses: float
    savings_last: bool
    depleted_at_age: Optional[int] = None
    savings_by_age: List[AgeRow]
    withdrawals_by_age: List[AgeRow]
