"""Data contracts for the mortgage, loan and credit-card payoff calculators."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calc_backend.schemas.common import PeriodRow, YearRow


class MortgageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    home_price: float = Field(..., gt=0)
    down_payment: float = Field(0.0, ge=0)
    loan_term_years: int = Field(..., ge=1, le=50)
    interest_rate: float = Field(..., ge=0, le=100, description="Annual rate in percent.")
    property_tax_rate: float = Field(
        0.0,
        ge=0,
        le=100,
        description="Annual property tax as a percent of the home price.",
    )
    home_insurance: float = Field(0.0, ge=0, description="Annual home insurance premium.")


class MortgageYear(BaseModel):
    year: int = Field(..., ge=0)
    balance: float = Field(..., ge=0)
    paid: float = Field(..., ge=0, description="Principal repaid so far.")


class MortgageResponse(BaseModel):
    loan_amount: float
    down_payment_percent: float
    principal_and_interest: float
    monthly_property_tax: float
    monthly_home_insurance: float
    monthly_payment: float
    total_interest: float
    total_paid: float
    payoff_months: int
    yearly: List[MortgageYear]


class LoanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    loan_amount: float = Field(..., gt=0)
    down_payment: float = Field(0.0, ge=0)
    interest_rate: float = Field(..., ge=0, le=100)
    loan_term_years: int = Field(..., ge=1, le=100)
    additional_payment: float = Field(0.0, ge=0, description="Extra principal paid every month.")


class LoanResponse(BaseModel):
    principal: float
    monthly_payment: float
    total_payment: float
    total_interest: float
    baseline_total_interest: float
    interest_saved: float = Field(..., ge=0)
    months: int
    months_saved: int = Field(..., ge=0)
    years_saved: float = Field(..., ge=0)
    yearly: List[YearRow]


class CreditCardRequest(BaseModel):
    """Pay off a card either with a fixed monthly payment or within a number of months."""

    model_config = ConfigDict(extra="forbid")

    balance: float = Field(..., gt=0)
    interest_rate: float = Field(..., ge=0, le=100)
    monthly_payment: Optional[float] = Field(default=None, gt=0)
    months_to_payoff: Optional[int] = Field(default=None, ge=1, le=1200)

    @model_validator(mode="after")
    def ensure_single_target(self) -> "CreditCardRequest":
        if (self.monthly_payment is None) == (self.months_to_payoff is None):
            raise ValueError("provide exactly one of monthly_payment or months_to_payoff")
        return self


class CreditCardResponse(BaseModel):
    monthly_payment: float
    months_to_payoff: int
    total_interest: float
    total_paid: float
    minimum_payment: float
    schedule: List[PeriodRow]
