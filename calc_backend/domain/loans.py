from __future__ import annotations

from calc_backend.core.aggregate import to_yearly_summaries
from calc_backend.core.amortization import simulate_amortization
from calc_backend.core.errors import InvalidParameter, SolverMismatch
from calc_backend.core.money import from_cents, to_cents
from calc_backend.core.solver import solve_months_to_payoff
from calc_backend.models import ContributionFrequency, SimulationParameters
from calc_backend.schemas.common import period_rows, year_rows
from calc_backend.schemas.loans import (
    CreditCardRequest,
    CreditCardResponse,
    LoanRequest,
    LoanResponse,
    MortgageRequest,
    MortgageResponse,
    MortgageYear,
)

MONTHS_PER_YEAR = 12
MIN_CARD_PAYMENT = 25.0
MIN_CARD_PAYMENT_RATE = 0.02


def calculate_mortgage(request: MortgageRequest) -> MortgageResponse:
    """Principal & interest plus escrowed tax and insurance, with a yearly balance table."""
    loan_amount = request.home_price - request.down_payment
    if loan_amount <= 0:
        raise InvalidParameter("loan amount must be greater than zero", field="down_payment")

    result = simulate_amortization(
        SimulationParameters(
            principal=loan_amount,
            annual_rate_percent=request.interest_rate,
            horizon_years=request.loan_term_years,
        )
    )

    principal = to_cents(loan_amount)
    yearly = [MortgageYear(year=0, balance=from_cents(principal), paid=0.0)]
    for summary in to_yearly_summaries(result.schedule, MONTHS_PER_YEAR):
        yearly.append(
            MortgageYear(
                year=summary.year,
                balance=from_cents(summary.balance),
                paid=from_cents(principal - summary.balance),
            )
        )

    principal_and_interest = from_cents(result.payment)
    monthly_tax = request.home_price * request.property_tax_rate / 100.0 / MONTHS_PER_YEAR
    monthly_insurance = request.home_insurance / MONTHS_PER_YEAR

    return MortgageResponse(
        loan_amount=from_cents(principal),
        down_payment_percent=round(request.down_payment / request.home_price * 100.0, 2),
        principal_and_interest=principal_and_interest,
        monthly_property_tax=round(monthly_tax, 2),
        monthly_home_insurance=round(monthly_insurance, 2),
        monthly_payment=round(principal_and_interest + monthly_tax + monthly_insurance, 2),
        total_interest=from_cents(result.summary.total_interest),
        total_paid=from_cents(result.summary.total_paid),
        payoff_months=result.periods,
        yearly=yearly,
    )


def calculate_loan(request: LoanRequest) -> LoanResponse:
    """Loan schedule with an optional extra monthly payment, compared to paying only the minimum."""
    principal = request.loan_amount - request.down_payment
    if principal <= 0:
        raise InvalidParameter("loan amount must be greater than the down payment", field="down_payment")

    baseline_params = SimulationParameters(
        principal=principal,
        annual_rate_percent=request.interest_rate,
        horizon_years=request.loan_term_years,
    )
    baseline = simulate_amortization(baseline_params)

    if request.additional_payment > 0:
        accelerated = simulate_amortization(
            baseline_params.model_copy(
                update={
                    "contribution_amount": request.additional_payment,
                    "contribution_frequency": ContributionFrequency.MONTHLY,
                }
            )
        )
    else:
        accelerated = baseline

    months_saved = baseline.periods - accelerated.periods
    interest_saved = baseline.summary.total_interest - accelerated.summary.total_interest

    return LoanResponse(
        principal=from_cents(to_cents(principal)),
        monthly_payment=from_cents(accelerated.payment),
        total_payment=from_cents(accelerated.summary.total_paid),
        total_interest=from_cents(accelerated.summary.total_interest),
        baseline_total_interest=from_cents(baseline.summary.total_interest),
        interest_saved=from_cents(max(0, interest_saved)),
        months=accelerated.periods,
        months_saved=max(0, months_saved),
        years_saved=round(max(0, months_saved) / MONTHS_PER_YEAR, 2),
        yearly=year_rows(to_yearly_summaries(accelerated.schedule, MONTHS_PER_YEAR)),
    )


def minimum_card_payment(balance: float) -> float:
    """Greater of $25 or 2% of the balance."""
    return round(max(MIN_CARD_PAYMENT, balance * MIN_CARD_PAYMENT_RATE), 2)


def calculate_credit_card_payoff(request: CreditCardRequest) -> CreditCardResponse:
    if request.monthly_payment is not None:
        params = SimulationParameters(
            principal=request.balance,
            annual_rate_percent=request.interest_rate,
            fixed_payment=request.monthly_payment,
        )
        expected_months = solve_months_to_payoff(params)
    else:
        params = SimulationParameters(
            principal=request.balance,
            annual_rate_percent=request.interest_rate,
            horizon_years=request.months_to_payoff / MONTHS_PER_YEAR,
        )
        expected_months = request.months_to_payoff

    result = simulate_amortization(params)
    if result.periods != expected_months:
        raise SolverMismatch(expected_months, result.periods)

    return CreditCardResponse(
        monthly_payment=from_cents(result.payment),
        months_to_payoff=result.periods,
        total_interest=from_cents(result.summary.total_interest),
        total_paid=from_cents(result.summary.total_paid),
        minimum_payment=minimum_card_payment(request.balance),
        schedule=period_rows(result.schedule),
    )
