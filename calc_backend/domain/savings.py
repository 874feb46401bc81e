from __future__ import annotations

from calc_backend.core.accumulation import simulate_accumulation
from calc_backend.core.aggregate import to_yearly_summaries
from calc_backend.core.drawdown import simulate_drawdown
from calc_backend.core.money import from_cents, to_cents
from calc_backend.core.rates import effective_annual_yield, periods_per_year
from calc_backend.core.solver import solve_retirement_goal
from calc_backend.models import (
    CompoundingFrequency,
    ContributionFrequency,
    ContributionTiming,
    SimulationParameters,
)
from calc_backend.schemas.savings import (
    AgeRow,
    CompoundInterestRequest,
    CompoundInterestResponse,
    CompoundInterestYear,
    InvestmentRequest,
    InvestmentResponse,
    InvestmentYear,
    RetirementRequest,
    RetirementResponse,
)

MONTHS_PER_YEAR = 12


def calculate_compound_interest(request: CompoundInterestRequest) -> CompoundInterestResponse:
    """Future value with optional contributions and an inflation-adjusted view.

    Deposits include the starting principal.
    """
    result = simulate_accumulation(
        SimulationParameters(
            principal=request.principal,
            annual_rate_percent=request.interest_rate,
            compounding_frequency=request.compounding_frequency,
            contribution_amount=request.contribution,
            contribution_frequency=request.contribution_frequency,
            contribution_timing=request.contribution_timing,
            horizon_years=request.years,
        )
    )
    inflation = request.inflation_rate / 100.0 if request.include_inflation else 0.0

    yearly = []
    for summary in to_yearly_summaries(result.schedule, periods_per_year(request.compounding_frequency)):
        balance = from_cents(summary.balance)
        yearly.append(
            CompoundInterestYear(
                year=summary.year,
                balance=balance,
                contributions=from_cents(result.principal + summary.cumulative_contributions_or_payments),
                interest=from_cents(summary.cumulative_interest),
                inflation_adjusted=round(balance / (1 + inflation) ** summary.year, 2),
            )
        )

    future_value = from_cents(result.final_balance)
    return CompoundInterestResponse(
        future_value=future_value,
        total_deposits=from_cents(result.principal + result.summary.total_contributions),
        interest_earned=from_cents(result.summary.total_interest),
        inflation_adjusted_value=round(future_value / (1 + inflation) ** request.years, 2),
        yearly=yearly,
    )


def calculate_investment(request: InvestmentRequest) -> InvestmentResponse:
    """Investment growth with monthly contributions made at the start of each period."""
    result = simulate_accumulation(
        SimulationParameters(
            principal=request.initial_investment,
            annual_rate_percent=request.interest_rate,
            compounding_frequency=request.compounding_frequency,
            contribution_amount=request.monthly_contribution,
            contribution_frequency=ContributionFrequency.MONTHLY,
            contribution_timing=ContributionTiming.PRE_COMPOUND,
            horizon_years=request.years,
        )
    )

    yearly = [
        InvestmentYear(
            year=0,
            total_value=from_cents(result.principal),
            principal=from_cents(result.principal),
            interest_earned=0.0,
        )
    ]
    for summary in to_yearly_summaries(result.schedule, periods_per_year(request.compounding_frequency)):
        yearly.append(
            InvestmentYear(
                year=summary.year,
                total_value=from_cents(summary.balance),
                principal=from_cents(result.principal + summary.cumulative_contributions_or_payments),
                interest_earned=from_cents(summary.cumulative_interest),
            )
        )

    total_principal = result.principal + result.summary.total_contributions
    final_balance = result.final_balance
    roi = (final_balance / total_principal - 1) * 100.0 if total_principal > 0 else 0.0

    return InvestmentResponse(
        future_value=from_cents(final_balance),
        total_principal=from_cents(total_principal),
        total_interest=from_cents(result.summary.total_interest),
        effective_annual_yield=round(
            effective_annual_yield(request.interest_rate, request.compounding_frequency), 4
        ),
        return_on_investment=round(roi, 4),
        yearly=yearly,
    )


def calculate_retirement(
    request: RetirementRequest,
    default_years_in_retirement: int = 30,
) -> RetirementResponse:
    """Savings until retirement, then withdrawals through retirement.

    Working years: monthly contribution, then monthly growth at annual_return.
    Retirement years: expenses grown by inflation to the retirement date,
    withdrawn monthly and escalated by inflation each following year; the
    remainder grows at return_during_retirement.
    The goal is the present value of those first-year expenses over the
    retirement horizon.
    """
    years_to_retirement = request.retirement_age - request.current_age
    years_in_retirement = request.years_in_retirement or default_years_in_retirement

    accumulation = simulate_accumulation(
        SimulationParameters(
            principal=request.current_savings,
            annual_rate_percent=request.annual_return,
            compounding_frequency=CompoundingFrequency.MONTHLY,
            contribution_amount=request.monthly_contribution,
            contribution_frequency=ContributionFrequency.MONTHLY,
            contribution_timing=ContributionTiming.PRE_COMPOUND,
            horizon_years=years_to_retirement,
        )
    )
    projected = accumulation.final_balance

    expenses_at_retirement = request.annual_expenses * (1 + request.inflation_rate / 100.0) ** years_to_retirement
    goal = solve_retirement_goal(
        SimulationParameters(
            principal=0.0,
            annual_rate_percent=request.return_during_retirement,
            withdrawal_amount=expenses_at_retirement,
            horizon_years=years_in_retirement,
        )
    )
    drawdown = simulate_drawdown(
        SimulationParameters(
            principal=from_cents(projected),
            annual_rate_percent=request.return_during_retirement,
            compounding_frequency=CompoundingFrequency.MONTHLY,
            withdrawal_amount=expenses_at_retirement,
            inflation_rate_percent=request.inflation_rate,
            horizon_years=years_in_retirement,
        )
    )

    savings_by_age = [AgeRow(age=request.current_age, savings=from_cents(accumulation.principal))]
    for summary in to_yearly_summaries(accumulation.schedule, MONTHS_PER_YEAR):
        savings_by_age.append(
            AgeRow(
                age=request.current_age + summary.year,
                savings=from_cents(summary.balance),
                contributions=from_cents(summary.cumulative_contributions_or_payments),
                interest=from_cents(summary.cumulative_interest),
            )
        )

    withdrawals_by_age = [AgeRow(age=request.retirement_age, savings=from_cents(projected))]
    for summary in to_yearly_summaries(drawdown.schedule, MONTHS_PER_YEAR):
        withdrawals_by_age.append(
            AgeRow(
                age=request.retirement_age + summary.year,
                savings=from_cents(summary.balance),
                interest=from_cents(summary.interest),
                withdrawal=from_cents(summary.contributions_or_payments),
            )
        )

    depleted_at_age = None
    if drawdown.depleted_at_period is not None:
        depleted_at_age = request.retirement_age + (drawdown.depleted_at_period - 1) // MONTHS_PER_YEAR

    return RetirementResponse(
        retirement_savings_goal=goal,
        projected_savings=from_cents(projected),
        additional_savings_needed=from_cents(max(0, to_cents(goal) - projected)),
        first_year_expenses=round(expenses_at_retirement, 2),
        savings_last=depleted_at_age is None,
        depleted_at_age=depleted_at_age,
        savings_by_age=savings_by_age,
        withdrawals_by_age=withdrawals_by_age,
    )
