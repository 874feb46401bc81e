from math import isclose

import pytest
from pydantic import ValidationError

from calc_backend.core.errors import InvalidParameter, PaymentTooLowError, SolverMismatch
from calc_backend.domain import loans
from calc_backend.domain.loans import (
    calculate_credit_card_payoff,
    calculate_loan,
    calculate_mortgage,
    minimum_card_payment,
)
from calc_backend.domain.savings import (
    calculate_compound_interest,
    calculate_investment,
    calculate_retirement,
)
from calc_backend.schemas.loans import CreditCardRequest, LoanRequest, MortgageRequest
from calc_backend.schemas.savings import (
    CompoundInterestRequest,
    InvestmentRequest,
    RetirementRequest,
)


# ---------- loans ----------


def test_mortgage_breakdown():
    result = calculate_mortgage(
        MortgageRequest(
            home_price=300_000,
            down_payment=60_000,
            loan_term_years=30,
            interest_rate=4.5,
            property_tax_rate=1.2,
            home_insurance=1_200,
        )
    )

    assert result.loan_amount == 240_000
    assert result.down_payment_percent == 20.0
    assert isclose(result.principal_and_interest, 1216.04, abs_tol=0.02)
    assert result.monthly_property_tax == 300.0
    assert result.monthly_home_insurance == 100.0
    assert isclose(result.monthly_payment, result.principal_and_interest + 400, abs_tol=0.01)
    assert result.payoff_months == 360
    assert isclose(result.total_paid, 240_000 + result.total_interest, abs_tol=0.01)


def test_mortgage_yearly_table_runs_from_loan_amount_to_zero():
    result = calculate_mortgage(
        MortgageRequest(home_price=300_000, down_payment=60_000, loan_term_years=30, interest_rate=4.5)
    )

    assert len(result.yearly) == 31
    assert result.yearly[0].year == 0
    assert result.yearly[0].balance == 240_000
    assert result.yearly[-1].year == 30
    assert result.yearly[-1].balance == 0
    assert result.yearly[-1].paid == 240_000


def test_mortgage_requires_a_loan():
    with pytest.raises(InvalidParameter):
        calculate_mortgage(
            MortgageRequest(home_price=200_000, down_payment=200_000, loan_term_years=30, interest_rate=5)
        )


def test_loan_without_extra_payment():
    result = calculate_loan(LoanRequest(loan_amount=25_000, interest_rate=6.5, loan_term_years=5))

    assert result.principal == 25_000
    assert result.monthly_payment == 489.16
    assert result.months == 60
    assert result.months_saved == 0
    assert result.interest_saved == 0
    assert result.total_interest == result.baseline_total_interest
    assert len(result.yearly) == 5


def test_loan_extra_payment_saves_interest_and_time():
    result = calculate_loan(
        LoanRequest(loan_amount=25_000, interest_rate=6.5, loan_term_years=5, additional_payment=100)
    )

    assert result.months < 60
    assert result.months_saved == 60 - result.months
    assert result.years_saved == round(result.months_saved / 12, 2)
    assert result.interest_saved > 0
    assert isclose(
        result.interest_saved,
        result.baseline_total_interest - result.total_interest,
        abs_tol=0.01,
    )


def test_loan_down_payment_is_subtracted():
    result = calculate_loan(
        LoanRequest(loan_amount=30_000, down_payment=5_000, interest_rate=6.5, loan_term_years=5)
    )
    assert result.principal == 25_000

    with pytest.raises(InvalidParameter):
        calculate_loan(LoanRequest(loan_amount=5_000, down_payment=5_000, interest_rate=5, loan_term_years=3))


def test_credit_card_with_fixed_payment():
    result = calculate_credit_card_payoff(
        CreditCardRequest(balance=5_000, interest_rate=18.9, monthly_payment=200)
    )

    assert result.months_to_payoff == 33
    assert isclose(result.total_interest, 1405.04, abs_tol=1.0)
    assert result.minimum_payment == 100.0
    assert len(result.schedule) == 33
    assert result.schedule[-1].closing_balance == 0


def test_credit_card_with_target_months():
    result = calculate_credit_card_payoff(
        CreditCardRequest(balance=5_000, interest_rate=18.9, months_to_payoff=36)
    )

    assert result.monthly_payment == 183.03
    assert result.months_to_payoff == 36


@pytest.mark.parametrize("months", [1, 7, 24, 60, 120])
def test_credit_card_target_months_are_met(months):
    result = calculate_credit_card_payoff(
        CreditCardRequest(balance=8_765.43, interest_rate=22.99, months_to_payoff=months)
    )
    assert result.months_to_payoff == months


def test_credit_card_payoff_refuses_disagreeing_counts(monkeypatch):
    monkeypatch.setattr(loans, "solve_months_to_payoff", lambda params: 34)

    with pytest.raises(SolverMismatch) as excinfo:
        calculate_credit_card_payoff(CreditCardRequest(balance=5_000, interest_rate=18.9, monthly_payment=200))
    assert excinfo.value.expected == 34
    assert excinfo.value.actual == 33


def test_credit_card_payment_below_interest():
    with pytest.raises(PaymentTooLowError):
        calculate_credit_card_payoff(CreditCardRequest(balance=5_000, interest_rate=18.9, monthly_payment=50))


def test_credit_card_needs_exactly_one_target():
    with pytest.raises(ValidationError):
        CreditCardRequest(balance=5_000, interest_rate=18.9, monthly_payment=200, months_to_payoff=12)
    with pytest.raises(ValidationError):
        CreditCardRequest(balance=5_000, interest_rate=18.9)


def test_minimum_card_payment():
    assert minimum_card_payment(500) == 25.0
    assert minimum_card_payment(5_000) == 100.0


# ---------- savings ----------


def test_compound_interest_annual():
    result = calculate_compound_interest(
        CompoundInterestRequest(principal=10_000, contribution=0, interest_rate=7, years=10)
    )

    assert result.future_value == 19_671.52
    assert result.total_deposits == 10_000
    assert result.interest_earned == 9_671.52
    assert result.inflation_adjusted_value == result.future_value
    assert len(result.yearly) == 10
    assert result.yearly[-1].balance == result.future_value


def test_compound_interest_inflation_view():
    result = calculate_compound_interest(
        CompoundInterestRequest(
            principal=10_000,
            contribution=0,
            interest_rate=7,
            years=10,
            inflation_rate=3,
            include_inflation=True,
        )
    )

    assert isclose(result.inflation_adjusted_value, 19_671.52 / 1.03**10, abs_tol=0.01)
    assert isclose(result.yearly[0].inflation_adjusted, 10_700 / 1.03, abs_tol=0.01)


def test_compound_interest_deposits_include_principal():
    result = calculate_compound_interest(
        CompoundInterestRequest(
            principal=1_000,
            contribution=100,
            contribution_frequency="monthly",
            interest_rate=0,
            years=2,
            compounding_frequency="monthly",
        )
    )

    assert result.total_deposits == 3_400
    assert result.future_value == 3_400
    assert result.yearly[0].contributions == 2_200


def test_investment_growth():
    result = calculate_investment(InvestmentRequest(initial_investment=10_000, interest_rate=6, years=1))

    assert result.effective_annual_yield == 6.1678
    assert isclose(result.return_on_investment, 6.1678, abs_tol=0.001)
    assert [row.year for row in result.yearly] == [0, 1]
    assert result.yearly[0].total_value == 10_000
    assert result.yearly[0].interest_earned == 0


def test_investment_without_interest():
    result = calculate_investment(
        InvestmentRequest(initial_investment=1_000, monthly_contribution=100, interest_rate=0, years=2)
    )

    assert result.future_value == 3_400
    assert result.total_principal == 3_400
    assert result.total_interest == 0
    assert result.return_on_investment == 0


def test_retirement_shortfall():
    result = calculate_retirement(
        RetirementRequest(
            current_age=30,
            retirement_age=65,
            current_savings=50_000,
            monthly_contribution=500,
            annual_return=7,
            return_during_retirement=5,
            years_in_retirement=30,
            annual_expenses=60_000,
            inflation_rate=2.5,
        )
    )

    assert isclose(result.first_year_expenses, 60_000 * 1.025**35, abs_tol=0.01)
    assert 2_150_000 < result.retirement_savings_goal < 2_270_000
    assert 1_420_000 < result.projected_savings < 1_540_000
    assert isclose(
        result.additional_savings_needed,
        result.retirement_savings_goal - result.projected_savings,
        abs_tol=0.01,
    )
    assert result.savings_last is False
    assert 65 <= result.depleted_at_age < 95
    assert result.savings_by_age[0].age == 30
    assert result.savings_by_age[-1].age == 65
    assert len(result.savings_by_age) == 36
    assert result.withdrawals_by_age[0].age == 65
    assert result.withdrawals_by_age[0].savings == result.projected_savings


def test_retirement_without_growth():
    request = RetirementRequest(
        current_age=30,
        retirement_age=31,
        monthly_contribution=1_000,
        annual_return=0,
        return_during_retirement=0,
        annual_expenses=6_000,
    )
    result = calculate_retirement(request, default_years_in_retirement=2)

    assert result.projected_savings == 12_000
    assert result.retirement_savings_goal == 12_000
    assert result.additional_savings_needed == 0
    # the last withdrawal takes the balance to exactly zero
    assert result.depleted_at_age == 32
    assert result.savings_last is False


def test_retirement_age_must_follow_current_age():
    with pytest.raises(ValidationError):
        RetirementRequest(
            current_age=65,
            retirement_age=60,
            annual_return=5,
            return_during_retirement=4,
            annual_expenses=40_000,
        )
