"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from calc_backend import __version__
from calc_backend.core.accumulation import simulate_accumulation
from calc_backend.core.aggregate import to_yearly_summaries
from calc_backend.core.amortization import simulate_amortization
from calc_backend.core.drawdown import simulate_drawdown
from calc_backend.core.errors import CalculationError, DidNotConverge, SolverMismatch
from calc_backend.core.money import from_cents
from calc_backend.core.rates import periods_per_year
from calc_backend.core.solver import solve_months_to_payoff, solve_payment, solve_retirement_goal
from calc_backend.domain.alcohol import calculate_bac
from calc_backend.domain.loans import (
    calculate_credit_card_payoff,
    calculate_loan,
    calculate_mortgage,
)
from calc_backend.domain.savings import (
    calculate_compound_interest,
    calculate_investment,
    calculate_retirement,
)
from calc_backend.models import SimulationParameters
from calc_backend.schemas.alcohol import AlcoholRequest
from calc_backend.schemas.common import TotalsOut, period_rows, year_rows
from calc_backend.schemas.engine import (
    AccumulationResponse,
    AmortizationResponse,
    DrawdownResponse,
    GoalSolution,
    PaymentSolution,
    PayoffSolution,
)
from calc_backend.schemas.health import HealthResponse
from calc_backend.schemas.loans import CreditCardRequest, LoanRequest, MortgageRequest
from calc_backend.schemas.savings import (
    CompoundInterestRequest,
    InvestmentRequest,
    RetirementRequest,
)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    """Invalid inputs and payments that cannot retire the balance are the caller's to fix."""
    current_app.logger.info("rejected calculation: %s", exc)
    return jsonify(exc.to_dict()), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(DidNotConverge)
@api_bp.errorhandler(SolverMismatch)
def _handle_engine_fault(exc: CalculationError):
    current_app.logger.error("engine fault: %s", exc)
    return jsonify(exc.to_dict()), HTTPStatus.INTERNAL_SERVER_ERROR


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(status="ok", version=__version__)
    return jsonify(response.model_dump())


# ---------- engine ----------


@api_bp.post("/engine/amortization")
def engine_amortization() -> Any:
    params = SimulationParameters.model_validate(_payload())
    result = simulate_amortization(params)
    response = AmortizationResponse(
        payment=from_cents(result.payment),
        extra_payment=from_cents(result.extra_payment),
        periods=result.periods,
        scheduled_periods=result.scheduled_periods,
        schedule=period_rows(result.schedule),
        yearly=year_rows(to_yearly_summaries(result.schedule, periods_per_year(params.compounding_frequency))),
        summary=TotalsOut.from_totals(result.summary),
    )
    return jsonify(response.model_dump())


@api_bp.post("/engine/accumulation")
def engine_accumulation() -> Any:
    params = SimulationParameters.model_validate(_payload())
    result = simulate_accumulation(params)
    response = AccumulationResponse(
        principal=from_cents(result.principal),
        final_balance=from_cents(result.final_balance),
        schedule=period_rows(result.schedule),
        yearly=year_rows(to_yearly_summaries(result.schedule, periods_per_year(params.compounding_frequency))),
        summary=TotalsOut.from_totals(result.summary),
    )
    return jsonify(response.model_dump())


@api_bp.post("/engine/drawdown")
def engine_drawdown() -> Any:
    params = SimulationParameters.model_validate(_payload())
    result = simulate_drawdown(params)
    response = DrawdownResponse(
        final_balance=from_cents(result.final_balance),
        depleted_at_period=result.depleted_at_period,
        schedule=period_rows(result.schedule),
        yearly=year_rows(to_yearly_summaries(result.schedule, periods_per_year(params.compounding_frequency))),
        summary=TotalsOut.from_totals(result.summary),
    )
    return jsonify(response.model_dump())


@api_bp.post("/engine/solve/payment")
def engine_solve_payment() -> Any:
    params = SimulationParameters.model_validate(_payload())
    return jsonify(PaymentSolution(payment=solve_payment(params)).model_dump())


@api_bp.post("/engine/solve/months-to-payoff")
def engine_solve_months() -> Any:
    params = SimulationParameters.model_validate(_payload())
    return jsonify(PayoffSolution(periods=solve_months_to_payoff(params)).model_dump())


@api_bp.post("/engine/solve/retirement-goal")
def engine_solve_goal() -> Any:
    params = SimulationParameters.model_validate(_payload())
    return jsonify(GoalSolution(goal=solve_retirement_goal(params)).model_dump())


# ---------- calculators ----------


@api_bp.post("/calc/mortgage")
def mortgage() -> Any:
    payload = MortgageRequest.model_validate(_payload())
    return jsonify(calculate_mortgage(payload).model_dump())


@api_bp.post("/calc/loan")
def loan() -> Any:
    payload = LoanRequest.model_validate(_payload())
    return jsonify(calculate_loan(payload).model_dump())


@api_bp.post("/calc/credit-card")
def credit_card() -> Any:
    payload = CreditCardRequest.model_validate(_payload())
    return jsonify(calculate_credit_card_payoff(payload).model_dump())


@api_bp.post("/calc/compound-interest")
def compound_interest() -> Any:
    payload = CompoundInterestRequest.model_validate(_payload())
    return jsonify(calculate_compound_interest(payload).model_dump())


@api_bp.post("/calc/investment")
def investment() -> Any:
    payload = InvestmentRequest.model_validate(_payload())
    return jsonify(calculate_investment(payload).model_dump())


@api_bp.post("/calc/retirement")
def retirement() -> Any:
    payload = RetirementRequest.model_validate(_payload())
    result = calculate_retirement(
        payload,
        default_years_in_retirement=current_app.config["DEFAULT_YEARS_IN_RETIREMENT"],
    )
    return jsonify(result.model_dump())


@api_bp.post("/calc/alcohol")
def alcohol() -> Any:
    payload = AlcoholRequest.model_validate(_payload())
    return jsonify(calculate_bac(payload).model_dump(mode="json"))
