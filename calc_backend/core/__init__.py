"""Projection engine: rate conversion, period simulators, goal solving, aggregation."""

from calc_backend.core.accumulation import simulate_accumulation
from calc_backend.core.aggregate import balance_breakpoints, to_yearly_summaries, totals
from calc_backend.core.amortization import simulate_amortization
from calc_backend.core.drawdown import eliminate, simulate_drawdown
from calc_backend.core.errors import (
    CalculationError,
    DidNotConverge,
    InvalidParameter,
    PaymentTooLowError,
    SolverMismatch,
)
from calc_backend.core.records import (
    AccumulationResult,
    AmortizationResult,
    DrawdownResult,
    EliminationResult,
    PeriodRecord,
    Totals,
    YearlySummary,
)
from calc_backend.core.solver import (
    solve_months_to_payoff,
    solve_payment,
    solve_retirement_goal,
)

__all__ = [
    "simulate_amortization",
    "simulate_accumulation",
    "simulate_drawdown",
    "eliminate",
    "solve_payment",
    "solve_months_to_payoff",
    "solve_retirement_goal",
    "to_yearly_summaries",
    "totals",
    "balance_breakpoints",
    "PeriodRecord",
    "YearlySummary",
    "Totals",
    "AmortizationResult",
    "AccumulationResult",
    "DrawdownResult",
    "EliminationResult",
    "CalculationError",
    "InvalidParameter",
    "PaymentTooLowError",
    "DidNotConverge",
    "SolverMismatch",
]
